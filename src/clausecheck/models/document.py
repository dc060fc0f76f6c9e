"""
Document models produced by ingestion.
"""

from pydantic import BaseModel, Field


class DocumentMetadata(BaseModel):
    """Metadata describing an ingested contract document."""

    file_name: str = "text_input"
    file_type: str = "text/plain"
    file_size: int = 0
    character_count: int = 0
    word_count: int = 0
    page_count: int | None = None


class ExtractedDocument(BaseModel):
    """Raw contract text plus the metadata gathered while extracting it."""

    text: str
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
