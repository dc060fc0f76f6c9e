"""
Contract loading and PDF/DOCX text extraction service.
"""

import io
from functools import lru_cache
from pathlib import Path
from typing import BinaryIO

import pdfplumber
import structlog
from docx import Document

from clausecheck.config import get_settings
from clausecheck.models.document import DocumentMetadata, ExtractedDocument

logger = structlog.get_logger(__name__)

FILE_TYPES = {
    ".txt": "text/plain",
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class ContractLoader:
    """
    Service for turning uploaded documents into raw contract text.

    Supports plain text, text-based PDFs and Word (.docx) documents.
    """

    def __init__(self):
        self.settings = get_settings()

    def load_text(self, text: str, file_name: str = "text_input") -> ExtractedDocument:
        """Wrap raw text input, e.g. pasted contract text."""
        return ExtractedDocument(
            text=text,
            metadata=DocumentMetadata(
                file_name=file_name,
                file_type="text/plain",
                file_size=len(text.encode("utf-8")),
                character_count=len(text),
                word_count=len(text.split()),
            ),
        )

    def load_file(self, file_path: Path | str) -> ExtractedDocument:
        """Load a contract from a .txt, .pdf or .docx file on disk."""
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Contract file not found: {file_path}")

        return self.load_bytes(file_path.read_bytes(), file_path.name)

    def load_bytes(self, content: bytes, file_name: str) -> ExtractedDocument:
        """Load a contract from uploaded bytes, dispatching on the file extension."""
        suffix = Path(file_name).suffix.lower()

        if suffix not in self.settings.allowed_extensions or suffix not in FILE_TYPES:
            raise ValueError(f"Unsupported file type: {suffix or file_name}")

        if len(content) > self.settings.max_upload_bytes:
            limit_mb = self.settings.max_upload_bytes // (1024 * 1024)
            raise ValueError(f"File must be under {limit_mb}MB")

        if suffix == ".pdf":
            text, pages = self._extract_pdf_text(io.BytesIO(content), file_name)
        elif suffix == ".docx":
            text, pages = self._extract_docx_text(io.BytesIO(content), file_name), None
        else:
            text, pages = content.decode("utf-8", errors="replace"), None

        document = ExtractedDocument(
            text=text,
            metadata=DocumentMetadata(
                file_name=file_name,
                file_type=FILE_TYPES[suffix],
                file_size=len(content),
                character_count=len(text),
                word_count=len(text.split()),
                page_count=pages,
            ),
        )

        logger.info(
            "contract_loaded",
            filename=file_name,
            pages=pages,
            words=document.metadata.word_count,
        )
        return document

    def _extract_pdf_text(self, stream: BinaryIO, file_name: str) -> tuple[str, int]:
        """
        Extract text from PDF using pdfplumber.

        Returns (full_text, page_count).
        """
        full_text_parts = []

        try:
            with pdfplumber.open(stream) as pdf:
                page_count = len(pdf.pages)
                for page in pdf.pages:
                    page_text = page.extract_text() or ""
                    if page_text.strip():
                        full_text_parts.append(page_text)
        except Exception as e:
            logger.error("pdf_extraction_failed", file=file_name, error=str(e))
            raise ValueError(f"PDF parsing failed: {e}. Try converting to TXT format.") from e

        if not full_text_parts:
            raise ValueError(
                "PDF appears to be empty or contains only images. "
                "Please upload a text-based PDF or a TXT file."
            )

        return "\n\n".join(full_text_parts), page_count

    def _extract_docx_text(self, stream: BinaryIO, file_name: str) -> str:
        """Extract paragraph and table text from a Word document."""
        try:
            doc = Document(stream)
        except Exception as e:
            logger.error("docx_extraction_failed", file=file_name, error=str(e))
            raise ValueError(f"DOCX parsing failed: {e}. Try converting to TXT format.") from e

        blocks = [p.text.strip() for p in doc.paragraphs]
        for table in doc.tables:
            for row in table.rows:
                blocks.append(" | ".join(cell.text.strip() for cell in row.cells))

        text = "\n\n".join(block for block in blocks if block.strip(" |"))
        if not text:
            raise ValueError("DOCX appears to be empty. Please upload a document with text.")
        return text


@lru_cache()
def get_contract_loader() -> ContractLoader:
    """Get cached contract loader instance."""
    return ContractLoader()
