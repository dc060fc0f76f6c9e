"""
Clause model for segmented contract text.
"""

from pydantic import BaseModel, ConfigDict, Field


class Clause(BaseModel):
    """One segmented unit of contract text with a stable identity and order."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Sequential identifier, starting at 1")
    text: str = Field(..., min_length=1)
    position: int = Field(..., ge=0, description="Index in the segmenter output")
