"""
API request and response models.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from clausecheck.models.analysis import Deviation
from clausecheck.models.document import DocumentMetadata
from clausecheck.models.knowledge import ActSection, Pattern, RiskLevel


# =============================================================================
# Explanation Models
# =============================================================================


class ExplanationRequest(BaseModel):
    """What the explanation collaborator is given for one violation."""

    clause_text: str
    violation_type: str
    section_full_text: str
    language: Literal["en", "hi"] = "en"


class Explanation(BaseModel):
    """Plain-language explanation of a violation."""

    simple_explanation: str = Field(..., min_length=1)
    real_life_impact: str = Field(..., min_length=1)
    generated_by: str = "fallback"


# =============================================================================
# Analysis Models
# =============================================================================


class AnalyzeTextRequest(BaseModel):
    """Request model for analysing raw contract text."""

    text: str = Field(..., description="Extracted contract text")
    language: Optional[Literal["en", "hi"]] = Field(
        default=None, description="Explanation language; defaults to DEFAULT_LANGUAGE"
    )
    explain: bool = Field(default=True, description="Generate plain-language explanations")
    file_name: str = Field(default="text_input")


class LawReference(BaseModel):
    """Statutory citation attached to a risky clause."""

    section: str
    title: str
    full_text: str
    summary: str
    url: str


class RiskyClause(BaseModel):
    """A violation prepared for presentation."""

    id: int
    clause_number: int
    original_text: str
    violation_type: str
    risk_level: RiskLevel
    risk_score: int
    start_index: int
    end_index: int
    applies_to: list[str]
    business_risk: str
    law_reference: LawReference
    explanation: Explanation
    matched_keywords: list[str]


class AnalysisSummary(BaseModel):
    """Headline numbers for a report."""

    overall_risk_score: int = Field(..., ge=0, le=100)
    risk_level: str
    total_clauses: int
    risky_clauses_found: int
    deviations_found: int
    breakdown: dict[str, int]


class AnalysisReport(BaseModel):
    """Envelope consumed by presentation layers."""

    success: bool = True
    processing_time_ms: int
    document: DocumentMetadata
    analysis: AnalysisSummary
    risky_clauses: list[RiskyClause] = Field(default_factory=list)
    deviations: list[Deviation] = Field(default_factory=list)
    knowledge_source: str
    disclaimer: str


# =============================================================================
# Knowledge Models
# =============================================================================


class PatternListResponse(BaseModel):
    """Active pattern table and where it came from."""

    source: str
    version: str
    total: int
    patterns: list[Pattern]


class LawListResponse(BaseModel):
    """Parsed statute sections held in the knowledge store."""

    source: str = "Indian Contract Act, 1872"
    source_url: str
    total_sections: int
    sections: list[ActSection]
