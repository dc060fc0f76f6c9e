"""
Result models produced by the analysis pipeline.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from clausecheck.models.clause import Clause
from clausecheck.models.knowledge import RiskLevel


class DeviationLevel(str, Enum):
    """How far a term strays from the fair-practice baseline."""

    EXTREME = "EXTREME"
    SIGNIFICANT = "SIGNIFICANT"
    MINOR = "MINOR"


class RiskCategory(str, Enum):
    """Qualitative band for the overall score."""

    SAFE = "SAFE"
    MODERATE_RISK = "MODERATE RISK"
    HIGH_RISK = "HIGH RISK"
    DANGEROUS = "DANGEROUS"


class Violation(BaseModel):
    """One pattern firing on one clause."""

    model_config = ConfigDict(frozen=True)

    clause_id: int
    clause_text: str
    violation_type: str
    section_number: str
    section_title: str
    section_full_text: str
    risk_level: RiskLevel
    risk_score: int
    matched_keywords: tuple[str, ...]
    explanation: str
    source_url: str


class Deviation(BaseModel):
    """A departure from a fair-practice baseline."""

    model_config = ConfigDict(frozen=True)

    category: str
    found_in_contract: str
    fair_standard: str
    deviation_level: DeviationLevel
    explanation: str


class AnalysisResult(BaseModel):
    """Complete, immutable outcome of analysing one document."""

    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(..., ge=0, le=100)
    risk_level: RiskCategory
    clauses: tuple[Clause, ...] = ()
    violations: tuple[Violation, ...] = ()
    deviations: tuple[Deviation, ...] = ()

    @property
    def breakdown(self) -> dict[str, int]:
        """Violation counts per risk level."""
        counts = {level.value: 0 for level in RiskLevel}
        for violation in self.violations:
            counts[violation.risk_level.value] += 1
        return counts
