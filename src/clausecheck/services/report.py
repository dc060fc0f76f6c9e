"""
Report builder.

Wraps an AnalysisResult in the envelope consumed by presentation layers:
document metadata, headline numbers, highlighted risky clauses with their
explanations, deviations and the disclaimer.
"""

from typing import Sequence

from clausecheck.models.analysis import AnalysisResult
from clausecheck.models.api import (
    AnalysisReport,
    AnalysisSummary,
    Explanation,
    LawReference,
    RiskyClause,
)
from clausecheck.models.document import DocumentMetadata

DISCLAIMER = (
    "This analysis is for educational purposes only. It does not constitute legal advice. "
    "Consult a qualified lawyer before signing any contract."
)

PREFIX_MATCH_LENGTH = 50
UNLOCATED_SPAN = 100

# violation_type -> who the clause hurts and what kind of risk it is
IMPACT_PROFILES: dict[str, dict] = {
    "non_compete": {
        "applies_to": ["Freelancer", "Employee"],
        "business_risk": "Career Restriction",
    },
    "unlimited_liability": {
        "applies_to": ["Freelancer", "Small Business"],
        "business_risk": "Financial Exposure",
    },
    "excessive_penalty": {
        "applies_to": ["Freelancer", "Small Business"],
        "business_risk": "Financial Penalty",
    },
    "unilateral_termination": {
        "applies_to": ["Freelancer", "Contractor"],
        "business_risk": "Income Stability",
    },
    "foreign_jurisdiction": {
        "applies_to": ["All"],
        "business_risk": "Dispute Resolution Cost",
    },
}
DEFAULT_PROFILE = {"applies_to": ["All"], "business_risk": "Contract Risk"}


def locate_clause(text: str, clause_text: str, index: int, total: int) -> tuple[int, int]:
    """
    Best-effort character span of a clause within the original text.

    Tries an exact case-insensitive match, then the clause's first 50
    characters, then estimates from the clause's rank among violations.
    """
    text_lower = text.lower()
    clause_lower = clause_text.lower()

    start = text_lower.find(clause_lower)
    if start == -1:
        start = text_lower.find(clause_lower[:PREFIX_MATCH_LENGTH])
    if start == -1:
        start = int(index / max(total, 1) * len(text))
        end = start + UNLOCATED_SPAN
    else:
        end = start + len(clause_text)

    return max(0, start), min(len(text), end)


class ReportBuilder:
    """Assembles AnalysisReport envelopes."""

    def build(
        self,
        text: str,
        result: AnalysisResult,
        metadata: DocumentMetadata,
        explanations: Sequence[Explanation],
        processing_time_ms: int,
        knowledge_source: str = "default",
    ) -> AnalysisReport:
        violations = result.violations
        risky_clauses = []

        for index, (violation, explanation) in enumerate(zip(violations, explanations)):
            start, end = locate_clause(text, violation.clause_text, index, len(violations))
            profile = IMPACT_PROFILES.get(violation.violation_type, DEFAULT_PROFILE)

            risky_clauses.append(
                RiskyClause(
                    id=index + 1,
                    clause_number=violation.clause_id,
                    original_text=violation.clause_text,
                    violation_type=violation.violation_type,
                    risk_level=violation.risk_level,
                    risk_score=violation.risk_score,
                    start_index=start,
                    end_index=end,
                    applies_to=list(profile["applies_to"]),
                    business_risk=profile["business_risk"],
                    law_reference=LawReference(
                        section=violation.section_number,
                        title=violation.section_title,
                        full_text=violation.section_full_text,
                        summary=violation.explanation,
                        url=violation.source_url,
                    ),
                    explanation=explanation,
                    matched_keywords=list(violation.matched_keywords),
                )
            )

        return AnalysisReport(
            processing_time_ms=processing_time_ms,
            document=metadata,
            analysis=AnalysisSummary(
                overall_risk_score=result.overall_score,
                risk_level=result.risk_level.value,
                total_clauses=len(result.clauses),
                risky_clauses_found=len(violations),
                deviations_found=len(result.deviations),
                breakdown=result.breakdown,
            ),
            risky_clauses=risky_clauses,
            deviations=list(result.deviations),
            knowledge_source=knowledge_source,
            disclaimer=DISCLAIMER,
        )
