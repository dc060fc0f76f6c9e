"""
Risk Scorer

Deterministic 0-100 score from violation severities.
"""

from typing import Sequence

from clausecheck.models.analysis import RiskCategory, Violation

MAX_SCORE = 100

# Lower bound of each band, checked from the top
RISK_BANDS = (
    (76, RiskCategory.DANGEROUS),
    (51, RiskCategory.HIGH_RISK),
    (26, RiskCategory.MODERATE_RISK),
)


def score(violations: Sequence[Violation]) -> int:
    """Sum of violation risk scores, capped at 100."""
    return min(MAX_SCORE, sum(v.risk_score for v in violations))


def classify(value: int) -> RiskCategory:
    """Map a score to its qualitative risk band."""
    for lower_bound, category in RISK_BANDS:
        if value >= lower_bound:
            return category
    return RiskCategory.SAFE
