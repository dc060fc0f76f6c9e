"""
Violation Detector

Matches clauses against statutory-violation patterns. Rule-based, not
model-based, so every finding can be traced to the keywords that caused it.
"""

from typing import Sequence

import structlog

from clausecheck.models.analysis import Violation
from clausecheck.models.clause import Clause
from clausecheck.models.knowledge import Pattern

logger = structlog.get_logger(__name__)

# Absolute count, independent of how many keywords a pattern carries
MIN_KEYWORD_MATCHES = 2


def match_keywords(lower_text: str, pattern: Pattern) -> list[str]:
    """Keywords of the pattern found in already lower-cased text, in pattern order."""
    return [kw for kw in pattern.keywords if kw in lower_text]


class ViolationDetector:
    """
    First-fit pattern matcher.

    Patterns are tried in stored order and the first one with enough
    keyword evidence wins the clause, even if a later pattern is more
    severe. At most one violation is reported per clause.
    """

    def __init__(self, min_matches: int = MIN_KEYWORD_MATCHES):
        self.min_matches = min_matches

    def detect(
        self,
        clauses: Sequence[Clause],
        patterns: Sequence[Pattern],
    ) -> list[Violation]:
        violations = []

        for clause in clauses:
            violation = self.check_clause(clause, patterns)
            if violation is not None:
                violations.append(violation)

        logger.debug(
            "violations_detected",
            clauses=len(clauses),
            patterns=len(patterns),
            violations=len(violations),
        )
        return violations

    def check_clause(
        self,
        clause: Clause,
        patterns: Sequence[Pattern],
    ) -> Violation | None:
        """Return the violation for the first firing pattern, if any."""
        lower_text = clause.text.lower()

        for pattern in patterns:
            matched = match_keywords(lower_text, pattern)
            if len(matched) >= self.min_matches:
                return Violation(
                    clause_id=clause.id,
                    clause_text=clause.text,
                    violation_type=pattern.violation_type,
                    section_number=pattern.section_number,
                    section_title=pattern.section_title,
                    section_full_text=pattern.section_full_text,
                    risk_level=pattern.risk_level,
                    risk_score=pattern.risk_score,
                    matched_keywords=tuple(matched),
                    explanation=pattern.description,
                    source_url=pattern.source_url,
                )
        return None


def detect(clauses: Sequence[Clause], patterns: Sequence[Pattern]) -> list[Violation]:
    """Module-level convenience wrapper."""
    return ViolationDetector().detect(clauses, patterns)
