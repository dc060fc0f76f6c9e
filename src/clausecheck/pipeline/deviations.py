"""
Deviation Analyzer

Compares a contract against the "fair contract" baseline and highlights
unusually harsh terms that keyword patterns do not capture. Four
independent heuristics; each reports at most one deviation per document,
based on the first clause that mentions its topic.
"""

import re
from typing import Sequence

import structlog

from clausecheck.models.analysis import Deviation, DeviationLevel
from clausecheck.models.clause import Clause
from clausecheck.models.knowledge import FairBaseline

logger = structlog.get_logger(__name__)

PAYMENT_TRIGGERS = ("payment", "invoice")
TERMINATION_TRIGGERS = ("terminate", "termination")
LIABILITY_TRIGGERS = ("liability", "indemnify")
JURISDICTION_TRIGGERS = ("jurisdiction", "governed by")

# Matched case-sensitively so "UK" does not fire on ordinary words
FOREIGN_JURISDICTIONS = (
    "USA",
    "United States",
    "UK",
    "United Kingdom",
    "Singapore",
    "Delaware",
    "California",
    "New York",
)

# Anchored at the start of a digit run so long runs are scanned once
PAYMENT_DAYS = re.compile(r"(?<!\d)(\d+)\s*days?", re.IGNORECASE)

MAX_DAY_DIGITS = 6
MAX_PAYMENT_DAYS = 999_999

STANDARD_PAYMENT_DAYS = 30
EXTREME_PAYMENT_DAYS = 90
SIGNIFICANT_PAYMENT_DAYS = 60


def find_trigger_clause(clauses: Sequence[Clause], triggers: Sequence[str]) -> Clause | None:
    """First clause whose lower-cased text contains any trigger keyword."""
    for clause in clauses:
        lower_text = clause.text.lower()
        if any(trigger in lower_text for trigger in triggers):
            return clause
    return None


def parse_days(digits: str) -> int:
    """Day count from a digit run, clamped to MAX_PAYMENT_DAYS."""
    digits = digits.lstrip("0") or "0"
    if len(digits) > MAX_DAY_DIGITS:
        return MAX_PAYMENT_DAYS
    return int(digits)


def fair_standard_for(baselines: Sequence[FairBaseline], category: str, default: str) -> str:
    """Fair standard from the baseline table, or the built-in default."""
    for baseline in baselines:
        if baseline.category == category:
            return baseline.fair_standard
    return default


class DeviationAnalyzer:
    """Runs the fair-contract heuristics over a clause set."""

    def analyze(
        self,
        clauses: Sequence[Clause],
        baselines: Sequence[FairBaseline],
    ) -> list[Deviation]:
        checks = (
            self.check_payment_terms,
            self.check_termination_notice,
            self.check_liability_cap,
            self.check_jurisdiction,
        )
        deviations = []
        for check in checks:
            deviation = check(clauses, baselines)
            if deviation is not None:
                deviations.append(deviation)

        logger.debug("deviations_analyzed", clauses=len(clauses), deviations=len(deviations))
        return deviations

    def check_payment_terms(
        self, clauses: Sequence[Clause], baselines: Sequence[FairBaseline]
    ) -> Deviation | None:
        clause = find_trigger_clause(clauses, PAYMENT_TRIGGERS)
        if clause is None:
            return None

        match = PAYMENT_DAYS.search(clause.text)
        if match is None:
            return None

        days = parse_days(match.group(1))
        fair_standard = fair_standard_for(baselines, "payment_terms", "Net 30 days")
        beyond = days - STANDARD_PAYMENT_DAYS

        if days > EXTREME_PAYMENT_DAYS:
            return Deviation(
                category="Payment Terms",
                found_in_contract=f"Net {days} days",
                fair_standard=fair_standard,
                deviation_level=DeviationLevel.EXTREME,
                explanation=(
                    f"Your contract has {days}-day payment terms, which is {beyond} days "
                    "beyond the standard Net 30. This creates significant cash flow risk "
                    "for freelancers."
                ),
            )
        if days > SIGNIFICANT_PAYMENT_DAYS:
            return Deviation(
                category="Payment Terms",
                found_in_contract=f"Net {days} days",
                fair_standard=fair_standard,
                deviation_level=DeviationLevel.SIGNIFICANT,
                explanation=f"Payment terms are {beyond} days beyond industry standard.",
            )
        return None

    def check_termination_notice(
        self, clauses: Sequence[Clause], baselines: Sequence[FairBaseline]
    ) -> Deviation | None:
        clause = find_trigger_clause(clauses, TERMINATION_TRIGGERS)
        if clause is None or "immediate" not in clause.text.lower():
            return None

        return Deviation(
            category="Termination Notice",
            found_in_contract="Immediate termination without notice",
            fair_standard=fair_standard_for(
                baselines, "termination_notice", "15-30 days written notice"
            ),
            deviation_level=DeviationLevel.SIGNIFICANT,
            explanation=(
                "Client can terminate instantly without notice period, leaving you without "
                "income. Fair contracts have 15-30 day notice periods."
            ),
        )

    def check_liability_cap(
        self, clauses: Sequence[Clause], baselines: Sequence[FairBaseline]
    ) -> Deviation | None:
        clause = find_trigger_clause(clauses, LIABILITY_TRIGGERS)
        if clause is None or "unlimited" not in clause.text.lower():
            return None

        return Deviation(
            category="Liability Cap",
            found_in_contract="Unlimited liability",
            fair_standard=fair_standard_for(
                baselines, "liability_cap", "Capped at contract value"
            ),
            deviation_level=DeviationLevel.EXTREME,
            explanation=(
                "You could be forced to pay unlimited damages. Fair contracts cap liability "
                "at the project value."
            ),
        )

    def check_jurisdiction(
        self, clauses: Sequence[Clause], baselines: Sequence[FairBaseline]
    ) -> Deviation | None:
        clause = find_trigger_clause(clauses, JURISDICTION_TRIGGERS)
        if clause is None:
            return None
        if not any(name in clause.text for name in FOREIGN_JURISDICTIONS):
            return None

        return Deviation(
            category="Jurisdiction",
            found_in_contract="Foreign jurisdiction (non-local)",
            fair_standard="Local courts",
            deviation_level=DeviationLevel.SIGNIFICANT,
            explanation=(
                "Disputes must be resolved in foreign courts, which is expensive and "
                "impractical for a local freelancer. This heavily favors the client."
            ),
        )


def analyze(clauses: Sequence[Clause], baselines: Sequence[FairBaseline]) -> list[Deviation]:
    """Module-level convenience wrapper."""
    return DeviationAnalyzer().analyze(clauses, baselines)
