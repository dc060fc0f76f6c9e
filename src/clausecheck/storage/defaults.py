"""Built-in knowledge used when the external store is absent or unseeded.

The default pattern set is versioned; bump DEFAULT_PATTERN_SET_VERSION
whenever a keyword, score or the pattern order changes, because order
decides which pattern wins on a clause that matches several.
"""

from clausecheck.models.knowledge import (
    DEFAULT_SOURCE_URL,
    FairBaseline,
    Pattern,
    PatternSet,
    RiskLevel,
)

DEFAULT_PATTERN_SET_VERSION = "2024.1"

SECTION_10_TEXT = (
    "All agreements are contracts if they are made by the free consent of parties "
    "competent to contract, for a lawful consideration and with a lawful object."
)

DEFAULT_PATTERN_SET = PatternSet(
    version=DEFAULT_PATTERN_SET_VERSION,
    patterns=(
        # === RESTRAINT OF TRADE ===
        Pattern(
            violation_type="non_compete",
            keywords=(
                "non-compete", "non compete", "shall not compete", "restraint of trade",
                "not engage in similar", "cannot work for competitor",
            ),
            risk_level=RiskLevel.CRITICAL,
            risk_score=40,
            section_number="Section 27",
            section_title="Agreement in restraint of trade void",
            section_full_text=(
                "Every agreement by which any one is restrained from exercising a lawful "
                "profession, trade or business of any kind, is to that extent void."
            ),
            description="Non-compete clause restricting freelancer from taking other work",
            source_url=DEFAULT_SOURCE_URL,
        ),

        # === COMPENSATION FOR BREACH ===
        Pattern(
            violation_type="unlimited_liability",
            keywords=(
                "unlimited liability", "all damages", "consequential damages",
                "indirect damages", "liable for all losses", "without limitation",
            ),
            risk_level=RiskLevel.HIGH,
            risk_score=25,
            section_number="Section 73",
            section_title="Compensation for loss or damage caused by breach of contract",
            section_full_text=(
                "When a contract has been broken, the party who suffers by such breach is "
                "entitled to receive, from the party who has broken the contract, "
                "compensation for any loss or damage caused to him thereby."
            ),
            description="Freelancer liable for unlimited damages without reasonable cap",
            source_url=DEFAULT_SOURCE_URL,
        ),
        Pattern(
            violation_type="excessive_penalty",
            keywords=(
                "penalty of", "liquidated damages", "shall pay", "penalty equal to",
                "forfeit", "breach penalty",
            ),
            risk_level=RiskLevel.HIGH,
            risk_score=20,
            section_number="Section 74",
            section_title="Compensation for breach of contract where penalty stipulated for",
            section_full_text=(
                "When a contract has been broken, if a sum is named in the contract as the "
                "amount to be paid in case of such breach, the party complaining of the "
                "breach is entitled, whether or not actual damage or loss is proved to have "
                "been caused thereby, to receive from the party who has broken the contract "
                "reasonable compensation."
            ),
            description="Excessive penalty that exceeds reasonable compensation for breach",
            source_url=DEFAULT_SOURCE_URL,
        ),

        # === ONE-SIDED TERMS ===
        Pattern(
            violation_type="unilateral_termination",
            keywords=(
                "terminate at will", "without cause", "immediate termination",
                "terminate without notice", "at sole discretion", "cancel anytime",
            ),
            risk_level=RiskLevel.MEDIUM,
            risk_score=15,
            section_number="Section 10",
            section_title="What agreements are contracts",
            section_full_text=SECTION_10_TEXT,
            description="Client can terminate without reason or notice period",
            source_url=DEFAULT_SOURCE_URL,
        ),
        Pattern(
            violation_type="foreign_jurisdiction",
            keywords=(
                "governed by laws of", "jurisdiction of", "courts of usa", "uk jurisdiction",
                "singapore courts", "delaware", "california law",
            ),
            risk_level=RiskLevel.MEDIUM,
            risk_score=12,
            section_number="Section 10",
            section_title="What agreements are contracts",
            section_full_text=SECTION_10_TEXT,
            description="Disputes must be resolved in foreign jurisdiction (expensive for freelancer)",
            source_url=DEFAULT_SOURCE_URL,
        ),
    ),
)


# Runtime fallback when the baseline table is unavailable: no baselines,
# every deviation heuristic uses its own built-in fair standard.
DEFAULT_FAIR_BASELINES: tuple[FairBaseline, ...] = ()


# Rows written by `clausecheck init-db`
SEED_FAIR_BASELINES: tuple[FairBaseline, ...] = (
    FairBaseline(category="payment_terms", fair_standard="Net 30 days"),
    FairBaseline(category="termination_notice", fair_standard="15-30 days written notice"),
    FairBaseline(category="liability_cap", fair_standard="Capped at contract value"),
    FairBaseline(category="jurisdiction", fair_standard="Local courts"),
)
