"""Tests for clausecheck.pipeline.orchestrator: end-to-end analysis of text."""

from unittest.mock import MagicMock

import pytest

from clausecheck.models.analysis import DeviationLevel, RiskCategory
from clausecheck.models.knowledge import FairBaseline, KnowledgeSnapshot, RiskLevel
from clausecheck.pipeline.orchestrator import AnalysisOrchestrator, get_analysis_orchestrator


@pytest.fixture
def orchestrator(default_store):
    return AnalysisOrchestrator(pattern_store=default_store)


class TestRiskyContract:

    def test_score_and_level(self, orchestrator, risky_contract_text):
        result = orchestrator.analyze(risky_contract_text)
        # 40 + 25 + 15 + 12
        assert result.overall_score == 92
        assert result.risk_level == RiskCategory.DANGEROUS

    def test_violations(self, orchestrator, risky_contract_text):
        result = orchestrator.analyze(risky_contract_text)
        assert [(v.clause_id, v.violation_type) for v in result.violations] == [
            (3, "non_compete"),
            (4, "unlimited_liability"),
            (5, "unilateral_termination"),
            (6, "foreign_jurisdiction"),
        ]
        assert result.breakdown == {"CRITICAL": 1, "HIGH": 1, "MEDIUM": 2, "LOW": 0}

    def test_deviations(self, orchestrator, risky_contract_text):
        result = orchestrator.analyze(risky_contract_text)
        assert [(d.category, d.deviation_level) for d in result.deviations] == [
            ("Payment Terms", DeviationLevel.EXTREME),
            ("Termination Notice", DeviationLevel.SIGNIFICANT),
            ("Liability Cap", DeviationLevel.EXTREME),
            ("Jurisdiction", DeviationLevel.SIGNIFICANT),
        ]

    def test_violations_reference_clauses(self, orchestrator, risky_contract_text):
        result = orchestrator.analyze(risky_contract_text)
        clauses = {c.id: c.text for c in result.clauses}
        for violation in result.violations:
            assert clauses[violation.clause_id] == violation.clause_text

    def test_idempotent(self, orchestrator, risky_contract_text):
        first = orchestrator.analyze(risky_contract_text)
        second = orchestrator.analyze(risky_contract_text)
        assert first.model_dump_json() == second.model_dump_json()


class TestNonCompeteScenario:

    def test_single_clause_document(self, orchestrator):
        text = (
            "The Freelancer accepts a non-compete obligation. This non-compete is a "
            "reasonable restraint of trade, and any restraint of trade is accepted "
            "by the Freelancer."
        )
        result = orchestrator.analyze(text)

        assert len(result.violations) == 1
        violation = result.violations[0]
        assert violation.risk_level == RiskLevel.CRITICAL
        assert violation.section_number == "Section 27"
        assert result.overall_score == 40
        assert result.risk_level == RiskCategory.MODERATE_RISK


class TestEdgeInputs:

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\n", "\t\r\n", "äöü ✓ 契約"])
    def test_degenerate_input(self, orchestrator, text):
        result = orchestrator.analyze(text)
        assert result.overall_score == 0
        assert result.risk_level == RiskCategory.SAFE
        assert result.clauses == ()
        assert result.violations == ()
        assert result.deviations == ()

    def test_oversized_day_count(self, orchestrator):
        result = orchestrator.analyze(
            "Payment of each invoice is due within " + "9" * 5000 + " days of receipt."
        )
        assert len(result.clauses) == 1
        assert [d.deviation_level for d in result.deviations] == [DeviationLevel.EXTREME]

    def test_fair_contract(self, orchestrator, fair_contract_text):
        result = orchestrator.analyze(fair_contract_text)
        assert len(result.clauses) == 4
        assert result.overall_score == 0
        assert result.risk_level == RiskCategory.SAFE
        assert result.deviations == ()


class TestKnowledgeBinding:

    def test_explicit_snapshot_bypasses_store(self, default_snapshot, risky_contract_text):
        store = MagicMock()
        orchestrator = AnalysisOrchestrator(pattern_store=store)

        result = orchestrator.analyze(risky_contract_text, snapshot=default_snapshot)

        store.snapshot.assert_not_called()
        assert result.overall_score == 92

    def test_baselines_from_snapshot(self, default_snapshot, risky_contract_text, orchestrator):
        snapshot = KnowledgeSnapshot(
            patterns=default_snapshot.patterns,
            baselines=(FairBaseline(category="payment_terms", fair_standard="Net 7 days"),),
        )
        result = orchestrator.analyze(risky_contract_text, snapshot=snapshot)
        assert result.deviations[0].fair_standard == "Net 7 days"

    def test_empty_pattern_snapshot(self, risky_contract_text, orchestrator):
        result = orchestrator.analyze(risky_contract_text, snapshot=KnowledgeSnapshot(patterns=()))
        assert result.violations == ()
        assert result.overall_score == 0
        assert len(result.deviations) == 4

    def test_singleton_uses_pattern_store(self, risky_contract_text):
        orchestrator = get_analysis_orchestrator()
        assert orchestrator is get_analysis_orchestrator()
        assert orchestrator.analyze(risky_contract_text).overall_score == 92
