"""Shared pytest fixtures for the clausecheck test suite."""

import pytest

from clausecheck.models.analysis import Violation
from clausecheck.models.clause import Clause
from clausecheck.models.knowledge import KnowledgeSnapshot, RiskLevel
from clausecheck.storage.defaults import DEFAULT_PATTERN_SET, DEFAULT_PATTERN_SET_VERSION
from clausecheck.storage.pattern_store import PatternStoreAdapter


# ---------------------------------------------------------------------------
# Isolated environment and singleton cache clearing (autouse)
# ---------------------------------------------------------------------------

def _clear_singletons():
    from clausecheck.config import get_settings
    from clausecheck.pipeline.orchestrator import get_analysis_orchestrator
    from clausecheck.services.act_loader import get_act_loader
    from clausecheck.services.analysis_service import get_analysis_service
    from clausecheck.services.contract_loader import get_contract_loader
    from clausecheck.services.explainer import get_explanation_service
    from clausecheck.services.llm_service import get_llm_service
    from clausecheck.storage.knowledge_db import get_knowledge_database
    from clausecheck.storage.pattern_store import get_pattern_store

    get_settings.cache_clear()
    get_knowledge_database.cache_clear()
    get_pattern_store.cache_clear()
    get_analysis_orchestrator.cache_clear()
    get_llm_service.cache_clear()
    get_explanation_service.cache_clear()
    get_contract_loader.cache_clear()
    get_act_loader.cache_clear()
    get_analysis_service.cache_clear()


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point every test at a throwaway knowledge DB with no LLM credentials."""
    monkeypatch.setenv("KNOWLEDGE_DB_URL", f"sqlite:///{tmp_path / 'knowledge.db'}")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("EXPLANATIONS_ENABLED", "true")

    _clear_singletons()
    yield
    _clear_singletons()


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

RISKY_CONTRACT = """FREELANCE SERVICES AGREEMENT

1. Scope. The Freelancer shall design and build the Client's marketing website.
2. Payment. The Client shall pay each invoice within 120 days of receipt.
3. Non-compete. The Freelancer agrees to a non-compete covenant and accepts this restraint of trade for two years after completion.
4. Liability. The Freelancer accepts unlimited liability for all damages arising from the services.
5. Termination. The Client may terminate at will and without cause, with immediate termination of all payments.
6. Governing Law. This Agreement is governed by laws of Singapore and subject to the exclusive jurisdiction of Singapore courts.
"""

FAIR_CONTRACT = """CONSULTING AGREEMENT

1. Services. The Consultant will provide design reviews as agreed in writing.
2. Fees. The Client will settle each invoice within 30 days of receipt.
3. Notice. Either party may end this agreement with 30 days written notice.
4. Law. This agreement is subject to the courts of Bengaluru, India.
"""


@pytest.fixture
def risky_contract_text():
    """Six numbered clauses: four risky, one long payment term."""
    return RISKY_CONTRACT


@pytest.fixture
def fair_contract_text():
    """Four numbered clauses with no violations or deviations."""
    return FAIR_CONTRACT


@pytest.fixture
def default_snapshot():
    """Snapshot of the built-in patterns with no baselines."""
    return KnowledgeSnapshot(
        patterns=DEFAULT_PATTERN_SET.patterns,
        source="default",
        version=DEFAULT_PATTERN_SET_VERSION,
    )


@pytest.fixture
def default_store():
    """Pattern store with no external source."""
    return PatternStoreAdapter(source=None)


@pytest.fixture
def make_clause():
    """Factory for Clause instances."""
    def _make(text, id=1, position=None):
        return Clause(id=id, text=text, position=id - 1 if position is None else position)
    return _make


@pytest.fixture
def make_violation():
    """Factory for Violation instances with a given risk score."""
    def _make(risk_score, clause_id=1, risk_level=RiskLevel.MEDIUM, violation_type="non_compete"):
        return Violation(
            clause_id=clause_id,
            clause_text="The Freelancer shall not compete with the Client.",
            violation_type=violation_type,
            section_number="Section 27",
            section_title="Agreement in restraint of trade void",
            section_full_text="Every agreement by which any one is restrained...",
            risk_level=risk_level,
            risk_score=risk_score,
            matched_keywords=("non-compete", "shall not compete"),
            explanation="Non-compete clause restricting freelancer from taking other work",
            source_url="https://example.org/act.pdf",
        )
    return _make
