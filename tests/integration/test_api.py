"""Integration tests for FastAPI API endpoints via TestClient."""

import inspect
import io

import pytest
from unittest.mock import MagicMock
from docx import Document
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from clausecheck.api.main import create_app
from clausecheck.storage.defaults import (
    DEFAULT_PATTERN_SET,
    DEFAULT_PATTERN_SET_VERSION,
    SEED_FAIR_BASELINES,
)
from clausecheck.storage.knowledge_db import get_knowledge_database


@pytest.fixture
def client():
    return TestClient(create_app())


class TestHealthEndpoints:

    def test_root(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        data = resp.json()
        assert data["name"] == "clausecheck API"
        assert "version" in data

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["services"]["knowledge_db"] is True
        assert data["services"]["llm"] == {"anthropic": False, "openai": False}

    def test_startup_loads_knowledge(self):
        with capture_logs() as logs:
            with TestClient(create_app()) as client:
                assert client.get("/").status_code == 200

        started = next(e for e in logs if e["event"] == "application_started")
        assert started["knowledge_source"] == "default"
        assert started["knowledge_version"] == DEFAULT_PATTERN_SET_VERSION


class TestAnalysisEndpoints:

    def test_analyze_text(self, client, risky_contract_text):
        resp = client.post("/api/v1/analysis", json={"text": risky_contract_text})
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["analysis"]["overall_risk_score"] == 92
        assert data["analysis"]["risk_level"] == "DANGEROUS"
        assert data["knowledge_source"] == "default"
        assert len(data["risky_clauses"]) == 4
        assert len(data["deviations"]) == 4
        assert data["risky_clauses"][0]["explanation"]["generated_by"] == "fallback"
        assert data["disclaimer"]

    def test_analyze_empty_text(self, client):
        resp = client.post("/api/v1/analysis", json={"text": ""})
        assert resp.status_code == 200
        assert resp.json()["analysis"]["risk_level"] == "SAFE"

    def test_missing_text(self, client):
        resp = client.post("/api/v1/analysis", json={"language": "en"})
        assert resp.status_code == 422

    def test_unsupported_language(self, client):
        resp = client.post("/api/v1/analysis", json={"text": "x", "language": "fr"})
        assert resp.status_code == 422

    def test_upload_txt(self, client, risky_contract_text):
        resp = client.post(
            "/api/v1/analysis/upload",
            files={"file": ("contract.txt", risky_contract_text.encode("utf-8"), "text/plain")},
            data={"language": "en", "explain": "false"},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["document"]["file_name"] == "contract.txt"
        assert data["analysis"]["overall_risk_score"] == 92

    def test_upload_unsupported_type(self, client):
        resp = client.post(
            "/api/v1/analysis/upload",
            files={"file": ("contract.rtf", b"{\\rtf1}", "application/rtf")},
        )
        assert resp.status_code == 400
        assert "Unsupported file type" in resp.json()["detail"]

    def test_unhandled_error_returns_500(self, monkeypatch, fair_contract_text):
        mock_service = MagicMock()
        mock_service.run.side_effect = RuntimeError("boom")
        monkeypatch.setattr(
            "clausecheck.api.routes.analysis.get_analysis_service", lambda: mock_service
        )

        resp = TestClient(create_app(), raise_server_exceptions=False).post(
            "/api/v1/analysis",
            json={"text": fair_contract_text},
        )
        assert resp.status_code == 500
        assert resp.json()["success"] is False


class TestKnowledgeEndpoints:

    def test_patterns_default(self, client):
        resp = client.get("/api/v1/knowledge/patterns")
        assert resp.status_code == 200
        data = resp.json()
        assert data["source"] == "default"
        assert data["version"] == DEFAULT_PATTERN_SET_VERSION
        assert data["total"] == 5
        assert data["patterns"][0]["violation_type"] == "non_compete"

    def test_reload_picks_up_seeded_database(self, client):
        assert client.get("/api/v1/knowledge/patterns").json()["source"] == "default"

        get_knowledge_database().seed(DEFAULT_PATTERN_SET, SEED_FAIR_BASELINES)
        resp = client.post("/api/v1/knowledge/reload")

        assert resp.status_code == 200
        assert resp.json()["source"] == "database"
        assert client.get("/api/v1/knowledge/patterns").json()["version"].startswith("db-")

    def test_laws_empty(self, client):
        resp = client.get("/api/v1/knowledge/laws")
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_sections"] == 0
        assert data["source"] == "Indian Contract Act, 1872"

    def test_laws_failure(self, client, monkeypatch):
        broken = MagicMock()
        broken.list_act_sections.side_effect = RuntimeError("disk error")
        monkeypatch.setattr(
            "clausecheck.api.routes.knowledge.get_knowledge_database", lambda: broken
        )
        resp = client.get("/api/v1/knowledge/laws")
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to fetch laws"


class TestRouteHandlers:

    def test_handlers_run_in_threadpool(self):
        app = create_app()
        endpoints = {
            route.path: route.endpoint
            for route in app.routes
            if isinstance(route, APIRoute)
        }
        assert "/api/v1/analysis/upload" in endpoints
        assert "/health" in endpoints
        assert not any(inspect.iscoroutinefunction(e) for e in endpoints.values())

    def test_upload_docx(self, client):
        doc = Document()
        doc.add_paragraph(
            "The Freelancer agrees to a non-compete covenant and shall not compete "
            "with the Client for two years after this agreement ends."
        )
        buffer = io.BytesIO()
        doc.save(buffer)

        resp = client.post(
            "/api/v1/analysis/upload",
            files={"file": ("contract.docx", buffer.getvalue(), "application/octet-stream")},
            data={"explain": "false"},
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["document"]["file_name"] == "contract.docx"
        assert data["risky_clauses"][0]["violation_type"] == "non_compete"
