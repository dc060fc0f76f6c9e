"""
Service identity and health routes.
"""

from fastapi import APIRouter

from clausecheck import __version__
from clausecheck.services.llm_service import get_llm_service
from clausecheck.storage.knowledge_db import get_knowledge_database

router = APIRouter()


@router.get("/")
def root() -> dict:
    return {
        "name": "clausecheck API",
        "version": __version__,
        "docs": "/docs",
    }


@router.get("/health")
def health_check() -> dict:
    """Report whether the knowledge store and LLM providers are reachable."""
    return {
        "status": "healthy",
        "services": {
            "llm": get_llm_service().health_check(),
            "knowledge_db": get_knowledge_database().health_check(),
        },
    }
