"""
Knowledge base routes: active patterns and statute sections.
"""

import structlog
from fastapi import APIRouter, HTTPException

from clausecheck.models.api import LawListResponse, PatternListResponse
from clausecheck.models.knowledge import DEFAULT_SOURCE_URL, KnowledgeSnapshot
from clausecheck.storage.knowledge_db import get_knowledge_database
from clausecheck.storage.pattern_store import get_pattern_store

logger = structlog.get_logger(__name__)
router = APIRouter()


def _pattern_listing(snapshot: KnowledgeSnapshot) -> PatternListResponse:
    return PatternListResponse(
        source=snapshot.source,
        version=snapshot.version,
        total=len(snapshot.patterns),
        patterns=list(snapshot.patterns),
    )


@router.get("/patterns", response_model=PatternListResponse)
def list_patterns() -> PatternListResponse:
    """List the patterns currently used for analysis."""
    return _pattern_listing(get_pattern_store().snapshot())


@router.post("/reload", response_model=PatternListResponse)
def reload_patterns() -> PatternListResponse:
    """Reload patterns and baselines from the knowledge store."""
    snapshot = get_pattern_store().reload()
    logger.info("knowledge_reloaded", source=snapshot.source, version=snapshot.version)
    return _pattern_listing(snapshot)


@router.get("/laws", response_model=LawListResponse)
def list_laws() -> LawListResponse:
    """List parsed sections of the Indian Contract Act."""
    try:
        sections = get_knowledge_database().list_act_sections()
    except Exception as e:
        logger.error("act_sections_unavailable", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch laws")

    return LawListResponse(
        source_url=DEFAULT_SOURCE_URL,
        total_sections=len(sections),
        sections=sections,
    )
