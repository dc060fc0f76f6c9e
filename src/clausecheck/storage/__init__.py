"""
Storage adapters for clausecheck.

Provides the knowledge database and the pattern store that sits in front of it.
"""

from clausecheck.storage.knowledge_db import KnowledgeDatabase, get_knowledge_database
from clausecheck.storage.pattern_store import (
    DatabasePatternSource,
    PatternSource,
    PatternStoreAdapter,
    get_pattern_store,
)

__all__ = [
    "KnowledgeDatabase",
    "get_knowledge_database",
    "DatabasePatternSource",
    "PatternSource",
    "PatternStoreAdapter",
    "get_pattern_store",
]
