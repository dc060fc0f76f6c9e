"""
SQLite knowledge store using SQLAlchemy.

Holds the clause pattern table, fair-contract baselines and the parsed
sections of the Indian Contract Act.
"""

import json
from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Generator, Iterable

import structlog
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection

from clausecheck.config import get_settings
from clausecheck.models.knowledge import ActSection, FairBaseline, PatternSet

logger = structlog.get_logger(__name__)


SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS clause_patterns (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        clause_type TEXT NOT NULL,
        keywords TEXT NOT NULL,
        risk_level TEXT NOT NULL,
        risk_score INTEGER NOT NULL,
        section_number TEXT,
        section_title TEXT,
        full_text TEXT,
        description TEXT,
        gov_url TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS fair_contract_baselines (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        clause_category TEXT NOT NULL UNIQUE,
        fair_standard TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS act_sections (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        section_number TEXT NOT NULL UNIQUE,
        section_title TEXT NOT NULL,
        full_text TEXT NOT NULL,
        summary TEXT,
        page_number INTEGER,
        chapter TEXT
    )
    """,
)


class KnowledgeDatabase:
    """
    Knowledge store adapter.

    Raw rows come back as dictionaries; mapping them onto validated models
    is the job of DatabasePatternSource.
    """

    def __init__(self, database_url: str | None = None):
        settings = get_settings()
        self.database_url = database_url or settings.knowledge_db_url
        self.engine = create_engine(
            self.database_url,
            echo=settings.debug,
            pool_pre_ping=True,
        )

    @contextmanager
    def connection(self) -> Generator[Connection, None, None]:
        """Get a transactional connection."""
        with self.engine.begin() as conn:
            yield conn

    def close(self) -> None:
        """Close database connections."""
        self.engine.dispose()

    def health_check(self) -> bool:
        """Check database connectivity."""
        try:
            with self.connection() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("knowledge_db_health_check_failed", error=str(e))
            return False

    def initialize_schema(self) -> None:
        """Create tables if they don't exist."""
        with self.connection() as conn:
            for statement in SCHEMA_STATEMENTS:
                conn.execute(text(statement))
        logger.info("knowledge_schema_initialized", url=self.database_url)

    # =========================================================================
    # Patterns and Baselines
    # =========================================================================

    def fetch_pattern_rows(self) -> list[dict[str, Any]]:
        """Get all clause pattern rows in stored order."""
        with self.connection() as conn:
            result = conn.execute(text("SELECT * FROM clause_patterns ORDER BY id"))
            return [dict(row) for row in result.mappings()]

    def fetch_baseline_rows(self) -> list[dict[str, Any]]:
        """Get all fair-contract baseline rows."""
        with self.connection() as conn:
            result = conn.execute(text("SELECT * FROM fair_contract_baselines ORDER BY id"))
            return [dict(row) for row in result.mappings()]

    def seed(self, pattern_set: PatternSet, baselines: Iterable[FairBaseline]) -> None:
        """Replace pattern and baseline tables with the given knowledge."""
        self.initialize_schema()
        baselines = list(baselines)

        with self.connection() as conn:
            conn.execute(text("DELETE FROM clause_patterns"))
            conn.execute(text("DELETE FROM fair_contract_baselines"))

            for pattern in pattern_set.patterns:
                conn.execute(
                    text("""
                        INSERT INTO clause_patterns (
                            clause_type, keywords, risk_level, risk_score,
                            section_number, section_title, full_text,
                            description, gov_url
                        ) VALUES (
                            :clause_type, :keywords, :risk_level, :risk_score,
                            :section_number, :section_title, :full_text,
                            :description, :gov_url
                        )
                    """),
                    {
                        "clause_type": pattern.violation_type,
                        "keywords": json.dumps(list(pattern.keywords)),
                        "risk_level": pattern.risk_level.value,
                        "risk_score": pattern.risk_score,
                        "section_number": pattern.section_number,
                        "section_title": pattern.section_title,
                        "full_text": pattern.section_full_text,
                        "description": pattern.description,
                        "gov_url": pattern.source_url,
                    },
                )

            for baseline in baselines:
                conn.execute(
                    text("""
                        INSERT INTO fair_contract_baselines (clause_category, fair_standard)
                        VALUES (:category, :fair_standard)
                    """),
                    {"category": baseline.category, "fair_standard": baseline.fair_standard},
                )

        logger.info(
            "knowledge_seeded",
            patterns=len(pattern_set.patterns),
            baselines=len(baselines),
            version=pattern_set.version,
        )

    # =========================================================================
    # Act Sections
    # =========================================================================

    def upsert_act_sections(self, sections: Iterable[ActSection]) -> int:
        """Insert or replace statute sections. Returns the number written."""
        self.initialize_schema()
        count = 0
        with self.connection() as conn:
            for section in sections:
                conn.execute(
                    text("""
                        INSERT OR REPLACE INTO act_sections (
                            section_number, section_title, full_text,
                            summary, page_number, chapter
                        ) VALUES (
                            :section_number, :section_title, :full_text,
                            :summary, :page_number, :chapter
                        )
                    """),
                    section.model_dump(),
                )
                count += 1
        logger.info("act_sections_stored", count=count)
        return count

    def list_act_sections(self) -> list[ActSection]:
        """Get stored statute sections in insertion order."""
        self.initialize_schema()
        with self.connection() as conn:
            result = conn.execute(
                text("""
                    SELECT section_number, section_title, full_text,
                           summary, page_number, chapter
                    FROM act_sections ORDER BY id
                """)
            )
            return [ActSection(**dict(row)) for row in result.mappings()]


@lru_cache()
def get_knowledge_database() -> KnowledgeDatabase:
    """Get cached knowledge database instance."""
    return KnowledgeDatabase()
