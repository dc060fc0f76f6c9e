"""
Pattern Store Adapter.

Loads violation patterns and fair-practice baselines from an external
source and falls back to the built-in defaults when that source is
unreachable or unseeded. Each analysis run binds one immutable
KnowledgeSnapshot; reload() swaps in a new snapshot without touching runs
that already hold the old one.
"""

import hashlib
import json
from functools import lru_cache
from typing import Any, Protocol, Sequence

import structlog
from pydantic import ValidationError

from clausecheck.models.knowledge import (
    DEFAULT_SOURCE_URL,
    FairBaseline,
    KnowledgeSnapshot,
    Pattern,
    PatternSet,
)
from clausecheck.storage.defaults import DEFAULT_FAIR_BASELINES, DEFAULT_PATTERN_SET
from clausecheck.storage.knowledge_db import KnowledgeDatabase, get_knowledge_database

logger = structlog.get_logger(__name__)


class PatternSource(Protocol):
    """External read dependency. Either method may return nothing or raise."""

    def load_patterns(self) -> Sequence[Pattern]: ...

    def load_baselines(self) -> Sequence[FairBaseline]: ...


def pattern_from_row(row: dict[str, Any]) -> Pattern:
    """Map a clause_patterns row onto a Pattern."""
    return Pattern(
        violation_type=row["clause_type"],
        keywords=row.get("keywords"),
        risk_level=row["risk_level"],
        risk_score=row["risk_score"],
        section_number=row.get("section_number") or "",
        section_title=row.get("section_title") or "Indian Contract Act",
        section_full_text=row.get("full_text") or row.get("description") or "",
        description=row.get("description") or "",
        source_url=row.get("gov_url") or DEFAULT_SOURCE_URL,
    )


class DatabasePatternSource:
    """PatternSource backed by the SQLite knowledge store."""

    def __init__(self, database: KnowledgeDatabase | None = None):
        self._database = database

    @property
    def database(self) -> KnowledgeDatabase:
        if self._database is None:
            self._database = get_knowledge_database()
        return self._database

    def load_patterns(self) -> list[Pattern]:
        patterns = []
        for row in self.database.fetch_pattern_rows():
            try:
                patterns.append(pattern_from_row(row))
            except (KeyError, ValidationError) as e:
                logger.warning(
                    "pattern_row_skipped",
                    clause_type=row.get("clause_type"),
                    error=str(e),
                )
        return patterns

    def load_baselines(self) -> list[FairBaseline]:
        baselines = []
        for row in self.database.fetch_baseline_rows():
            category = row.get("clause_category")
            standard = row.get("fair_standard")
            if category and standard:
                baselines.append(FairBaseline(category=category, fair_standard=standard))
        return baselines


def _fingerprint(patterns: Sequence[Pattern]) -> str:
    payload = json.dumps([p.model_dump(mode="json") for p in patterns], sort_keys=True)
    return "db-" + hashlib.sha256(payload.encode("utf-8")).hexdigest()[:12]


class PatternStoreAdapter:
    """
    Resolves the active knowledge for analysis runs.

    The default pattern set and baselines are injected at construction and
    never mutated.
    """

    def __init__(
        self,
        source: PatternSource | None = None,
        default_patterns: PatternSet = DEFAULT_PATTERN_SET,
        default_baselines: Sequence[FairBaseline] = DEFAULT_FAIR_BASELINES,
    ):
        self.source = source
        self.default_patterns = default_patterns
        self.default_baselines = tuple(default_baselines)
        self._snapshot: KnowledgeSnapshot | None = None

    def load_patterns(self) -> tuple[Pattern, ...]:
        """Active pattern sequence (external or default, never merged)."""
        patterns, _ = self._resolve_patterns()
        return patterns

    def load_baselines(self) -> tuple[FairBaseline, ...]:
        """Active baselines; empty when the store has none."""
        if self.source is None:
            return self.default_baselines

        try:
            baselines = tuple(self.source.load_baselines() or ())
        except Exception as e:
            logger.warning("baseline_store_unavailable", error=str(e))
            return self.default_baselines

        if not baselines:
            logger.info("baseline_store_empty", fallback_count=len(self.default_baselines))
            return self.default_baselines
        return baselines

    def _resolve_patterns(self) -> tuple[tuple[Pattern, ...], bool]:
        """Return (patterns, from_store)."""
        if self.source is None:
            return self.default_patterns.patterns, False

        try:
            patterns = tuple(self.source.load_patterns() or ())
        except Exception as e:
            logger.warning(
                "pattern_store_fallback",
                reason="unavailable",
                error=str(e),
                version=self.default_patterns.version,
            )
            return self.default_patterns.patterns, False

        if not patterns:
            logger.info(
                "pattern_store_fallback",
                reason="empty",
                version=self.default_patterns.version,
            )
            return self.default_patterns.patterns, False

        return patterns, True

    def build_snapshot(self) -> KnowledgeSnapshot:
        """Load a fresh snapshot from the source."""
        patterns, from_store = self._resolve_patterns()
        snapshot = KnowledgeSnapshot(
            patterns=patterns,
            baselines=self.load_baselines(),
            source="database" if from_store else "default",
            version=_fingerprint(patterns) if from_store else self.default_patterns.version,
        )
        logger.info(
            "patterns_loaded",
            source=snapshot.source,
            version=snapshot.version,
            patterns=len(snapshot.patterns),
            baselines=len(snapshot.baselines),
        )
        return snapshot

    def snapshot(self) -> KnowledgeSnapshot:
        """Current snapshot, loaded on first use."""
        if self._snapshot is None:
            self._snapshot = self.build_snapshot()
        return self._snapshot

    def reload(self) -> KnowledgeSnapshot:
        """Replace the current snapshot. Runs holding the old one keep it."""
        self._snapshot = self.build_snapshot()
        return self._snapshot


@lru_cache()
def get_pattern_store() -> PatternStoreAdapter:
    """Get cached pattern store backed by the knowledge database."""
    return PatternStoreAdapter(source=DatabasePatternSource())
