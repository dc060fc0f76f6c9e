"""
Analysis Orchestrator

Sequences the clause analysis pipeline for one document:
text -> clauses -> (violations, deviations) -> score.
"""

from functools import lru_cache

import structlog

from clausecheck.models.analysis import AnalysisResult
from clausecheck.models.knowledge import KnowledgeSnapshot
from clausecheck.pipeline import scorer
from clausecheck.pipeline.detector import ViolationDetector
from clausecheck.pipeline.deviations import DeviationAnalyzer
from clausecheck.pipeline.segmenter import ClauseSegmenter
from clausecheck.storage.pattern_store import PatternStoreAdapter, get_pattern_store

logger = structlog.get_logger(__name__)


class AnalysisOrchestrator:
    """
    Runs the clause analysis pipeline.

    Coordinates:
    1. Clause segmentation
    2. Violation detection against the active patterns
    3. Deviation analysis against the fair baselines
    4. Scoring and classification

    Each run binds one knowledge snapshot up front, so a concurrent
    reload of the pattern store never changes a run halfway through.
    """

    def __init__(
        self,
        pattern_store: PatternStoreAdapter | None = None,
        segmenter: ClauseSegmenter | None = None,
        detector: ViolationDetector | None = None,
        deviation_analyzer: DeviationAnalyzer | None = None,
    ):
        self._pattern_store = pattern_store
        self.segmenter = segmenter or ClauseSegmenter()
        self.detector = detector or ViolationDetector()
        self.deviation_analyzer = deviation_analyzer or DeviationAnalyzer()

    @property
    def pattern_store(self) -> PatternStoreAdapter:
        if self._pattern_store is None:
            self._pattern_store = get_pattern_store()
        return self._pattern_store

    def analyze(
        self,
        text: str,
        snapshot: KnowledgeSnapshot | None = None,
    ) -> AnalysisResult:
        """
        Analyze contract text.

        Args:
            text: Extracted contract text (may be empty)
            snapshot: Knowledge to analyze against; defaults to the
                pattern store's current snapshot

        Returns:
            AnalysisResult with score, level, violations and deviations
        """
        knowledge = snapshot or self.pattern_store.snapshot()

        clauses = self.segmenter.segment(text or "")
        violations = self.detector.detect(clauses, knowledge.patterns)
        deviations = self.deviation_analyzer.analyze(clauses, knowledge.baselines)

        overall_score = scorer.score(violations)
        result = AnalysisResult(
            overall_score=overall_score,
            risk_level=scorer.classify(overall_score),
            clauses=tuple(clauses),
            violations=tuple(violations),
            deviations=tuple(deviations),
        )

        logger.info(
            "analysis_completed",
            clauses=len(clauses),
            violations=len(violations),
            deviations=len(deviations),
            score=result.overall_score,
            risk_level=result.risk_level.value,
            knowledge_source=knowledge.source,
            knowledge_version=knowledge.version,
        )
        return result


@lru_cache()
def get_analysis_orchestrator() -> AnalysisOrchestrator:
    """Get cached orchestrator instance."""
    return AnalysisOrchestrator()
