"""
End-to-end document analysis.

Runs the analysis pipeline on an ingested document, adds explanations and
assembles the presentation report. Shared by the API and the CLI.
"""

import time
from functools import lru_cache

import structlog

from clausecheck.models.api import AnalysisReport
from clausecheck.models.document import ExtractedDocument
from clausecheck.pipeline.orchestrator import AnalysisOrchestrator, get_analysis_orchestrator
from clausecheck.services.explainer import (
    ExplanationService,
    fallback_explanation,
    get_explanation_service,
)
from clausecheck.services.report import ReportBuilder

logger = structlog.get_logger(__name__)


class AnalysisService:
    """Document in, report out."""

    def __init__(
        self,
        orchestrator: AnalysisOrchestrator | None = None,
        explainer: ExplanationService | None = None,
        report_builder: ReportBuilder | None = None,
    ):
        self.orchestrator = orchestrator or get_analysis_orchestrator()
        self._explainer = explainer
        self.report_builder = report_builder or ReportBuilder()

    @property
    def explainer(self) -> ExplanationService:
        if self._explainer is None:
            self._explainer = get_explanation_service()
        return self._explainer

    def run(
        self,
        document: ExtractedDocument,
        language: str | None = None,
        explain: bool = True,
    ) -> AnalysisReport:
        started = time.perf_counter()

        snapshot = self.orchestrator.pattern_store.snapshot()
        result = self.orchestrator.analyze(document.text, snapshot=snapshot)

        if explain:
            explanations = self.explainer.explain_violations(result.violations, language)
        else:
            explanations = [fallback_explanation(v) for v in result.violations]

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        report = self.report_builder.build(
            text=document.text,
            result=result,
            metadata=document.metadata,
            explanations=explanations,
            processing_time_ms=elapsed_ms,
            knowledge_source=snapshot.source,
        )

        logger.info(
            "document_analyzed",
            filename=document.metadata.file_name,
            score=result.overall_score,
            duration_ms=elapsed_ms,
        )
        return report


@lru_cache()
def get_analysis_service() -> AnalysisService:
    """Get cached analysis service instance."""
    return AnalysisService()
