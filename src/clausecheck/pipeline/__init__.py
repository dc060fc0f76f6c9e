"""
Clause analysis pipeline.

1. Segmentation - Split raw text into clauses
2. Detection - Match clauses against statutory-violation patterns
3. Deviations - Compare terms against the fair-contract baseline
4. Scoring - Aggregate violations into a 0-100 score and risk band
"""

from clausecheck.pipeline.segmenter import ClauseSegmenter
from clausecheck.pipeline.detector import ViolationDetector
from clausecheck.pipeline.deviations import DeviationAnalyzer
from clausecheck.pipeline.scorer import classify, score
from clausecheck.pipeline.orchestrator import AnalysisOrchestrator

__all__ = [
    "ClauseSegmenter",
    "ViolationDetector",
    "DeviationAnalyzer",
    "classify",
    "score",
    "AnalysisOrchestrator",
]
