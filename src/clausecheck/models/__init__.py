"""
Pydantic models for clausecheck.

- Clause models for segmented contract text
- Knowledge models for patterns, baselines and statute sections
- Analysis models for violations, deviations and results
- Document and API models for ingestion and request/response schemas
"""

from clausecheck.models.clause import Clause
from clausecheck.models.knowledge import (
    ActSection,
    FairBaseline,
    KnowledgeSnapshot,
    Pattern,
    PatternSet,
    RiskLevel,
)
from clausecheck.models.analysis import (
    AnalysisResult,
    Deviation,
    DeviationLevel,
    RiskCategory,
    Violation,
)
from clausecheck.models.document import DocumentMetadata, ExtractedDocument
from clausecheck.models.api import (
    AnalysisReport,
    AnalyzeTextRequest,
    Explanation,
    ExplanationRequest,
    RiskyClause,
)

__all__ = [
    # Clause models
    "Clause",
    # Knowledge models
    "ActSection",
    "FairBaseline",
    "KnowledgeSnapshot",
    "Pattern",
    "PatternSet",
    "RiskLevel",
    # Analysis models
    "AnalysisResult",
    "Deviation",
    "DeviationLevel",
    "RiskCategory",
    "Violation",
    # Document models
    "DocumentMetadata",
    "ExtractedDocument",
    # API models
    "AnalysisReport",
    "AnalyzeTextRequest",
    "Explanation",
    "ExplanationRequest",
    "RiskyClause",
]
