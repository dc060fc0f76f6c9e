"""
Services around the analysis core: ingestion, explanations and reporting.
"""

from clausecheck.services.llm_service import LLMService, get_llm_service
from clausecheck.services.contract_loader import ContractLoader, get_contract_loader
from clausecheck.services.explainer import ExplanationService, get_explanation_service
from clausecheck.services.act_loader import ActLoader, get_act_loader
from clausecheck.services.report import ReportBuilder
from clausecheck.services.analysis_service import AnalysisService, get_analysis_service

__all__ = [
    "LLMService",
    "get_llm_service",
    "ContractLoader",
    "get_contract_loader",
    "ExplanationService",
    "get_explanation_service",
    "ActLoader",
    "get_act_loader",
    "ReportBuilder",
    "AnalysisService",
    "get_analysis_service",
]
