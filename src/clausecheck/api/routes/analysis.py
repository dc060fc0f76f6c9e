"""
Contract analysis routes.
"""

from typing import Literal, Optional

import structlog
from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from clausecheck.models.api import AnalysisReport, AnalyzeTextRequest
from clausecheck.services.analysis_service import get_analysis_service
from clausecheck.services.contract_loader import get_contract_loader

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("", response_model=AnalysisReport)
def analyze_text(request: AnalyzeTextRequest) -> AnalysisReport:
    """
    Analyze already-extracted contract text.
    """
    document = get_contract_loader().load_text(request.text, file_name=request.file_name)
    return get_analysis_service().run(
        document,
        language=request.language,
        explain=request.explain,
    )


@router.post("/upload", response_model=AnalysisReport)
def analyze_upload(
    file: UploadFile = File(...),
    language: Optional[Literal["en", "hi"]] = Form(None),
    explain: bool = Form(True),
) -> AnalysisReport:
    """
    Upload a contract (.txt, .pdf or .docx) and analyze it.
    """
    content = file.file.read()

    try:
        document = get_contract_loader().load_bytes(content, file.filename or "upload")
    except ValueError as e:
        logger.warning("contract_upload_rejected", filename=file.filename, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return get_analysis_service().run(document, language=language, explain=explain)
