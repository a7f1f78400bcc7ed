"""Analysis API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from riskrules.dependencies import get_analysis_service, get_current_user_id
from riskrules.schemas.analysis import AnalysisResponse, AnalyzeRequest, DirectAnalyzeRequest
from riskrules.schemas.rules import MessageResponse
from riskrules.services.analysis_service import AnalysisService

router = APIRouter(prefix="/analyses", tags=["analyses"])


@router.post("", response_model=AnalysisResponse, status_code=201)
async def analyze_submission(
    request: AnalyzeRequest,
    user_id: str = Depends(get_current_user_id),
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    """Score a submission fetched from the questionnaire service."""
    analysis = await service.analyze_submission(request.submission_id, user_id)
    return AnalysisResponse(**analysis)


@router.post("/direct", response_model=AnalysisResponse, status_code=201)
async def analyze_inline_submission(
    request: DirectAnalyzeRequest,
    user_id: str = Depends(get_current_user_id),
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    """Score a submission supplied in the request body."""
    analysis = await service.create_analysis(
        user_id, request.submission_id, request.submission.model_dump()
    )
    return AnalysisResponse(**analysis)


@router.get("", response_model=list[AnalysisResponse])
async def list_analyses(
    user_id: str = Depends(get_current_user_id),
    service: AnalysisService = Depends(get_analysis_service),
) -> list[AnalysisResponse]:
    """List the caller's analyses, newest first."""
    return [AnalysisResponse(**a) for a in await service.get_user_analyses(user_id)]


@router.get("/{analysis_id}", response_model=AnalysisResponse)
async def get_analysis(
    analysis_id: str,
    user_id: str = Depends(get_current_user_id),
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    return AnalysisResponse(**await service.get_analysis(analysis_id, user_id))


@router.delete("/{analysis_id}", response_model=MessageResponse)
async def delete_analysis(
    analysis_id: str,
    user_id: str = Depends(get_current_user_id),
    service: AnalysisService = Depends(get_analysis_service),
) -> MessageResponse:
    await service.delete_analysis(analysis_id, user_id)
    return MessageResponse(message="Analysis deleted successfully")
