"""Webhooks called by the questionnaire and report services."""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends

from riskrules.dependencies import get_analysis_service
from riskrules.errors import MissingParametersError
from riskrules.schemas.webhooks import AnalysisCompletedEvent, QuestionnaireCompletedEvent, WebhookAck
from riskrules.services.analysis_service import AnalysisService

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/questionnaire-completed", response_model=WebhookAck, status_code=202)
async def questionnaire_completed(
    event: QuestionnaireCompletedEvent,
    background_tasks: BackgroundTasks,
    service: AnalysisService = Depends(get_analysis_service),
) -> WebhookAck:
    """Accept a finished submission and score it after responding."""
    if not event.submission_id or not event.user_id:
        raise MissingParametersError("Submission ID and User ID are required")
    background_tasks.add_task(
        service.process_completed_questionnaire, event.submission_id, event.user_id
    )
    return WebhookAck(message="Questionnaire submission accepted for processing")


@router.post("/analysis-completed", response_model=WebhookAck)
async def analysis_completed(
    event: AnalysisCompletedEvent,
    service: AnalysisService = Depends(get_analysis_service),
) -> WebhookAck:
    if not event.analysis_id:
        raise MissingParametersError("Analysis ID is required")
    await service.process_completed_analysis(event.analysis_id)
    return WebhookAck(message="Report generation triggered successfully")
