"""Payloads posted by other platform services."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class QuestionnaireCompletedEvent(BaseModel):
    """Sent by the questionnaire service when a user finishes a submission."""

    model_config = ConfigDict(populate_by_name=True)

    submission_id: str | None = Field(default=None, alias="submissionId")
    user_id: str | None = Field(default=None, alias="userId")


class AnalysisCompletedEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    analysis_id: str | None = Field(default=None, alias="analysisId")


class WebhookAck(BaseModel):
    success: bool = True
    message: str
