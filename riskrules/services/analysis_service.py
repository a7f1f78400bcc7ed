"""Scoring submissions into analyses and managing the stored records."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog

from riskrules.config import Settings
from riskrules.errors import NotFoundError, RiskRulesError, UnauthorizedError
from riskrules.models.base import utcnow
from riskrules.services.questionnaire_client import QuestionnaireClient
from riskrules.services.risk_scoring import calculate_risk_scores, generate_recommendations
from riskrules.store import DataStore


class AnalysisService:
    """Creates, reads and deletes a user's risk analyses."""

    def __init__(
        self,
        store: DataStore,
        settings: Settings,
        questionnaire: QuestionnaireClient | None = None,
        clock: Callable[[], datetime] = utcnow,
        logger: Any = None,
    ) -> None:
        self.store = store
        self.settings = settings
        self.questionnaire = questionnaire or QuestionnaireClient(
            settings.questionnaire_service_url, timeout=settings.http_timeout_seconds
        )
        self.clock = clock
        self.logger = logger or structlog.get_logger()

    async def analyze_submission(self, submission_id: str, user_id: str) -> dict[str, Any]:
        """Fetch a submission from the questionnaire service and score it."""
        submission = await self.questionnaire.get_submission(submission_id)
        return await self.create_analysis(user_id, submission_id, submission)

    async def process_completed_questionnaire(self, submission_id: str, user_id: str) -> dict[str, Any] | None:
        """Score a submission announced by webhook; failures are logged, not raised."""
        try:
            analysis = await self.analyze_submission(submission_id, user_id)
        except RiskRulesError as exc:
            self.logger.error(
                "webhook_analysis_failed",
                submission_id=submission_id,
                user_id=user_id,
                code=exc.code,
                reason=exc.message,
            )
            return None
        return analysis

    async def process_completed_analysis(self, analysis_id: str) -> dict[str, Any]:
        """Load an analysis announced as complete so reporting can pick it up."""
        analysis = self.store.get_analysis(analysis_id)
        if analysis is None:
            raise NotFoundError("Analysis not found")
        self.logger.info("analysis_completed", analysis_id=analysis_id, user_id=analysis["user_id"])
        return analysis

    async def create_analysis(
        self, user_id: str, submission_id: str, submission: dict[str, Any]
    ) -> dict[str, Any]:
        """Score a submission and store the analysis with its recommendations."""
        scores = calculate_risk_scores(
            submission,
            self.settings.category_weights,
            self.settings.risk_thresholds,
        )
        now = self.clock()
        analysis = {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "submission_id": submission_id,
            "risk_score": scores["risk_score"],
            "security_level": scores["security_level"],
            "industry_id": None,
            "area_scores": scores["area_scores"],
            "recommendations": generate_recommendations(scores["area_scores"]),
            "benchmark_comparisons": [],
            "created_at": now,
            "updated_at": now,
        }
        self.store.add_analysis(analysis)
        self.logger.info(
            "analysis_created",
            analysis_id=analysis["id"],
            user_id=user_id,
            risk_score=analysis["risk_score"],
            security_level=analysis["security_level"],
        )
        return analysis

    async def get_analysis(self, analysis_id: str, user_id: str) -> dict[str, Any]:
        analysis = self.store.get_analysis(analysis_id)
        if analysis is None:
            raise NotFoundError("Analysis not found")
        if analysis["user_id"] != user_id:
            raise UnauthorizedError("Analysis belongs to a different user")
        return analysis

    async def get_user_analyses(self, user_id: str) -> list[dict[str, Any]]:
        return self.store.get_user_analyses(user_id)

    async def delete_analysis(self, analysis_id: str, user_id: str) -> dict[str, Any]:
        """Delete an analysis; its scores, comparisons and rule results go with it."""
        await self.get_analysis(analysis_id, user_id)
        async with self.store.analysis_lock(analysis_id):
            await self.get_analysis(analysis_id, user_id)
            deleted = self.store.delete_analysis(analysis_id)
        self.logger.info("analysis_deleted", analysis_id=analysis_id, user_id=user_id)
        return deleted
