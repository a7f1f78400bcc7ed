"""Client for fetching submissions from the questionnaire service."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from riskrules.errors import NotFoundError, QuestionnaireServiceError
from riskrules.schemas.analysis import SubmissionInput


class QuestionnaireClient:
    """HTTP client for the questionnaire service's submission API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def get_submission(self, submission_id: str) -> dict[str, Any]:
        """Fetch a submission with its answers and questionnaire template."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.base_url}/api/submissions/{submission_id}",
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as exc:
            raise QuestionnaireServiceError(f"Error fetching submission data: {exc}") from exc

        if response.status_code == 404:
            raise NotFoundError("Submission not found")
        if response.status_code != 200:
            raise QuestionnaireServiceError(
                f"Failed to fetch submission data: {response.status_code} {response.text}"
            )

        body = response.json()
        if not body.get("success") or not body.get("data"):
            raise NotFoundError("Submission not found")
        try:
            submission = SubmissionInput.model_validate(normalise_submission(body["data"]))
        except ValidationError as exc:
            raise QuestionnaireServiceError(
                f"Invalid submission data for {submission_id}: {exc.error_count()} invalid field(s)"
            ) from exc
        return submission.model_dump()


def normalise_submission(data: dict[str, Any]) -> dict[str, Any]:
    """Convert the questionnaire service's camelCase payload to scoring input."""
    template = data.get("template") or {}
    return {
        "answers": [
            {
                "question_id": str(a.get("questionId", a.get("question_id"))),
                "value": _answer_value(a.get("value")),
            }
            for a in data.get("answers", [])
        ],
        "template": {
            "questions": [
                {
                    "id": str(q.get("id")),
                    "category": q.get("category"),
                    "weight": q.get("weight"),
                }
                for q in template.get("questions", [])
            ],
        },
    }


def _answer_value(value: Any) -> Any:
    # Unanswered questions arrive as empty strings.
    if isinstance(value, str) and not value.strip():
        return None
    return value
