"""Health endpoints for the orchestrator and load balancer."""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Request, Response, status

from riskrules.config import Settings
from riskrules.schemas.health import ComponentStatus, HealthResponse
from riskrules.store import data_store

router = APIRouter(tags=["health"])


def _store_status() -> ComponentStatus:
    return ComponentStatus(
        name="store",
        ready=True,
        detail=f"{len(data_store.rules)} rules, {len(data_store.analyses)} analyses",
    )


def _questionnaire_status(settings: Settings) -> ComponentStatus:
    """The questionnaire service URL must be an absolute http(s) URL."""
    try:
        url = httpx.URL(settings.questionnaire_service_url)
    except httpx.InvalidURL as exc:
        return ComponentStatus(name="questionnaire_service", ready=False, detail=str(exc))
    if url.scheme not in ("http", "https") or not url.host:
        return ComponentStatus(
            name="questionnaire_service",
            ready=False,
            detail=f"Unusable URL: {settings.questionnaire_service_url!r}",
        )
    return ComponentStatus(name="questionnaire_service", ready=True, detail=str(url))


def _response(settings: Settings, status_text: str, components: list[ComponentStatus]) -> HealthResponse:
    return HealthResponse(
        status=status_text,
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        components=components,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    return _response(request.app.state.settings, "ok", [])


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(request: Request, response: Response) -> HealthResponse:
    """Ready once the store answers and the questionnaire service is addressable."""
    settings = request.app.state.settings
    components = [_store_status(), _questionnaire_status(settings)]
    if all(c.ready for c in components):
        return _response(settings, "ready", components)
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return _response(settings, "degraded", components)


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    return {"status": "alive"}
