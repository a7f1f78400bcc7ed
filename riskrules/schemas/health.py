"""Schemas for the health endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class ComponentStatus(BaseModel):
    """Readiness of one thing the service depends on."""

    name: str
    ready: bool
    detail: str | None = None


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    environment: str
    components: list[ComponentStatus] = []
