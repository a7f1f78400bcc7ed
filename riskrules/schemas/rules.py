"""Schemas for custom rule endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class RuleCreateRequest(BaseModel):
    """Request to create a custom rule. Criteria structure is checked by the service."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    category: str = Field(..., min_length=1, max_length=100)
    severity: int = Field(..., ge=1, le=5)
    criteria: dict[str, Any]
    active: bool = True


class RuleUpdateRequest(BaseModel):
    """Partial rule update. Only fields present in the body change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(default=None, min_length=1, max_length=100)
    severity: int | None = Field(default=None, ge=1, le=5)
    criteria: dict[str, Any] | None = None
    active: bool | None = None


class RuleResponse(BaseModel):
    """A stored custom rule."""

    id: str
    user_id: str
    name: str
    description: str | None = None
    category: str
    severity: int
    criteria: dict[str, Any]
    active: bool
    created_at: datetime
    updated_at: datetime


class DecoratedRuleResult(BaseModel):
    """A rule verdict with the rule's display fields copied alongside."""

    id: str
    analysis_id: str
    rule_id: str
    matched: bool
    created_at: datetime
    updated_at: datetime
    rule_name: str
    rule_category: str
    rule_severity: int


class EvaluationResponse(BaseModel):
    """Result of evaluating all active rules against an analysis."""

    analysis_id: str
    rule_count: int
    matched_count: int
    results: list[DecoratedRuleResult]


class RuleResultResponse(BaseModel):
    """A stored rule verdict with the full rule embedded."""

    id: str
    analysis_id: str
    rule_id: str
    matched: bool
    created_at: datetime
    updated_at: datetime
    rule: RuleResponse


class MessageResponse(BaseModel):
    message: str
