"""Schemas for industry benchmark endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class IndustrySchema(BaseModel):
    id: str
    name: str


class IndustryBenchmarkSchema(BaseModel):
    """Average area score for an industry under one framework."""

    id: str
    industry_id: str
    framework_id: str
    area: str
    average_score: float


class FrameworkAvailability(BaseModel):
    framework_id: str
    area_count: int


class IndustryAvailability(BaseModel):
    industry: IndustrySchema
    frameworks: list[FrameworkAvailability]


class CompareRequest(BaseModel):
    """Request to compare an analysis against an industry benchmark set."""

    industry_id: str = Field(..., min_length=1)
    framework_id: str = Field(..., min_length=1, description="e.g. ISO27001, SOC2, HIPAA")
