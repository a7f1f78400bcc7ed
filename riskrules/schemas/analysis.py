"""Schemas for analysis endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class AreaScoreSchema(BaseModel):
    area: str
    score: float = Field(..., ge=0.0, le=10.0)


class RecommendationSchema(BaseModel):
    description: str
    category: str
    priority: int = Field(..., ge=1, le=5)


class BenchmarkComparisonSchema(BaseModel):
    area: str
    score: float
    benchmark_score: float
    percentile: float = Field(..., ge=0.0, le=100.0)


class AnswerInput(BaseModel):
    """One questionnaire answer on a 1-5 scale (higher is better)."""

    question_id: str
    value: float | None = Field(default=None, ge=0.0, le=5.0)


class QuestionInput(BaseModel):
    id: str
    category: str | None = None
    weight: float | None = Field(default=None, gt=0.0)


class TemplateInput(BaseModel):
    questions: list[QuestionInput] = Field(default_factory=list)


class SubmissionInput(BaseModel):
    """A questionnaire submission supplied inline."""

    answers: list[AnswerInput] = Field(default_factory=list)
    template: TemplateInput = Field(default_factory=TemplateInput)


class AnalyzeRequest(BaseModel):
    """Request to analyse a submission held by the questionnaire service."""

    submission_id: str = Field(..., min_length=1)


class DirectAnalyzeRequest(BaseModel):
    """Request to analyse a submission included in the body."""

    submission_id: str = Field(..., min_length=1)
    submission: SubmissionInput


class AnalysisResponse(BaseModel):
    """A scored analysis with its area scores, recommendations and comparisons."""

    id: str
    user_id: str
    submission_id: str
    risk_score: float = Field(..., ge=0.0, le=10.0)
    security_level: str
    industry_id: str | None = None
    area_scores: list[AreaScoreSchema]
    recommendations: list[RecommendationSchema]
    benchmark_comparisons: list[BenchmarkComparisonSchema]
    created_at: datetime
    updated_at: datetime
