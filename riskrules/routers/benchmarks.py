"""Industry benchmark API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from riskrules.dependencies import get_benchmark_service, get_current_user_id
from riskrules.schemas.analysis import AnalysisResponse
from riskrules.schemas.benchmark import (
    CompareRequest,
    IndustryAvailability,
    IndustryBenchmarkSchema,
    IndustrySchema,
)
from riskrules.services.benchmark_comparison import BenchmarkService

router = APIRouter(prefix="/benchmarks", tags=["benchmarks"])


@router.get("/industries", response_model=list[IndustrySchema])
async def list_industries(
    service: BenchmarkService = Depends(get_benchmark_service),
) -> list[IndustrySchema]:
    """All industries, alphabetically."""
    return [IndustrySchema(**i) for i in await service.list_industries()]


@router.get("/frameworks", response_model=list[str])
async def list_frameworks(
    service: BenchmarkService = Depends(get_benchmark_service),
) -> list[str]:
    """Compliance frameworks that have benchmark data."""
    return await service.get_available_frameworks()


@router.get("/availability", response_model=list[IndustryAvailability])
async def get_availability(
    service: BenchmarkService = Depends(get_benchmark_service),
) -> list[IndustryAvailability]:
    """Benchmarked area counts per industry and framework."""
    return [IndustryAvailability(**a) for a in await service.get_benchmark_availability()]


@router.get(
    "/industries/{industry_id}/frameworks/{framework_id}",
    response_model=list[IndustryBenchmarkSchema],
)
async def get_industry_benchmarks(
    industry_id: str,
    framework_id: str,
    service: BenchmarkService = Depends(get_benchmark_service),
) -> list[IndustryBenchmarkSchema]:
    """Benchmarks for one industry and framework, by area."""
    benchmarks = await service.get_industry_benchmarks(industry_id, framework_id)
    return [IndustryBenchmarkSchema(**b) for b in benchmarks]


@router.post("/analyses/{analysis_id}/compare", response_model=AnalysisResponse)
async def compare_analysis(
    analysis_id: str,
    request: CompareRequest,
    user_id: str = Depends(get_current_user_id),
    service: BenchmarkService = Depends(get_benchmark_service),
) -> AnalysisResponse:
    """Compare an analysis' area scores against an industry's benchmarks."""
    analysis = await service.generate_benchmark_comparisons(
        analysis_id, user_id, request.industry_id, request.framework_id
    )
    return AnalysisResponse(**analysis)
