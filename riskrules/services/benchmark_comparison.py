"""Industry benchmark comparisons for analyses."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog

from riskrules.errors import NotFoundError, UnauthorizedError
from riskrules.models.base import utcnow
from riskrules.store import DataStore

# Area scores are on a 0-10 scale
MAX_SCORE = 10.0


def estimate_percentile(score: float, average: float) -> float:
    """Estimate where a score sits relative to an industry average.

    Scores above the average map linearly onto 50-100 between the average
    and the maximum score; scores at or below it map onto 0-50 between zero
    and the average.

    Args:
        score: The analysis' area score (0-10).
        average: The industry's average score for the area (0-10).

    Returns:
        Percentile as a float between 0.0 and 100.0, one decimal.
    """
    if score > average:
        headroom = MAX_SCORE - average
        percentile = 100.0 if headroom <= 0 else 50 + (score - average) / headroom * 50
    elif average <= 0:
        percentile = 50.0
    else:
        percentile = score / average * 50

    return round(max(0.0, min(100.0, percentile)), 1)


def build_comparisons(
    analysis: dict[str, Any],
    benchmarks: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """One comparison per area score that has a benchmark for the same area."""
    by_area = {b["area"]: b for b in benchmarks}
    comparisons = []
    for area_score in analysis.get("area_scores", []):
        benchmark = by_area.get(area_score["area"])
        if benchmark is None:
            continue
        comparisons.append({
            "id": str(uuid.uuid4()),
            "analysis_id": analysis["id"],
            "benchmark_id": benchmark["id"],
            "area": area_score["area"],
            "score": area_score["score"],
            "benchmark_score": benchmark["average_score"],
            "percentile": estimate_percentile(area_score["score"], benchmark["average_score"]),
        })
    return comparisons


class BenchmarkService:
    """Industry benchmark lookups and per-analysis comparison runs."""

    def __init__(
        self,
        store: DataStore,
        clock: Callable[[], datetime] = utcnow,
        logger: Any = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.logger = logger or structlog.get_logger()

    async def list_industries(self) -> list[dict[str, Any]]:
        return sorted(self.store.industries.values(), key=lambda i: i["name"])

    async def get_industry_benchmarks(self, industry_id: str, framework_id: str) -> list[dict[str, Any]]:
        benchmarks = self.store.get_industry_benchmarks(industry_id, framework_id)
        return sorted(benchmarks, key=lambda b: b["area"])

    async def get_available_frameworks(self) -> list[str]:
        """Distinct framework ids that have benchmark data, in first-seen order."""
        return list(dict.fromkeys(b["framework_id"] for b in self.store.industry_benchmarks))

    async def get_benchmark_availability(self) -> list[dict[str, Any]]:
        """Benchmarked area counts per industry and framework."""
        availability = []
        for industry in await self.list_industries():
            counts: dict[str, int] = {}
            for benchmark in self.store.industry_benchmarks:
                if benchmark["industry_id"] == industry["id"]:
                    counts[benchmark["framework_id"]] = counts.get(benchmark["framework_id"], 0) + 1
            availability.append({
                "industry": industry,
                "frameworks": [
                    {"framework_id": framework_id, "area_count": count}
                    for framework_id, count in counts.items()
                ],
            })
        return availability

    async def generate_benchmark_comparisons(
        self,
        analysis_id: str,
        user_id: str,
        industry_id: str,
        framework_id: str,
    ) -> dict[str, Any]:
        """Replace an analysis' benchmark comparisons with a fresh run."""
        self._owned_analysis(analysis_id, user_id)
        async with self.store.analysis_lock(analysis_id):
            analysis = self._owned_analysis(analysis_id, user_id)

            benchmarks = self.store.get_industry_benchmarks(industry_id, framework_id)
            if not benchmarks:
                raise NotFoundError("No benchmark data available for the specified industry and framework")

            now = self.clock()
            comparisons = build_comparisons(analysis, benchmarks)
            for comparison in comparisons:
                comparison["created_at"] = now
            self.store.replace_benchmark_comparisons(analysis_id, comparisons, industry_id)
            analysis["updated_at"] = now

        self.logger.info(
            "benchmark_comparisons_generated",
            analysis_id=analysis_id,
            industry_id=industry_id,
            framework_id=framework_id,
            comparison_count=len(comparisons),
        )
        return analysis

    def _owned_analysis(self, analysis_id: str, user_id: str) -> dict[str, Any]:
        analysis = self.store.get_analysis(analysis_id)
        if analysis is None:
            raise NotFoundError("Analysis not found")
        if analysis["user_id"] != user_id:
            raise UnauthorizedError("Analysis belongs to a different user")
        return analysis
