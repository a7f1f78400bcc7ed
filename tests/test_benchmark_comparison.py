"""Tests for industry benchmark comparisons."""

from __future__ import annotations

import asyncio

import pytest

from conftest import OTHER_USER_ID, USER_ID
from riskrules.errors import NotFoundError, UnauthorizedError
from riskrules.services.benchmark_comparison import (
    BenchmarkService,
    build_comparisons,
    estimate_percentile,
)
from riskrules.services.field_resolver import resolve_field
from riskrules.store import data_store


class TestEstimatePercentile:
    """Tests for the percentile estimate."""

    @pytest.mark.parametrize("score,average,expected", [
        (7.8, 6.5, 68.6),
        (5.2, 6.0, 43.3),
        (6.0, 6.0, 50.0),
        (10.0, 6.0, 100.0),
        (0.0, 6.0, 0.0),
        (10.0, 10.0, 50.0),
        (0.0, 0.0, 50.0),
        (5.0, 0.0, 75.0),
    ])
    def test_values(self, score, average, expected):
        assert estimate_percentile(score, average) == expected

    def test_above_max_score_is_clamped(self):
        assert estimate_percentile(11.0, 10.0) == 100.0

    def test_negative_score_is_clamped(self):
        assert estimate_percentile(-1.0, 5.0) == 0.0


class TestBuildComparisons:
    def test_only_benchmarked_areas(self, sample_analysis):
        benchmarks = [
            {"id": "bm-1", "area": "Access Control", "average_score": 6.0},
            {"id": "bm-x", "area": "Physical Security", "average_score": 5.0},
        ]
        comparisons = build_comparisons(sample_analysis, benchmarks)
        assert len(comparisons) == 1
        assert comparisons[0]["area"] == "Access Control"
        assert comparisons[0]["benchmark_id"] == "bm-1"
        assert comparisons[0]["percentile"] == 43.3

    def test_no_area_scores(self):
        assert build_comparisons({"id": "a", "area_scores": []}, [{"id": "b", "area": "X", "average_score": 1}]) == []


class TestBenchmarkService:
    """Tests for benchmark lookups and comparison runs."""

    @pytest.fixture
    def service(self):
        return BenchmarkService(data_store)

    def test_list_industries_by_name(self, service, sample_benchmarks):
        names = [i["name"] for i in asyncio.run(service.list_industries())]
        assert names == ["Financial Services", "Healthcare"]

    def test_available_frameworks(self, service, sample_benchmarks):
        assert asyncio.run(service.get_available_frameworks()) == ["ISO27001", "SOC2", "HIPAA"]

    def test_availability(self, service, sample_benchmarks):
        availability = asyncio.run(service.get_benchmark_availability())
        finance = availability[0]
        assert finance["industry"]["id"] == "ind-finance"
        assert finance["frameworks"] == [
            {"framework_id": "ISO27001", "area_count": 3},
            {"framework_id": "SOC2", "area_count": 1},
        ]

    def test_industry_benchmarks_by_area(self, service, sample_benchmarks):
        benchmarks = asyncio.run(service.get_industry_benchmarks("ind-finance", "ISO27001"))
        assert [b["area"] for b in benchmarks] == ["Access Control", "Data Protection", "Network Security"]

    def test_generate_comparisons(self, service, sample_analysis, sample_benchmarks):
        analysis = asyncio.run(service.generate_benchmark_comparisons(
            "analysis-1", USER_ID, "ind-finance", "ISO27001"
        ))
        by_area = {c["area"]: c for c in analysis["benchmark_comparisons"]}
        assert by_area["Access Control"]["percentile"] == 43.3
        assert by_area["Network Security"]["percentile"] == 68.6
        assert by_area["Data Protection"]["percentile"] == 17.1
        assert analysis["industry_id"] == "ind-finance"

    def test_generate_replaces_previous_comparisons(self, service, sample_analysis, sample_benchmarks):
        asyncio.run(service.generate_benchmark_comparisons("analysis-1", USER_ID, "ind-finance", "ISO27001"))
        analysis = asyncio.run(service.generate_benchmark_comparisons(
            "analysis-1", USER_ID, "ind-finance", "SOC2"
        ))
        assert [c["area"] for c in analysis["benchmark_comparisons"]] == ["Access Control"]

    def test_comparisons_feed_rule_fields(self, service, sample_analysis, sample_benchmarks):
        asyncio.run(service.generate_benchmark_comparisons("analysis-1", USER_ID, "ind-finance", "ISO27001"))
        analysis = data_store.get_analysis("analysis-1")
        assert resolve_field("benchmarkComparisons.Data Protection.percentile", analysis) == 17.1
        assert resolve_field("benchmarkComparisons.Data Protection.benchmarkScore", analysis) == 7.0

    def test_missing_benchmarks(self, service, sample_analysis, sample_benchmarks):
        with pytest.raises(NotFoundError, match="No benchmark data available"):
            asyncio.run(service.generate_benchmark_comparisons(
                "analysis-1", USER_ID, "ind-health", "ISO27001"
            ))
        assert len(data_store.get_analysis("analysis-1")["benchmark_comparisons"]) == 1

    def test_missing_analysis(self, service, sample_benchmarks):
        with pytest.raises(NotFoundError, match="Analysis not found"):
            asyncio.run(service.generate_benchmark_comparisons("nope", USER_ID, "ind-finance", "ISO27001"))
        assert data_store._analysis_locks == {}

    def test_foreign_analysis(self, service, sample_analysis, sample_benchmarks):
        with pytest.raises(UnauthorizedError):
            asyncio.run(service.generate_benchmark_comparisons(
                "analysis-1", OTHER_USER_ID, "ind-finance", "ISO27001"
            ))


class TestBenchmarkApi:
    """API tests for the benchmark endpoints."""

    def test_list_industries(self, client, sample_benchmarks):
        resp = client.get("/api/benchmarks/industries")
        assert resp.status_code == 200
        assert [i["id"] for i in resp.json()] == ["ind-finance", "ind-health"]

    def test_frameworks(self, client, sample_benchmarks):
        assert client.get("/api/benchmarks/frameworks").json() == ["ISO27001", "SOC2", "HIPAA"]

    def test_availability(self, client, sample_benchmarks):
        data = client.get("/api/benchmarks/availability").json()
        assert data[1]["frameworks"] == [{"framework_id": "HIPAA", "area_count": 1}]

    def test_industry_framework_benchmarks(self, client, sample_benchmarks):
        resp = client.get("/api/benchmarks/industries/ind-finance/frameworks/SOC2")
        assert resp.status_code == 200
        assert resp.json()[0]["average_score"] == 5.5

    def test_compare(self, client, auth_headers, sample_analysis, sample_benchmarks):
        resp = client.post(
            "/api/benchmarks/analyses/analysis-1/compare",
            json={"industry_id": "ind-finance", "framework_id": "ISO27001"},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["industry_id"] == "ind-finance"
        assert len(data["benchmark_comparisons"]) == 3

    def test_compare_requires_identity(self, client, sample_analysis, sample_benchmarks):
        resp = client.post(
            "/api/benchmarks/analyses/analysis-1/compare",
            json={"industry_id": "ind-finance", "framework_id": "ISO27001"},
        )
        assert resp.status_code == 401

    def test_compare_without_data(self, client, auth_headers, sample_analysis):
        resp = client.post(
            "/api/benchmarks/analyses/analysis-1/compare",
            json={"industry_id": "ind-finance", "framework_id": "ISO27001"},
            headers=auth_headers,
        )
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "NOT_FOUND"

    def test_compare_validates_body(self, client, auth_headers, sample_analysis):
        resp = client.post(
            "/api/benchmarks/analyses/analysis-1/compare",
            json={"industry_id": ""},
            headers=auth_headers,
        )
        assert resp.status_code == 422
