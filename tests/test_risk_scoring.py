"""Tests for questionnaire risk scoring and recommendation generation."""

from __future__ import annotations

import pytest

from riskrules.config import Settings
from riskrules.services.risk_scoring import (
    DEFAULT_AREA,
    calculate_area_scores,
    calculate_overall_score,
    calculate_risk_scores,
    determine_security_level,
    generate_recommendations,
)


def make_submission(answers, questions=None):
    questions = questions or [
        {"id": "q1", "category": "Access Control", "weight": 2},
        {"id": "q2", "category": "Access Control", "weight": 1},
        {"id": "q3", "category": "Network Security", "weight": 1},
    ]
    return {
        "id": "submission-1",
        "answers": [{"question_id": qid, "value": value} for qid, value in answers],
        "template": {"questions": questions},
    }


class TestAreaScores:
    """Tests for per-area weighted averages."""

    def test_weighted_average_normalised(self):
        scores = calculate_area_scores(make_submission([("q1", 2), ("q2", 5), ("q3", 4)]))
        assert scores == [
            {"area": "Access Control", "score": 6.0},
            {"area": "Network Security", "score": 8.0},
        ]

    def test_unknown_question_skipped(self):
        scores = calculate_area_scores(make_submission([("q3", 5), ("q99", 1)]))
        assert scores == [{"area": "Network Security", "score": 10.0}]

    def test_missing_category_uses_default_area(self):
        submission = make_submission([("q1", 3)], questions=[{"id": "q1"}])
        assert calculate_area_scores(submission) == [{"area": DEFAULT_AREA, "score": 6.0}]

    def test_no_answers(self):
        assert calculate_area_scores(make_submission([])) == []

    def test_missing_template(self):
        assert calculate_area_scores({"answers": [{"question_id": "q1", "value": 3}]}) == []


class TestOverallScore:
    """Tests for the category-weighted overall score."""

    def test_weighted_by_category(self):
        area_scores = [{"area": "Access Control", "score": 6.0}, {"area": "Network Security", "score": 8.0}]
        weights = {"Access Control": 0.20, "Network Security": 0.15}
        assert calculate_overall_score(area_scores, weights) == 6.9

    def test_unknown_category_weighs_one(self):
        area_scores = [{"area": "Mystery", "score": 4.0}, {"area": "Other", "score": 8.0}]
        assert calculate_overall_score(area_scores, {}) == 6.0

    def test_empty(self):
        assert calculate_overall_score([], {"Access Control": 0.2}) == 0.0

    def test_zero_weights(self):
        area_scores = [{"area": "Access Control", "score": 6.0}]
        assert calculate_overall_score(area_scores, {"Access Control": 0}) == 0.0


class TestSecurityLevel:
    """Tests for mapping scores onto levels."""

    @pytest.mark.parametrize("score,level", [
        (0.0, "High Risk"),
        (3.0, "High Risk"),
        (3.1, "Medium Risk"),
        (6.0, "Medium Risk"),
        (6.1, "Low Risk"),
        (8.0, "Low Risk"),
        (8.1, "Minimal Risk"),
        (10.0, "Minimal Risk"),
    ])
    def test_default_thresholds(self, score, level):
        assert determine_security_level(score) == level

    def test_custom_thresholds(self):
        thresholds = {"low": 1.0, "medium": 2.0, "high": 3.0}
        assert determine_security_level(2.5, thresholds) == "Low Risk"

    def test_thresholds_from_settings(self):
        settings = Settings(risk_threshold_low=5.0)
        assert determine_security_level(4.0, settings.risk_thresholds) == "High Risk"


class TestCalculateRiskScores:
    def test_full_pipeline(self):
        result = calculate_risk_scores(
            make_submission([("q1", 2), ("q2", 5), ("q3", 4)]),
            {"Access Control": 0.20, "Network Security": 0.15},
        )
        assert result["risk_score"] == 6.9
        assert result["security_level"] == "Low Risk"
        assert len(result["area_scores"]) == 2


class TestRecommendations:
    """Tests for recommendation generation."""

    def test_weakest_areas_always_covered(self):
        recs = generate_recommendations([
            {"area": "Access Control", "score": 9.0},
            {"area": "Network Security", "score": 8.0},
        ])
        assert {r["category"] for r in recs} == {"Access Control", "Network Security"}
        assert len(recs) == 6

    def test_strong_areas_beyond_minimum_skipped(self):
        recs = generate_recommendations([
            {"area": "Access Control", "score": 9.5},
            {"area": "Network Security", "score": 9.0},
            {"area": "Data Protection", "score": 8.5},
            {"area": "Application Security", "score": 8.0},
        ])
        assert "Access Control" not in {r["category"] for r in recs}

    def test_weak_areas_always_covered(self):
        area_scores = [{"area": f"Area {i}", "score": 2.0} for i in range(5)]
        recs = generate_recommendations(area_scores)
        assert len(recs) == 15

    def test_sorted_by_priority(self):
        recs = generate_recommendations([
            {"area": "Access Control", "score": 3.0},
            {"area": "Data Protection", "score": 6.0},
        ])
        priorities = [r["priority"] for r in recs]
        assert priorities == sorted(priorities)
        assert recs[0]["priority"] == 1

    def test_low_score_raises_priority(self):
        low = generate_recommendations([{"area": "Access Control", "score": 2.0}])
        high = generate_recommendations([{"area": "Access Control", "score": 6.5}])
        mfa = "Implement multi-factor authentication for all user accounts"
        assert next(r for r in low if r["description"] == mfa)["priority"] == 1
        assert next(r for r in high if r["description"] == mfa)["priority"] == 2

    def test_unknown_area_gets_general_advice(self):
        recs = generate_recommendations([{"area": "Physical Security", "score": 2.0}])
        assert {r["category"] for r in recs} == {"Governance", "Incident Response"}

    def test_priorities_within_range(self):
        recs = generate_recommendations([{"area": "Security Awareness", "score": 0.0}])
        assert all(1 <= r["priority"] <= 5 for r in recs)

    def test_no_areas(self):
        assert generate_recommendations([]) == []
