"""Shared test fixtures for the Risk Rules test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from riskrules.app import create_app
from riskrules.config import Settings
from riskrules.store import data_store

USER_ID = "user-alice"
OTHER_USER_ID = "user-bob"


def _test_settings() -> Settings:
    """Return settings suitable for testing."""
    return Settings(
        environment="development",
        log_format="console",
        rate_limit_default="1000/minute",
        allowed_origins="http://localhost:3000,http://localhost:5015",
    )


@pytest.fixture
def settings():
    """Test settings."""
    return _test_settings()


@pytest.fixture
def app(settings):
    """Create a fresh FastAPI app for testing."""
    return create_app(settings)


@pytest.fixture
def client(app):
    """HTTP test client."""
    return TestClient(app)


@pytest.fixture
def auth_headers():
    """Identity headers for the primary test user."""
    return {"X-User-ID": USER_ID}


@pytest.fixture
def other_headers():
    """Identity headers for a second user."""
    return {"X-User-ID": OTHER_USER_ID}


@pytest.fixture(autouse=True)
def reset_store():
    """Reset the global data store before each test."""
    data_store.reset()
    yield
    data_store.reset()


def make_analysis(**overrides) -> dict:
    """Build an analysis dict with sensible defaults."""
    now = datetime.now(timezone.utc)
    analysis = {
        "id": "analysis-1",
        "user_id": USER_ID,
        "submission_id": "submission-1",
        "risk_score": 3.5,
        "security_level": "Medium Risk",
        "industry_id": None,
        "area_scores": [
            {"area": "Access Control", "score": 5.2},
            {"area": "Network Security", "score": 7.8},
            {"area": "Data Protection", "score": 2.4},
        ],
        "recommendations": [
            {"description": "Enable MFA", "category": "Access Control", "priority": 1},
            {"description": "Review access policies", "category": "Access Control", "priority": 3},
            {"description": "Encrypt data at rest", "category": "Data Protection", "priority": 1},
        ],
        "benchmark_comparisons": [
            {
                "area": "Network Security",
                "score": 7.8,
                "benchmark_score": 6.5,
                "percentile": 68.6,
            },
        ],
        "created_at": now,
        "updated_at": now,
    }
    analysis.update(overrides)
    return analysis


def make_rule(**overrides) -> dict:
    """Build a stored rule dict with sensible defaults."""
    now = datetime.now(timezone.utc)
    rule = {
        "id": "rule-1",
        "user_id": USER_ID,
        "name": "Weak access control",
        "description": None,
        "category": "Access Control",
        "severity": 4,
        "criteria": {
            "operator": "AND",
            "conditions": [
                {"field": "riskScore", "operator": "lessThan", "value": 4},
                {"field": "areaScores.Access Control", "operator": "lessThan", "value": 6},
            ],
        },
        "active": True,
        "created_at": now,
        "updated_at": now,
    }
    rule.update(overrides)
    return rule


@pytest.fixture
def sample_analysis():
    """Store an analysis owned by the primary test user."""
    analysis = make_analysis()
    data_store.add_analysis(analysis)
    return analysis


@pytest.fixture
def sample_rules():
    """Store three rules for the primary user (one inactive) and one for another user."""
    base = datetime.now(timezone.utc)
    rules = [
        make_rule(id="rule-1", created_at=base),
        make_rule(
            id="rule-2",
            name="High risk label",
            category="Governance",
            severity=2,
            criteria={
                "operator": "OR",
                "conditions": [
                    {"field": "securityLevel", "operator": "equals", "value": "High Risk"},
                    {"field": "recommendations.Data Protection", "operator": "greaterThan", "value": 3},
                ],
            },
            created_at=base + timedelta(seconds=1),
        ),
        make_rule(id="rule-3", name="Inactive rule", active=False, created_at=base + timedelta(seconds=2)),
        make_rule(id="rule-foreign", user_id=OTHER_USER_ID, name="Someone else's rule"),
    ]
    for rule in rules:
        data_store.add_rule(rule)
    return rules


@pytest.fixture
def sample_benchmarks():
    """Store two industries with ISO27001 and SOC2 benchmarks."""
    industries = [
        {"id": "ind-finance", "name": "Financial Services"},
        {"id": "ind-health", "name": "Healthcare"},
    ]
    for industry in industries:
        data_store.add_industry(industry)

    benchmarks = [
        ("bm-1", "ind-finance", "ISO27001", "Access Control", 6.0),
        ("bm-2", "ind-finance", "ISO27001", "Network Security", 6.5),
        ("bm-3", "ind-finance", "ISO27001", "Data Protection", 7.0),
        ("bm-4", "ind-finance", "SOC2", "Access Control", 5.5),
        ("bm-5", "ind-health", "HIPAA", "Data Protection", 8.0),
    ]
    for bm_id, industry_id, framework_id, area, average in benchmarks:
        data_store.add_industry_benchmark({
            "id": bm_id,
            "industry_id": industry_id,
            "framework_id": framework_id,
            "area": area,
            "average_score": average,
        })
    return industries
