"""FastAPI dependencies: caller identity and service construction."""

from __future__ import annotations

from fastapi import Request

from riskrules.errors import AuthenticationError
from riskrules.services.analysis_service import AnalysisService
from riskrules.services.benchmark_comparison import BenchmarkService
from riskrules.services.rules_service import RulesService
from riskrules.store import data_store


def get_current_user_id(request: Request) -> str:
    """Caller identity forwarded by the API gateway after authentication."""
    header = request.app.state.settings.user_id_header
    user_id = request.headers.get(header, "").strip()
    if not user_id:
        raise AuthenticationError(f"Missing {header} header")
    request.state.user_id = user_id
    return user_id


def get_rules_service(request: Request) -> RulesService:
    settings = request.app.state.settings
    return RulesService(data_store, equality_mode=settings.rule_equality_mode)


def get_analysis_service(request: Request) -> AnalysisService:
    settings = request.app.state.settings
    questionnaire = getattr(request.app.state, "questionnaire_client", None)
    return AnalysisService(data_store, settings, questionnaire=questionnaire)


def get_benchmark_service() -> BenchmarkService:
    return BenchmarkService(data_store)
