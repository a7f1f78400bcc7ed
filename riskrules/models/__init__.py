"""Database models for the Risk Rules service."""

from riskrules.models.base import Base
from riskrules.models.industry import Industry, IndustryBenchmark
from riskrules.models.analysis import Analysis, AreaScore, Recommendation, BenchmarkComparison
from riskrules.models.rule import CustomRule, RuleResult

__all__ = [
    "Base",
    "Industry",
    "IndustryBenchmark",
    "Analysis",
    "AreaScore",
    "Recommendation",
    "BenchmarkComparison",
    "CustomRule",
    "RuleResult",
]
