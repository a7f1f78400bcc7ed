"""In-memory data store for the Risk Rules service.

Provides the storage used during development and testing. In production the
same shapes are persisted in PostgreSQL (see ``riskrules.models``).
"""

from __future__ import annotations

import asyncio
from typing import Any


class DataStore:
    """In-memory store for analyses, custom rules, rule results and benchmarks."""

    def __init__(self) -> None:
        self.analyses: dict[str, dict[str, Any]] = {}
        self.rules: dict[str, dict[str, Any]] = {}
        self.rule_results: dict[str, list[dict[str, Any]]] = {}  # analysis_id -> list
        self.industries: dict[str, dict[str, Any]] = {}
        self.industry_benchmarks: list[dict[str, Any]] = []
        self._analysis_locks: dict[str, asyncio.Lock] = {}

    def reset(self) -> None:
        """Clear all data (used in tests)."""
        self.__init__()

    def analysis_lock(self, analysis_id: str) -> asyncio.Lock:
        """Return the lock serialising result replacement for one analysis.

        Locks are only kept for stored analyses; an unknown id gets a
        throwaway lock so bogus ids never accumulate here.
        """
        if analysis_id not in self.analyses:
            return asyncio.Lock()
        return self._analysis_locks.setdefault(analysis_id, asyncio.Lock())

    # Analyses

    def add_analysis(self, analysis: dict[str, Any]) -> None:
        """Add or replace an analysis aggregate."""
        analysis.setdefault("area_scores", [])
        analysis.setdefault("recommendations", [])
        analysis.setdefault("benchmark_comparisons", [])
        self.analyses[analysis["id"]] = analysis

    def get_analysis(self, analysis_id: str) -> dict[str, Any] | None:
        """Get an analysis with its area scores, recommendations and comparisons."""
        return self.analyses.get(analysis_id)

    def get_user_analyses(self, user_id: str) -> list[dict[str, Any]]:
        """Get all analyses owned by a user, newest first."""
        owned = [a for a in self.analyses.values() if a.get("user_id") == user_id]
        return sorted(owned, key=lambda a: a["created_at"], reverse=True)

    def delete_analysis(self, analysis_id: str) -> dict[str, Any] | None:
        """Delete an analysis and its rule results."""
        self.rule_results.pop(analysis_id, None)
        self._analysis_locks.pop(analysis_id, None)
        return self.analyses.pop(analysis_id, None)

    def replace_benchmark_comparisons(
        self, analysis_id: str, comparisons: list[dict[str, Any]], industry_id: str
    ) -> None:
        """Swap the benchmark comparisons of an analysis for a new set."""
        analysis = self.analyses[analysis_id]
        analysis["benchmark_comparisons"] = comparisons
        analysis["industry_id"] = industry_id

    # Custom rules

    def add_rule(self, rule: dict[str, Any]) -> None:
        """Add a custom rule."""
        self.rules[rule["id"]] = rule

    def get_rule(self, rule_id: str) -> dict[str, Any] | None:
        """Get a custom rule by id."""
        return self.rules.get(rule_id)

    def get_user_rules(self, user_id: str, active_only: bool = False) -> list[dict[str, Any]]:
        """Get a user's rules in creation order."""
        return [
            r for r in self.rules.values()
            if r["user_id"] == user_id and (r["active"] or not active_only)
        ]

    def delete_rule(self, rule_id: str) -> dict[str, Any] | None:
        """Delete a rule and every result produced by it."""
        for analysis_id, results in self.rule_results.items():
            self.rule_results[analysis_id] = [r for r in results if r["rule_id"] != rule_id]
        return self.rules.pop(rule_id, None)

    # Rule results

    def get_rule_results(self, analysis_id: str) -> list[dict[str, Any]]:
        """Get the current generation of rule results for an analysis."""
        return self.rule_results.get(analysis_id, [])

    def replace_rule_results(self, analysis_id: str, results: list[dict[str, Any]]) -> None:
        """Delete all rule results of an analysis and insert a new generation."""
        self.rule_results[analysis_id] = list(results)

    # Industry benchmarks

    def add_industry(self, industry: dict[str, Any]) -> None:
        """Add or update an industry."""
        self.industries[industry["id"]] = industry

    def add_industry_benchmark(self, benchmark: dict[str, Any]) -> None:
        """Add a benchmark data point for an industry, framework and area."""
        self.industry_benchmarks.append(benchmark)

    def get_industry_benchmarks(self, industry_id: str, framework_id: str) -> list[dict[str, Any]]:
        """Get benchmarks for one industry and framework."""
        return [
            b for b in self.industry_benchmarks
            if b["industry_id"] == industry_id and b["framework_id"] == framework_id
        ]


# Global singleton, reset in tests
data_store = DataStore()
