"""Custom rule management and rule evaluation sessions."""

from __future__ import annotations

import copy
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog

from riskrules.errors import NotFoundError, UnauthorizedError
from riskrules.models.base import utcnow
from riskrules.services.criteria import validate_criteria
from riskrules.services.rule_engine import EQUALITY_LOOSE, evaluate_rule
from riskrules.store import DataStore

UPDATABLE_FIELDS = ("name", "description", "criteria", "severity", "category", "active")


class RulesService:
    """Owns a user's custom rules and evaluates them against analyses.

    Storage, clock and logger are injected so the service can be exercised
    against a throwaway store in tests.
    """

    def __init__(
        self,
        store: DataStore,
        clock: Callable[[], datetime] = utcnow,
        logger: Any = None,
        equality_mode: str = EQUALITY_LOOSE,
    ) -> None:
        self.store = store
        self.clock = clock
        self.logger = logger or structlog.get_logger()
        self.equality_mode = equality_mode

    # Rule management

    async def get_rules_by_user(self, user_id: str) -> list[dict[str, Any]]:
        """All of a user's rules, newest first.

        Rules handed out by the service are copies; edits go through
        :meth:`update_rule`.
        """
        rules = self.store.get_user_rules(user_id)
        return copy.deepcopy(sorted(rules, key=lambda r: r["created_at"], reverse=True))

    async def get_rule(self, rule_id: str, user_id: str) -> dict[str, Any]:
        """Fetch one rule owned by ``user_id``."""
        return copy.deepcopy(self._owned_rule(rule_id, user_id))

    async def create_rule(self, draft: dict[str, Any]) -> dict[str, Any]:
        """Validate a rule draft's criteria and persist it."""
        criteria = validate_criteria(draft.get("criteria"))
        now = self.clock()
        rule = {
            "id": str(uuid.uuid4()),
            "user_id": draft["user_id"],
            "name": draft["name"],
            "description": draft.get("description"),
            "category": draft["category"],
            "severity": draft["severity"],
            "criteria": criteria,
            "active": True if draft.get("active") is None else draft["active"],
            "created_at": now,
            "updated_at": now,
        }
        self.store.add_rule(rule)
        self.logger.info("rule_created", rule_id=rule["id"], user_id=rule["user_id"])
        return copy.deepcopy(rule)

    async def update_rule(self, rule_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        """Apply a partial update; fields absent from ``patch`` keep their values."""
        rule = self._owned_rule(rule_id, patch.get("user_id"))

        changes = {
            k: patch[k] for k in UPDATABLE_FIELDS
            if k in patch and (patch[k] is not None or k == "description")
        }
        if "criteria" in changes:
            changes["criteria"] = validate_criteria(changes["criteria"])

        rule.update(changes)
        rule["updated_at"] = self.clock()
        self.logger.info("rule_updated", rule_id=rule_id, fields=sorted(changes))
        return copy.deepcopy(rule)

    async def delete_rule(self, rule_id: str, user_id: str) -> dict[str, Any]:
        """Delete a rule together with the results it produced."""
        self._owned_rule(rule_id, user_id)
        deleted = self.store.delete_rule(rule_id)
        self.logger.info("rule_deleted", rule_id=rule_id, user_id=user_id)
        return deleted

    def _owned_rule(self, rule_id: str, user_id: str | None) -> dict[str, Any]:
        rule = self.store.get_rule(rule_id)
        if rule is None:
            raise NotFoundError("Rule not found")
        if rule["user_id"] != user_id:
            raise UnauthorizedError("Rule belongs to a different user")
        return rule

    # Evaluation

    def _owned_analysis(self, analysis_id: str, user_id: str) -> dict[str, Any]:
        analysis = self.store.get_analysis(analysis_id)
        if analysis is None:
            raise NotFoundError("Analysis not found")
        if analysis["user_id"] != user_id:
            raise UnauthorizedError("Analysis belongs to a different user")
        return analysis

    async def evaluate_rules_for_analysis(self, analysis_id: str, user_id: str) -> list[dict[str, Any]]:
        """Evaluate every active rule of ``user_id`` against one analysis.

        The previous generation of results for the analysis is replaced as a
        whole. Sessions for the same analysis are serialised; sessions for
        different analyses run independently.
        """
        self._owned_analysis(analysis_id, user_id)
        async with self.store.analysis_lock(analysis_id):
            analysis = self._owned_analysis(analysis_id, user_id)
            rules = self.store.get_user_rules(user_id, active_only=True)

            now = self.clock()
            results = []
            decorated = []
            for rule in rules:
                matched = evaluate_rule(rule, analysis, self.equality_mode)
                result = {
                    "id": str(uuid.uuid4()),
                    "analysis_id": analysis_id,
                    "rule_id": rule["id"],
                    "matched": matched,
                    "created_at": now,
                    "updated_at": now,
                }
                results.append(result)
                decorated.append({
                    **result,
                    "rule_name": rule["name"],
                    "rule_category": rule["category"],
                    "rule_severity": rule["severity"],
                })

            self.store.replace_rule_results(analysis_id, results)

        self.logger.info(
            "rules_evaluated",
            analysis_id=analysis_id,
            user_id=user_id,
            rule_count=len(results),
            matched_count=sum(1 for r in results if r["matched"]),
        )
        return decorated

    async def get_rule_results_for_analysis(
        self, analysis_id: str, user_id: str | None = None
    ) -> list[dict[str, Any]]:
        """Current rule results for an analysis with the rule embedded, newest first.

        Ownership of the analysis is checked whenever ``user_id`` is given.
        """
        if user_id is not None:
            self._owned_analysis(analysis_id, user_id)

        results = []
        for result in self.store.get_rule_results(analysis_id):
            rule = self.store.get_rule(result["rule_id"])
            results.append({**result, "rule": copy.deepcopy(rule)})
        return sorted(results, key=lambda r: r["created_at"], reverse=True)
