"""Structural validation of custom rule criteria."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from riskrules.errors import InvalidCriteriaError
from riskrules.services.rule_engine import CONDITION_OPERATORS, LOGICAL_OPERATORS, ORDERED_OPERATORS


def validate_criteria(criteria: Any) -> dict[str, Any]:
    """Validate a criteria document and return a normalised copy.

    Checks run in order and stop at the first failure. The returned copy
    always carries an explicit logical operator (AND when none was given);
    the caller's object is left untouched.

    Raises:
        InvalidCriteriaError: with a human-readable reason for the first
            violated check. Condition numbers in messages are 1-indexed.
    """
    if not isinstance(criteria, Mapping):
        raise InvalidCriteriaError("Rule criteria must be a valid JSON object")

    conditions = criteria.get("conditions")
    if not isinstance(conditions, list) or not conditions:
        raise InvalidCriteriaError("Rule criteria must contain at least one condition")

    operator = criteria.get("operator")
    if operator is not None and operator not in LOGICAL_OPERATORS:
        raise InvalidCriteriaError("Rule criteria operator must be either AND or OR")

    for index, condition in enumerate(conditions, start=1):
        _validate_condition(index, condition)

    normalised = copy.deepcopy(dict(criteria))
    normalised["operator"] = operator or "AND"
    return normalised


def _validate_condition(index: int, condition: Any) -> None:
    if not isinstance(condition, Mapping):
        raise InvalidCriteriaError(f"Rule criteria condition {index} must be an object")

    field = condition.get("field")
    if not isinstance(field, str) or not field:
        raise InvalidCriteriaError(f"Rule criteria condition {index} must have a valid field name")

    operator = condition.get("operator")
    if not isinstance(operator, str) or not operator:
        raise InvalidCriteriaError(f"Rule criteria condition {index} must have a valid operator")

    if operator not in CONDITION_OPERATORS:
        raise InvalidCriteriaError(
            f"Rule criteria condition {index} has an invalid operator: {operator}"
        )

    value = condition.get("value")
    if value is None:
        raise InvalidCriteriaError(
            f"Rule criteria condition {index} requires a value for operator {operator}"
        )

    if operator in ORDERED_OPERATORS:
        if field.partition(".")[0] == "securityLevel":
            raise InvalidCriteriaError(
                f"Rule criteria condition {index} cannot apply {operator} to non-numeric field {field}"
            )
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidCriteriaError(
                f"Rule criteria condition {index} requires a numeric value for operator {operator}"
            )
