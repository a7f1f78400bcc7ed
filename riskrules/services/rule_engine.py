"""Boolean evaluation of custom rule conditions over an analysis result."""

from __future__ import annotations

from typing import Any

from riskrules.services.field_resolver import resolve_field

# Supported condition operators
ORDERED_OPERATORS = {
    "greaterThan",
    "lessThan",
    "greaterThanEqual",
    "lessThanEqual",
}

CONDITION_OPERATORS = [
    "equals",
    "notEquals",
    "greaterThan",
    "lessThan",
    "greaterThanEqual",
    "lessThanEqual",
    "contains",
    "notContains",
]

LOGICAL_OPERATORS = ("AND", "OR")

# Equality modes for equals / notEquals
EQUALITY_LOOSE = "loose"
EQUALITY_STRICT = "strict"
EQUALITY_MODES = (EQUALITY_LOOSE, EQUALITY_STRICT)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_number(value: Any) -> float | None:
    """Coerce a number, bool or numeric string to float; None otherwise."""
    if isinstance(value, bool):
        return float(value)
    if _is_number(value):
        return float(value)
    if isinstance(value, str) and value.strip():
        try:
            return float(value)
        except ValueError:
            return None
    return None


def loose_equals(actual: Any, expected: Any) -> bool:
    """Equality where numeric strings and numbers compare equal ("5" == 5)."""
    if isinstance(actual, str) and isinstance(expected, str):
        return actual == expected
    if isinstance(actual, str) or isinstance(expected, str):
        left, right = _to_number(actual), _to_number(expected)
        if left is None or right is None:
            return False
        return left == right
    return actual == expected


def strict_equals(actual: Any, expected: Any) -> bool:
    """Equality without type coercion; numbers of any kind still compare by value."""
    if _is_number(actual) and _is_number(expected):
        return actual == expected
    return type(actual) is type(expected) and actual == expected


def _compare(operator: str, actual: Any, expected: Any, mode: str) -> bool:
    if isinstance(actual, str) and isinstance(expected, str) and mode == EQUALITY_LOOSE:
        left, right = actual, expected
    elif mode == EQUALITY_STRICT:
        if not (_is_number(actual) and _is_number(expected)):
            return False
        left, right = actual, expected
    else:
        left, right = _to_number(actual), _to_number(expected)
        if left is None or right is None:
            return False

    if operator == "greaterThan":
        return left > right
    if operator == "lessThan":
        return left < right
    if operator == "greaterThanEqual":
        return left >= right
    return left <= right


def _contains(actual: Any, expected: Any, mode: str) -> bool | None:
    """Containment test; None when the actual value is not a container."""
    if isinstance(actual, str):
        if isinstance(expected, str):
            return expected in actual
        return mode == EQUALITY_LOOSE and str(expected) in actual
    if isinstance(actual, (list, tuple)):
        return expected in actual
    return None


def evaluate_condition(
    condition: dict[str, Any],
    analysis: dict[str, Any],
    mode: str = EQUALITY_LOOSE,
) -> bool:
    """Evaluate one {field, operator, value} condition against an analysis.

    An unresolvable field never matches, whatever the operator. Evaluation
    never raises for well-formed or malformed operands.
    """
    field = condition.get("field")
    if not isinstance(field, str):
        return False
    actual = resolve_field(field, analysis)
    if actual is None:
        return False

    operator = condition.get("operator")
    expected = condition.get("value")
    equals = loose_equals if mode == EQUALITY_LOOSE else strict_equals

    if operator == "equals":
        return equals(actual, expected)
    if operator == "notEquals":
        return not equals(actual, expected)
    if operator in ORDERED_OPERATORS:
        return _compare(operator, actual, expected, mode)
    if operator == "contains":
        found = _contains(actual, expected, mode)
        return bool(found)
    if operator == "notContains":
        found = _contains(actual, expected, mode)
        return True if found is None else not found
    return False


def evaluate_condition_results(
    criteria: dict[str, Any],
    analysis: dict[str, Any],
    mode: str = EQUALITY_LOOSE,
) -> list[bool]:
    """Evaluate every condition of a criteria document, preserving order."""
    return [evaluate_condition(c, analysis, mode) for c in criteria.get("conditions") or []]


def evaluate_rule(
    rule: dict[str, Any],
    analysis: dict[str, Any],
    mode: str = EQUALITY_LOOSE,
) -> bool:
    """Combine a rule's conditions with its logical operator into one verdict.

    A rule without conditions never matches. A missing operator means AND;
    any operator other than AND or OR never matches.
    """
    criteria = rule.get("criteria") or {}
    results = evaluate_condition_results(criteria, analysis, mode)
    if not results:
        return False

    operator = criteria.get("operator") or "AND"
    if operator == "AND":
        return all(results)
    if operator == "OR":
        return any(results)
    return False
