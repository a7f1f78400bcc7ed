"""Dotted field paths over an analysis result.

A rule condition names the value it tests with a dotted path such as
``riskScore``, ``areaScores.Access Control`` or
``benchmarkComparisons.Network Security.percentile``. Paths are parsed into
one of four field types and then resolved against an analysis dict.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

SCALAR_FIELDS = {
    "riskScore": "risk_score",
    "securityLevel": "security_level",
}

BENCHMARK_SUBFIELDS = {
    "percentile": "percentile",
    "score": "score",
    "benchmarkScore": "benchmark_score",
}


@dataclass(frozen=True)
class ScalarField:
    name: str


@dataclass(frozen=True)
class AreaScoreField:
    area: str


@dataclass(frozen=True)
class RecommendationCountField:
    category: str | None = None


@dataclass(frozen=True)
class BenchmarkField:
    area: str
    subfield: str


FieldPath = Union[ScalarField, AreaScoreField, RecommendationCountField, BenchmarkField]


def parse_field_path(field: str) -> FieldPath | None:
    """Parse a dotted path, returning None when it cannot name a value.

    Segments are positional: the area or category is always the second
    segment and a benchmark sub-field the third. Further segments are
    ignored, so names containing dots cannot be addressed.
    """
    segments = field.split(".")
    facet = segments[0]

    if facet in SCALAR_FIELDS:
        return ScalarField(facet)

    if facet == "areaScores":
        return AreaScoreField(segments[1]) if len(segments) > 1 else None

    if facet == "recommendations":
        # "recommendations." counts the category "", not every recommendation
        return RecommendationCountField(segments[1] if len(segments) > 1 else None)

    if facet == "benchmarkComparisons":
        if len(segments) < 3 or segments[2] not in BENCHMARK_SUBFIELDS:
            return None
        return BenchmarkField(segments[1], segments[2])

    return None


def resolve_path(path: FieldPath, analysis: dict[str, Any]) -> Any:
    """Resolve a parsed path against an analysis; None when absent."""
    if isinstance(path, ScalarField):
        return analysis.get(SCALAR_FIELDS[path.name])

    if isinstance(path, AreaScoreField):
        for entry in analysis.get("area_scores", []):
            if entry.get("area") == path.area:
                return entry.get("score")
        return None

    if isinstance(path, RecommendationCountField):
        recommendations = analysis.get("recommendations", [])
        if path.category is None:
            return len(recommendations)
        return sum(1 for r in recommendations if r.get("category") == path.category)

    if isinstance(path, BenchmarkField):
        for entry in analysis.get("benchmark_comparisons", []):
            if entry.get("area") == path.area:
                return entry.get(BENCHMARK_SUBFIELDS[path.subfield])
        return None

    raise TypeError(f"Unsupported field path: {path!r}")


def resolve_field(field: str, analysis: dict[str, Any]) -> Any:
    """Extract the value a dotted field path names, or None if it names nothing."""
    path = parse_field_path(field)
    if path is None:
        return None
    return resolve_path(path, analysis)
