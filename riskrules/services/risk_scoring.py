"""Risk scoring: turns questionnaire answers into area scores and a risk level."""

from __future__ import annotations

from typing import Any

DEFAULT_AREA = "General"

# Security levels, from worst to best
SECURITY_LEVELS = ["High Risk", "Medium Risk", "Low Risk", "Minimal Risk"]

DEFAULT_THRESHOLDS = {"low": 3.0, "medium": 6.0, "high": 8.0}

# Areas with a score under this always receive recommendations
RECOMMENDATION_SCORE_CUTOFF = 7
# The lowest-scoring areas always receive recommendations
RECOMMENDATION_MIN_AREAS = 3


def calculate_area_scores(submission: dict[str, Any]) -> list[dict[str, Any]]:
    """Weighted average answer per question category, normalised to 0-10.

    Answers are on a 1-5 scale where higher is better. Answers referring to
    unknown questions are skipped; missing weights and values count as 1.
    """
    questions = {q["id"]: q for q in submission.get("template", {}).get("questions", [])}
    totals: dict[str, float] = {}
    weights: dict[str, float] = {}

    for answer in submission.get("answers", []):
        question = questions.get(answer.get("question_id"))
        if question is None:
            continue

        area = question.get("category") or DEFAULT_AREA
        weight = question.get("weight") or 1
        value = answer.get("value") or 1

        totals[area] = totals.get(area, 0.0) + value * weight
        weights[area] = weights.get(area, 0.0) + weight

    return [
        {"area": area, "score": round(totals[area] / weights[area] / 5 * 10, 1)}
        for area in totals
    ]


def calculate_overall_score(
    area_scores: list[dict[str, Any]],
    category_weights: dict[str, float],
) -> float:
    """Category-weighted mean of area scores; unknown categories weigh 1."""
    if not area_scores:
        return 0.0

    weighted = 0.0
    total_weight = 0.0
    for entry in area_scores:
        weight = category_weights.get(entry["area"], 1)
        weighted += entry["score"] * weight
        total_weight += weight

    if total_weight == 0:
        return 0.0
    return round(weighted / total_weight, 1)


def determine_security_level(score: float, thresholds: dict[str, float] | None = None) -> str:
    """Map a 0-10 score (higher is safer) onto a security level."""
    thresholds = thresholds or DEFAULT_THRESHOLDS
    if score <= thresholds["low"]:
        return "High Risk"
    if score <= thresholds["medium"]:
        return "Medium Risk"
    if score <= thresholds["high"]:
        return "Low Risk"
    return "Minimal Risk"


def calculate_risk_scores(
    submission: dict[str, Any],
    category_weights: dict[str, float],
    thresholds: dict[str, float] | None = None,
) -> dict[str, Any]:
    """Score a submission.

    Args:
        submission: Dict with ``answers`` (``question_id``, ``value``) and
            ``template.questions`` (``id``, ``category``, ``weight``).
        category_weights: Relative weight of each area in the overall score.
        thresholds: ``low``/``medium``/``high`` security level boundaries.

    Returns:
        Dict with ``risk_score``, ``security_level`` and ``area_scores``.
    """
    area_scores = calculate_area_scores(submission)
    risk_score = calculate_overall_score(area_scores, category_weights)
    return {
        "risk_score": risk_score,
        "security_level": determine_security_level(risk_score, thresholds),
        "area_scores": area_scores,
    }


def _recommendations_for_area(area: str, score: float) -> list[dict[str, Any]]:
    """Canned recommendations for an area; lower scores raise the priority."""
    catalogue = {
        "Access Control": [
            ("Implement multi-factor authentication for all user accounts", 1 if score < 4 else 2),
            ("Review and update access control policies every quarter", 3),
            ("Implement the principle of least privilege for all system access", 2 if score < 6 else 3),
        ],
        "Data Protection": [
            ("Encrypt all sensitive data at rest and in transit", 1 if score < 5 else 2),
            ("Develop and implement a comprehensive data classification policy", 2),
            ("Implement regular data backup and recovery testing", 1 if score < 4 else 3),
        ],
        "Network Security": [
            ("Deploy network segmentation to isolate sensitive systems", 1 if score < 5 else 2),
            ("Implement intrusion detection and prevention systems", 1 if score < 4 else 3),
            ("Conduct regular vulnerability scanning and penetration testing", 2),
        ],
        "Application Security": [
            ("Implement secure coding practices and training", 1 if score < 5 else 2),
            ("Conduct regular security code reviews", 2),
            ("Implement web application firewall", 1 if score < 4 else 3),
        ],
        "Security Awareness": [
            ("Conduct regular security awareness training for all employees", 1 if score < 5 else 2),
            ("Implement phishing simulation exercises", 2),
            ("Develop security guidelines for remote workers", 3),
        ],
    }
    general = [
        ("Develop and implement a comprehensive security policy", 1 if score < 4 else 3, "Governance"),
        ("Conduct a full security risk assessment annually", 2, "Governance"),
        ("Establish a security incident response team", 2 if score < 5 else 3, "Incident Response"),
    ]

    if area in catalogue:
        entries = [(desc, priority, area) for desc, priority in catalogue[area]]
    else:
        entries = general

    return [
        {"description": desc, "priority": max(1, min(5, priority)), "category": category}
        for desc, priority, category in entries
    ]


def generate_recommendations(area_scores: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Recommendations for the weakest areas, most urgent first."""
    recommendations: list[dict[str, Any]] = []
    for index, entry in enumerate(sorted(area_scores, key=lambda a: a["score"])):
        if entry["score"] < RECOMMENDATION_SCORE_CUTOFF or index < RECOMMENDATION_MIN_AREAS:
            recommendations.extend(_recommendations_for_area(entry["area"], entry["score"]))
    return sorted(recommendations, key=lambda r: r["priority"])
