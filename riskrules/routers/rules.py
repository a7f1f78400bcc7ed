"""Custom rule API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from riskrules.dependencies import get_current_user_id, get_rules_service
from riskrules.schemas.rules import (
    DecoratedRuleResult,
    EvaluationResponse,
    MessageResponse,
    RuleCreateRequest,
    RuleResponse,
    RuleResultResponse,
    RuleUpdateRequest,
)
from riskrules.services.rules_service import RulesService

router = APIRouter(prefix="/rules", tags=["rules"])


@router.get("", response_model=list[RuleResponse])
async def list_rules(
    user_id: str = Depends(get_current_user_id),
    service: RulesService = Depends(get_rules_service),
) -> list[RuleResponse]:
    """List the caller's custom rules, newest first."""
    rules = await service.get_rules_by_user(user_id)
    return [RuleResponse(**r) for r in rules]


@router.get("/{rule_id}", response_model=RuleResponse)
async def get_rule(
    rule_id: str,
    user_id: str = Depends(get_current_user_id),
    service: RulesService = Depends(get_rules_service),
) -> RuleResponse:
    """Get one of the caller's rules."""
    return RuleResponse(**await service.get_rule(rule_id, user_id))


@router.post("", response_model=RuleResponse, status_code=201)
async def create_rule(
    request: RuleCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: RulesService = Depends(get_rules_service),
) -> RuleResponse:
    """Create a custom rule after validating its criteria."""
    rule = await service.create_rule({**request.model_dump(), "user_id": user_id})
    return RuleResponse(**rule)


@router.put("/{rule_id}", response_model=RuleResponse)
async def update_rule(
    rule_id: str,
    request: RuleUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: RulesService = Depends(get_rules_service),
) -> RuleResponse:
    """Partially update a rule; omitted fields are left unchanged."""
    patch = {**request.model_dump(exclude_unset=True), "user_id": user_id}
    return RuleResponse(**await service.update_rule(rule_id, patch))


@router.delete("/{rule_id}", response_model=MessageResponse)
async def delete_rule(
    rule_id: str,
    user_id: str = Depends(get_current_user_id),
    service: RulesService = Depends(get_rules_service),
) -> MessageResponse:
    """Delete a rule and its results."""
    await service.delete_rule(rule_id, user_id)
    return MessageResponse(message="Rule deleted successfully")


@router.post("/analyses/{analysis_id}/evaluate", response_model=EvaluationResponse)
async def evaluate_rules(
    analysis_id: str,
    user_id: str = Depends(get_current_user_id),
    service: RulesService = Depends(get_rules_service),
) -> EvaluationResponse:
    """Evaluate all of the caller's active rules against an analysis."""
    results = await service.evaluate_rules_for_analysis(analysis_id, user_id)
    return EvaluationResponse(
        analysis_id=analysis_id,
        rule_count=len(results),
        matched_count=sum(1 for r in results if r["matched"]),
        results=[DecoratedRuleResult(**r) for r in results],
    )


@router.get("/analyses/{analysis_id}/results", response_model=list[RuleResultResponse])
async def get_rule_results(
    analysis_id: str,
    user_id: str = Depends(get_current_user_id),
    service: RulesService = Depends(get_rules_service),
) -> list[RuleResultResponse]:
    """Latest rule results for one of the caller's analyses."""
    results = await service.get_rule_results_for_analysis(analysis_id, user_id)
    return [RuleResultResponse(**r) for r in results]
