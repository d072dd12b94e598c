"""Pydantic schemas for API request/response validation"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from payment_optimizer.domain.models import (
    AccountPlan,
    AccountSnapshot,
    AllocationInput,
    AllocationPlan,
    ScoreFactors,
    ScoreImpact,
    Strategy,
)


class AccountSchema(BaseModel):
    """Credit account snapshot supplied by the caller"""

    account_id: str = Field(..., min_length=1, description="Account identifier")
    current_balance_cents: int = Field(..., ge=0, description="Amount owed in cents")
    credit_limit_cents: int = Field(..., gt=0, description="Credit limit in cents")
    minimum_payment_cents: int = Field(0, ge=0, description="Minimum payment due in cents")
    interest_rate_annual_percent: float = Field(0.0, ge=0, allow_inf_nan=False, description="APR in percent")
    nickname: Optional[str] = None

    def to_domain(self) -> AccountSnapshot:
        return AccountSnapshot(
            account_id=self.account_id,
            current_balance_cents=self.current_balance_cents,
            credit_limit_cents=self.credit_limit_cents,
            minimum_payment_cents=self.minimum_payment_cents,
            interest_rate_annual_percent=self.interest_rate_annual_percent,
            nickname=self.nickname,
        )


class AllocationRequest(BaseModel):
    """Request body for POST /v1/allocations"""

    accounts: List[AccountSchema] = Field(..., min_length=1)
    available_funds_cents: int = Field(..., ge=0, description="Funds to distribute in cents")
    strategy: Strategy = Strategy.UTILIZATION_MINIMIZING

    def to_domain(self) -> AllocationInput:
        return AllocationInput(
            accounts=tuple(account.to_domain() for account in self.accounts),
            available_funds_cents=self.available_funds_cents,
            strategy=self.strategy,
        )


class CompareRequest(BaseModel):
    """Request body for POST /v1/allocations/compare"""

    accounts: List[AccountSchema] = Field(..., min_length=1)
    available_funds_cents: int = Field(..., ge=0)


class ScoreFactorsSchema(BaseModel):
    utilization_impact: float
    payment_history_impact: float
    credit_mix_impact: float


class ScoreImpactSchema(BaseModel):
    """Heuristic score projection"""

    baseline_score: int
    projected_score: float
    change_points: float
    factors: ScoreFactorsSchema

    @classmethod
    def from_domain(cls, impact: ScoreImpact) -> "ScoreImpactSchema":
        return cls(
            baseline_score=impact.baseline_score,
            projected_score=impact.projected_score,
            change_points=impact.change_points,
            factors=ScoreFactorsSchema(
                utilization_impact=impact.factors.utilization_impact,
                payment_history_impact=impact.factors.payment_history_impact,
                credit_mix_impact=impact.factors.credit_mix_impact,
            ),
        )

    def to_domain(self) -> ScoreImpact:
        return ScoreImpact(
            baseline_score=self.baseline_score,
            projected_score=self.projected_score,
            change_points=self.change_points,
            factors=ScoreFactors(
                utilization_impact=self.factors.utilization_impact,
                payment_history_impact=self.factors.payment_history_impact,
                credit_mix_impact=self.factors.credit_mix_impact,
            ),
        )


class AccountPlanSchema(BaseModel):
    """Suggested payment for one account"""

    account_id: str
    current_balance_cents: int
    credit_limit_cents: int
    minimum_payment_cents: int
    suggested_payment_cents: int
    new_balance_cents: int
    old_utilization: float
    new_utilization: float
    utilization_change_percentage_points: float
    utilization_status: str
    score_impact_points: float
    estimated_interest_saved_cents: int
    is_manual: bool = False
    nickname: Optional[str] = None


class AllocationPlanSchema(BaseModel):
    """Response for allocation and override endpoints"""

    strategy: Strategy
    available_funds_cents: int
    accounts: List[AccountPlanSchema]
    total_old_utilization: float
    total_new_utilization: float
    score_impact: ScoreImpactSchema
    total_payment_cents: int
    unallocated_cents: int
    estimated_interest_saved_cents: int
    warnings: List[str] = []

    @classmethod
    def from_domain(cls, plan: AllocationPlan) -> "AllocationPlanSchema":
        return cls(
            strategy=plan.strategy,
            available_funds_cents=plan.available_funds_cents,
            accounts=[AccountPlanSchema(**vars(account)) for account in plan.accounts],
            total_old_utilization=plan.total_old_utilization,
            total_new_utilization=plan.total_new_utilization,
            score_impact=ScoreImpactSchema.from_domain(plan.score_impact),
            total_payment_cents=plan.total_payment_cents,
            unallocated_cents=plan.unallocated_cents,
            estimated_interest_saved_cents=plan.estimated_interest_saved_cents,
            warnings=list(plan.warnings),
        )

    def to_domain(self) -> AllocationPlan:
        return AllocationPlan(
            strategy=self.strategy,
            available_funds_cents=self.available_funds_cents,
            accounts=tuple(AccountPlan(**account.model_dump()) for account in self.accounts),
            total_old_utilization=self.total_old_utilization,
            total_new_utilization=self.total_new_utilization,
            score_impact=self.score_impact.to_domain(),
            total_payment_cents=self.total_payment_cents,
            unallocated_cents=self.unallocated_cents,
            estimated_interest_saved_cents=self.estimated_interest_saved_cents,
            warnings=tuple(self.warnings),
        )


class OverrideRequest(BaseModel):
    """Request body for POST /v1/allocations/override

    The service keeps no session, so the client posts back the last plan
    together with the original allocation request.
    """

    plan: AllocationPlanSchema
    allocation: AllocationRequest
    account_id: str = Field(..., min_length=1)
    requested_payment_cents: int


class CompareResponse(BaseModel):
    """Response for POST /v1/allocations/compare"""

    plans: Dict[Strategy, AllocationPlanSchema]


class ScoreImpactRequest(BaseModel):
    """Request body for POST /v1/score-impact"""

    utilization_change_percentage_points: float
    baseline_score: Optional[int] = Field(None, ge=0)
