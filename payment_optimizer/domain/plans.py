"""Assembly of account plans and allocation plans from settled payments"""

from typing import List, Sequence, Tuple

from payment_optimizer.config import Settings
from payment_optimizer.domain.models import (
    AccountPlan,
    AccountSnapshot,
    AllocationPlan,
    Strategy,
)
from payment_optimizer.domain.score_impact import estimate_score_impact
from payment_optimizer.domain.utilization import (
    aggregate_utilization,
    utilization_ratio,
    utilization_status,
)
from payment_optimizer.utils.money import from_cents, monthly_interest_cents


def build_account_plan(
    snapshot: AccountSnapshot, payment_cents: int, is_manual: bool = False
) -> AccountPlan:
    """Derive balance, utilization and impact fields for one settled payment"""
    new_balance = snapshot.current_balance_cents - payment_cents
    old_utilization = utilization_ratio(snapshot.current_balance_cents, snapshot.credit_limit_cents)
    new_utilization = utilization_ratio(new_balance, snapshot.credit_limit_cents)
    change_pp = (new_utilization - old_utilization) * 100

    return AccountPlan(
        account_id=snapshot.account_id,
        current_balance_cents=snapshot.current_balance_cents,
        credit_limit_cents=snapshot.credit_limit_cents,
        minimum_payment_cents=snapshot.minimum_payment_cents,
        suggested_payment_cents=payment_cents,
        new_balance_cents=new_balance,
        old_utilization=old_utilization,
        new_utilization=new_utilization,
        utilization_change_percentage_points=change_pp,
        utilization_status=utilization_status(new_utilization),
        score_impact_points=abs(change_pp) * 2,
        estimated_interest_saved_cents=monthly_interest_cents(
            payment_cents, snapshot.interest_rate_annual_percent
        ),
        is_manual=is_manual,
        nickname=snapshot.nickname,
    )


def _plan_warnings(
    account_plans: Sequence[AccountPlan], available_funds_cents: int, total_payment_cents: int
) -> Tuple[str, ...]:
    warnings: List[str] = []
    unallocated = available_funds_cents - total_payment_cents
    balance_remains = any(plan.new_balance_cents > 0 for plan in account_plans)

    if unallocated > 0 and balance_remains:
        warnings.append(
            f"${from_cents(unallocated)} of your available funds were not allocated "
            "while balances remain. Apply it to a card manually or increase a payment."
        )
    if unallocated < 0:
        warnings.append(
            f"Payments exceed your available funds by ${from_cents(-unallocated)}."
        )
    if total_payment_cents == 0 and available_funds_cents > 0:
        warnings.append("No payments were allocated. Check card balances and limits.")

    return tuple(warnings)


def assemble_plan(
    strategy: Strategy,
    available_funds_cents: int,
    account_plans: Sequence[AccountPlan],
    settings: Settings,
) -> AllocationPlan:
    """
    Compute aggregate utilization, score impact and totals over account plans.

    Aggregates are taken over summed balances and summed limits, never as
    an average of per-account ratios.
    """
    total_old = aggregate_utilization(
        (plan.current_balance_cents, plan.credit_limit_cents) for plan in account_plans
    )
    total_new = aggregate_utilization(
        (plan.new_balance_cents, plan.credit_limit_cents) for plan in account_plans
    )
    score_impact = estimate_score_impact((total_new - total_old) * 100, settings=settings)

    total_payment = sum(plan.suggested_payment_cents for plan in account_plans)

    return AllocationPlan(
        strategy=strategy,
        available_funds_cents=available_funds_cents,
        accounts=tuple(account_plans),
        total_old_utilization=total_old,
        total_new_utilization=total_new,
        score_impact=score_impact,
        total_payment_cents=total_payment,
        unallocated_cents=available_funds_cents - total_payment,
        estimated_interest_saved_cents=sum(
            plan.estimated_interest_saved_cents for plan in account_plans
        ),
        warnings=_plan_warnings(account_plans, available_funds_cents, total_payment),
    )
