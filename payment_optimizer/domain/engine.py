"""Allocation engine - core business logic for payment plans"""

import logging
from typing import Dict, Iterable, Optional

from payment_optimizer.config import Settings, settings as default_settings
from payment_optimizer.domain.models import (
    AccountSnapshot,
    AccountState,
    AllocationInput,
    AllocationPlan,
    Strategy,
)
from payment_optimizer.domain.overrides import apply_override
from payment_optimizer.domain.plans import assemble_plan, build_account_plan
from payment_optimizer.domain.score_impact import estimate_score_impact
from payment_optimizer.domain.strategies import allocate_remainder
from payment_optimizer.domain.validation import validate_input, validate_strategy

logger = logging.getLogger(__name__)

__all__ = ["allocate", "apply_override", "compare_strategies", "estimate_score_impact"]


def allocate(allocation_input: AllocationInput, settings: Optional[Settings] = None) -> AllocationPlan:
    """
    Main entry point: split available funds across accounts.

    Flow:
    1. Validate input and keep accounts that carry a balance
    2. Seed every eligible account at its minimum payment
    3. Hand the remaining funds to the selected strategy
    4. Derive per-account and aggregate utilization
    5. Estimate score impact of the aggregate change

    Raises:
        UnknownStrategyError: The strategy names no known strategy
        InvalidFundsError: Funds are non-finite, fractional or negative
        InvalidAccountError: A snapshot violates its invariants
        NoEligibleAccountsError: No account carries a balance
        InsufficientFundsError: Funds do not cover the minimum payments
    """
    settings = settings or default_settings
    strategy = validate_strategy(allocation_input.strategy)

    eligible = validate_input(allocation_input)
    funds = int(allocation_input.available_funds_cents)

    states = tuple(
        AccountState(
            snapshot=snapshot,
            suggested_payment_cents=snapshot.minimum_payment_cents,
            new_balance_cents=snapshot.current_balance_cents - snapshot.minimum_payment_cents,
        )
        for snapshot in eligible
    )
    remaining = funds - sum(state.suggested_payment_cents for state in states)

    settled, leftover = allocate_remainder(strategy, states, remaining, settings)

    plan = assemble_plan(
        strategy=strategy,
        available_funds_cents=funds,
        account_plans=[
            build_account_plan(state.snapshot, state.suggested_payment_cents) for state in settled
        ],
        settings=settings,
    )

    logger.debug(
        "Allocation computed",
        extra={
            "strategy": strategy.value,
            "eligible_accounts": len(settled),
            "leftover_cents": leftover,
            "projected_score": plan.score_impact.projected_score,
        },
    )

    return plan


def compare_strategies(
    accounts: Iterable[AccountSnapshot],
    available_funds_cents: int,
    settings: Optional[Settings] = None,
) -> Dict[Strategy, AllocationPlan]:
    """Run every strategy over the same accounts and funds"""
    accounts = tuple(accounts)
    return {
        strategy: allocate(
            AllocationInput(
                accounts=accounts,
                available_funds_cents=available_funds_cents,
                strategy=strategy,
            ),
            settings=settings,
        )
        for strategy in Strategy
    }
