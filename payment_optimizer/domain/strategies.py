"""Allocation strategies - distribute the funds left after minimum payments

Each strategy is a pure transform over a tuple of AccountState values
indexed by position. It returns a new tuple in the same positional order
plus the leftover cents (never negative). Ordering keys are total orders
ending in ``account_id`` so results never depend on input or hash order.
"""

import logging
from dataclasses import replace
from fractions import Fraction
from typing import Callable, Dict, List, Sequence, Tuple

from payment_optimizer.config import Settings
from payment_optimizer.domain.models import AccountState, Strategy
from payment_optimizer.utils.money import fraction_of

logger = logging.getLogger(__name__)

StrategyResult = Tuple[Tuple[AccountState, ...], int]
StrategyFn = Callable[[Tuple[AccountState, ...], int, Settings], StrategyResult]


def _pay(state: AccountState, amount_cents: int) -> AccountState:
    return replace(
        state,
        suggested_payment_cents=state.suggested_payment_cents + amount_cents,
        new_balance_cents=state.new_balance_cents - amount_cents,
    )


def utilization_order(states: Sequence[AccountState]) -> List[int]:
    """Positions sorted by current utilization desc, balance desc, id asc"""

    def key(position: int):
        snapshot = states[position].snapshot
        utilization = Fraction(snapshot.current_balance_cents, snapshot.credit_limit_cents)
        return (-utilization, -snapshot.current_balance_cents, snapshot.account_id)

    return sorted(range(len(states)), key=key)


def interest_order(states: Sequence[AccountState]) -> List[int]:
    """Positions sorted by APR desc, balance desc, id asc"""

    def key(position: int):
        snapshot = states[position].snapshot
        return (
            -snapshot.interest_rate_annual_percent,
            -snapshot.current_balance_cents,
            snapshot.account_id,
        )

    return sorted(range(len(states)), key=key)


def snowball_order(states: Sequence[AccountState]) -> List[int]:
    """Positions sorted by balance asc, id asc"""

    def key(position: int):
        snapshot = states[position].snapshot
        return (snapshot.current_balance_cents, snapshot.account_id)

    return sorted(range(len(states)), key=key)


def _pay_in_order(
    states: Tuple[AccountState, ...], order: List[int], remaining_cents: int
) -> StrategyResult:
    """Single pass: clear each account in turn until the funds run out"""
    working = list(states)
    for position in order:
        if remaining_cents <= 0:
            break
        payment = min(remaining_cents, working[position].new_balance_cents)
        if payment > 0:
            working[position] = _pay(working[position], payment)
            remaining_cents -= payment

    return tuple(working), remaining_cents


def allocate_utilization_minimizing(
    states: Tuple[AccountState, ...], remaining_cents: int, settings: Settings
) -> StrategyResult:
    """
    Minimize aggregate utilization, the largest lever on the score estimate.

    Phase A: bring each account (highest utilization first) down to the
    healthy threshold (30% of its limit by default).

    Phase B: sweep the same order repeatedly, paying at most
    ``mop_up_increment_cents`` per account per sweep, so leftover funds are
    spread across accounts instead of landing on the first one. A sweep
    that distributes nothing ends the loop.
    """
    order = utilization_order(states)
    working = list(states)

    # Phase A: threshold pass
    for position in order:
        if remaining_cents <= 0:
            break
        state = working[position]
        target_balance = fraction_of(
            state.snapshot.credit_limit_cents, settings.healthy_utilization_threshold
        )
        payment_needed = max(0, state.new_balance_cents - target_balance)
        payment = min(payment_needed, remaining_cents)
        if payment > 0:
            working[position] = _pay(state, payment)
            remaining_cents -= payment

    logger.debug("Threshold pass complete", extra={"remaining_cents": remaining_cents})

    # Phase B: bounded-chunk mop-up
    increment = settings.mop_up_increment_cents
    if increment <= 0:
        increment = remaining_cents

    sweeps = 0
    while remaining_cents > 0 and any(working[p].new_balance_cents > 0 for p in order):
        distributed = 0
        for position in order:
            if remaining_cents <= 0:
                break
            payment = min(remaining_cents, working[position].new_balance_cents, increment)
            if payment > 0:
                working[position] = _pay(working[position], payment)
                remaining_cents -= payment
                distributed += payment

        sweeps += 1
        if distributed == 0:
            break

    logger.debug("Mop-up pass complete", extra={"sweeps": sweeps, "remaining_cents": remaining_cents})

    return tuple(working), remaining_cents


def allocate_interest_minimizing(
    states: Tuple[AccountState, ...], remaining_cents: int, settings: Settings
) -> StrategyResult:
    """Highest APR first (avalanche)"""
    return _pay_in_order(states, interest_order(states), remaining_cents)


def allocate_balance_snowball(
    states: Tuple[AccountState, ...], remaining_cents: int, settings: Settings
) -> StrategyResult:
    """Smallest balance first, to extinguish small debts before larger ones"""
    return _pay_in_order(states, snowball_order(states), remaining_cents)


STRATEGIES: Dict[Strategy, StrategyFn] = {
    Strategy.UTILIZATION_MINIMIZING: allocate_utilization_minimizing,
    Strategy.INTEREST_MINIMIZING: allocate_interest_minimizing,
    Strategy.BALANCE_SNOWBALL: allocate_balance_snowball,
}


def allocate_remainder(
    strategy: Strategy,
    states: Tuple[AccountState, ...],
    remaining_cents: int,
    settings: Settings,
) -> StrategyResult:
    """Dispatch the remainder to the selected strategy"""
    allocate_fn = STRATEGIES[Strategy(strategy)]
    return allocate_fn(states, remaining_cents, settings)
