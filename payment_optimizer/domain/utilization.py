"""Credit utilization calculations"""

from typing import Iterable, Tuple

from payment_optimizer.domain.models import AccountSnapshot


def utilization_ratio(balance_cents: int, limit_cents: int) -> float:
    """
    Balance over limit, capped to [0, 1].

    A non-positive limit yields 0 rather than dividing by zero.
    """
    if limit_cents <= 0:
        return 0.0
    return max(0.0, min(balance_cents / limit_cents, 1.0))


def utilization_status(ratio: float) -> str:
    """
    Map a utilization ratio to a display band.

    Bands:
    - excellent: 0-10%
    - good:      11-30%
    - fair:      31-50%
    - poor:      51-80%
    - critical:  81-100%
    """
    if ratio <= 0.10:
        return "excellent"
    elif ratio <= 0.30:
        return "good"
    elif ratio <= 0.50:
        return "fair"
    elif ratio <= 0.80:
        return "poor"
    else:
        return "critical"


def aggregate_utilization(balances_and_limits: Iterable[Tuple[int, int]]) -> float:
    """Utilization over summed balances and summed limits (not an average of ratios)"""
    total_balance = 0
    total_limit = 0
    for balance_cents, limit_cents in balances_and_limits:
        total_balance += balance_cents
        total_limit += limit_cents
    return utilization_ratio(total_balance, total_limit)


def summarize_utilization(accounts: Iterable[AccountSnapshot]) -> float:
    """Current aggregate utilization of a set of account snapshots"""
    return aggregate_utilization(
        (account.current_balance_cents, account.credit_limit_cents) for account in accounts
    )
