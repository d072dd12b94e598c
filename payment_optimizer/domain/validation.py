"""Input validation for allocation runs"""

import logging
import math
from dataclasses import replace
from typing import Iterable, List

from payment_optimizer.domain.exceptions import (
    InvalidAccountError,
    InvalidAmountError,
    InvalidFundsError,
    InsufficientFundsError,
    NoEligibleAccountsError,
    UnknownStrategyError,
)
from payment_optimizer.domain.models import AccountSnapshot, AllocationInput, Strategy
from payment_optimizer.utils.money import require_cents

logger = logging.getLogger(__name__)


def validate_strategy(strategy: object) -> Strategy:
    """
    Resolve a strategy name or member.

    Raises:
        UnknownStrategyError: The value names no known strategy
    """
    try:
        return Strategy(strategy)
    except (ValueError, TypeError) as e:
        raise UnknownStrategyError(strategy) from e


def validate_account(account: AccountSnapshot) -> AccountSnapshot:
    """
    Check snapshot invariants and return it with amounts as int cents.

    Integral floats and Decimals are accepted and normalized, so nothing
    downstream ever sees a non-int amount.

    Raises:
        InvalidAccountError: On a negative balance, non-positive limit,
            minimum outside [0, balance] or a negative/non-finite rate
    """
    try:
        balance = require_cents(account.current_balance_cents)
        minimum = require_cents(account.minimum_payment_cents)
        limit = require_cents(account.credit_limit_cents)
    except InvalidAmountError as e:
        raise InvalidAccountError(account.account_id, str(e)) from e

    if limit <= 0:
        raise InvalidAccountError(account.account_id, "credit limit must be positive")
    if minimum > balance:
        raise InvalidAccountError(account.account_id, "minimum payment exceeds current balance")

    rate = account.interest_rate_annual_percent
    if not math.isfinite(rate) or rate < 0:
        raise InvalidAccountError(account.account_id, "interest rate must be a finite, non-negative percentage")

    return replace(
        account,
        current_balance_cents=balance,
        credit_limit_cents=limit,
        minimum_payment_cents=minimum,
    )


def validate_accounts(accounts: Iterable[AccountSnapshot]) -> List[AccountSnapshot]:
    """Validate every snapshot and require unique account ids"""
    seen = set()
    validated = []
    for account in accounts:
        if account.account_id in seen:
            raise InvalidAccountError(account.account_id, "duplicate account id")
        seen.add(account.account_id)
        validated.append(validate_account(account))
    return validated


def eligible_accounts(accounts: Iterable[AccountSnapshot]) -> List[AccountSnapshot]:
    """Accounts carrying a balance are the only ones that receive a payment"""
    return [account for account in accounts if account.current_balance_cents > 0]


def validate_input(allocation_input: AllocationInput) -> List[AccountSnapshot]:
    """
    Validate an allocation request and return its eligible accounts,
    normalized to int cents.

    Order of checks (fail fast, nothing partial is produced):
    1. funds are a finite, non-negative cent amount
    2. account invariants
    3. at least one account has a balance
    4. funds cover the eligible minimum payments
    """
    try:
        funds = require_cents(allocation_input.available_funds_cents)
    except InvalidAmountError as e:
        logger.warning("Rejected available funds", extra={"reason": str(e)})
        raise InvalidFundsError(str(e)) from e

    accounts = validate_accounts(allocation_input.accounts)

    eligible = eligible_accounts(accounts)
    if not eligible:
        raise NoEligibleAccountsError("No account carries a balance to pay down")

    required = sum(account.minimum_payment_cents for account in eligible)
    if funds < required:
        logger.warning(
            "Insufficient funds for minimum payments",
            extra={"required_cents": required, "available_cents": funds},
        )
        raise InsufficientFundsError(required_cents=required, available_cents=funds)

    return eligible
