"""Manual override reconciler - apply one user-edited payment to a plan"""

import logging
from typing import Optional

from payment_optimizer.config import Settings, settings as default_settings
from payment_optimizer.domain.exceptions import InvalidAmountError, InvalidFundsError, UnknownAccountError
from payment_optimizer.domain.models import AllocationInput, AllocationPlan
from payment_optimizer.domain.plans import assemble_plan, build_account_plan
from payment_optimizer.domain.validation import validate_account
from payment_optimizer.utils.money import require_cents, round_cents

logger = logging.getLogger(__name__)


def apply_override(
    plan: AllocationPlan,
    allocation_input: AllocationInput,
    account_id: str,
    requested_payment_cents: int,
    settings: Optional[Settings] = None,
) -> AllocationPlan:
    """
    Replace one account's suggested payment and recompute the plan.

    The request is clamped into the account's own band
    [minimum payment, min(current balance, available funds)]. Other
    accounts keep their entries and nothing is rebalanced, so the total
    may exceed or fall short of the available funds (a what-if plan).
    Aggregate utilization, score impact, totals and warnings are
    recomputed over all accounts. The plan passed in is not modified.

    Raises:
        UnknownAccountError: account_id is not in the plan or the input
        InvalidAmountError: requested payment is not a finite number
        InvalidFundsError: available funds on the input are invalid
        InvalidAccountError: the account snapshot violates its invariants
    """
    settings = settings or default_settings

    current = plan.get_account(account_id)
    snapshot = next(
        (account for account in allocation_input.accounts if account.account_id == account_id),
        None,
    )
    if current is None or snapshot is None:
        raise UnknownAccountError(account_id)
    snapshot = validate_account(snapshot)

    requested = round_cents(requested_payment_cents)
    try:
        funds = require_cents(allocation_input.available_funds_cents)
    except InvalidAmountError as e:
        raise InvalidFundsError(str(e)) from e

    upper = min(snapshot.current_balance_cents, funds)
    payment = max(snapshot.minimum_payment_cents, min(requested, upper))

    if payment != requested:
        logger.debug(
            "Override clamped",
            extra={"account_id": account_id, "requested_cents": requested, "payment_cents": payment},
        )

    updated = build_account_plan(snapshot, payment, is_manual=True)
    account_plans = [updated if entry.account_id == account_id else entry for entry in plan.accounts]

    return assemble_plan(
        strategy=plan.strategy,
        available_funds_cents=funds,
        account_plans=account_plans,
        settings=settings,
    )
