"""POST /v1/allocations - payment allocation, override and comparison endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from payment_optimizer.api.v1.schemas import (
    AllocationPlanSchema,
    AllocationRequest,
    CompareRequest,
    CompareResponse,
    OverrideRequest,
)
from payment_optimizer.api.dependencies import get_request_id, get_settings
from payment_optimizer.config import Settings
from payment_optimizer.domain.engine import allocate, apply_override, compare_strategies
from payment_optimizer.domain.exceptions import AllocationError, UnknownAccountError
from payment_optimizer.infrastructure.observability.metrics import (
    record_allocation,
    record_override,
    record_rejection,
)
from payment_optimizer.infrastructure.observability.logging import log_allocation, log_override

router = APIRouter()


@router.post("/allocations", response_model=AllocationPlanSchema)
def create_allocation(
    request_body: AllocationRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Compute a payment plan for the posted accounts.

    Flow:
    1. Convert the request to domain input
    2. Pay minimums, then distribute the rest with the chosen strategy
    3. Record metrics and logs
    4. Return the plan
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        plan = allocate(request_body.to_domain(), settings=settings)

    except AllocationError as e:
        record_rejection(request_body.strategy.value)
        logging.warning(f"Allocation rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration = time.time() - start_time
    record_allocation(
        plan.strategy.value, duration, plan.score_impact.change_points, plan.unallocated_cents
    )
    log_allocation(
        request_id,
        plan.strategy.value,
        len(plan.accounts),
        plan.total_payment_cents,
        plan.unallocated_cents,
        plan.score_impact.change_points,
        duration * 1000,
    )

    return AllocationPlanSchema.from_domain(plan)


@router.post("/allocations/override", response_model=AllocationPlanSchema)
def override_allocation(
    request_body: OverrideRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Apply a manual payment to one account of a previously returned plan.

    Returns:
        The reconciled plan; other accounts are left as they were
    """
    request_id = get_request_id(request)

    try:
        plan = apply_override(
            request_body.plan.to_domain(),
            request_body.allocation.to_domain(),
            request_body.account_id,
            request_body.requested_payment_cents,
            settings=settings,
        )

    except UnknownAccountError as e:
        logging.warning(f"Override for unknown account: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except AllocationError as e:
        logging.warning(f"Override rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    applied = plan.get_account(request_body.account_id).suggested_payment_cents
    record_override(clamped=applied != request_body.requested_payment_cents)
    log_override(
        request_id,
        request_body.account_id,
        request_body.requested_payment_cents,
        applied,
        plan.unallocated_cents,
    )

    return AllocationPlanSchema.from_domain(plan)


@router.post("/allocations/compare", response_model=CompareResponse)
def compare_allocations(
    request_body: CompareRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """Compute plans for every strategy over the same accounts and funds"""
    request_id = get_request_id(request)

    try:
        plans = compare_strategies(
            [account.to_domain() for account in request_body.accounts],
            request_body.available_funds_cents,
            settings=settings,
        )

    except AllocationError as e:
        logging.warning(f"Comparison rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return CompareResponse(
        plans={strategy: AllocationPlanSchema.from_domain(plan) for strategy, plan in plans.items()}
    )
