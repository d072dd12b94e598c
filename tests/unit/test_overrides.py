"""Unit tests for the manual override reconciler"""

import pytest
from payment_optimizer.domain.engine import allocate, apply_override
from payment_optimizer.domain.exceptions import InvalidAmountError, UnknownAccountError
from payment_optimizer.domain.models import AccountSnapshot, AllocationInput, Strategy


@pytest.fixture
def allocation_input(high_util_accounts) -> AllocationInput:
    return AllocationInput(high_util_accounts, 100_000, Strategy.UTILIZATION_MINIMIZING)


@pytest.fixture
def base_plan(allocation_input, settings):
    """visa 700, amex 200, rbc 100 (dollars)"""
    return allocate(allocation_input, settings=settings)


def test_override_leaves_other_accounts_unchanged(base_plan, allocation_input, settings):
    """Only the edited entry changes; aggregates are recomputed"""
    updated = apply_override(base_plan, allocation_input, "visa", 50_000, settings=settings)

    assert updated.get_account("amex") == base_plan.get_account("amex")
    assert updated.get_account("rbc") == base_plan.get_account("rbc")

    visa = updated.get_account("visa")
    assert visa.suggested_payment_cents == 50_000
    assert visa.new_balance_cents == 40_000
    assert visa.new_utilization == pytest.approx(0.4)
    assert visa.utilization_change_percentage_points == pytest.approx(-50.0)
    assert visa.is_manual is True

    assert updated.total_new_utilization == pytest.approx(600 / 3000)
    assert updated.score_impact != base_plan.score_impact


def test_override_does_not_mutate_base_plan(base_plan, allocation_input, settings):
    """The plan passed in is left as it was"""
    apply_override(base_plan, allocation_input, "visa", 50_000, settings=settings)

    assert base_plan.get_account("visa").suggested_payment_cents == 70_000
    assert base_plan.get_account("visa").is_manual is False


def test_override_clamped_to_minimum(base_plan, allocation_input, settings):
    """Requests below the minimum pay the minimum"""
    updated = apply_override(base_plan, allocation_input, "amex", 0, settings=settings)

    assert updated.get_account("amex").suggested_payment_cents == 1_000


def test_override_negative_request_clamped_to_minimum(base_plan, allocation_input, settings):
    updated = apply_override(base_plan, allocation_input, "amex", -5_000, settings=settings)

    assert updated.get_account("amex").suggested_payment_cents == 1_000


def test_override_clamped_to_balance(base_plan, allocation_input, settings):
    """Requests above the balance pay the balance, and the total can exceed the funds"""
    updated = apply_override(base_plan, allocation_input, "visa", 1_000_000, settings=settings)

    assert updated.get_account("visa").suggested_payment_cents == 90_000
    assert updated.get_account("visa").new_balance_cents == 0
    assert updated.total_payment_cents == 120_000
    assert updated.unallocated_cents == -20_000
    assert any("exceed your available funds" in w for w in updated.warnings)


def test_override_clamped_to_available_funds(high_util_accounts, settings):
    """Upper bound is the smaller of balance and available funds"""
    allocation_input = AllocationInput(high_util_accounts, 20_000, Strategy.INTEREST_MINIMIZING)
    plan = allocate(allocation_input, settings=settings)

    updated = apply_override(plan, allocation_input, "visa", 80_000, settings=settings)

    assert updated.get_account("visa").suggested_payment_cents == 20_000


def test_override_shortfall_warns_about_unallocated_funds(base_plan, allocation_input, settings):
    """Lowering a payment leaves funds on the table while balances remain"""
    updated = apply_override(base_plan, allocation_input, "visa", 2_500, settings=settings)

    assert updated.unallocated_cents == 67_500
    assert any("were not allocated" in w for w in updated.warnings)


def test_sequential_overrides_accumulate(base_plan, allocation_input, settings):
    """Each override builds on the previous plan"""
    first = apply_override(base_plan, allocation_input, "visa", 60_000, settings=settings)
    second = apply_override(first, allocation_input, "amex", 30_000, settings=settings)

    assert second.get_account("visa").suggested_payment_cents == 60_000
    assert second.get_account("amex").suggested_payment_cents == 30_000
    assert second.get_account("visa").is_manual
    assert second.get_account("amex").is_manual
    assert not second.get_account("rbc").is_manual
    assert second.strategy == Strategy.UTILIZATION_MINIMIZING


def test_override_unknown_account(base_plan, allocation_input, settings):
    with pytest.raises(UnknownAccountError) as exc_info:
        apply_override(base_plan, allocation_input, "missing", 10_000, settings=settings)

    assert exc_info.value.account_id == "missing"


@pytest.mark.parametrize("requested", [float("nan"), float("inf"), None, "100"])
def test_override_rejects_non_numeric_request(base_plan, allocation_input, settings, requested):
    with pytest.raises(InvalidAmountError):
        apply_override(base_plan, allocation_input, "visa", requested, settings=settings)


def test_override_rounds_fractional_cents(base_plan, allocation_input, settings):
    updated = apply_override(base_plan, allocation_input, "visa", 50_000.6, settings=settings)

    assert updated.get_account("visa").suggested_payment_cents == 50_001


def test_override_normalizes_float_snapshot_amounts(settings):
    """Whole-number float amounts on the input still yield int cents on the edited entry"""
    accounts = (
        AccountSnapshot("a", 1000.0, 5000.0, 100.0, nickname="Everyday"),
        AccountSnapshot("b", 2000, 10000, 200),
    )
    allocation_input = AllocationInput(accounts, 1000, Strategy.BALANCE_SNOWBALL)
    plan = allocate(allocation_input, settings=settings)

    updated = apply_override(plan, allocation_input, "a", 700, settings=settings)

    entry = updated.get_account("a")
    assert entry.suggested_payment_cents == 700
    assert entry.new_balance_cents == 300
    assert type(entry.current_balance_cents) is int
    assert type(entry.new_balance_cents) is int
    assert entry.nickname == "Everyday"
