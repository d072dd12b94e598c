"""Fixed-point money utilities (amounts are integer cents)"""

import math
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP

from payment_optimizer.domain.exceptions import InvalidAmountError

CENTS_PER_UNIT = 100


def from_cents(cents: int) -> Decimal:
    """Convert integer cents to a two-place Decimal dollar amount"""
    return (Decimal(cents) / CENTS_PER_UNIT).quantize(Decimal("0.01"))


def require_cents(value: object) -> int:
    """
    Check that a value is already a usable cent amount.

    Accepts ints and integral floats/Decimals; anything non-finite,
    fractional or negative is rejected.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Amount must be a number, got {value!r}")
    if isinstance(value, int):
        cents = value
    elif isinstance(value, (float, Decimal)):
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidAmountError(f"Amount must be finite, got {value}")
        if isinstance(value, Decimal) and not value.is_finite():
            raise InvalidAmountError(f"Amount must be finite, got {value}")
        if value != int(value):
            raise InvalidAmountError(f"Amount must be a whole number of cents, got {value}")
        cents = int(value)
    else:
        raise InvalidAmountError(f"Amount must be a number, got {value!r}")

    if cents < 0:
        raise InvalidAmountError(f"Amount must be non-negative, got {cents}")
    return cents


def round_cents(value: object) -> int:
    """Round any finite number to whole cents (sign preserved)"""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidAmountError(f"Amount must be a number, got {value!r}")
    if isinstance(value, int):
        return value

    decimal_value = Decimal(str(value)) if isinstance(value, float) else value
    if not decimal_value.is_finite():
        raise InvalidAmountError(f"Amount must be finite, got {value}")
    return int(decimal_value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def fraction_of(cents: int, ratio: float) -> int:
    """Return ``cents * ratio`` floored to the cent (ratio applied as a decimal literal)"""
    return int((Decimal(cents) * Decimal(str(ratio))).to_integral_value(rounding=ROUND_FLOOR))


def monthly_interest_cents(cents: int, annual_rate_percent: float) -> int:
    """One month of simple interest on ``cents`` at an annual percentage rate"""
    monthly = Decimal(cents) * Decimal(str(annual_rate_percent)) / Decimal(100) / Decimal(12)
    return int(monthly.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
