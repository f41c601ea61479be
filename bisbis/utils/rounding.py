"""Decimal-place rounding for prices and derived ratings."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

# Doubles at or above 2**53 are whole numbers; nothing left to round.
_EXACT_INTEGER_LIMIT = 2.0 ** 53


def round_to_dp(num: float, places: int = 2) -> float:
    """
    Multiply by 10**places, round half away from zero, divide back.

    The scaled value is the binary float product, not the decimal the caller
    typed: 59.005 * 100 == 5900.499999999999, so round_to_dp(59.005) == 59.0.
    Decimal(float) is exact, so no second rounding happens before the
    half-away-from-zero step.

    A value whose scaled form has no fractional digits (or overflows) is
    returned as a float unchanged.
    """
    factor = 10 ** places
    scaled = float(num) * factor
    if not abs(scaled) < _EXACT_INTEGER_LIMIT:
        return float(num)
    return float(Decimal(scaled).quantize(Decimal(1), rounding=ROUND_HALF_UP)) / factor
