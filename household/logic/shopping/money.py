"""Cent-precision helpers for shopping-list costs."""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from household.utilities.constants import COST_DECIMALS

CENT = Decimal(1).scaleb(-COST_DECIMALS)

__all__ = ["CENT", "to_decimal", "round_cost"]


def to_decimal(value: Any, default: Decimal = Decimal(0)) -> Decimal:
    """Coerce a stored cost (number, numeric string, None) to Decimal.

    Floats go through str() so 1.1 stays 1.1. None, booleans, garbage and
    non-finite values give ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return default
    return result if result.is_finite() else default


def round_cost(value: Any) -> float:
    """Round half-up to cents and return a float suitable for JSON."""
    return float(to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))
