"""Peso rounding helpers.

Amounts are rounded half-up on their shortest decimal representation, so
2.675 rounds to 2.68 the way it reads on a payroll statement, not the way
the binary float happens to sit.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional


def round_to(amount: float, places: int) -> float:
    """Round half-up to a fixed number of decimal places."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(amount))).quantize(quantum, rounding=ROUND_HALF_UP))


def round_cents(amount: float) -> float:
    """Round to 2 decimal places (pesos and centavos)."""
    return round_to(amount, 2)


def parse_number(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Leniently parse a user-supplied number.

    Accepts numbers and numeric strings with thousands separators. Anything
    else (None, empty or non-numeric strings, NaN) yields `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    else:
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number
