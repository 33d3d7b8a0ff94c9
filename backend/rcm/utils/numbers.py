"""
Decimal helpers shared by the capacity engine.
Persisted hours and percentages are NUMERIC columns; arithmetic stays in
Decimal and is rounded only when a response is built.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
TWO_PLACES = Decimal("0.01")


def to_decimal(value: Optional[Number]) -> Decimal:
    """
    Convert a persisted or user-supplied number to Decimal.
    
    Floats go through ``str`` so 37.5 stays 37.5 rather than its binary expansion.
    None is treated as zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_float(value: Number, places: Decimal = TWO_PLACES) -> float:
    """Round half-up to two places and return a float for JSON output."""
    return float(to_decimal(value).quantize(places, rounding=ROUND_HALF_UP))
