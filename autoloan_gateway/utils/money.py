"""Money helpers - Decimal coercion and cent rounding"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Coerce a number to Decimal without picking up binary float noise"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Number) -> Decimal:
    """Round to cents, half-up (12.345 -> 12.35)"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_usd(value: Number) -> str:
    """Whole-dollar currency string, e.g. $2000"""
    whole = to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"${whole}"


def format_pct(ratio: float) -> str:
    """Ratio as a one-decimal percentage, e.g. 0.5 -> 50.0%"""
    return f"{ratio * 100:.1f}%"
