"""Rough ownership estimates shown next to the financing numbers"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from autoloan_gateway.utils.money import Number, round_money, to_decimal

FIRST_YEAR_RETENTION = Decimal("0.80")
LATER_YEAR_RETENTION = Decimal("0.88")


def estimate_residual(msrp: Number, years: int) -> Decimal:
    """
    Toy depreciation curve: -20% the first year, -12% each year after.

    Example:
        $30,000 after 2 years -> 30000 * 0.80 * 0.88 = $21,120
    """
    value = to_decimal(msrp)
    for year in range(1, years + 1):
        value *= FIRST_YEAR_RETENTION if year == 1 else LATER_YEAR_RETENTION
    return max(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP), Decimal("0"))


def estimate_tco_per_month(
    miles_per_year: Number,
    mpg: Optional[Number] = None,
    fuel_price: Optional[Number] = None,
    insurance_per_month: Number = 0,
    maintenance_per_month: Number = 0,
) -> Decimal:
    """Monthly running cost; fuel only counts when both mpg and fuel price are known"""
    fuel = Decimal("0")
    if mpg and fuel_price:
        fuel = to_decimal(miles_per_year) / 12 / to_decimal(mpg) * to_decimal(fuel_price)
    return round_money(to_decimal(insurance_per_month) + to_decimal(maintenance_per_month) + fuel)
