"""Input guards run before a loan config / borrower enters the pipeline"""

import re
from decimal import Decimal
from typing import List

from autoloan_gateway.domain.exceptions import ValidationError
from autoloan_gateway.domain.models import BorrowerProfile, LoanConfig

_STATE_CODE = re.compile(r"^[A-Za-z]{2}$")

# Upper bounds keep every amount inside Decimal's 28-digit context once
# rates and terms are applied, and keep schedules a sane length
MAX_MONEY = Decimal("1e12")
MAX_RATE_PCT = Decimal("100")
MAX_TERM_MONTHS = 600

_LOAN_MONEY = (
    "price",
    "down",
    "trade_in",
    "trade_in_payoff",
    "upfront_fees",
    "financed_fees",
    "upfront_extras",
    "financed_extras",
)
_LOAN_RATES = ("apr", "tax_rate")
_BORROWER_MONEY = ("monthly_income", "housing_cost", "other_debt")


def _check_range(errors: List[str], name: str, value: Decimal, upper: Decimal) -> None:
    if not value.is_finite():
        errors.append(f"{name} must be a finite number (got {value})")
    elif value < 0:
        errors.append(f"{name} must be >= 0 (got {value})")
    elif value > upper:
        errors.append(f"{name} must be <= {upper} (got {value})")


def validate_loan_config(cfg: LoanConfig) -> None:
    """
    Raises:
        ValidationError: listing every breached invariant
    """
    errors: List[str] = []

    if cfg.term_months <= 0:
        errors.append(f"term_months must be > 0 (got {cfg.term_months})")
    elif cfg.term_months > MAX_TERM_MONTHS:
        errors.append(f"term_months must be <= {MAX_TERM_MONTHS} (got {cfg.term_months})")
    for name in _LOAN_RATES:
        _check_range(errors, name, getattr(cfg, name), MAX_RATE_PCT)
    for name in _LOAN_MONEY:
        _check_range(errors, name, getattr(cfg, name), MAX_MONEY)

    if errors:
        raise ValidationError(errors)


def validate_borrower(borrower: BorrowerProfile) -> None:
    """
    Raises:
        ValidationError: listing every breached invariant
    """
    errors: List[str] = []

    for name in _BORROWER_MONEY:
        _check_range(errors, name, getattr(borrower, name), MAX_MONEY)
    if borrower.state is not None and not _STATE_CODE.match(borrower.state.strip()):
        errors.append(f"state must be a two-letter code (got {borrower.state!r})")

    if errors:
        raise ValidationError(errors)
