"""Loan math - sales tax, financed principal, payment, amortization and totals"""

from decimal import Decimal
from typing import List, Optional

from autoloan_gateway.domain.models import AmortizationRow, LoanConfig, Summary, TaxRule
from autoloan_gateway.utils.money import round_money

ZERO = Decimal("0")


def monthly_rate(cfg: LoanConfig) -> Decimal:
    """APR percent -> periodic (monthly) rate"""
    return cfg.apr / 100 / 12


def compute_sales_tax(cfg: LoanConfig) -> Decimal:
    """
    Sales tax on the vehicle.

    price_minus_tradein taxes max(price - trade-in, 0); price_full taxes the
    full price regardless of trade-in.
    """
    if cfg.tax_rule == TaxRule.PRICE_MINUS_TRADEIN:
        taxable_base = max(cfg.price - cfg.trade_in, ZERO)
    else:
        taxable_base = cfg.price
    return round_money(taxable_base * cfg.tax_rate / 100)


def compute_financed_amount(cfg: LoanConfig, sales_tax: Optional[Decimal] = None) -> Decimal:
    """
    Principal actually financed.

    price - down - trade-in + tax + financed fees/extras - trade-in payoff,
    floored at zero.
    """
    tax = compute_sales_tax(cfg) if sales_tax is None else sales_tax
    principal = (
        cfg.price
        - cfg.down
        - cfg.trade_in
        + tax
        + cfg.financed_fees
        + cfg.financed_extras
        - cfg.trade_in_payoff
    )
    return max(round_money(principal), ZERO)


def compute_payment(cfg: LoanConfig, financed_amount: Optional[Decimal] = None) -> Decimal:
    """
    Level monthly payment: PMT = PV * r / (1 - (1 + r)^-n)

    A zero rate degrades to PV / n; a non-positive term yields 0.
    """
    pv = compute_financed_amount(cfg) if financed_amount is None else financed_amount
    n = cfg.term_months
    if n <= 0:
        return ZERO

    r = monthly_rate(cfg)
    if r == 0:
        return round_money(pv / n)

    return round_money(r * pv / (1 - (1 + r) ** -n))


def build_amortization(cfg: LoanConfig) -> List[AmortizationRow]:
    """
    Period-by-period schedule for the loan.

    Requirements:
    - payment == interest + principal on every row
    - balance never increases
    - Final period absorbs rounding drift so the balance ends at exactly 0.00
    - Principal is capped at the remaining balance, so a rounded-up payment
      on a tiny loan never drives the balance below zero

    Example:
        $20,000 at 0% over 48 months -> 47 rows of $416.67, last row $416.51
    """
    tax = compute_sales_tax(cfg)
    pv = compute_financed_amount(cfg, tax)
    pmt = compute_payment(cfg, pv)
    r = monthly_rate(cfg)

    rows = []
    balance = pv
    for period in range(1, cfg.term_months + 1):
        interest = round_money(balance * r)
        if period == cfg.term_months:
            principal = balance
        else:
            principal = min(round_money(pmt - interest), balance)
        payment = interest + principal
        balance = balance - principal
        rows.append(
            AmortizationRow(
                period=period,
                payment=payment,
                interest=interest,
                principal=principal,
                balance=balance,
            )
        )

    return rows


def compute_summary(cfg: LoanConfig) -> Summary:
    """
    Lifetime totals.

    Total cost uses the nominal payment times the term, not the sum of the
    schedule's rows (whose last payment carries the drift correction).
    """
    tax = compute_sales_tax(cfg)
    pv = compute_financed_amount(cfg, tax)
    pmt = compute_payment(cfg, pv)
    rows = build_amortization(cfg)

    total_interest = round_money(sum((row.interest for row in rows), ZERO))
    total_payments = round_money(pmt * cfg.term_months)
    total_cost = round_money(cfg.down + cfg.upfront_fees + cfg.upfront_extras + total_payments)

    return Summary(
        payment=pmt,
        total_interest=total_interest,
        total_cost=total_cost,
        financed_amount=pv,
        sales_tax=tax,
    )
