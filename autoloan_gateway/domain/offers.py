"""Lender offer pricing and ranking"""

from dataclasses import replace
from decimal import Decimal
from typing import List, Sequence

from autoloan_gateway.domain.loan import compute_financed_amount, compute_payment, compute_sales_tax, compute_summary
from autoloan_gateway.domain.models import Features, Lender, LoanConfig, Offer, RiskScore
from autoloan_gateway.utils.money import round_money, to_decimal

DEFAULT_BPS_PER_PD = Decimal("120")

DEFAULT_LENDERS: tuple[Lender, ...] = (
    Lender(id="L1", name="Acme Bank", base_apr="6.9", max_term=72, max_ltv=1.3, max_dti=0.5, risk_apr_bps_per_pd=120),
    Lender(id="L2", name="Metro Credit", base_apr="5.9", max_term=60, max_ltv=1.2, max_dti=0.45, risk_apr_bps_per_pd=160),
    Lender(id="L3", name="Sunrise Financial", base_apr="7.5", max_term=84, max_ltv=1.35, max_dti=0.55, risk_apr_bps_per_pd=90),
)


def is_eligible(lender: Lender, cfg: LoanConfig, features: Features) -> bool:
    """Term, LTV and DTI gates; lenders failing any are dropped, not declined"""
    if cfg.term_months > lender.max_term:
        return False
    if lender.max_ltv is not None and features.ltv > lender.max_ltv:
        return False
    if lender.max_dti is not None and features.dti > lender.max_dti:
        return False
    return True


def price_apr(lender: Lender, pd: float) -> Decimal:
    """
    Lender APR with risk uplift.

    uplift (percent) = bps_per_pd * (pd * 10) / 100
    e.g. 120 bps at pd 0.25 -> +3.00 points
    """
    bps = lender.risk_apr_bps_per_pd if lender.risk_apr_bps_per_pd is not None else DEFAULT_BPS_PER_PD
    uplift = bps * to_decimal(pd) * 10 / 100
    return round_money(lender.base_apr + uplift)


def get_lender_offers(
    cfg: LoanConfig,
    features: Features,
    risk: RiskScore,
    lenders: Sequence[Lender] = DEFAULT_LENDERS,
) -> List[Offer]:
    """
    Price every eligible lender and rank the offers.

    Returns offers sorted ascending by risk-adjusted APR (apr * (1 + pd)),
    lowest effective cost first. Ties keep catalog order.
    """
    tax = compute_sales_tax(cfg)
    financed_amount = compute_financed_amount(cfg, tax)
    pd = to_decimal(risk.pd)

    offers = []
    for lender in lenders:
        if not is_eligible(lender, cfg, features):
            continue

        apr = price_apr(lender, risk.pd)
        priced_cfg = replace(cfg, apr=apr)
        payment = compute_payment(priced_cfg, financed_amount)
        summary = compute_summary(priced_cfg)

        offers.append(
            Offer(
                lender_id=lender.id,
                lender_name=lender.name,
                term_months=cfg.term_months,
                apr=apr,
                monthly_payment=payment,
                total_cost=summary.total_cost,
                risk_adjusted_apr=round_money(apr * (1 + pd)),
            )
        )

    return sorted(offers, key=lambda offer: offer.risk_adjusted_apr)
