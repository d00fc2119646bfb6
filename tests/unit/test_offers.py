"""Unit tests for lender offer pricing and ranking"""

from dataclasses import replace
from decimal import Decimal

from autoloan_gateway.domain.features import compute_features
from autoloan_gateway.domain.loan import compute_payment, compute_summary
from autoloan_gateway.domain.models import BorrowerProfile, Features, Lender, LoanConfig, RiskScore
from autoloan_gateway.domain.offers import DEFAULT_LENDERS, get_lender_offers, is_eligible, price_apr

PD_25 = RiskScore(pd=0.25, confidence=0.5, model_version="test")


def _features(cfg: LoanConfig, borrower: BorrowerProfile) -> Features:
    return compute_features(cfg, borrower)


def test_price_apr_uplift():
    """120 bps per 0.10 PD at pd 0.25 adds 3 points"""
    lender = Lender(id="X", name="X", base_apr="6.9", max_term=72, risk_apr_bps_per_pd=120)
    assert price_apr(lender, 0.25) == Decimal("9.90")


def test_price_apr_default_coefficient():
    lender = Lender(id="X", name="X", base_apr="5", max_term=72)
    assert price_apr(lender, 0.25) == Decimal("8.00")  # default 120 bps


def test_offers_ranked_by_risk_adjusted_apr(approved_config: LoanConfig, prime_borrower: BorrowerProfile):
    """
    pd 0.25:
    - Acme 9.90 -> 12.38, Metro 9.90 -> 12.38, Sunrise 9.75 -> 12.19
    Ties keep catalog order.
    """
    offers = get_lender_offers(approved_config, _features(approved_config, prime_borrower), PD_25)

    assert [o.lender_id for o in offers] == ["L3", "L1", "L2"]
    assert [o.apr for o in offers] == [Decimal("9.75"), Decimal("9.90"), Decimal("9.90")]
    assert [o.risk_adjusted_apr for o in offers] == [Decimal("12.19"), Decimal("12.38"), Decimal("12.38")]


def test_offer_payment_and_cost_use_lender_apr(approved_config: LoanConfig, prime_borrower: BorrowerProfile):
    offers = get_lender_offers(approved_config, _features(approved_config, prime_borrower), PD_25)

    for offer in offers:
        priced = replace(approved_config, apr=offer.apr)
        assert offer.monthly_payment == compute_payment(priced)
        assert offer.total_cost == compute_summary(priced).total_cost
        assert offer.term_months == 60
        assert offer.lender_name


def test_offers_exclude_lenders_below_requested_term(approved_config: LoanConfig, prime_borrower: BorrowerProfile):
    cfg = replace(approved_config, term_months=72)

    offers = get_lender_offers(cfg, _features(cfg, prime_borrower), PD_25)

    assert {o.lender_id for o in offers} == {"L1", "L3"}  # Metro caps at 60 months
    lenders = {lender.id: lender for lender in DEFAULT_LENDERS}
    assert all(lenders[o.lender_id].max_term >= 72 for o in offers)


def test_offers_none_when_term_exceeds_catalog(approved_config: LoanConfig, prime_borrower: BorrowerProfile):
    cfg = replace(approved_config, term_months=96)
    assert get_lender_offers(cfg, _features(cfg, prime_borrower), PD_25) == []


def test_eligibility_ltv_and_dti_gates(approved_config: LoanConfig):
    features = Features(
        ltv=1.25,
        dti=0.5,
        payment=Decimal("400"),
        financed_amount=Decimal("37500"),
        apr=Decimal("6"),
        term_months=60,
        monthly_income=Decimal("5000"),
    )
    eligible = {lender.id for lender in DEFAULT_LENDERS if is_eligible(lender, approved_config, features)}

    # Metro: max LTV 1.2 / DTI 0.45; Acme and Sunrise allow 1.25 / 0.50
    assert eligible == {"L1", "L3"}


def test_lender_without_limits_only_checks_term(approved_config: LoanConfig):
    lender = Lender(id="OPEN", name="Open Lending", base_apr="9", max_term=60)
    features = Features(
        ltv=3.0,
        dti=2.0,
        payment=Decimal("400"),
        financed_amount=Decimal("90000"),
        apr=Decimal("6"),
        term_months=60,
        monthly_income=Decimal("1"),
    )
    assert is_eligible(lender, approved_config, features) is True


def test_synthetic_catalog(approved_config: LoanConfig, prime_borrower: BorrowerProfile):
    catalog = [
        Lender(id="A", name="Alpha", base_apr="4", max_term=60, risk_apr_bps_per_pd=400),
        Lender(id="B", name="Beta", base_apr="6", max_term=60, risk_apr_bps_per_pd=0),
    ]

    offers = get_lender_offers(approved_config, _features(approved_config, prime_borrower), PD_25, catalog)

    # Alpha 4 + 10 = 14.00, Beta stays at 6.00
    assert [o.lender_id for o in offers] == ["B", "A"]
    assert offers[0].apr == Decimal("6.00")
    assert offers[1].apr == Decimal("14.00")
