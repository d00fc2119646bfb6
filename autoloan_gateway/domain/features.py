"""Feature extraction - LTV, DTI and payment for underwriting"""

from decimal import Decimal

from autoloan_gateway.domain.loan import compute_financed_amount, compute_payment, compute_sales_tax
from autoloan_gateway.domain.models import BorrowerProfile, Features, LoanConfig

ONE = Decimal("1")


def compute_features(cfg: LoanConfig, borrower: BorrowerProfile) -> Features:
    """
    Derive underwriting features from the loan config and borrower.

    - LTV = financed amount / max(price, 1)
    - DTI = (other debt + housing + new payment) / max(income, 1)
    """
    tax = compute_sales_tax(cfg)
    financed_amount = compute_financed_amount(cfg, tax)
    payment = compute_payment(cfg, financed_amount)

    ltv = financed_amount / max(cfg.price, ONE)

    monthly_debt_load = borrower.other_debt + borrower.housing_cost + payment
    dti = monthly_debt_load / max(borrower.monthly_income, ONE)

    return Features(
        ltv=float(ltv),
        dti=float(dti),
        payment=payment,
        financed_amount=financed_amount,
        apr=cfg.apr,
        term_months=cfg.term_months,
        monthly_income=borrower.monthly_income,
    )


def is_affordable(features: Features, max_dti: float = 0.45) -> bool:
    """Quick affordability flag, independent of the underwriting rules"""
    return features.dti <= max_dti
