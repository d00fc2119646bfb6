"""Underwriting rules - hard eligibility gates"""

from typing import List

from autoloan_gateway.domain.models import (
    BorrowerProfile,
    Features,
    RiskScore,
    RuleConfig,
    RuleResult,
    RuleViolation,
)
from autoloan_gateway.utils.money import format_pct, format_usd

DEFAULT_RULES = RuleConfig()


def apply_rules(
    features: Features,
    borrower: BorrowerProfile,
    risk: RiskScore,
    rules: RuleConfig = DEFAULT_RULES,
) -> RuleResult:
    """
    Evaluate every gate and collect all violations.

    Gates (no short-circuit, the caller sees every decline reason):
    - MAX_LTV:    ltv > max_ltv
    - MAX_DTI:    dti > max_dti
    - MIN_INCOME: monthly income < min_income
    - MAX_PD:     pd > max_pd
    """
    violations: List[RuleViolation] = []

    if features.ltv > rules.max_ltv:
        violations.append(
            RuleViolation("MAX_LTV", f"LTV {format_pct(features.ltv)} exceeds {format_pct(rules.max_ltv)}")
        )
    if features.dti > rules.max_dti:
        violations.append(
            RuleViolation("MAX_DTI", f"DTI {format_pct(features.dti)} exceeds {format_pct(rules.max_dti)}")
        )
    if borrower.monthly_income < rules.min_income:
        violations.append(
            RuleViolation(
                "MIN_INCOME",
                f"Income {format_usd(borrower.monthly_income)} below {format_usd(rules.min_income)}",
            )
        )
    if risk.pd > rules.max_pd:
        violations.append(
            RuleViolation("MAX_PD", f"PD {format_pct(risk.pd)} exceeds {format_pct(rules.max_pd)}")
        )

    return RuleResult(approved=not violations, violations=tuple(violations))
