"""Evaluation pipeline - features -> risk -> rules -> offers"""

from typing import List, Optional, Sequence

from autoloan_gateway.domain.features import compute_features
from autoloan_gateway.domain.models import BorrowerProfile, EvaluationResult, Lender, LoanConfig, Offer, RuleConfig
from autoloan_gateway.domain.offers import DEFAULT_LENDERS, get_lender_offers
from autoloan_gateway.domain.rules import DEFAULT_RULES, apply_rules
from autoloan_gateway.domain.scoring import LocalRiskScorer, RiskScorer
from autoloan_gateway.domain.validation import validate_borrower, validate_loan_config


async def evaluate_application(
    cfg: LoanConfig,
    borrower: BorrowerProfile,
    lenders: Sequence[Lender] = DEFAULT_LENDERS,
    scorer: Optional[RiskScorer] = None,
    rules: RuleConfig = DEFAULT_RULES,
) -> EvaluationResult:
    """
    Main entry point: one atomic evaluation per (loan config, borrower).

    Flow:
    1. Validate inputs (ValidationError before any stage runs)
    2. Compute features
    3. Score risk (RiskUnavailableError propagates unchanged)
    4. Apply underwriting rules
    5. Price offers if approved, otherwise none

    Declines are a normal result: features and risk are still reported.
    """
    validate_loan_config(cfg)
    validate_borrower(borrower)
    scorer = scorer or LocalRiskScorer()

    features = compute_features(cfg, borrower)
    risk = await scorer.score(features, cfg.terms, borrower.monthly_income)
    rule_result = apply_rules(features, borrower, risk, rules)
    offers = get_lender_offers(cfg, features, risk, lenders) if rule_result.approved else []

    return EvaluationResult(
        features=features,
        risk=risk,
        rules=rule_result,
        offers=tuple(offers),
    )


async def fetch_offers(
    cfg: LoanConfig,
    borrower: BorrowerProfile,
    scorer: Optional[RiskScorer] = None,
    lenders: Sequence[Lender] = DEFAULT_LENDERS,
) -> List[Offer]:
    """Marketplace shortcut: price offers without the underwriting gate"""
    validate_loan_config(cfg)
    validate_borrower(borrower)
    scorer = scorer or LocalRiskScorer()

    features = compute_features(cfg, borrower)
    risk = await scorer.score(features, cfg.terms, borrower.monthly_income)
    return get_lender_offers(cfg, features, risk, lenders)
