"""Dependency injection for FastAPI endpoints"""

from typing import Sequence

from fastapi import Request

from autoloan_gateway.config import settings
from autoloan_gateway.domain.models import Lender, RuleConfig
from autoloan_gateway.domain.offers import DEFAULT_LENDERS
from autoloan_gateway.domain.scoring import LocalRiskScorer, RiskScorer
from autoloan_gateway.infrastructure.clients.risk import RemoteRiskScorer


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_risk_scorer() -> RiskScorer:
    """Provide the configured risk scorer"""
    if settings.risk_scorer_mode == "remote":
        return RemoteRiskScorer()
    return LocalRiskScorer()


def get_lenders() -> Sequence[Lender]:
    """Provide the lender catalog"""
    return DEFAULT_LENDERS


def get_rule_config() -> RuleConfig:
    """Underwriting thresholds from settings"""
    return RuleConfig(
        max_ltv=settings.rule_max_ltv,
        max_dti=settings.rule_max_dti,
        min_income=settings.rule_min_income,
        max_pd=settings.rule_max_pd,
    )
