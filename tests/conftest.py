"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient

from autoloan_gateway.api.dependencies import get_risk_scorer
from autoloan_gateway.api.main import create_app
from autoloan_gateway.domain.exceptions import RiskTimeoutError, RiskUnavailableError
from autoloan_gateway.domain.models import BorrowerProfile, LoanConfig, RiskScore, TaxRule
from autoloan_gateway.domain.scoring import LocalRiskScorer


class FixedRiskScorer:
    """Returns the same score every time and records its inputs"""

    def __init__(self, pd: float = 0.1, confidence: float = 0.8):
        self.risk = RiskScore(pd=pd, confidence=confidence, model_version="test-fixed")
        self.calls = []

    async def score(self, features, terms, income) -> RiskScore:
        self.calls.append((features, terms, income))
        return self.risk


class FailingRiskScorer:
    """Simulates an unreachable remote scorer"""

    def __init__(self, error: Exception | None = None):
        self.error = error or RiskUnavailableError("connection refused")
        self.calls = 0

    async def score(self, features, terms, income) -> RiskScore:
        self.calls += 1
        raise self.error


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client using the in-process scorer"""
    app = create_app()
    app.dependency_overrides[get_risk_scorer] = LocalRiskScorer
    return TestClient(app)


@pytest.fixture
def client_with_scorer():
    """Build a test client whose risk scorer is replaced"""

    def _make(scorer) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_risk_scorer] = lambda: scorer
        return TestClient(app)

    return _make


@pytest.fixture
def fixed_scorer():
    return FixedRiskScorer


@pytest.fixture
def unavailable_scorer() -> FailingRiskScorer:
    return FailingRiskScorer()


@pytest.fixture
def timeout_scorer() -> FailingRiskScorer:
    return FailingRiskScorer(RiskTimeoutError("Risk API timeout after 10.0s"))


@pytest.fixture
def example_config() -> LoanConfig:
    """$32k car, 8.75% tax, $400 upfront / $300 financed fees, 6.5% over 60 months"""
    return LoanConfig(
        price=32000,
        down=2000,
        apr="6.5",
        term_months=60,
        tax_rate="8.75",
        tax_rule=TaxRule.PRICE_MINUS_TRADEIN,
        upfront_fees=400,
        financed_fees=300,
    )


@pytest.fixture
def zero_apr_config() -> LoanConfig:
    """$20k at 0% over 48 months, no tax or fees"""
    return LoanConfig(price=20000, apr=0, term_months=48)


@pytest.fixture
def approved_config() -> LoanConfig:
    """$30k car with $10k down at 6% over 60 months: $20k financed, LTV 66.7%"""
    return LoanConfig(price=30000, down=10000, apr=6, term_months=60)


@pytest.fixture
def prime_borrower() -> BorrowerProfile:
    """$8k/month income, $1.5k housing, $200 other debt"""
    return BorrowerProfile(monthly_income=8000, housing_cost=1500, other_debt=200, state="CA")
