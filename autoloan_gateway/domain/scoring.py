"""Risk scoring - reference probability-of-default policy and scorer contract"""

import math
from decimal import Decimal
from typing import Protocol

from autoloan_gateway.domain.models import Features, LoanTerms, RiskScore

MODEL_VERSION = "ref-logistic-1.0"

# Pivot points of the reference policy
LTV_PIVOT = 0.9
DTI_PIVOT = 0.35
LTV_WINDOW = 0.5
DTI_WINDOW = 0.35

PD_FLOOR, PD_CAP = 0.02, 0.60
CONFIDENCE_FLOOR, CONFIDENCE_CAP = 0.20, 0.95


class RiskScorer(Protocol):
    """Anything that can turn features into a RiskScore, local or remote"""

    async def score(self, features: Features, terms: LoanTerms, income: Decimal) -> RiskScore:
        ...


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _logistic(z: float) -> float:
    return 1.0 / (1.0 + math.exp(-z))


def calculate_pd(ltv: float, dti: float) -> float:
    """
    Probability of default from LTV and DTI.

    Scoring weights:
    - z = 3.0 * (ltv - 0.9) + 2.5 * (dti - 0.35)
    - pd = logistic(z), clamped to [0.02, 0.60]

    At the pivots (LTV 90%, DTI 35%) z = 0 and pd = 0.5.
    """
    z = 3.0 * (ltv - LTV_PIVOT) + 2.5 * (dti - DTI_PIVOT)
    return _clamp(_logistic(z), PD_FLOOR, PD_CAP)


def calculate_confidence(ltv: float, dti: float) -> float:
    """
    Confidence grows with distance from the pivots.

    Each term is |x - pivot| / window clamped to [0, 1]; the average is
    clamped to [0.20, 0.95].
    """
    ltv_term = _clamp(abs(ltv - LTV_PIVOT) / LTV_WINDOW, 0.0, 1.0)
    dti_term = _clamp(abs(dti - DTI_PIVOT) / DTI_WINDOW, 0.0, 1.0)
    return _clamp((ltv_term + dti_term) / 2, CONFIDENCE_FLOOR, CONFIDENCE_CAP)


def score_features(ltv: float, dti: float) -> RiskScore:
    """Reference policy as a plain function, shared by the local scorer and /v1/score"""
    return RiskScore(
        pd=round(calculate_pd(ltv, dti), 4),
        confidence=round(calculate_confidence(ltv, dti), 4),
        model_version=MODEL_VERSION,
    )


class LocalRiskScorer:
    """In-process scorer; same contract as the remote one, no I/O"""

    async def score(self, features: Features, terms: LoanTerms, income: Decimal) -> RiskScore:
        return score_features(features.ltv, features.dti)
