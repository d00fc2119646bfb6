"""POST /v1/score - reference risk scorer behind the remote scoring contract"""

from fastapi import APIRouter

from autoloan_gateway.api.v1.schemas import ScoreRequest, ScoreResponse
from autoloan_gateway.domain.scoring import score_features

router = APIRouter()


@router.post("/score", response_model=ScoreResponse)
def score(request_body: ScoreRequest):
    """
    Score LTV/DTI with the reference logistic policy.

    APR, term and income are accepted for contract compatibility; the
    reference policy only uses LTV and DTI.
    """
    risk = score_features(request_body.ltv, request_body.dti)
    return ScoreResponse(pd=risk.pd, confidence=risk.confidence, model_version=risk.model_version)
