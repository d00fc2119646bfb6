"""POST /v1/evaluate - auto-loan underwriting and lender offers"""

import logging
import time
from typing import Sequence

from fastapi import APIRouter, Depends, HTTPException, Request

from autoloan_gateway.api.dependencies import get_lenders, get_request_id, get_risk_scorer, get_rule_config
from autoloan_gateway.api.v1.schemas import EvaluationRequest, EvaluationResponse
from autoloan_gateway.domain.exceptions import RiskTimeoutError, RiskUnavailableError, ValidationError
from autoloan_gateway.domain.loan import compute_summary
from autoloan_gateway.domain.models import Lender, RuleConfig
from autoloan_gateway.domain.pipeline import evaluate_application
from autoloan_gateway.domain.scoring import RiskScorer
from autoloan_gateway.domain.tax import apply_tax_preset
from autoloan_gateway.infrastructure.observability.logging import log_evaluation
from autoloan_gateway.infrastructure.observability.metrics import record_evaluation, record_failed_evaluation

router = APIRouter()


@router.post("/evaluate", response_model=EvaluationResponse)
async def evaluate(
    request_body: EvaluationRequest,
    request: Request,
    scorer: RiskScorer = Depends(get_risk_scorer),
    lenders: Sequence[Lender] = Depends(get_lenders),
    rules: RuleConfig = Depends(get_rule_config),
):
    """
    Evaluate one loan config for one borrower.

    Flow:
    1. Map request to domain config/borrower (optionally seed state tax preset)
    2. Run the pipeline: features -> risk -> rules -> offers
    3. Record metrics and logs
    4. Return features, risk, rules, offers and the loan summary

    A decline is a 200 with violations; a scorer failure is a 503/504.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    cfg = request_body.loan.to_domain()
    borrower = request_body.borrower.to_domain()
    if request_body.apply_state_tax_preset:
        cfg = apply_tax_preset(cfg, borrower.state)

    try:
        result = await evaluate_application(cfg, borrower, lenders, scorer, rules)

    except ValidationError as e:
        logging.warning(f"Invalid evaluation input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.errors)

    except RiskTimeoutError as e:
        record_failed_evaluation()
        logging.error(f"Risk scorer timeout: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=504, detail="Risk scorer timed out")

    except RiskUnavailableError as e:
        record_failed_evaluation()
        logging.error(f"Risk scorer unavailable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Risk scorer unavailable")

    duration_ms = (time.time() - start_time) * 1000
    record_evaluation(result.rules.approved, result.rules.codes, len(result.offers))
    log_evaluation(
        request_id,
        result.rules.approved,
        result.rules.codes,
        len(result.offers),
        result.risk.pd,
        duration_ms,
    )

    return EvaluationResponse.from_domain(result, compute_summary(cfg))
