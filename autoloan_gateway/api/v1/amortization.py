"""POST /v1/amortization - payment schedule and lifetime totals"""

from fastapi import APIRouter, HTTPException

from autoloan_gateway.api.v1.schemas import (
    AmortizationResponse,
    AmortizationRowSchema,
    LoanConfigSchema,
    SummarySchema,
)
from autoloan_gateway.domain.exceptions import ValidationError
from autoloan_gateway.domain.loan import build_amortization, compute_summary
from autoloan_gateway.domain.validation import validate_loan_config

router = APIRouter()


@router.post("/amortization", response_model=AmortizationResponse)
def get_amortization(request_body: LoanConfigSchema):
    """
    Build the full schedule for a loan config.

    Returns:
        Summary plus one row per month; the last row's balance is 0.00
    """
    cfg = request_body.to_domain()
    try:
        validate_loan_config(cfg)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)

    return AmortizationResponse(
        summary=SummarySchema.from_domain(compute_summary(cfg)),
        schedule=[AmortizationRowSchema.from_domain(row) for row in build_amortization(cfg)],
    )
