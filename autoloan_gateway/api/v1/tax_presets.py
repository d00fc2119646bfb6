"""GET /v1/tax-presets/{state} - regional tax defaults"""

from fastapi import APIRouter, HTTPException

from autoloan_gateway.api.v1.schemas import TaxPresetResponse
from autoloan_gateway.domain.tax import get_tax_preset

router = APIRouter()


@router.get("/tax-presets/{state}", response_model=TaxPresetResponse)
def get_preset(state: str):
    preset = get_tax_preset(state)
    if preset is None:
        raise HTTPException(status_code=404, detail="No tax preset for state")
    return TaxPresetResponse.from_domain(state, preset)
