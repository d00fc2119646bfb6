"""Regional sales-tax presets used to seed a loan config"""

from dataclasses import replace
from decimal import Decimal
from typing import Dict, Optional

from autoloan_gateway.domain.models import LoanConfig, TaxPreset, TaxRule

TAX_PRESETS: Dict[str, TaxPreset] = {
    "CA": TaxPreset(rate_pct=Decimal("8.75"), rule=TaxRule.PRICE_MINUS_TRADEIN),
    "TX": TaxPreset(rate_pct=Decimal("6.25"), rule=TaxRule.PRICE_FULL),
    "FL": TaxPreset(rate_pct=Decimal("6.00"), rule=TaxRule.PRICE_MINUS_TRADEIN),
    "NY": TaxPreset(rate_pct=Decimal("8.875"), rule=TaxRule.PRICE_MINUS_TRADEIN),
    "WA": TaxPreset(rate_pct=Decimal("6.50"), rule=TaxRule.PRICE_MINUS_TRADEIN),
}


def get_tax_preset(state: Optional[str]) -> Optional[TaxPreset]:
    if not state:
        return None
    return TAX_PRESETS.get(state.strip().upper())


def apply_tax_preset(cfg: LoanConfig, state: Optional[str]) -> LoanConfig:
    """New config with the state's tax rate and rule; unchanged if no preset"""
    preset = get_tax_preset(state)
    if preset is None:
        return cfg
    return replace(cfg, tax_rate=preset.rate_pct, tax_rule=preset.rule)
