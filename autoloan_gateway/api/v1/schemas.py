"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from autoloan_gateway.domain.models import (
    AmortizationRow,
    BorrowerProfile,
    EvaluationResult,
    LoanConfig,
    Offer,
    Summary,
    TaxPreset,
    TaxRule,
)


class FeeSplit(BaseModel):
    """Amount paid at signing vs rolled into the loan"""

    upfront: Decimal = Decimal("0")
    financed: Decimal = Decimal("0")


class LoanConfigSchema(BaseModel):
    """Loan configuration; invariants are checked by the domain validator"""

    price: Decimal = Field(..., description="Vehicle price")
    down: Decimal = Decimal("0")
    trade_in: Decimal = Decimal("0")
    trade_in_payoff: Decimal = Decimal("0")
    apr: Decimal = Field(..., description="APR in percent, e.g. 6.5")
    term_months: int = Field(..., description="Loan term in months")
    tax_rate: Decimal = Field(Decimal("0"), description="Sales tax rate in percent")
    tax_rule: TaxRule = TaxRule.PRICE_MINUS_TRADEIN
    fees: FeeSplit = Field(default_factory=FeeSplit)
    extras: FeeSplit = Field(default_factory=FeeSplit)

    def to_domain(self) -> LoanConfig:
        return LoanConfig(
            price=self.price,
            down=self.down,
            trade_in=self.trade_in,
            trade_in_payoff=self.trade_in_payoff,
            apr=self.apr,
            term_months=self.term_months,
            tax_rate=self.tax_rate,
            tax_rule=self.tax_rule,
            upfront_fees=self.fees.upfront,
            financed_fees=self.fees.financed,
            upfront_extras=self.extras.upfront,
            financed_extras=self.extras.financed,
        )


class BorrowerSchema(BaseModel):
    monthly_income: Decimal = Field(..., description="Gross monthly income")
    housing_cost: Decimal = Decimal("0")
    other_debt: Decimal = Decimal("0")
    state: Optional[str] = None

    def to_domain(self) -> BorrowerProfile:
        return BorrowerProfile(
            monthly_income=self.monthly_income,
            housing_cost=self.housing_cost,
            other_debt=self.other_debt,
            state=self.state,
        )


class EvaluationRequest(BaseModel):
    """Request body for POST /v1/evaluate"""

    loan: LoanConfigSchema
    borrower: BorrowerSchema
    apply_state_tax_preset: bool = Field(
        False, description="Seed tax rate/rule from the borrower's state when a preset exists"
    )


class FeaturesSchema(BaseModel):
    ltv: float
    dti: float
    payment: float
    financed_amount: float


class RiskSchema(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    pd: float
    confidence: float
    model_version: str


class ViolationSchema(BaseModel):
    code: str
    message: str


class RulesSchema(BaseModel):
    approved: bool
    violations: List[ViolationSchema]


class OfferSchema(BaseModel):
    lender_id: str
    lender_name: str
    term_months: int
    apr: float
    monthly_payment: float
    total_cost: float
    risk_adjusted_apr: float

    @classmethod
    def from_domain(cls, offer: Offer) -> "OfferSchema":
        return cls(
            lender_id=offer.lender_id,
            lender_name=offer.lender_name,
            term_months=offer.term_months,
            apr=float(offer.apr),
            monthly_payment=float(offer.monthly_payment),
            total_cost=float(offer.total_cost),
            risk_adjusted_apr=float(offer.risk_adjusted_apr),
        )


class SummarySchema(BaseModel):
    payment: float
    total_interest: float
    total_cost: float
    financed_amount: float
    sales_tax: float

    @classmethod
    def from_domain(cls, summary: Summary) -> "SummarySchema":
        return cls(
            payment=float(summary.payment),
            total_interest=float(summary.total_interest),
            total_cost=float(summary.total_cost),
            financed_amount=float(summary.financed_amount),
            sales_tax=float(summary.sales_tax),
        )


class EvaluationResponse(BaseModel):
    """Response for POST /v1/evaluate"""

    features: FeaturesSchema
    risk: RiskSchema
    rules: RulesSchema
    offers: List[OfferSchema]
    summary: SummarySchema

    @classmethod
    def from_domain(cls, result: EvaluationResult, summary: Summary) -> "EvaluationResponse":
        return cls(
            features=FeaturesSchema(
                ltv=result.features.ltv,
                dti=result.features.dti,
                payment=float(result.features.payment),
                financed_amount=float(result.features.financed_amount),
            ),
            risk=RiskSchema(
                pd=result.risk.pd,
                confidence=result.risk.confidence,
                model_version=result.risk.model_version,
            ),
            rules=RulesSchema(
                approved=result.rules.approved,
                violations=[ViolationSchema(code=v.code, message=v.message) for v in result.rules.violations],
            ),
            offers=[OfferSchema.from_domain(o) for o in result.offers],
            summary=SummarySchema.from_domain(summary),
        )


class AmortizationRowSchema(BaseModel):
    period: int
    payment: float
    interest: float
    principal: float
    balance: float

    @classmethod
    def from_domain(cls, row: AmortizationRow) -> "AmortizationRowSchema":
        return cls(
            period=row.period,
            payment=float(row.payment),
            interest=float(row.interest),
            principal=float(row.principal),
            balance=float(row.balance),
        )


class AmortizationResponse(BaseModel):
    """Response for POST /v1/amortization"""

    summary: SummarySchema
    schedule: List[AmortizationRowSchema]


class ScoreRequest(BaseModel):
    """Remote risk contract request; APR is a decimal here (0.065), not percent"""

    model_config = ConfigDict(populate_by_name=True)

    ltv: float = Field(..., ge=0)
    dti: float = Field(..., ge=0)
    apr: float = Field(..., ge=0)
    term_months: int = Field(..., gt=0, alias="termMonths")
    income: float = Field(..., ge=0)


class ScoreResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    pd: float
    confidence: float
    model_version: str = Field(..., serialization_alias="modelVersion")


class TaxPresetResponse(BaseModel):
    """Response for GET /v1/tax-presets/{state}"""

    state: str
    rate_pct: float
    rule: TaxRule

    @classmethod
    def from_domain(cls, state: str, preset: TaxPreset) -> "TaxPresetResponse":
        return cls(state=state.strip().upper(), rate_pct=float(preset.rate_pct), rule=preset.rule)
