"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from autoloan_gateway.utils.money import to_decimal


class TaxRule(str, Enum):
    """Which amount sales tax is levied on"""

    PRICE_MINUS_TRADEIN = "price_minus_tradein"
    PRICE_FULL = "price_full"


def _coerce_decimals(obj, names: Tuple[str, ...]) -> None:
    # Frozen dataclasses: bypass __setattr__ to normalize numeric inputs
    for name in names:
        value = getattr(obj, name)
        if value is not None and not isinstance(value, Decimal):
            object.__setattr__(obj, name, to_decimal(value))


@dataclass(frozen=True)
class LoanTerms:
    """APR (percent) and term handed to the risk scorer"""

    apr: Decimal
    term_months: int


@dataclass(frozen=True)
class LoanConfig:
    """Vehicle price, financing terms, fees and extras for one evaluation"""

    price: Decimal
    apr: Decimal  # percent, e.g. 6.5
    term_months: int
    down: Decimal = Decimal("0")
    trade_in: Decimal = Decimal("0")
    trade_in_payoff: Decimal = Decimal("0")
    tax_rate: Decimal = Decimal("0")  # percent
    tax_rule: TaxRule = TaxRule.PRICE_MINUS_TRADEIN
    upfront_fees: Decimal = Decimal("0")
    financed_fees: Decimal = Decimal("0")
    upfront_extras: Decimal = Decimal("0")
    financed_extras: Decimal = Decimal("0")

    def __post_init__(self):
        _coerce_decimals(
            self,
            tuple(f.name for f in fields(self) if f.name not in ("term_months", "tax_rule")),
        )
        object.__setattr__(self, "tax_rule", TaxRule(self.tax_rule))

    @property
    def terms(self) -> LoanTerms:
        return LoanTerms(apr=self.apr, term_months=self.term_months)


@dataclass(frozen=True)
class BorrowerProfile:
    """Borrower's monthly income and obligations"""

    monthly_income: Decimal
    housing_cost: Decimal = Decimal("0")
    other_debt: Decimal = Decimal("0")
    state: Optional[str] = None

    def __post_init__(self):
        _coerce_decimals(self, ("monthly_income", "housing_cost", "other_debt"))


@dataclass(frozen=True)
class AmortizationRow:
    """Single period of an amortization schedule"""

    period: int  # 1-based month
    payment: Decimal
    interest: Decimal
    principal: Decimal
    balance: Decimal


@dataclass(frozen=True)
class Summary:
    """Lifetime totals for a loan config"""

    payment: Decimal
    total_interest: Decimal
    total_cost: Decimal  # down + upfronts + all payments over life
    financed_amount: Decimal
    sales_tax: Decimal


@dataclass(frozen=True)
class Features:
    """Underwriting features derived from loan config + borrower"""

    ltv: float
    dti: float
    payment: Decimal
    financed_amount: Decimal
    apr: Decimal
    term_months: int
    monthly_income: Decimal


@dataclass(frozen=True)
class RiskScore:
    """Output of a risk scorer"""

    pd: float  # probability of default, 0..1
    confidence: float  # 0..1
    model_version: str


@dataclass(frozen=True)
class RuleViolation:
    code: str
    message: str


@dataclass(frozen=True)
class RuleResult:
    """Underwriting decision; violations are empty iff approved"""

    approved: bool
    violations: Tuple[RuleViolation, ...] = ()

    @property
    def codes(self) -> Tuple[str, ...]:
        return tuple(v.code for v in self.violations)


@dataclass(frozen=True)
class RuleConfig:
    """Hard eligibility thresholds"""

    max_ltv: float = 1.25
    max_dti: float = 0.50
    min_income: Decimal = Decimal("2000")
    max_pd: float = 0.35

    def __post_init__(self):
        _coerce_decimals(self, ("min_income",))


@dataclass(frozen=True)
class Lender:
    """Static lender catalog entry"""

    id: str
    name: str
    base_apr: Decimal
    max_term: int
    min_income: Optional[Decimal] = None
    max_ltv: Optional[float] = None
    max_dti: Optional[float] = None
    risk_apr_bps_per_pd: Optional[Decimal] = None  # e.g. +120 bps per 0.10 PD

    def __post_init__(self):
        _coerce_decimals(self, ("base_apr", "min_income", "risk_apr_bps_per_pd"))


@dataclass(frozen=True)
class Offer:
    """Priced lender offer"""

    lender_id: str
    lender_name: str
    term_months: int
    apr: Decimal  # lender-priced APR
    monthly_payment: Decimal
    total_cost: Decimal
    risk_adjusted_apr: Decimal  # apr * (1 + pd), ranking only


@dataclass(frozen=True)
class EvaluationResult:
    """Aggregate output of one pipeline run"""

    features: Features
    risk: RiskScore
    rules: RuleResult
    offers: Tuple[Offer, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TaxPreset:
    """Regional default tax rate and rule"""

    rate_pct: Decimal
    rule: TaxRule
