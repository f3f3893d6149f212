from dataclasses import dataclass, field
from decimal import Decimal

from dealmath.models.financing import ClosingCostBreakdown

POSITIVE_INFINITY = Decimal("Infinity")
NEGATIVE_INFINITY = Decimal("-Infinity")


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class CashOnCash:
    """Cash-on-cash return (WholePercent) that may be a signed infinity.

    value is Decimal("Infinity") when every invested dollar came back and the
    deal still cash flows, Decimal("-Infinity") when nothing is left in the
    deal but cash flow is negative. is_infinite travels with it for
    serializers that cannot encode infinities.
    """
    value: Decimal
    is_infinite: bool = False

    @classmethod
    def positive_infinity(cls) -> "CashOnCash":
        return cls(value=POSITIVE_INFINITY, is_infinite=True)

    @classmethod
    def negative_infinity(cls) -> "CashOnCash":
        return cls(value=NEGATIVE_INFINITY, is_infinite=True)

    @property
    def direction(self) -> str | None:
        if not self.is_infinite:
            return None
        return "positive" if self.value > 0 else "negative"

    @property
    def finite_value(self) -> Decimal | None:
        return None if self.is_infinite else self.value


# ---- Fix & flip ----

@dataclass(frozen=True)
class FlipResult:
    down_payment: Decimal
    acquisition_loan: Decimal
    rehab_holdback: Decimal | None  # None for conventional financing
    total_loan: Decimal
    holding_costs: Decimal
    selling_costs: Decimal
    closing_costs: ClosingCostBreakdown
    cash_required: Decimal
    total_investment: Decimal
    total_project_cost: Decimal
    net_profit: Decimal
    roi: Decimal  # On cash_required
    profit_margin: Decimal  # On ARV
    is_hard_money: bool
    validation: ValidationResult = field(default_factory=ValidationResult)


# ---- BRRRR ----

@dataclass(frozen=True)
class BRRRRPhase1:
    purchase_price: Decimal
    down_payment: Decimal
    initial_loan_amount: Decimal
    renovation_costs: Decimal
    renovation_months: int
    closing_costs: Decimal
    monthly_holding_costs: Decimal
    total_holding_costs: Decimal
    total_cash_invested: Decimal


@dataclass(frozen=True)
class BRRRRPhase2:
    arv: Decimal
    refinance_ltv: Decimal  # UnitFraction
    refinance_amount: Decimal
    initial_loan_payoff: Decimal
    cash_returned: Decimal  # Negative when the refinance does not retire the initial loan
    cash_left_in_deal: Decimal
    capital_recovery_percent: Decimal


@dataclass(frozen=True)
class BRRRRPhase3:
    monthly_rent: Decimal
    new_loan_payment: Decimal
    monthly_operating_expenses: Decimal
    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal
    annual_noi: Decimal
    cap_rate: Decimal
    cash_on_cash_return: CashOnCash


@dataclass(frozen=True)
class BRRRRSummary:
    total_roi: Decimal  # 5-year cumulative
    is_infinite_return: bool
    rating: str  # excellent | good | marginal | poor
    recommendation: str


@dataclass(frozen=True)
class TimelineEntry:
    year: int
    description: str
    cash_flow: Decimal
    cumulative_return: Decimal


@dataclass(frozen=True)
class BRRRRResult:
    phase1: BRRRRPhase1
    phase2: BRRRRPhase2
    phase3: BRRRRPhase3
    summary: BRRRRSummary
    timeline: tuple[TimelineEntry, ...]
    validation: ValidationResult = field(default_factory=ValidationResult)


# ---- Buy & hold rental ----

@dataclass(frozen=True)
class YearlyProjection:
    year: int
    gross_rent: Decimal
    operating_expenses: Decimal
    noi: Decimal
    debt_service: Decimal
    cash_flow: Decimal
    principal_paid: Decimal
    loan_balance: Decimal
    property_value: Decimal
    equity: Decimal


@dataclass(frozen=True)
class RentalResult:
    loan_amount: Decimal
    down_payment: Decimal
    monthly_mortgage: Decimal
    total_monthly_rent: Decimal
    monthly_expenses: Decimal
    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal
    annual_noi: Decimal
    cap_rate: Decimal
    cash_on_cash_return: CashOnCash
    closing_costs: ClosingCostBreakdown
    total_investment: Decimal
    effective_mortgage: Decimal | None = None  # House hack: mortgage net of rent
    projections: tuple[YearlyProjection, ...] = ()
    validation: ValidationResult = field(default_factory=ValidationResult)
