"""Pydantic schemas for API request/response models.

Percent fields are whole-number percents (7.5 means 7.5%). The only unit
fraction is refinance_ltv.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


# ---- Request schemas ----

class FlipRequest(BaseModel):
    purchase_price: Decimal
    arv: Decimal
    renovation_costs: Decimal = Decimal("0")
    holding_period_months: int = 6
    loan_type: str = Field("hard_money", description="conventional | hard_money")
    down_payment_percent: Decimal | None = None
    interest_rate: Decimal | None = None
    points_percent: Decimal | None = None
    other_closing_costs_percent: Decimal | None = None


class BRRRRRequest(BaseModel):
    purchase_price: Decimal
    down_payment_percent: Decimal
    renovation_costs: Decimal
    monthly_rent: Decimal
    arv: Decimal
    refinance_ltv: Decimal | None = Field(None, description="Unit fraction, e.g. 0.75")
    initial_interest_rate: Decimal | None = None
    refinance_interest_rate: Decimal | None = None
    renovation_months: int | None = None
    closing_cost_percent: Decimal | None = None


class RentalRequest(BaseModel):
    purchase_price: Decimal
    strategy: str = "rental"
    units: int = 1
    rent_per_unit: Decimal | None = None
    total_monthly_rent: Decimal | None = None
    renovation_costs: Decimal = Decimal("0")
    hoa_monthly: Decimal = Decimal("0")
    property_type: str | None = None
    hold_years: int = 5
    down_payment_percent: Decimal | None = None
    interest_rate: Decimal | None = None
    loan_term_years: int | None = None
    points_percent: Decimal | None = None


class ComparableRequest(BaseModel):
    sale_price: Decimal
    sqft: int
    distance_miles: Decimal | None = None
    similarity: Decimal | None = None
    address: str = ""


class ARVRequest(BaseModel):
    subject_sqft: int
    purchase_price: Decimal = Decimal("0")
    comparables: list[ComparableRequest] = []
    avm_value: Decimal | None = None
    renovation_level: str = "medium"
    strategy: str = "flip"


class RehabRequest(BaseModel):
    square_footage: int
    renovation_level: str
    state: str | None = None


# ---- Response schemas ----

class ValidationResponse(BaseModel):
    is_valid: bool
    errors: list[str]
    warnings: list[str]


class CashOnCashResponse(BaseModel):
    """value is null when the return is unbounded; direction says which way."""
    value: Decimal | None
    is_infinite: bool
    direction: str | None = None


class ClosingCostResponse(BaseModel):
    lender_points: Decimal
    other_costs: Decimal
    total: Decimal
    lender_points_percent: Decimal
    other_costs_percent: Decimal
    total_percent: Decimal


class FlipResponse(BaseModel):
    down_payment: Decimal
    acquisition_loan: Decimal
    rehab_holdback: Decimal | None
    total_loan: Decimal
    holding_costs: Decimal
    selling_costs: Decimal
    closing_costs: ClosingCostResponse
    cash_required: Decimal
    total_investment: Decimal
    total_project_cost: Decimal
    net_profit: Decimal
    roi: Decimal
    profit_margin: Decimal
    is_hard_money: bool
    validation: ValidationResponse


class BRRRRPhase1Response(BaseModel):
    purchase_price: Decimal
    down_payment: Decimal
    initial_loan_amount: Decimal
    renovation_costs: Decimal
    renovation_months: int
    closing_costs: Decimal
    monthly_holding_costs: Decimal
    total_holding_costs: Decimal
    total_cash_invested: Decimal


class BRRRRPhase2Response(BaseModel):
    arv: Decimal
    refinance_ltv: Decimal
    refinance_amount: Decimal
    initial_loan_payoff: Decimal
    cash_returned: Decimal
    cash_left_in_deal: Decimal
    capital_recovery_percent: Decimal


class BRRRRPhase3Response(BaseModel):
    monthly_rent: Decimal
    new_loan_payment: Decimal
    monthly_operating_expenses: Decimal
    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal
    annual_noi: Decimal
    cap_rate: Decimal
    cash_on_cash_return: CashOnCashResponse


class BRRRRSummaryResponse(BaseModel):
    total_roi: Decimal
    is_infinite_return: bool
    rating: str
    recommendation: str


class TimelineEntryResponse(BaseModel):
    year: int
    description: str
    cash_flow: Decimal
    cumulative_return: Decimal


class BRRRRResponse(BaseModel):
    phase1: BRRRRPhase1Response
    phase2: BRRRRPhase2Response
    phase3: BRRRRPhase3Response
    summary: BRRRRSummaryResponse
    timeline: list[TimelineEntryResponse]
    validation: ValidationResponse


class YearlyProjectionResponse(BaseModel):
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


class RentalResponse(BaseModel):
    loan_amount: Decimal
    down_payment: Decimal
    monthly_mortgage: Decimal
    total_monthly_rent: Decimal
    monthly_expenses: Decimal
    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal
    annual_noi: Decimal
    cap_rate: Decimal
    cash_on_cash_return: CashOnCashResponse
    closing_costs: ClosingCostResponse
    total_investment: Decimal
    effective_mortgage: Decimal | None = None
    yearly_projections: list[YearlyProjectionResponse] = []
    validation: ValidationResponse


class ARVResponse(BaseModel):
    value: Decimal
    method: str
    confidence: str
    details: str
    comparables_used: int
    price_per_sqft: Decimal
    uplift_pct: Decimal


class RehabLineItemResponse(BaseModel):
    category: str
    percentage: Decimal
    cost: Decimal
    description: str


class RehabResponse(BaseModel):
    level: str
    low: Decimal
    high: Decimal
    average: Decimal
    cost_per_sqft: Decimal
    renovation_months: int
    line_items: list[RehabLineItemResponse]


class FinancingDefaultsResponse(BaseModel):
    strategy: str
    financing_type: str
    down_payment_percent: Decimal
    interest_rate: Decimal
    loan_term_years: int
    lender_points_percent: Decimal
    other_closing_costs_percent: Decimal
    total_closing_costs_percent: Decimal
    description: str
    mortgage_insurance: bool


class InterestRateResponse(BaseModel):
    default: Decimal
    min: Decimal
    max: Decimal
    description: str
