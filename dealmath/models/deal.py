"""Deal inputs: strategy enums and the per-strategy input variants.

Input fields are deliberately loose (str, float, Decimal, None) because they
arrive from forms, prompt context and scraped listings. Calculators pass
every field through dealmath.engine.normalize before using it.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Union

from dealmath.models.rehab import RenovationLevel

RawNumber = Union[Decimal, float, int, str, None]


class Strategy(Enum):
    FLIP = "flip"
    BRRRR = "brrrr"
    RENTAL = "rental"
    BUY_AND_HOLD = "buy-and-hold"
    HOUSE_HACK = "house-hack"
    COMMERCIAL = "commercial"
    SHORT_TERM_RENTAL = "short-term-rental"


class LoanType(Enum):
    CONVENTIONAL = "conventional"
    HARD_MONEY = "hard_money"


class FinancingType(Enum):
    HARD_MONEY = "hard-money"
    CONVENTIONAL = "conventional"
    FHA = "fha"
    VA = "va"
    PORTFOLIO = "portfolio"
    CASH = "cash"


@dataclass(frozen=True)
class LoanTerms:
    interest_rate: Decimal  # WholePercent
    term_years: Decimal
    loan_type: LoanType = LoanType.CONVENTIONAL
    points_percent: Decimal = Decimal("0")


@dataclass(frozen=True)
class FlipInputs:
    purchase_price: RawNumber
    arv: RawNumber
    renovation_costs: RawNumber = 0
    holding_period_months: RawNumber = 6
    loan_type: Union[LoanType, str] = LoanType.HARD_MONEY

    # None -> hard money flip defaults
    down_payment_percent: RawNumber = None
    interest_rate: RawNumber = None
    points_percent: RawNumber = None
    other_closing_costs_percent: RawNumber = None


@dataclass(frozen=True)
class BRRRRInputs:
    purchase_price: RawNumber
    down_payment_percent: RawNumber
    renovation_costs: RawNumber
    monthly_rent: RawNumber
    arv: RawNumber

    # None -> BRRRR financing defaults
    refinance_ltv: RawNumber = None  # UnitFraction, e.g. 0.75
    initial_interest_rate: RawNumber = None
    refinance_interest_rate: RawNumber = None
    renovation_months: RawNumber = None
    closing_cost_percent: RawNumber = None


@dataclass(frozen=True)
class RentalInputs:
    purchase_price: RawNumber
    strategy: Union[Strategy, str] = Strategy.RENTAL
    units: RawNumber = 1
    rent_per_unit: RawNumber = None
    total_monthly_rent: RawNumber = None  # Wins over rent_per_unit when > 0
    renovation_costs: RawNumber = 0
    hoa_monthly: RawNumber = 0
    property_type: str | None = None
    hold_years: RawNumber = 5

    # None -> strategy financing defaults
    down_payment_percent: RawNumber = None
    interest_rate: RawNumber = None
    loan_term_years: RawNumber = None
    points_percent: RawNumber = None


@dataclass(frozen=True)
class PropertyFacts:
    """Subset of listing facts the rehab heuristics need."""
    sqft: int = 0
    year_built: int | None = None
    state: str | None = None
    property_type: str | None = None
    existing_rehab_cost: Decimal = Decimal("0")
    renovation_level: RenovationLevel | None = None
