"""Financing assumptions and closing cost types. Percent fields are WholePercent."""

from dataclasses import dataclass
from decimal import Decimal

from dealmath.models.deal import FinancingType, LoanType


@dataclass(frozen=True)
class FinancingDefaults:
    financing_type: FinancingType
    down_payment_percent: Decimal
    interest_rate: Decimal
    loan_term_years: int
    lender_points_percent: Decimal
    other_closing_costs_percent: Decimal
    description: str
    mortgage_insurance: bool = False

    @property
    def total_closing_costs_percent(self) -> Decimal:
        return self.lender_points_percent + self.other_closing_costs_percent

    @property
    def loan_type(self) -> LoanType:
        if self.financing_type == FinancingType.HARD_MONEY:
            return LoanType.HARD_MONEY
        return LoanType.CONVENTIONAL


@dataclass(frozen=True)
class RefinanceTerms:
    financing_type: FinancingType
    ltv: Decimal  # UnitFraction
    interest_rate: Decimal
    loan_term_years: int
    closing_costs_percent: Decimal


@dataclass(frozen=True)
class BRRRRFinancingDefaults:
    acquisition: FinancingDefaults
    refinance: RefinanceTerms


@dataclass(frozen=True)
class InterestRateRange:
    default: Decimal
    min: Decimal
    max: Decimal
    description: str


@dataclass(frozen=True)
class ClosingCostBreakdown:
    lender_points: Decimal
    other_costs: Decimal
    total: Decimal
    lender_points_percent: Decimal
    other_costs_percent: Decimal
    total_percent: Decimal
