"""Cross-field sanity checks for the composite calculators.

Rules never raise and never stop a calculation: errors mean the result is
not meaningful for the strategy, warnings mean a value is outside the usual
range. Either way the caller still gets numbers to show.
"""

import logging
from decimal import Decimal

from dealmath.models.results import ValidationResult

logger = logging.getLogger(__name__)

MAX_REASONABLE_RATE = Decimal("15")
MAX_VALID_RATE = Decimal("20")


class ValidationCollector:
    def __init__(self, context: str):
        self.context = context
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def check_rate(self, rate: Decimal, label: str = "Interest rate") -> None:
        if rate <= 0 or rate > MAX_VALID_RATE:
            self.warn(f"{label} of {rate}% is outside the expected 0-20% range")
        elif rate > MAX_REASONABLE_RATE:
            self.warn(f"{label} of {rate}% is unusually high; verify it is correct")

    def extend(self, other: ValidationResult) -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def result(self) -> ValidationResult:
        if self.errors:
            logger.debug("%s validation errors: %s", self.context, self.errors)
        return ValidationResult(errors=tuple(self.errors), warnings=tuple(self.warnings))


def validate_flip(
    purchase_price: Decimal,
    arv: Decimal,
    holding_months: int,
    down_payment_percent: Decimal,
    interest_rate: Decimal,
    cash_required: Decimal,
    profit_margin: Decimal,
    roi: Decimal,
    loan_to_cost: Decimal,
) -> ValidationResult:
    v = ValidationCollector("flip")

    if purchase_price <= 0:
        v.error("Purchase price must be greater than 0")
    if arv <= purchase_price:
        v.error("ARV must be greater than purchase price for a profitable flip")
    if cash_required <= 0:
        v.error("Cash required must be greater than 0")
    if holding_months < 1 or holding_months > 18:
        v.error("Holding period must be between 1 and 18 months")
    if down_payment_percent < 0 or down_payment_percent > 100:
        v.error("Down payment must be between 0% and 100%")

    v.check_rate(interest_rate)
    if profit_margin < 10:
        v.warn(f"Profit margin of {profit_margin}% is below the 10% safety threshold")
    if loan_to_cost > Decimal("0.9"):
        v.warn(f"Loan-to-cost of {(loan_to_cost * 100).quantize(Decimal('0.1'))}% is above 90%")
    if roi > 500:
        v.warn(f"ROI of {roi}% seems unrealistic; double-check the inputs")

    return v.result()


def validate_brrrr(
    purchase_price: Decimal,
    down_payment_percent: Decimal,
    arv: Decimal,
    refinance_ltv: Decimal,
    max_refinance_ltv: Decimal,
    cash_returned: Decimal,
    monthly_cash_flow: Decimal,
    initial_rate: Decimal,
    refinance_rate: Decimal,
) -> ValidationResult:
    v = ValidationCollector("brrrr")

    if purchase_price <= 0:
        v.error("Purchase price must be greater than 0")
    if down_payment_percent < 0 or down_payment_percent > 100:
        v.error("Down payment must be between 0% and 100%")
    if refinance_ltv <= 0 or refinance_ltv > 1:
        v.error("Refinance LTV must be between 0 and 1")
    elif refinance_ltv > max_refinance_ltv:
        v.warn(
            f"Refinance LTV of {refinance_ltv} exceeds the typical lender ceiling "
            f"of {max_refinance_ltv}"
        )

    if arv <= purchase_price:
        v.warn("ARV is not above purchase price; the refinance may not return capital")
    if cash_returned < 0:
        v.warn("Refinance does not fully pay off the initial loan; additional cash is needed")
    if monthly_cash_flow < 0:
        v.warn("Property has negative monthly cash flow after refinance")

    v.check_rate(initial_rate, "Initial interest rate")
    v.check_rate(refinance_rate, "Refinance interest rate")
    return v.result()


def validate_rental_inputs(
    purchase_price: Decimal,
    down_payment_percent: Decimal,
    interest_rate: Decimal,
    loan_term_years: int,
    units: int,
    monthly_rent: Decimal,
) -> ValidationResult:
    v = ValidationCollector("rental inputs")

    if purchase_price <= 0:
        v.error("Purchase price must be greater than 0")
    elif purchase_price > 100_000_000:
        v.warn("Purchase price seems unusually high")
    elif purchase_price < 10_000:
        v.warn("Purchase price seems unusually low")

    if down_payment_percent < 0 or down_payment_percent > 100:
        v.error("Down payment must be between 0% and 100%")
    elif down_payment_percent < Decimal("3.5"):
        v.warn("Down payment below 3.5% is rare for investment properties")

    v.check_rate(interest_rate)

    if loan_term_years < 1 or loan_term_years > 40:
        v.error("Loan term must be between 1 and 40 years")
    if units < 1 or units > 500:
        v.error("Units must be between 1 and 500")

    if monthly_rent <= 0:
        v.warn("No rent provided; cash flow reflects expenses only")
    elif purchase_price > 0:
        rent_ratio = monthly_rent / purchase_price * 100
        if rent_ratio > 3:
            v.warn("Rent above 3% of price per month is unusually high")
        elif rent_ratio < Decimal("0.3"):
            v.warn("Rent below 0.3% of price per month is unusually low")

    return v.result()


def validate_rental_outputs(
    loan_amount: Decimal,
    monthly_mortgage: Decimal,
    cap_rate: Decimal,
) -> ValidationResult:
    v = ValidationCollector("rental outputs")

    if loan_amount > 0:
        if monthly_mortgage <= 0:
            v.error("Monthly mortgage must be positive when there is a loan")
        elif monthly_mortgage > loan_amount * Decimal("0.05"):
            v.warn("Monthly mortgage is over 5% of the loan amount; check rate and term")

    if cap_rate < -50 or cap_rate > 50:
        v.warn(f"Cap rate of {cap_rate}% is outside the typical range")

    return v.result()
