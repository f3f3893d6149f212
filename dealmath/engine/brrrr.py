"""BRRRR (buy, rehab, rent, refinance, repeat) calculator.

Single pass over three phases:
  1. Acquisition and renovation: cash in, hard money carry while vacant.
  2. Cash-out refinance at a percentage of ARV retires the initial loan.
  3. Stabilized rental on the new 30-year loan.

When the refinance returns every invested dollar, cash-on-cash return on the
remaining capital is unbounded and is reported as a CashOnCash infinity.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from dealmath.engine.assumptions import DEFAULT_ASSUMPTIONS, CostAssumptions
from dealmath.engine.debt import calculate_monthly_mortgage, payment_for_terms
from dealmath.engine.financing import get_brrrr_financing_defaults
from dealmath.engine.normalize import (
    parse_fraction,
    parse_integer,
    parse_percentage,
    parse_price,
)
from dealmath.engine.validation import validate_brrrr
from dealmath.models.deal import BRRRRInputs, LoanTerms, LoanType
from dealmath.models.results import (
    BRRRRPhase1,
    BRRRRPhase2,
    BRRRRPhase3,
    BRRRRResult,
    BRRRRSummary,
    CashOnCash,
    TimelineEntry,
)
from dealmath.models.units import UnitFraction, WholePercent

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
WHOLE = Decimal("1")

DEFAULT_RENOVATION_MONTHS = 6
REFINANCE_TERM_YEARS = 30
PROJECTION_YEARS = 5

RATINGS: list[tuple[Decimal, str, str]] = [
    (Decimal("100"), "excellent", "Exceptional BRRRR deal - recovers ALL invested capital or more!"),
    (Decimal("80"), "excellent", "Excellent BRRRR candidate - recovers 80%+ of investment"),
    (Decimal("60"), "good", "Good BRRRR candidate - recovers 60-80% of investment"),
    (Decimal("40"), "marginal", "Marginal BRRRR candidate - recovers 40-60% of investment"),
]
POOR_RATING = ("poor", "Poor BRRRR candidate - recovers less than 40% of investment")


def _whole(amount: Decimal) -> Decimal:
    return amount.quantize(WHOLE, ROUND_HALF_UP)


def cash_on_cash(annual_cash_flow: Decimal, cash_left_in_deal: Decimal) -> CashOnCash:
    """Cash-on-cash return on capital still in the deal.

    Nothing left in the deal: +Infinity if it still cash flows (zero included),
    -Infinity if it does not.
    """
    if cash_left_in_deal <= 0:
        if annual_cash_flow >= 0:
            return CashOnCash.positive_infinity()
        return CashOnCash.negative_infinity()
    return CashOnCash(
        value=(annual_cash_flow / cash_left_in_deal * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
    )


def rate_deal(capital_recovery_percent: Decimal) -> tuple[str, str]:
    """(rating, recommendation) for a capital recovery percent."""
    for threshold, rating, recommendation in RATINGS:
        if capital_recovery_percent >= threshold:
            return rating, recommendation
    return POOR_RATING


def _annual_cash_flow_at(
    year: int,
    monthly_rent: Decimal,
    fixed_monthly_costs: Decimal,
    assumptions: CostAssumptions,
) -> Decimal:
    """Annual cash flow for a projection year with rent growth applied.

    Percent-of-rent expenses grow with rent; debt service and the tax and
    insurance proxies stay flat.
    """
    growth = (1 + Decimal(assumptions.annual_rent_growth) / 100) ** (year - 1)
    rent = monthly_rent * growth
    monthly = rent - assumptions.percent_of_rent_expenses(rent) - fixed_monthly_costs
    return _whole(monthly * 12)


def build_timeline(
    total_cash_invested: Decimal,
    cash_returned: Decimal,
    renovation_months: int,
    monthly_rent: Decimal,
    fixed_monthly_costs: Decimal,
    assumptions: CostAssumptions,
) -> tuple[TimelineEntry, ...]:
    entries = [
        TimelineEntry(
            year=0,
            description=f"Initial investment and {renovation_months}-month renovation",
            cash_flow=-total_cash_invested,
            cumulative_return=-total_cash_invested,
        )
    ]

    rented_months = max(12 - renovation_months, 0)
    year1_rent = _annual_cash_flow_at(1, monthly_rent, fixed_monthly_costs, assumptions)
    year1 = _whole(cash_returned + year1_rent * rented_months / 12)
    cumulative = year1 - total_cash_invested
    entries.append(TimelineEntry(
        year=1,
        description="Refinance cash-out + partial year rental income",
        cash_flow=year1,
        cumulative_return=cumulative,
    ))

    for year in range(2, PROJECTION_YEARS + 1):
        flow = _annual_cash_flow_at(year, monthly_rent, fixed_monthly_costs, assumptions)
        cumulative += flow
        entries.append(TimelineEntry(
            year=year,
            description="Annual rental cash flow",
            cash_flow=flow,
            cumulative_return=cumulative,
        ))

    return tuple(entries)


def calculate_brrrr(
    inputs: BRRRRInputs,
    assumptions: CostAssumptions = DEFAULT_ASSUMPTIONS,
) -> BRRRRResult:
    """Three-phase BRRRR economics for one deal.

    Args:
        inputs: Deal inputs. Missing financing fields use the hard money
            acquisition and conventional refinance defaults.
        assumptions: Cost proxies; defaults come from settings.

    Returns:
        BRRRRResult with numbers always filled in. Deal problems are listed
        in result.validation.
    """
    defaults = get_brrrr_financing_defaults()

    price = parse_price(inputs.purchase_price)
    down_pct = parse_percentage(inputs.down_payment_percent)
    renovation = parse_price(inputs.renovation_costs)
    monthly_rent = parse_price(inputs.monthly_rent)
    arv = parse_price(inputs.arv)
    ltv = (
        UnitFraction(defaults.refinance.ltv) if inputs.refinance_ltv is None
        else parse_fraction(inputs.refinance_ltv)
    )
    initial_rate = (
        WholePercent(defaults.acquisition.interest_rate) if inputs.initial_interest_rate is None
        else parse_percentage(inputs.initial_interest_rate)
    )
    refinance_rate = (
        WholePercent(defaults.refinance.interest_rate) if inputs.refinance_interest_rate is None
        else parse_percentage(inputs.refinance_interest_rate)
    )
    renovation_months = (
        DEFAULT_RENOVATION_MONTHS if inputs.renovation_months is None
        else parse_integer(inputs.renovation_months, DEFAULT_RENOVATION_MONTHS)
    )
    closing_pct = (
        assumptions.brrrr_closing_costs_pct if inputs.closing_cost_percent is None
        else parse_percentage(inputs.closing_cost_percent)
    )

    # Phase 1: buy and renovate. Renovation is paid in cash.
    down_payment = _whole(down_pct.of(price))
    initial_loan = _whole(price - down_payment)
    closing_costs = _whole(closing_pct.of(price))
    carry_interest = calculate_monthly_mortgage(
        initial_loan, initial_rate, defaults.acquisition.loan_term_years, LoanType.HARD_MONEY
    )
    monthly_holding = _whole(
        carry_interest
        + assumptions.monthly_tax_and_insurance(price)
        + assumptions.monthly_utilities
        + assumptions.monthly_upkeep
    )
    total_holding = monthly_holding * renovation_months
    total_cash_invested = _whole(down_payment + renovation + total_holding + closing_costs)

    phase1 = BRRRRPhase1(
        purchase_price=price,
        down_payment=down_payment,
        initial_loan_amount=initial_loan,
        renovation_costs=renovation,
        renovation_months=renovation_months,
        closing_costs=closing_costs,
        monthly_holding_costs=monthly_holding,
        total_holding_costs=total_holding,
        total_cash_invested=total_cash_invested,
    )

    # Phase 2: cash-out refinance. Not clamped; a shortfall is negative.
    refinance_amount = _whole(arv * ltv)
    cash_returned = refinance_amount - initial_loan
    cash_left = total_cash_invested - cash_returned
    capital_recovery = Decimal("0")
    if total_cash_invested > 0:
        capital_recovery = (cash_returned / total_cash_invested * 100).quantize(
            TWO_PLACES, ROUND_HALF_UP
        )

    phase2 = BRRRRPhase2(
        arv=arv,
        refinance_ltv=ltv,
        refinance_amount=refinance_amount,
        initial_loan_payoff=initial_loan,
        cash_returned=cash_returned,
        cash_left_in_deal=cash_left,
        capital_recovery_percent=capital_recovery,
    )

    # Phase 3: stabilized rental on the refinance loan.
    refinance_terms = LoanTerms(
        interest_rate=refinance_rate,
        term_years=Decimal(REFINANCE_TERM_YEARS),
        loan_type=LoanType.CONVENTIONAL,
    )
    new_payment = payment_for_terms(refinance_amount, refinance_terms)
    tax_and_insurance = assumptions.monthly_tax_and_insurance(price)
    operating = _whole(tax_and_insurance + assumptions.percent_of_rent_expenses(monthly_rent))
    monthly_cash_flow = monthly_rent - new_payment - operating
    annual_cash_flow = _whole(monthly_cash_flow * 12)
    annual_noi = _whole((monthly_rent - operating) * 12)
    cap_rate = Decimal("0")
    if arv > 0:
        cap_rate = (annual_noi / arv * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
    coc = cash_on_cash(annual_cash_flow, cash_left)

    phase3 = BRRRRPhase3(
        monthly_rent=monthly_rent,
        new_loan_payment=new_payment,
        monthly_operating_expenses=operating,
        monthly_cash_flow=_whole(monthly_cash_flow),
        annual_cash_flow=annual_cash_flow,
        annual_noi=annual_noi,
        cap_rate=cap_rate,
        cash_on_cash_return=coc,
    )

    total_roi = Decimal("0")
    if total_cash_invested > 0:
        total_roi = (
            (cash_returned + annual_cash_flow * PROJECTION_YEARS) / total_cash_invested * 100
        ).quantize(TWO_PLACES, ROUND_HALF_UP)
    rating, recommendation = rate_deal(capital_recovery)
    summary = BRRRRSummary(
        total_roi=total_roi,
        is_infinite_return=coc.direction == "positive",
        rating=rating,
        recommendation=recommendation,
    )

    timeline = build_timeline(
        total_cash_invested,
        cash_returned,
        renovation_months,
        monthly_rent,
        new_payment + tax_and_insurance,
        assumptions,
    )

    validation = validate_brrrr(
        purchase_price=price,
        down_payment_percent=Decimal(down_pct),
        arv=arv,
        refinance_ltv=Decimal(ltv),
        max_refinance_ltv=Decimal(assumptions.max_refinance_ltv),
        cash_returned=cash_returned,
        monthly_cash_flow=monthly_cash_flow,
        initial_rate=Decimal(initial_rate),
        refinance_rate=Decimal(refinance_rate),
    )

    logger.debug(
        "BRRRR: invested=%s returned=%s left=%s coc=%s rating=%s",
        total_cash_invested, cash_returned, cash_left, coc.value, rating,
    )

    return BRRRRResult(
        phase1=phase1,
        phase2=phase2,
        phase3=phase3,
        summary=summary,
        timeline=timeline,
        validation=validation,
    )
