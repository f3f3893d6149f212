"""Buy & hold rental calculator (also house hack, short-term rental, commercial).

Monthly economics on the strategy's default financing, plus a yearly
projection over the hold period.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from dealmath.engine.assumptions import DEFAULT_ASSUMPTIONS, CostAssumptions
from dealmath.engine.brrrr import cash_on_cash
from dealmath.engine.debt import (
    amortization_schedule,
    calculate_monthly_mortgage,
    yearly_debt_summary,
)
from dealmath.engine.financing import (
    get_simple_financing_defaults,
    get_strategy_interest_rate,
)
from dealmath.engine.normalize import (
    parse_integer,
    parse_percentage,
    parse_price,
    parse_strategy,
)
from dealmath.engine.validation import (
    ValidationCollector,
    validate_rental_inputs,
    validate_rental_outputs,
)
from dealmath.models.deal import LoanType, RentalInputs, Strategy
from dealmath.models.financing import ClosingCostBreakdown
from dealmath.models.results import RentalResult, YearlyProjection
from dealmath.models.units import WholePercent

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
WHOLE = Decimal("1")


def _whole(amount: Decimal) -> Decimal:
    return amount.quantize(WHOLE, ROUND_HALF_UP)


def rental_closing_costs(
    purchase_price: Decimal,
    loan_amount: Decimal,
    points_percent: WholePercent,
    assumptions: CostAssumptions,
) -> ClosingCostBreakdown:
    """Points are charged on the loan and come out of the total closing budget."""
    total_pct = Decimal(assumptions.total_closing_costs_pct)
    other_pct = max(total_pct - Decimal(points_percent), Decimal("0"))
    lender_points = _whole(points_percent.of(loan_amount))
    other_costs = _whole(WholePercent(other_pct).of(purchase_price))
    total = lender_points + other_costs
    total_percent = Decimal("0")
    if purchase_price > 0:
        total_percent = (total / purchase_price * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
    return ClosingCostBreakdown(
        lender_points=lender_points,
        other_costs=other_costs,
        total=total,
        lender_points_percent=Decimal(points_percent),
        other_costs_percent=other_pct,
        total_percent=total_percent,
    )


def total_monthly_rent(total_rent: Decimal, rent_per_unit: Decimal, units: int) -> Decimal:
    """An explicit building total wins; otherwise rent per unit times units."""
    if total_rent > 0:
        return total_rent
    return rent_per_unit * max(units, 1)


def project_years(
    purchase_price: Decimal,
    loan_amount: Decimal,
    interest_rate: WholePercent,
    term_years: int,
    hold_years: int,
    monthly_rent: Decimal,
    hoa_monthly: Decimal,
    assumptions: CostAssumptions,
) -> tuple[YearlyProjection, ...]:
    """Year-by-year rent, NOI, debt service and equity over the hold period."""
    if hold_years <= 0:
        return ()

    schedule = amortization_schedule(loan_amount, interest_rate, term_years, hold_years)
    debt_by_year = {int(y["year"]): y for y in yearly_debt_summary(schedule)}
    rent_growth = 1 + Decimal(assumptions.annual_rent_growth) / 100
    appreciation = 1 + Decimal(assumptions.annual_appreciation) / 100
    fixed_annual = (assumptions.monthly_tax_and_insurance(purchase_price) + hoa_monthly) * 12

    projections = []
    for year in range(1, hold_years + 1):
        gross = monthly_rent * 12 * rent_growth ** (year - 1)
        expenses = fixed_annual + assumptions.percent_of_rent_expenses(gross)
        noi = gross - expenses

        # Past the loan term the debt is paid off.
        debt = debt_by_year.get(year)
        debt_service = debt["debt_service"] if debt else Decimal("0")
        principal = debt["principal"] if debt else Decimal("0")
        balance = debt["ending_balance"] if debt else Decimal("0")

        value = purchase_price * appreciation ** year
        projections.append(YearlyProjection(
            year=year,
            gross_rent=_whole(gross),
            operating_expenses=_whole(expenses),
            noi=_whole(noi),
            debt_service=_whole(debt_service),
            cash_flow=_whole(noi - debt_service),
            principal_paid=_whole(principal),
            loan_balance=_whole(balance),
            property_value=_whole(value),
            equity=_whole(value - balance),
        ))
    return tuple(projections)


def calculate_rental_returns(
    inputs: RentalInputs,
    assumptions: CostAssumptions = DEFAULT_ASSUMPTIONS,
) -> RentalResult:
    """Monthly and annual rental economics with a hold-period projection.

    Missing financing fields fall back to the strategy's default financing.
    Cash-on-cash is measured on down payment, renovation and closing costs.
    """
    strategy = parse_strategy(inputs.strategy)
    defaults = get_simple_financing_defaults(strategy)

    price = parse_price(inputs.purchase_price)
    units = parse_integer(inputs.units, 1)
    rent = total_monthly_rent(
        parse_price(inputs.total_monthly_rent), parse_price(inputs.rent_per_unit), units
    )
    renovation = parse_price(inputs.renovation_costs)
    hoa = parse_price(inputs.hoa_monthly)
    hold_years = parse_integer(inputs.hold_years, 5)
    down_pct = (
        WholePercent(defaults.down_payment_percent) if inputs.down_payment_percent is None
        else parse_percentage(inputs.down_payment_percent)
    )
    if inputs.interest_rate is not None:
        rate = parse_percentage(inputs.interest_rate)
    elif inputs.property_type or units > 1:
        # Multifamily and commercial property price off their own rate band
        band = get_strategy_interest_rate(strategy.value, inputs.property_type, units)
        rate = WholePercent(band.default)
    else:
        rate = WholePercent(defaults.interest_rate)
    term = (
        defaults.loan_term_years if inputs.loan_term_years is None
        else parse_integer(inputs.loan_term_years, defaults.loan_term_years)
    )
    points = (
        WholePercent(defaults.lender_points_percent) if inputs.points_percent is None
        else parse_percentage(inputs.points_percent)
    )

    down_payment = _whole(down_pct.of(price))
    loan_amount = _whole(price - down_payment)
    loan_type = defaults.loan_type
    monthly_mortgage = calculate_monthly_mortgage(
        loan_amount, rate, term, loan_type,
        renovation if loan_type == LoanType.HARD_MONEY else Decimal("0"),
    )

    monthly_expenses = (
        assumptions.monthly_tax_and_insurance(price)
        + assumptions.percent_of_rent_expenses(rent)
        + hoa
    ).quantize(TWO_PLACES, ROUND_HALF_UP)
    monthly_cash_flow = rent - monthly_mortgage - monthly_expenses
    annual_cash_flow = _whole(monthly_cash_flow * 12)
    annual_noi = _whole((rent - monthly_expenses) * 12)

    closing = rental_closing_costs(price, loan_amount, points, assumptions)
    total_investment = _whole(down_payment + renovation + closing.total)

    cap_rate = Decimal("0")
    if price > 0:
        cap_rate = (annual_noi / price * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
    coc = cash_on_cash(annual_cash_flow, total_investment)

    effective_mortgage = None
    if strategy == Strategy.HOUSE_HACK:
        effective_mortgage = monthly_mortgage - rent

    projections = ()
    if loan_type == LoanType.CONVENTIONAL:
        projections = project_years(
            price, loan_amount, rate, term, hold_years, rent, hoa, assumptions
        )

    v = ValidationCollector("rental")
    v.extend(validate_rental_inputs(
        purchase_price=price,
        down_payment_percent=Decimal(down_pct),
        interest_rate=Decimal(rate),
        loan_term_years=term,
        units=units,
        monthly_rent=rent,
    ))
    v.extend(validate_rental_outputs(loan_amount, monthly_mortgage, cap_rate))
    validation = v.result()

    logger.debug(
        "Rental (%s): rent=%s mortgage=%s cash_flow=%s cap=%s%%",
        strategy.value, rent, monthly_mortgage, monthly_cash_flow, cap_rate,
    )

    return RentalResult(
        loan_amount=loan_amount,
        down_payment=down_payment,
        monthly_mortgage=monthly_mortgage,
        total_monthly_rent=rent,
        monthly_expenses=monthly_expenses,
        monthly_cash_flow=monthly_cash_flow,
        annual_cash_flow=annual_cash_flow,
        annual_noi=annual_noi,
        cap_rate=cap_rate,
        cash_on_cash_return=coc,
        closing_costs=closing,
        total_investment=total_investment,
        effective_mortgage=effective_mortgage,
        projections=projections,
        validation=validation,
    )
