"""Fix & flip return calculator.

ROI is measured against cash actually required at closing, not against the
total project cost. With hard money the renovation is funded by a lender
holdback, so the same deal shows a much higher ROI than with conventional
financing.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from dealmath.engine.assumptions import DEFAULT_ASSUMPTIONS, CostAssumptions
from dealmath.engine.financing import calculate_closing_costs, get_simple_financing_defaults
from dealmath.engine.normalize import (
    parse_integer,
    parse_loan_type,
    parse_percentage,
    parse_price,
)
from dealmath.engine.validation import validate_flip
from dealmath.models.deal import FlipInputs, LoanType, Strategy
from dealmath.models.financing import ClosingCostBreakdown
from dealmath.models.results import FlipResult
from dealmath.models.units import WholePercent

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
WHOLE = Decimal("1")

# Holdback draws are spread over the rehab, so on average half is outstanding.
AVERAGE_HOLDBACK_DRAW = Decimal("0.5")


def _whole(amount: Decimal) -> Decimal:
    return amount.quantize(WHOLE, ROUND_HALF_UP)


def _percent_or_default(value, default) -> WholePercent:
    if value is None:
        return WholePercent(default)
    return parse_percentage(value)


def flip_closing_costs(
    purchase_price: Decimal,
    points_percent: WholePercent,
    other_percent: WholePercent | None,
    assumptions: CostAssumptions,
) -> ClosingCostBreakdown:
    """Closing costs where lender points come out of the configured total.

    Without an explicit other-costs percent, other costs are whatever the
    points leave of the total, but never below the configured minimum.
    """
    if other_percent is None:
        if points_percent > 0:
            other_percent = max(
                Decimal(assumptions.min_other_closing_costs_pct),
                Decimal(assumptions.total_closing_costs_pct) - Decimal(points_percent),
            )
        else:
            other_percent = assumptions.total_closing_costs_pct
    return calculate_closing_costs(purchase_price, points_percent, other_percent)


def monthly_carrying_cost(
    purchase_price: Decimal,
    acquisition_loan: Decimal,
    rehab_holdback: Decimal,
    interest_rate: WholePercent,
    assumptions: CostAssumptions,
) -> Decimal:
    """Interest-only carry plus tax, insurance, utilities and upkeep, per month."""
    interest = interest_rate.of(acquisition_loan) / 12
    holdback_interest = interest_rate.of(rehab_holdback) / 12 * AVERAGE_HOLDBACK_DRAW
    return (
        interest
        + holdback_interest
        + assumptions.monthly_tax_and_insurance(purchase_price)
        + assumptions.monthly_utilities
        + assumptions.monthly_upkeep
    )


def calculate_flip_returns(
    inputs: FlipInputs,
    assumptions: CostAssumptions = DEFAULT_ASSUMPTIONS,
) -> FlipResult:
    """Full fix & flip economics for one deal.

    Always returns numbers; problems with the deal are reported in
    result.validation rather than raised.
    """
    defaults = get_simple_financing_defaults(Strategy.FLIP)

    price = parse_price(inputs.purchase_price)
    arv = parse_price(inputs.arv)
    renovation = parse_price(inputs.renovation_costs)
    months = parse_integer(inputs.holding_period_months)
    loan_type = parse_loan_type(inputs.loan_type)
    down_pct = _percent_or_default(inputs.down_payment_percent, defaults.down_payment_percent)
    rate = _percent_or_default(inputs.interest_rate, defaults.interest_rate)
    points = _percent_or_default(inputs.points_percent, defaults.lender_points_percent)
    other = (
        None if inputs.other_closing_costs_percent is None
        else parse_percentage(inputs.other_closing_costs_percent)
    )

    is_hard_money = loan_type == LoanType.HARD_MONEY

    down_payment = down_pct.of(price).quantize(WHOLE, ROUND_HALF_UP)
    acquisition_loan = price - down_payment
    rehab_holdback = renovation if is_hard_money else None
    total_loan = acquisition_loan + (rehab_holdback or Decimal("0"))

    closing = flip_closing_costs(price, points, other, assumptions)

    monthly_carry = monthly_carrying_cost(
        price, acquisition_loan, rehab_holdback or Decimal("0"), rate, assumptions
    )
    holding_costs = (monthly_carry * months).quantize(WHOLE, ROUND_HALF_UP)
    selling_costs = assumptions.selling_costs_pct.of(arv).quantize(WHOLE, ROUND_HALF_UP)

    if is_hard_money:
        cash_required = down_payment + closing.total
    else:
        cash_required = down_payment + closing.total + renovation

    total_investment = price + renovation + closing.total + holding_costs
    total_project_cost = total_investment + selling_costs
    net_profit = arv - total_project_cost

    roi = Decimal("0")
    if cash_required > 0:
        roi = (net_profit / cash_required * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
    profit_margin = Decimal("0")
    if arv > 0:
        profit_margin = (net_profit / arv * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
    loan_to_cost = Decimal("0")
    if price + renovation > 0:
        loan_to_cost = (total_loan / (price + renovation)).quantize(FOUR_PLACES, ROUND_HALF_UP)

    validation = validate_flip(
        purchase_price=price,
        arv=arv,
        holding_months=months,
        down_payment_percent=Decimal(down_pct),
        interest_rate=Decimal(rate),
        cash_required=cash_required,
        profit_margin=profit_margin,
        roi=roi,
        loan_to_cost=loan_to_cost,
    )

    logger.debug(
        "Flip: price=%s arv=%s profit=%s roi=%s%% valid=%s",
        price, arv, net_profit, roi, validation.is_valid,
    )

    return FlipResult(
        down_payment=down_payment,
        acquisition_loan=_whole(acquisition_loan),
        rehab_holdback=None if rehab_holdback is None else _whole(rehab_holdback),
        total_loan=_whole(total_loan),
        holding_costs=holding_costs,
        selling_costs=selling_costs,
        closing_costs=closing,
        cash_required=_whole(cash_required),
        total_investment=_whole(total_investment),
        total_project_cost=_whole(total_project_cost),
        net_profit=_whole(net_profit),
        roi=roi,
        profit_margin=profit_margin,
        is_hard_money=is_hard_money,
        validation=validation,
    )
