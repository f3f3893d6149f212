"""Strategy financing defaults, interest rate bands and closing costs.

All rates and percents are whole-number percents. The tables are
assumptions about typical lender terms, not legal or underwriting limits.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from dealmath.engine.normalize import (
    parse_integer,
    parse_price,
    parse_percentage,
    parse_strategy,
)
from dealmath.models.deal import FinancingType, Strategy
from dealmath.models.financing import (
    BRRRRFinancingDefaults,
    ClosingCostBreakdown,
    FinancingDefaults,
    InterestRateRange,
    RefinanceTerms,
)

logger = logging.getLogger(__name__)

WHOLE = Decimal("1")

HARD_MONEY_ACQUISITION = FinancingDefaults(
    financing_type=FinancingType.HARD_MONEY,
    down_payment_percent=Decimal("10"),
    interest_rate=Decimal("10.45"),
    loan_term_years=1,
    lender_points_percent=Decimal("2.5"),
    other_closing_costs_percent=Decimal("0.5"),
    description="Hard money loan for acquisition and rehab",
)

CONVENTIONAL_INVESTMENT = FinancingDefaults(
    financing_type=FinancingType.CONVENTIONAL,
    down_payment_percent=Decimal("25"),
    interest_rate=Decimal("7.5"),
    loan_term_years=30,
    lender_points_percent=Decimal("1"),
    other_closing_costs_percent=Decimal("2"),
    description="Conventional investment property loan",
)

FINANCING_DEFAULTS: dict[Strategy, FinancingDefaults] = {
    Strategy.FLIP: HARD_MONEY_ACQUISITION,
    Strategy.BRRRR: HARD_MONEY_ACQUISITION,
    Strategy.RENTAL: CONVENTIONAL_INVESTMENT,
    Strategy.BUY_AND_HOLD: CONVENTIONAL_INVESTMENT,
    Strategy.HOUSE_HACK: FinancingDefaults(
        financing_type=FinancingType.FHA,
        down_payment_percent=Decimal("3.5"),
        interest_rate=Decimal("6.5"),
        loan_term_years=30,
        lender_points_percent=Decimal("1"),
        other_closing_costs_percent=Decimal("4"),
        description="FHA owner-occupied loan for house hacking",
        mortgage_insurance=True,
    ),
    Strategy.COMMERCIAL: FinancingDefaults(
        financing_type=FinancingType.PORTFOLIO,
        down_payment_percent=Decimal("25"),
        interest_rate=Decimal("8"),
        loan_term_years=25,
        lender_points_percent=Decimal("1.5"),
        other_closing_costs_percent=Decimal("2.5"),
        description="Commercial loan for 5+ unit properties",
    ),
    Strategy.SHORT_TERM_RENTAL: FinancingDefaults(
        financing_type=FinancingType.CONVENTIONAL,
        down_payment_percent=Decimal("25"),
        interest_rate=Decimal("8"),
        loan_term_years=30,
        lender_points_percent=Decimal("1"),
        other_closing_costs_percent=Decimal("2"),
        description="Conventional or STR specialty loan",
    ),
}

BRRRR_REFINANCE = RefinanceTerms(
    financing_type=FinancingType.CONVENTIONAL,
    ltv=Decimal("0.75"),
    interest_rate=Decimal("7.5"),
    loan_term_years=30,
    closing_costs_percent=Decimal("2"),
)

# Points / other closing costs by loan product.
CLOSING_COSTS_BY_FINANCING: dict[FinancingType, tuple[Decimal, Decimal]] = {
    FinancingType.HARD_MONEY: (Decimal("2.5"), Decimal("0.5")),
    FinancingType.CONVENTIONAL: (Decimal("1"), Decimal("2")),
    FinancingType.FHA: (Decimal("1"), Decimal("4")),
    FinancingType.VA: (Decimal("0.5"), Decimal("2")),
    FinancingType.PORTFOLIO: (Decimal("1.5"), Decimal("2.5")),
    FinancingType.CASH: (Decimal("0"), Decimal("1.5")),
}


def _band(default: str, low: str, high: str, description: str) -> InterestRateRange:
    return InterestRateRange(
        default=Decimal(default), min=Decimal(low), max=Decimal(high), description=description
    )


RATE_BANDS: dict[Strategy, InterestRateRange] = {
    Strategy.RENTAL: _band("7.5", "7.0", "8.0", "Conventional investment property loan (20-25% down)"),
    Strategy.BUY_AND_HOLD: _band("7.5", "7.0", "8.0", "Conventional investment property loan (20-25% down)"),
    Strategy.HOUSE_HACK: _band("7.0", "6.5", "7.5", "Owner-occupied rates (FHA or conventional with 3.5-20% down)"),
    Strategy.BRRRR: _band("11.0", "10.0", "12.0", "Hard money for purchase/rehab, then refinance to 7-8%"),
    Strategy.FLIP: _band("11.0", "10.0", "12.0", "Hard money or private lending rates"),
    Strategy.COMMERCIAL: _band("8.0", "7.5", "8.5", "Commercial loan rates for larger properties"),
    Strategy.SHORT_TERM_RENTAL: _band("8.0", "7.5", "8.5", "Specialty STR loans or conventional investment"),
}
SMALL_MULTIFAMILY_BAND = _band("7.75", "7.25", "8.25", "Conventional 2-4 unit investment loan")
DEFAULT_RATE_BAND = _band("7.75", "7.0", "8.5", "Standard investment property rates")

_MULTIFAMILY_MARKERS = ("multi", "duplex", "triplex", "fourplex", "quadplex", "apartment")
_RENTAL_STRATEGIES = {
    Strategy.RENTAL, Strategy.BUY_AND_HOLD, Strategy.SHORT_TERM_RENTAL,
}


def get_simple_financing_defaults(strategy) -> FinancingDefaults:
    """One financing row per strategy. BRRRR returns its acquisition loan."""
    return FINANCING_DEFAULTS[parse_strategy(strategy)]


def get_brrrr_financing_defaults() -> BRRRRFinancingDefaults:
    return BRRRRFinancingDefaults(
        acquisition=FINANCING_DEFAULTS[Strategy.BRRRR],
        refinance=BRRRR_REFINANCE,
    )


def get_strategy_interest_rate(
    strategy_label: str,
    property_type: str | None = None,
    units: int | None = None,
) -> InterestRateRange:
    """Interest rate band adjusted for property type and unit count.

    5+ units or a commercial property type always price as commercial debt.
    Unrecognized strategy labels get the generic investment band.
    """
    kind = (property_type or "").lower()
    if units is not None:
        units = parse_integer(units)
    if (units is not None and units >= 5) or "commercial" in kind:
        return RATE_BANDS[Strategy.COMMERCIAL]

    try:
        strategy = parse_strategy(strategy_label)
    except ValueError:
        logger.debug("No rate band for strategy %r, using default", strategy_label)
        return DEFAULT_RATE_BAND

    is_multifamily = (units is not None and units >= 2) or any(
        marker in kind for marker in _MULTIFAMILY_MARKERS
    )
    if is_multifamily and strategy in _RENTAL_STRATEGIES:
        return SMALL_MULTIFAMILY_BAND
    return RATE_BANDS[strategy]


def calculate_closing_costs(
    purchase_price,
    points_percent=Decimal("2.5"),
    other_costs_percent=Decimal("0.5"),
) -> ClosingCostBreakdown:
    """Closing cost breakdown. Lender points are part of the total, not extra."""
    price = parse_price(purchase_price)
    points = parse_percentage(points_percent)
    other = parse_percentage(other_costs_percent)

    lender_points = points.of(price)
    other_costs = other.of(price)

    return ClosingCostBreakdown(
        lender_points=lender_points.quantize(WHOLE, ROUND_HALF_UP),
        other_costs=other_costs.quantize(WHOLE, ROUND_HALF_UP),
        total=(lender_points + other_costs).quantize(WHOLE, ROUND_HALF_UP),
        lender_points_percent=Decimal(points),
        other_costs_percent=Decimal(other),
        total_percent=Decimal(points) + Decimal(other),
    )


def get_closing_costs_for_financing_type(
    purchase_price,
    financing_type: FinancingType,
    points_override=None,
) -> ClosingCostBreakdown:
    points, other = CLOSING_COSTS_BY_FINANCING[financing_type]
    if points_override is not None:
        points = parse_percentage(points_override)
    return calculate_closing_costs(purchase_price, points, other)


def validate_financing_params(
    strategy,
    down_payment_percent,
    interest_rate,
    loan_term_years,
) -> list[str]:
    """Strategy-specific financing warnings. Empty list when nothing stands out."""
    strategy = parse_strategy(strategy)
    down = parse_percentage(down_payment_percent)
    rate = parse_percentage(interest_rate)
    term = parse_price(loan_term_years)
    warnings: list[str] = []

    if strategy == Strategy.HOUSE_HACK and down < Decimal("3.5"):
        warnings.append("FHA loans require minimum 3.5% down payment")
    elif strategy == Strategy.FLIP and down < 10:
        warnings.append("Most hard money lenders require minimum 10% down")
    elif strategy in (Strategy.RENTAL, Strategy.BUY_AND_HOLD) and down < 20:
        warnings.append("Investment properties typically require 20-25% down")

    if rate > 15:
        warnings.append("Interest rate seems unusually high - verify this is correct")

    if strategy == Strategy.FLIP and term > 2:
        warnings.append("Fix & flip loans are typically 6-18 months")

    return warnings
