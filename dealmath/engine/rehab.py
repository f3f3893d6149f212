"""Rehab cost estimator.

Pure function: floor area and renovation level in, RehabEstimate out. No I/O.

The estimator only works from floor area. When square footage is unknown it
returns a zero estimate; callers that need a number anyway apply their own
price-percentage heuristic.
"""

from decimal import Decimal, ROUND_HALF_UP

from dealmath.config import settings
from dealmath.engine.normalize import parse_price, parse_renovation_level
from dealmath.models.deal import PropertyFacts, Strategy
from dealmath.models.rehab import CostBand, RehabEstimate, RehabLineItem, RenovationLevel

WHOLE = Decimal("1")
TWO_PLACES = Decimal("0.01")

# $/sqft band by renovation level.
COST_PER_SQFT: dict[RenovationLevel, CostBand] = {
    RenovationLevel.NONE: CostBand(Decimal("0"), Decimal("0")),
    RenovationLevel.LIGHT: CostBand(Decimal("15"), Decimal("25")),
    RenovationLevel.MEDIUM: CostBand(Decimal("35"), Decimal("60")),
    RenovationLevel.HEAVY: CostBand(Decimal("70"), Decimal("100")),
    RenovationLevel.GUT: CostBand(Decimal("100"), Decimal("150")),
}

DEFAULT_RENOVATION_MONTHS: dict[RenovationLevel, int] = {
    RenovationLevel.NONE: 0,
    RenovationLevel.LIGHT: 1,
    RenovationLevel.MEDIUM: 3,
    RenovationLevel.HEAVY: 6,
    RenovationLevel.GUT: 9,
}

# (category, % of budget, description). Each level sums to 100.
BREAKDOWN: dict[RenovationLevel, list[tuple[str, int, str]]] = {
    RenovationLevel.NONE: [],
    RenovationLevel.LIGHT: [
        ("Paint & Cosmetics", 35, "Interior/exterior paint, fixtures"),
        ("Flooring", 30, "Carpet or LVP replacement"),
        ("Minor Repairs", 20, "Drywall, caulking, hardware"),
        ("Landscaping", 10, "Curb appeal improvements"),
        ("Contingency", 5, "Unexpected items"),
    ],
    RenovationLevel.MEDIUM: [
        ("Kitchen Update", 25, "Cabinets, countertops, appliances"),
        ("Bathroom Renovation", 20, "Fixtures, tile, vanity"),
        ("Flooring", 15, "Hardwood or quality LVP"),
        ("Systems Updates", 15, "HVAC, electrical, plumbing"),
        ("Paint & Drywall", 10, "Full interior paint, repairs"),
        ("Exterior", 10, "Siding, windows, landscaping"),
        ("Contingency", 5, "Unexpected repairs"),
    ],
    RenovationLevel.HEAVY: [
        ("Structural Work", 20, "Foundation, framing, roof"),
        ("Systems Replacement", 20, "New HVAC, electrical, plumbing"),
        ("Complete Kitchen", 18, "Full gut and remodel"),
        ("All Bathrooms", 15, "Complete renovation"),
        ("Windows & Doors", 10, "Full replacement"),
        ("Flooring Throughout", 8, "Premium materials"),
        ("Exterior Renovation", 6, "Siding, stucco, landscaping"),
        ("Contingency", 3, "Unexpected issues"),
    ],
    RenovationLevel.GUT: [
        ("Demolition & Structural", 22, "Down to studs, foundation, framing"),
        ("Systems Replacement", 22, "New HVAC, electrical, plumbing"),
        ("Complete Kitchen", 15, "Full remodel"),
        ("All Bathrooms", 13, "Full remodel"),
        ("Roof, Windows & Doors", 12, "Full replacement"),
        ("Drywall & Flooring", 8, "New throughout"),
        ("Exterior Renovation", 5, "Siding, stucco, landscaping"),
        ("Contingency", 3, "Unexpected issues"),
    ],
}


def _location_multiplier(state: str | None) -> Decimal:
    if state and state.upper() in settings.high_cost_rehab_states:
        return settings.high_cost_rehab_multiplier
    return Decimal("1")


def rehab_breakdown(total_cost: Decimal, level: RenovationLevel) -> tuple[RehabLineItem, ...]:
    """Split a rehab budget into category line items for its level."""
    return tuple(
        RehabLineItem(
            category=name,
            percentage=Decimal(pct),
            cost=(total_cost * Decimal(pct) / 100).quantize(WHOLE, ROUND_HALF_UP),
            description=description,
        )
        for name, pct, description in BREAKDOWN[level]
    )


def calculate_rehab_costs(
    square_footage,
    level: RenovationLevel,
    state: str | None = None,
) -> RehabEstimate:
    """Estimate a renovation budget range from floor area and level.

    Args:
        square_footage: Interior floor area.
        level: Renovation tier.
        state: Two-letter state code; high-cost states carry a location premium.

    Returns:
        RehabEstimate with low/high/average rounded to whole currency units.
        Zero estimate for RenovationLevel.NONE or non-positive floor area.
    """
    sqft = parse_price(square_footage)
    level = parse_renovation_level(level)
    if level == RenovationLevel.NONE or sqft <= 0:
        return RehabEstimate(level=level)

    band = COST_PER_SQFT[level]
    mult = _location_multiplier(state)
    per_sqft = band.midpoint * mult
    average = (sqft * per_sqft).quantize(WHOLE, ROUND_HALF_UP)

    return RehabEstimate(
        level=level,
        low=(sqft * band.low * mult).quantize(WHOLE, ROUND_HALF_UP),
        high=(sqft * band.high * mult).quantize(WHOLE, ROUND_HALF_UP),
        average=average,
        cost_per_sqft=per_sqft.quantize(TWO_PLACES, ROUND_HALF_UP),
        line_items=rehab_breakdown(average, level),
        renovation_months=DEFAULT_RENOVATION_MONTHS[level],
    )


def level_from_cost_per_sqft(cost_per_sqft: Decimal) -> RenovationLevel:
    """Classify an existing budget by the band floor it reaches."""
    for level in (RenovationLevel.GUT, RenovationLevel.HEAVY,
                  RenovationLevel.MEDIUM, RenovationLevel.LIGHT):
        if cost_per_sqft >= COST_PER_SQFT[level].low:
            return level
    return RenovationLevel.NONE


def determine_rehab_level(
    strategy: Strategy,
    as_of_year: int,
    year_built: int | None = None,
    existing_rehab_cost: Decimal = Decimal("0"),
    sqft: int = 0,
) -> RenovationLevel:
    """Pick a renovation level from an existing budget, or from age and strategy.

    Unknown build year is treated as a 50-year-old house.
    """
    if existing_rehab_cost > 0 and sqft > 0:
        return level_from_cost_per_sqft(existing_rehab_cost / Decimal(sqft))

    age = as_of_year - year_built if year_built else 50

    if strategy == Strategy.FLIP:
        return RenovationLevel.HEAVY if age > 40 else RenovationLevel.MEDIUM
    if strategy == Strategy.BRRRR:
        return RenovationLevel.HEAVY if age > 30 else RenovationLevel.MEDIUM
    if strategy == Strategy.HOUSE_HACK:
        return RenovationLevel.MEDIUM if age > 30 else RenovationLevel.LIGHT
    if strategy == Strategy.BUY_AND_HOLD:
        if age > 50:
            return RenovationLevel.MEDIUM
        return RenovationLevel.LIGHT if age > 20 else RenovationLevel.NONE

    if age > 40:
        return RenovationLevel.MEDIUM
    if age > 20:
        return RenovationLevel.LIGHT
    return RenovationLevel.NONE


def estimate_property_rehab_cost(
    facts: PropertyFacts,
    strategy: Strategy,
    as_of_year: int,
) -> RehabEstimate:
    """Rehab estimate for a listing.

    A known budget is kept as the average with a +/-10% range; otherwise the
    level (given, or derived from age and strategy) drives the sqft estimate.
    """
    existing = facts.existing_rehab_cost
    if existing > 0:
        level = determine_rehab_level(
            strategy, as_of_year, facts.year_built, existing, facts.sqft
        )
        per_sqft = existing / Decimal(facts.sqft) if facts.sqft > 0 else Decimal("0")
        return RehabEstimate(
            level=level,
            low=(existing * Decimal("0.9")).quantize(WHOLE, ROUND_HALF_UP),
            high=(existing * Decimal("1.1")).quantize(WHOLE, ROUND_HALF_UP),
            average=existing.quantize(WHOLE, ROUND_HALF_UP),
            cost_per_sqft=per_sqft.quantize(TWO_PLACES, ROUND_HALF_UP),
            line_items=rehab_breakdown(existing, level),
            renovation_months=DEFAULT_RENOVATION_MONTHS[level],
        )

    level = facts.renovation_level or determine_rehab_level(
        strategy, as_of_year, facts.year_built
    )
    return calculate_rehab_costs(facts.sqft, level, facts.state)
