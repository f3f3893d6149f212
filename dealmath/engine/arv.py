"""After-repair value estimation.

Comparable sales drive the estimate when at least two usable ones exist.
Otherwise the AVM (or, failing that, the purchase price) is marked up by a
renovation uplift band. The comparables sequence is never modified.
"""

import logging
import statistics
from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from dealmath.engine.normalize import (
    parse_fraction,
    parse_integer,
    parse_price,
    parse_renovation_level,
    parse_strategy,
)
from dealmath.models.arv import ARVMethod, ARVResult, Comparable, Confidence
from dealmath.models.deal import Strategy
from dealmath.models.rehab import CostBand, RenovationLevel

logger = logging.getLogger(__name__)

WHOLE = Decimal("1")
TWO_PLACES = Decimal("0.01")

MIN_COMP_PRICE = Decimal("50000")
SQFT_TOLERANCE = Decimal("0.30")
MAX_COMPS = 5
HIGH_CONFIDENCE_MIN_COMPS = 3
HIGH_CONFIDENCE_MAX_CV = Decimal("0.15")

# Whole-number percent uplift over as-is value by renovation level.
UPLIFT_BANDS: dict[RenovationLevel, CostBand] = {
    RenovationLevel.NONE: CostBand(Decimal("0"), Decimal("0")),
    RenovationLevel.LIGHT: CostBand(Decimal("8"), Decimal("12")),
    RenovationLevel.MEDIUM: CostBand(Decimal("12"), Decimal("18")),
    RenovationLevel.HEAVY: CostBand(Decimal("18"), Decimal("25")),
    RenovationLevel.GUT: CostBand(Decimal("25"), Decimal("32")),
}


def renovation_uplift_pct(level: RenovationLevel, strategy: Strategy) -> Decimal:
    """Uplift percent for a level. BRRRR takes the band floor since refinance
    appraisals come in conservative; every other strategy takes the midpoint."""
    band = UPLIFT_BANDS[level]
    if strategy == Strategy.BRRRR:
        return band.low
    return band.midpoint


def normalize_comparable(comp: Comparable) -> Comparable:
    """Copy of a comparable with raw numeric fields parsed to Decimal / int."""
    return replace(
        comp,
        sale_price=parse_price(comp.sale_price),
        sqft=parse_integer(comp.sqft),
        distance_miles=None if comp.distance_miles is None else parse_price(comp.distance_miles),
        similarity=None if comp.similarity is None else Decimal(parse_fraction(comp.similarity)),
    )


def _is_usable(comp: Comparable, subject_sqft: Decimal) -> bool:
    if comp.sale_price < MIN_COMP_PRICE or comp.sqft <= 0:
        return False
    low = subject_sqft * (1 - SQFT_TOLERANCE)
    high = subject_sqft * (1 + SQFT_TOLERANCE)
    return low <= comp.sqft <= high


def _rank_key(comp: Comparable):
    # Higher similarity first, then nearer; missing values sort last.
    similarity = comp.similarity if comp.similarity is not None else Decimal("-1")
    distance = comp.distance_miles if comp.distance_miles is not None else Decimal("Infinity")
    return (-similarity, distance)


def select_comparables(
    comparables: Sequence[Comparable], subject_sqft: Decimal
) -> list[Comparable]:
    """Usable comparables, best first, at most MAX_COMPS."""
    normalized = (normalize_comparable(c) for c in comparables)
    usable = [c for c in normalized if _is_usable(c, subject_sqft)]
    return sorted(usable, key=_rank_key)[:MAX_COMPS]


def _from_comparables(comps: list[Comparable], subject_sqft: Decimal) -> ARVResult:
    per_sqft = [c.price_per_sqft for c in comps]
    median = statistics.median(per_sqft)
    mean = statistics.mean(per_sqft)
    cv = statistics.pstdev(per_sqft) / mean if mean > 0 else Decimal("0")

    if len(comps) >= HIGH_CONFIDENCE_MIN_COMPS and cv <= HIGH_CONFIDENCE_MAX_CV:
        confidence = Confidence.HIGH
    else:
        confidence = Confidence.MEDIUM

    value = (median * subject_sqft).quantize(WHOLE, ROUND_HALF_UP)
    return ARVResult(
        value=value,
        method=ARVMethod.COMPARABLES,
        confidence=confidence,
        details=(
            f"Median ${median.quantize(TWO_PLACES, ROUND_HALF_UP)}/sqft across "
            f"{len(comps)} comparable sales x {subject_sqft.normalize():f} sqft "
            f"(dispersion {(cv * 100).quantize(TWO_PLACES, ROUND_HALF_UP)}%)"
        ),
        comparables_used=len(comps),
        price_per_sqft=median.quantize(TWO_PLACES, ROUND_HALF_UP),
    )


def calculate_arv_from_comparables(
    subject_sqft,
    purchase_price,
    comparables: Sequence[Comparable] = (),
    avm_value=None,
    renovation_level=RenovationLevel.MEDIUM,
    strategy=Strategy.FLIP,
) -> ARVResult:
    """Estimate after-repair value.

    Args:
        subject_sqft: Subject property floor area.
        purchase_price: Used as the base value when no AVM is available.
        comparables: Recent sales; filtered to price >= 50K and floor area
            within 30% of the subject.
        avm_value: Automated valuation of the property as-is.
        renovation_level: Drives the uplift band in the heuristic path.
        strategy: BRRRR uses the conservative end of the uplift band.

    Returns:
        ARVResult. Value 0 with LOW confidence when nothing usable was given.
    """
    sqft = parse_price(subject_sqft)
    price = parse_price(purchase_price)
    avm = parse_price(avm_value)
    level = parse_renovation_level(renovation_level)
    strategy = parse_strategy(strategy)

    if sqft > 0:
        comps = select_comparables(comparables, sqft)
        if len(comps) >= 2:
            result = _from_comparables(comps, sqft)
            logger.debug(
                "ARV %s from %d comparables (%s)",
                result.value, result.comparables_used, result.confidence.value,
            )
            return result

    uplift = renovation_uplift_pct(level, strategy)
    if avm > 0:
        base, confidence, source = avm, Confidence.MEDIUM, "AVM"
    elif price > 0:
        base, confidence, source = price, Confidence.LOW, "purchase price"
    else:
        return ARVResult(
            value=Decimal("0"),
            method=ARVMethod.AVM_HEURISTIC,
            confidence=Confidence.LOW,
            details="No comparables, AVM or purchase price available; manual ARV estimate required",
        )

    value = (base * (1 + uplift / 100)).quantize(WHOLE, ROUND_HALF_UP)
    logger.debug("ARV %s from %s %s with %s%% uplift", value, source, base, uplift)
    return ARVResult(
        value=value,
        method=ARVMethod.AVM_HEURISTIC,
        confidence=confidence,
        details=(
            f"{source} ${base:,.0f} plus {uplift.normalize():f}% uplift "
            f"for {level.value} renovation"
        ),
        price_per_sqft=(value / sqft).quantize(TWO_PLACES, ROUND_HALF_UP) if sqft > 0 else Decimal("0"),
        uplift_pct=uplift,
    )
