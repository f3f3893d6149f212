"""Input normalization: loosely typed caller values -> safe domain values.

Numeric parsers never raise; anything unusable becomes 0 (or the caller's
fallback). Enum parsers raise InputContractError for labels outside the
known set, which is the only failure the engine surfaces to callers.
"""

import logging
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from dealmath.models.deal import LoanType, Strategy
from dealmath.models.rehab import RenovationLevel
from dealmath.models.units import UnitFraction, WholePercent

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")

_NON_NUMERIC = re.compile(r"[^\d.\-]")


class InputContractError(ValueError):
    """A required enum field holds a value outside its known set."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Invalid value for {field}: {value!r}")


def _coerce_decimal(value: object) -> Decimal | None:
    """Best-effort Decimal conversion. None when the value is unusable."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value.replace(",", "").strip())
        if not cleaned:
            return None
        try:
            parsed = Decimal(cleaned)
        except InvalidOperation:
            return None
    else:
        return None

    if not parsed.is_finite():
        return None
    return parsed


def parse_price(value: object) -> Decimal:
    """Parse a monetary amount such as "$1,250,000" or 1250000.0.

    Negative, non-numeric and missing input all yield 0.
    """
    parsed = _coerce_decimal(value)
    if parsed is None or parsed < 0:
        if value not in (None, ""):
            logger.debug("parse_price: %r coerced to 0", value)
        return Decimal("0")
    return parsed.quantize(TWO_PLACES, ROUND_HALF_UP)


def parse_percentage(value: object) -> WholePercent:
    """Parse a whole-number percent such as "7.5%", "7.5" or 7.5.

    Bare numbers are never reinterpreted as fractions: 0.5 means 0.5%.
    A UnitFraction is converted explicitly.
    """
    if isinstance(value, WholePercent):
        return value
    if isinstance(value, UnitFraction):
        return value.to_percent()
    parsed = _coerce_decimal(value)
    if parsed is None or parsed < 0:
        if value not in (None, ""):
            logger.debug("parse_percentage: %r coerced to 0", value)
        return WholePercent("0")
    if parsed > 100:
        logger.debug("parse_percentage: %r is above 100%%", value)
    return WholePercent(parsed)


def parse_fraction(value: object) -> UnitFraction:
    """Parse a 0-1 ratio (refinance LTV). A WholePercent is converted explicitly."""
    if isinstance(value, UnitFraction):
        return value
    if isinstance(value, WholePercent):
        return value.to_fraction()
    parsed = _coerce_decimal(value)
    if parsed is None or parsed < 0:
        if value not in (None, ""):
            logger.debug("parse_fraction: %r coerced to 0", value)
        return UnitFraction("0")
    return UnitFraction(parsed)


def parse_integer(value: object, fallback: int = 0) -> int:
    """Parse a count (units, months, years), truncating toward zero."""
    parsed = _coerce_decimal(value)
    if parsed is None or parsed < 0:
        return fallback
    return int(parsed)


def _label_key(value: str) -> str:
    return re.sub(r"[^a-z]", "", value.lower().replace("&", "and"))


_STRATEGY_LABELS = {
    "flip": Strategy.FLIP,
    "fixflip": Strategy.FLIP,
    "fixandflip": Strategy.FLIP,
    "brrrr": Strategy.BRRRR,
    "rental": Strategy.RENTAL,
    "longtermrental": Strategy.RENTAL,
    "buyandhold": Strategy.BUY_AND_HOLD,
    "buyhold": Strategy.BUY_AND_HOLD,
    "househack": Strategy.HOUSE_HACK,
    "househacking": Strategy.HOUSE_HACK,
    "commercial": Strategy.COMMERCIAL,
    "shorttermrental": Strategy.SHORT_TERM_RENTAL,
    "str": Strategy.SHORT_TERM_RENTAL,
    "airbnb": Strategy.SHORT_TERM_RENTAL,
}

_LOAN_TYPE_LABELS = {
    "conventional": LoanType.CONVENTIONAL,
    "hardmoney": LoanType.HARD_MONEY,
}

_RENOVATION_LABELS = {
    "none": RenovationLevel.NONE,
    "turnkey": RenovationLevel.NONE,
    "light": RenovationLevel.LIGHT,
    "cosmetic": RenovationLevel.LIGHT,
    "medium": RenovationLevel.MEDIUM,
    "moderate": RenovationLevel.MEDIUM,
    "heavy": RenovationLevel.HEAVY,
    "extensive": RenovationLevel.HEAVY,
    "gut": RenovationLevel.GUT,
    "fullgut": RenovationLevel.GUT,
}


def _parse_label(value: object, labels: dict, enum_type, field: str):
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        found = labels.get(_label_key(value))
        if found is not None:
            return found
    logger.warning("Rejected %s value %r", field, value)
    raise InputContractError(field, value)


def parse_strategy(value: object, field: str = "strategy") -> Strategy:
    return _parse_label(value, _STRATEGY_LABELS, Strategy, field)


def parse_loan_type(value: object, field: str = "loan_type") -> LoanType:
    return _parse_label(value, _LOAN_TYPE_LABELS, LoanType, field)


def parse_renovation_level(
    value: object, field: str = "renovation_level"
) -> RenovationLevel:
    return _parse_label(value, _RENOVATION_LABELS, RenovationLevel, field)
