"""Rehab cost estimate data types."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class RenovationLevel(Enum):
    NONE = "none"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    GUT = "gut"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    def __lt__(self, other: "RenovationLevel") -> bool:
        if not isinstance(other, RenovationLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: "RenovationLevel") -> bool:
        if not isinstance(other, RenovationLevel):
            return NotImplemented
        return self.rank <= other.rank


_LEVEL_ORDER = [
    RenovationLevel.NONE,
    RenovationLevel.LIGHT,
    RenovationLevel.MEDIUM,
    RenovationLevel.HEAVY,
    RenovationLevel.GUT,
]


@dataclass(frozen=True)
class CostBand:
    low: Decimal
    high: Decimal

    @property
    def midpoint(self) -> Decimal:
        return (self.low + self.high) / 2


@dataclass(frozen=True)
class RehabLineItem:
    category: str
    percentage: Decimal  # WholePercent share of the average estimate
    cost: Decimal
    description: str = ""


@dataclass(frozen=True)
class RehabEstimate:
    level: RenovationLevel
    low: Decimal = Decimal("0")
    high: Decimal = Decimal("0")
    average: Decimal = Decimal("0")
    cost_per_sqft: Decimal = Decimal("0")
    line_items: tuple[RehabLineItem, ...] = ()
    renovation_months: int = 0

    @property
    def total_cost(self) -> Decimal:
        return self.average
