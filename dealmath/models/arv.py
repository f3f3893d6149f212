from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ARVMethod(Enum):
    COMPARABLES = "comparables"
    AVM_HEURISTIC = "avm_heuristic"


class Confidence(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Comparable:
    sale_price: Decimal
    sqft: int
    distance_miles: Decimal | None = None
    similarity: Decimal | None = None  # 0-1 score when the data provider supplies one
    address: str = ""

    @property
    def price_per_sqft(self) -> Decimal:
        if self.sqft <= 0:
            return Decimal("0")
        return self.sale_price / Decimal(self.sqft)


@dataclass(frozen=True)
class ARVResult:
    value: Decimal
    method: ARVMethod
    confidence: Confidence
    details: str
    comparables_used: int = 0
    price_per_sqft: Decimal = Decimal("0")
    uplift_pct: Decimal = Decimal("0")  # WholePercent applied in the heuristic path
