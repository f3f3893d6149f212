"""Percent and fraction value types.

Every rate in the engine is a WholePercent ("7.5" means 7.5%). The only places
that need a 0-1 fraction (refinance LTV) take a UnitFraction, and the two
convert into each other explicitly. Mixing them raises TypeError.
"""

from decimal import Decimal

HUNDRED = Decimal("100")


class WholePercent(Decimal):
    """A percentage on the 0-100 scale."""

    def __new__(cls, value="0", context=None):
        if isinstance(value, UnitFraction):
            raise TypeError(
                "UnitFraction cannot be used as a WholePercent; call .to_percent()"
            )
        return super().__new__(cls, value, context)

    def to_fraction(self) -> "UnitFraction":
        return UnitFraction(Decimal(self) / HUNDRED)

    def of(self, amount: Decimal) -> Decimal:
        """Apply this percent to an amount: WholePercent("8").of(1000) == 80."""
        return amount * Decimal(self) / HUNDRED

    def __repr__(self) -> str:
        return f"WholePercent('{Decimal(self)}')"


class UnitFraction(Decimal):
    """A ratio on the 0-1 scale, e.g. a loan-to-value of 0.75."""

    def __new__(cls, value="0", context=None):
        if isinstance(value, WholePercent):
            raise TypeError(
                "WholePercent cannot be used as a UnitFraction; call .to_fraction()"
            )
        return super().__new__(cls, value, context)

    def to_percent(self) -> WholePercent:
        return WholePercent(Decimal(self) * HUNDRED)

    def __repr__(self) -> str:
        return f"UnitFraction('{Decimal(self)}')"
