"""Canonical test fixtures used across all engine tests.

Rental: $300K single family, 25% down, 7% rate, 30yr fixed, $2,400 rent.
Flip: $200K purchase, $40K rehab, $300K ARV, 6 months on hard money.
BRRRR: $150K purchase, 20% down, $30K rehab, $230K ARV, 75% refinance, $2,200 rent.
"""

import pytest
from decimal import Decimal

from dealmath.engine.assumptions import CostAssumptions
from dealmath.models.arv import Comparable
from dealmath.models.deal import BRRRRInputs, FlipInputs, LoanType, RentalInputs, Strategy


@pytest.fixture
def assumptions() -> CostAssumptions:
    """Default cost proxies, independent of any .env on the test machine."""
    return CostAssumptions()


@pytest.fixture
def canonical_rental() -> RentalInputs:
    return RentalInputs(
        purchase_price=Decimal("300000"),
        strategy=Strategy.RENTAL,
        rent_per_unit=Decimal("2400"),
        down_payment_percent=Decimal("25"),
        interest_rate=Decimal("7"),
        loan_term_years=30,
        points_percent=Decimal("1"),
    )


@pytest.fixture
def canonical_flip() -> FlipInputs:
    return FlipInputs(
        purchase_price=Decimal("200000"),
        arv=Decimal("300000"),
        renovation_costs=Decimal("40000"),
        holding_period_months=6,
        loan_type=LoanType.HARD_MONEY,
        points_percent=Decimal("2.5"),
    )


@pytest.fixture
def canonical_brrrr() -> BRRRRInputs:
    return BRRRRInputs(
        purchase_price=Decimal("150000"),
        down_payment_percent=Decimal("20"),
        renovation_costs=Decimal("30000"),
        monthly_rent=Decimal("2200"),
        arv=Decimal("230000"),
        refinance_ltv=Decimal("0.75"),
    )


@pytest.fixture
def tight_comps() -> list[Comparable]:
    """Four similar-size sales clustered around $200/sqft."""
    return [
        Comparable(sale_price=Decimal("300000"), sqft=1500, distance_miles=Decimal("0.3")),
        Comparable(sale_price=Decimal("310000"), sqft=1550, distance_miles=Decimal("0.5")),
        Comparable(sale_price=Decimal("290000"), sqft=1450, distance_miles=Decimal("0.8")),
        Comparable(sale_price=Decimal("320000"), sqft=1600, distance_miles=Decimal("1.1")),
    ]
