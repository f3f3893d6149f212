"""Financing defaults and interest rate band routes."""

from fastapi import APIRouter

from dealmath.api.schemas import FinancingDefaultsResponse, InterestRateResponse
from dealmath.engine.financing import get_simple_financing_defaults, get_strategy_interest_rate
from dealmath.engine.normalize import parse_strategy

router = APIRouter(prefix="/api/v1", tags=["financing"])


@router.get("/financing/{strategy}", response_model=FinancingDefaultsResponse)
async def financing_defaults(strategy: str):
    resolved = parse_strategy(strategy)
    d = get_simple_financing_defaults(resolved)
    return FinancingDefaultsResponse(
        strategy=resolved.value,
        financing_type=d.financing_type.value,
        down_payment_percent=d.down_payment_percent,
        interest_rate=d.interest_rate,
        loan_term_years=d.loan_term_years,
        lender_points_percent=d.lender_points_percent,
        other_closing_costs_percent=d.other_closing_costs_percent,
        total_closing_costs_percent=d.total_closing_costs_percent,
        description=d.description,
        mortgage_insurance=d.mortgage_insurance,
    )


@router.get("/interest-rate", response_model=InterestRateResponse)
async def interest_rate(
    strategy: str,
    property_type: str | None = None,
    units: int | None = None,
):
    band = get_strategy_interest_rate(strategy, property_type, units)
    return InterestRateResponse(
        default=band.default, min=band.min, max=band.max, description=band.description
    )
