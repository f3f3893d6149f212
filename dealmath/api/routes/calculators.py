"""Strategy calculator routes: flip, BRRRR and rental."""

from fastapi import APIRouter

from dealmath.api.schemas import (
    BRRRRPhase1Response,
    BRRRRPhase2Response,
    BRRRRPhase3Response,
    BRRRRRequest,
    BRRRRResponse,
    BRRRRSummaryResponse,
    CashOnCashResponse,
    ClosingCostResponse,
    FlipRequest,
    FlipResponse,
    RentalRequest,
    RentalResponse,
    TimelineEntryResponse,
    ValidationResponse,
    YearlyProjectionResponse,
)
from dealmath.engine.brrrr import calculate_brrrr
from dealmath.engine.flip import calculate_flip_returns
from dealmath.engine.rental import calculate_rental_returns
from dealmath.models.deal import BRRRRInputs, FlipInputs, RentalInputs
from dealmath.models.financing import ClosingCostBreakdown
from dealmath.models.results import CashOnCash, ValidationResult

router = APIRouter(prefix="/api/v1", tags=["calculators"])


def _validation(v: ValidationResult) -> ValidationResponse:
    return ValidationResponse(
        is_valid=v.is_valid, errors=list(v.errors), warnings=list(v.warnings)
    )


def _cash_on_cash(coc: CashOnCash) -> CashOnCashResponse:
    """JSON has no infinity, so the sentinel travels as null plus a flag."""
    return CashOnCashResponse(
        value=coc.finite_value, is_infinite=coc.is_infinite, direction=coc.direction
    )


def _closing(c: ClosingCostBreakdown) -> ClosingCostResponse:
    return ClosingCostResponse(
        lender_points=c.lender_points,
        other_costs=c.other_costs,
        total=c.total,
        lender_points_percent=c.lender_points_percent,
        other_costs_percent=c.other_costs_percent,
        total_percent=c.total_percent,
    )


@router.post("/flip", response_model=FlipResponse)
async def flip(req: FlipRequest):
    result = calculate_flip_returns(FlipInputs(**req.model_dump()))
    return FlipResponse(
        down_payment=result.down_payment,
        acquisition_loan=result.acquisition_loan,
        rehab_holdback=result.rehab_holdback,
        total_loan=result.total_loan,
        holding_costs=result.holding_costs,
        selling_costs=result.selling_costs,
        closing_costs=_closing(result.closing_costs),
        cash_required=result.cash_required,
        total_investment=result.total_investment,
        total_project_cost=result.total_project_cost,
        net_profit=result.net_profit,
        roi=result.roi,
        profit_margin=result.profit_margin,
        is_hard_money=result.is_hard_money,
        validation=_validation(result.validation),
    )


@router.post("/brrrr", response_model=BRRRRResponse)
async def brrrr(req: BRRRRRequest):
    result = calculate_brrrr(BRRRRInputs(**req.model_dump()))
    p1, p2, p3 = result.phase1, result.phase2, result.phase3
    return BRRRRResponse(
        phase1=BRRRRPhase1Response(
            purchase_price=p1.purchase_price,
            down_payment=p1.down_payment,
            initial_loan_amount=p1.initial_loan_amount,
            renovation_costs=p1.renovation_costs,
            renovation_months=p1.renovation_months,
            closing_costs=p1.closing_costs,
            monthly_holding_costs=p1.monthly_holding_costs,
            total_holding_costs=p1.total_holding_costs,
            total_cash_invested=p1.total_cash_invested,
        ),
        phase2=BRRRRPhase2Response(
            arv=p2.arv,
            refinance_ltv=p2.refinance_ltv,
            refinance_amount=p2.refinance_amount,
            initial_loan_payoff=p2.initial_loan_payoff,
            cash_returned=p2.cash_returned,
            cash_left_in_deal=p2.cash_left_in_deal,
            capital_recovery_percent=p2.capital_recovery_percent,
        ),
        phase3=BRRRRPhase3Response(
            monthly_rent=p3.monthly_rent,
            new_loan_payment=p3.new_loan_payment,
            monthly_operating_expenses=p3.monthly_operating_expenses,
            monthly_cash_flow=p3.monthly_cash_flow,
            annual_cash_flow=p3.annual_cash_flow,
            annual_noi=p3.annual_noi,
            cap_rate=p3.cap_rate,
            cash_on_cash_return=_cash_on_cash(p3.cash_on_cash_return),
        ),
        summary=BRRRRSummaryResponse(
            total_roi=result.summary.total_roi,
            is_infinite_return=result.summary.is_infinite_return,
            rating=result.summary.rating,
            recommendation=result.summary.recommendation,
        ),
        timeline=[
            TimelineEntryResponse(
                year=t.year,
                description=t.description,
                cash_flow=t.cash_flow,
                cumulative_return=t.cumulative_return,
            )
            for t in result.timeline
        ],
        validation=_validation(result.validation),
    )


@router.post("/rental", response_model=RentalResponse)
async def rental(req: RentalRequest):
    result = calculate_rental_returns(RentalInputs(**req.model_dump()))
    return RentalResponse(
        loan_amount=result.loan_amount,
        down_payment=result.down_payment,
        monthly_mortgage=result.monthly_mortgage,
        total_monthly_rent=result.total_monthly_rent,
        monthly_expenses=result.monthly_expenses,
        monthly_cash_flow=result.monthly_cash_flow,
        annual_cash_flow=result.annual_cash_flow,
        annual_noi=result.annual_noi,
        cap_rate=result.cap_rate,
        cash_on_cash_return=_cash_on_cash(result.cash_on_cash_return),
        closing_costs=_closing(result.closing_costs),
        total_investment=result.total_investment,
        effective_mortgage=result.effective_mortgage,
        yearly_projections=[
            YearlyProjectionResponse(
                year=p.year,
                gross_rent=p.gross_rent,
                operating_expenses=p.operating_expenses,
                noi=p.noi,
                debt_service=p.debt_service,
                cash_flow=p.cash_flow,
                principal_paid=p.principal_paid,
                loan_balance=p.loan_balance,
                property_value=p.property_value,
                equity=p.equity,
            )
            for p in result.projections
        ],
        validation=_validation(result.validation),
    )
