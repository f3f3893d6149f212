"""ARV and rehab estimate routes."""

from fastapi import APIRouter

from dealmath.api.schemas import (
    ARVRequest,
    ARVResponse,
    RehabLineItemResponse,
    RehabRequest,
    RehabResponse,
)
from dealmath.engine.arv import calculate_arv_from_comparables
from dealmath.engine.rehab import calculate_rehab_costs
from dealmath.models.arv import Comparable

router = APIRouter(prefix="/api/v1", tags=["estimates"])


@router.post("/arv", response_model=ARVResponse)
async def arv(req: ARVRequest):
    comparables = [
        Comparable(
            sale_price=c.sale_price,
            sqft=c.sqft,
            distance_miles=c.distance_miles,
            similarity=c.similarity,
            address=c.address,
        )
        for c in req.comparables
    ]
    result = calculate_arv_from_comparables(
        subject_sqft=req.subject_sqft,
        purchase_price=req.purchase_price,
        comparables=comparables,
        avm_value=req.avm_value,
        renovation_level=req.renovation_level,
        strategy=req.strategy,
    )
    return ARVResponse(
        value=result.value,
        method=result.method.value,
        confidence=result.confidence.value,
        details=result.details,
        comparables_used=result.comparables_used,
        price_per_sqft=result.price_per_sqft,
        uplift_pct=result.uplift_pct,
    )


@router.post("/rehab", response_model=RehabResponse)
async def rehab(req: RehabRequest):
    estimate = calculate_rehab_costs(req.square_footage, req.renovation_level, req.state)
    return RehabResponse(
        level=estimate.level.value,
        low=estimate.low,
        high=estimate.high,
        average=estimate.average,
        cost_per_sqft=estimate.cost_per_sqft,
        renovation_months=estimate.renovation_months,
        line_items=[
            RehabLineItemResponse(
                category=item.category,
                percentage=item.percentage,
                cost=item.cost,
                description=item.description,
            )
            for item in estimate.line_items
        ],
    )
