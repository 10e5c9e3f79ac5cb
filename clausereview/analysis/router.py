from typing import Optional
from fastapi import APIRouter, Depends

from clausereview.analysis.schemas import (
    ClauseReferenceRequest,
    ClauseReferenceResponse,
    HealthStatus,
    PerspectiveView,
    ViewRequest,
)
from clausereview.analysis.health import classify
from clausereview.analysis.service import ReviewService, find_clause_references
from clausereview.perspective.dependencies import get_current_perspective
from clausereview.perspective.schemas import Perspective

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.post("/view", response_model=PerspectiveView)
async def build_view_endpoint(
    request: ViewRequest,
    perspective: Optional[Perspective] = Depends(get_current_perspective),
):
    service = ReviewService(request.record)
    return service.build_view(perspective, risk_level=request.risk_level)


@router.get("/health-band", response_model=HealthStatus)
async def health_band_endpoint(score: float):
    return classify(score)


@router.post("/clause-references", response_model=ClauseReferenceResponse)
async def clause_references_endpoint(request: ClauseReferenceRequest):
    return ClauseReferenceResponse(
        references=find_clause_references(request.text, request.clause_labels)
    )
