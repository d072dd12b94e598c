"""POST /v1/score-impact - preview score impact without a full allocation"""

from fastapi import APIRouter, Depends

from payment_optimizer.api.dependencies import get_settings
from payment_optimizer.api.v1.schemas import ScoreImpactRequest, ScoreImpactSchema
from payment_optimizer.config import Settings
from payment_optimizer.domain.score_impact import estimate_score_impact

router = APIRouter()


@router.post("/score-impact", response_model=ScoreImpactSchema)
def preview_score_impact(request_body: ScoreImpactRequest, settings: Settings = Depends(get_settings)):
    """Estimate the score change for a utilization change in percentage points"""
    impact = estimate_score_impact(
        request_body.utilization_change_percentage_points,
        baseline_score=request_body.baseline_score,
        settings=settings,
    )
    return ScoreImpactSchema.from_domain(impact)
