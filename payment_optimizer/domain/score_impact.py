"""Score impact estimator - heuristic projection of a utilization change"""

import math
from typing import Optional

from payment_optimizer.config import Settings, settings as default_settings
from payment_optimizer.domain.models import ScoreFactors, ScoreImpact


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def estimate_score_impact(
    utilization_change_percentage_points: float,
    baseline_score: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> ScoreImpact:
    """
    Estimate how a change in aggregate utilization moves a credit score.

    Model (a rough heuristic on the 300-900 scale, not a bureau model):
    - Utilization: -2 points per percentage point of change, capped at
      +/-100. A decrease in utilization is a positive impact.
    - Payment history: +5 for making any payment
    - Credit mix: +2

    The projected score is baseline + change, clamped to [300, 900].
    Total: NaN is treated as no change and infinities hit the cap.
    """
    settings = settings or default_settings
    baseline = settings.baseline_score if baseline_score is None else baseline_score

    change_pp = utilization_change_percentage_points
    if math.isnan(change_pp):
        change_pp = 0.0

    cap = settings.utilization_impact_cap
    utilization_impact = round(
        _clamp(change_pp * settings.utilization_impact_multiplier, -cap, cap), 2
    )
    payment_history_impact = settings.payment_history_impact
    credit_mix_impact = settings.credit_mix_impact

    change_points = round(utilization_impact + payment_history_impact + credit_mix_impact, 2)
    projected_score = float(
        _clamp(baseline + change_points, settings.score_floor, settings.score_ceiling)
    )

    return ScoreImpact(
        baseline_score=baseline,
        projected_score=projected_score,
        change_points=change_points,
        factors=ScoreFactors(
            utilization_impact=utilization_impact,
            payment_history_impact=payment_history_impact,
            credit_mix_impact=credit_mix_impact,
        ),
    )
