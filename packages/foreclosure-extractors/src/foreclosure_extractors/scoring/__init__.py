"""Lead scoring."""

from .lead_scorer import (
    AGE_BANDS,
    CONTINUANCE_CAP,
    clamp_score,
    continuance_points,
    is_business_entity,
    score_lead,
)

__all__ = [
    "AGE_BANDS",
    "CONTINUANCE_CAP",
    "clamp_score",
    "continuance_points",
    "is_business_entity",
    "score_lead",
]
