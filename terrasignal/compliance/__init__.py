"""Soil-carbon monitoring submission checks."""

from .checklist import (
    SOIL_CARBON_CHECKLIST,
    ChecklistItem,
    ChecklistResult,
    compute_score,
    group_by_category,
    normalize_submission,
    run_checklist,
    score_label,
)

__all__ = [
    "SOIL_CARBON_CHECKLIST",
    "ChecklistItem",
    "ChecklistResult",
    "compute_score",
    "group_by_category",
    "normalize_submission",
    "run_checklist",
    "score_label",
]
