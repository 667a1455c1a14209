"""Validation of a monitoring submission against the soil-carbon checklist."""

from __future__ import annotations

from typing import Any, Dict, Sequence

from terrasignal.compliance.checklist import (
    SOIL_CARBON_CHECKLIST,
    ChecklistItem,
    compute_score,
    group_by_category,
    run_checklist,
    score_label,
)
from terrasignal.schemas.submission import UploadFormData
from terrasignal.services.base import BaseService


class ComplianceService(BaseService):
    def validate(
        self,
        form: UploadFormData,
        items: Sequence[ChecklistItem] = SOIL_CARBON_CHECKLIST,
    ) -> Dict[str, Any]:
        """Score ``form`` and group the per-item results by category."""
        results = run_checklist(form, items)
        score = compute_score(results)
        self.logger.info("Checklist score %d over %d items", score, len(results))
        return {
            "score": score,
            "label": score_label(score),
            "results": [r.to_dict() for r in results],
            "byCategory": {
                category: [r.to_dict() for r in group]
                for category, group in group_by_category(results).items()
            },
        }
