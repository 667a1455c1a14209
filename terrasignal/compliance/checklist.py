"""Compliance checklist for soil-carbon monitoring submissions.

The catalogue follows Verra VM0042 v2.2 and the FAO voluntary guidelines
for SOC measurement. Every item carries its own predicate and items are
evaluated independently, in catalogue order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Literal, Sequence

import pandas as pd

from terrasignal.core.utils import round_int
from terrasignal.schemas.submission import NormalizedSubmission, UploadFormData

ValidationResult = Literal["compliant", "missing", "off-spec", "not-applicable"]
Severity = Literal["required", "recommended", "optional"]

MIN_DEPTH_CM = 30
MAX_BASELINE_OFFSET_YEARS = 5
MAX_VERIFICATION_INTERVAL_YEARS = 5
MIN_QAQC_METHODS = 2
MIN_SAMPLES_PER_STRATUM = 5
BULK_DENSITY_APPROACHES = frozenset({"measured", "esm"})

REQUIRED_WEIGHT = 90
RECOMMENDED_WEIGHT = 10


@dataclass(frozen=True)
class ChecklistItem:
    """One requirement of the measurement standard."""

    id: str
    category: str
    requirement: str
    description: str
    standard: str
    severity: Severity
    predicate: Callable[[NormalizedSubmission], ValidationResult]

    def evaluate(self, submission: NormalizedSubmission) -> ValidationResult:
        return self.predicate(submission)


@dataclass(frozen=True)
class ChecklistResult:
    item: ChecklistItem
    result: ValidationResult

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.item.id,
            "category": self.item.category,
            "requirement": self.item.requirement,
            "standard": self.item.standard,
            "severity": self.item.severity,
            "result": self.result,
        }


def _year_of(value: str) -> int | None:
    if not value:
        return None
    ts = pd.to_datetime(value, errors="coerce")
    return None if pd.isna(ts) else int(ts.year)


def normalize_submission(form: UploadFormData) -> NormalizedSubmission:
    """Reduce the user form to the facts checked by the catalogue."""
    bd_approach = (form.bulk_density_approach or "").strip().lower()
    return NormalizedSubmission(
        max_depth_cm=form.max_depth_cm if form.max_depth_cm is not None else 0,
        lab_method=form.lab_method or None,
        bulk_density_measured=bd_approach in BULK_DENSITY_APPROACHES,
        gps_coordinates=bool(form.gps_coordinates),
        stratification_documented=(
            len(form.stratification_factors) > 0
            and form.number_of_strata is not None
            and form.number_of_strata > 0
        ),
        baseline_year=_year_of(form.baseline_date),
        project_start_year=form.project_start_year,
        verification_frequency_years=(
            form.verification_frequency_years
            if form.verification_frequency_years is not None
            else 99
        ),
        qaqc_documented=len(form.qaqc_methods) >= MIN_QAQC_METHODS,
        samples_per_stratum=(
            form.samples_per_stratum if form.samples_per_stratum is not None else 0
        ),
    )


def _check_depth(s: NormalizedSubmission) -> ValidationResult:
    return "compliant" if s.max_depth_cm >= MIN_DEPTH_CM else "off-spec"


def _check_lab_method(s: NormalizedSubmission) -> ValidationResult:
    return "compliant" if s.lab_method else "missing"


def _check_bulk_density(s: NormalizedSubmission) -> ValidationResult:
    return "compliant" if s.bulk_density_measured else "missing"


def _check_georef(s: NormalizedSubmission) -> ValidationResult:
    return "compliant" if s.gps_coordinates else "missing"


def _check_stratification(s: NormalizedSubmission) -> ValidationResult:
    return "compliant" if s.stratification_documented else "missing"


def _check_baseline_timing(s: NormalizedSubmission) -> ValidationResult:
    if s.baseline_year is None or s.project_start_year is None:
        return "missing"
    offset = abs(s.baseline_year - s.project_start_year)
    return "compliant" if offset <= MAX_BASELINE_OFFSET_YEARS else "off-spec"


def _check_frequency(s: NormalizedSubmission) -> ValidationResult:
    return (
        "compliant"
        if s.verification_frequency_years <= MAX_VERIFICATION_INTERVAL_YEARS
        else "off-spec"
    )


def _check_qaqc(s: NormalizedSubmission) -> ValidationResult:
    return "compliant" if s.qaqc_documented else "missing"


def _check_samples(s: NormalizedSubmission) -> ValidationResult:
    return "compliant" if s.samples_per_stratum >= MIN_SAMPLES_PER_STRATUM else "off-spec"


SOIL_CARBON_CHECKLIST: tuple[ChecklistItem, ...] = (
    ChecklistItem(
        id="soc-depth",
        category="Sampling",
        requirement="Sampling depth ≥ 30cm",
        description=(
            "VM0042 minimum. Deeper recommended for practices affecting deeper soils."
        ),
        standard="Verra VM0042 v2.2",
        severity="required",
        predicate=_check_depth,
    ),
    ChecklistItem(
        id="soc-lab-method",
        category="Laboratory",
        requirement="Lab method documented",
        description=(
            "Dry combustion (Dumas, reference), wet oxidation (Walkley-Black with "
            "correction), or approved spectroscopic techniques (INS, LIBS, MIR, "
            "Vis-NIR) with documented uncertainty."
        ),
        standard="Verra VM0042 v2.2",
        severity="required",
        predicate=_check_lab_method,
    ),
    ChecklistItem(
        id="soc-bulk-density",
        category="Sampling",
        requirement="Bulk density measured or ESM approach",
        description=(
            "Bulk density must be directly measured or Equivalent Soil Mass (ESM) "
            "approach documented."
        ),
        standard="Verra VM0042 v2.2 / Agricarbon",
        severity="required",
        predicate=_check_bulk_density,
    ),
    ChecklistItem(
        id="soc-georef",
        category="Spatial",
        requirement="Sample locations georeferenced",
        description="GPS coordinates for all sampling locations.",
        standard="VM0042",
        severity="required",
        predicate=_check_georef,
    ),
    ChecklistItem(
        id="soc-stratification",
        category="Design",
        requirement="Stratification by soil type, practice, and cropping system",
        description="Sampling design must stratify by relevant factors.",
        standard="VM0042",
        severity="required",
        predicate=_check_stratification,
    ),
    ChecklistItem(
        id="soc-baseline-timing",
        category="Temporal",
        requirement="Baseline within ±5 years of project start",
        description=(
            "Timing documented relative to project start "
            "(baseline within ±5 years of t=0)."
        ),
        standard="VM0042",
        severity="required",
        predicate=_check_baseline_timing,
    ),
    ChecklistItem(
        id="soc-frequency",
        category="Temporal",
        requirement="Verification frequency ≥ every 5 years",
        description="Minimum verification period per VM0042.",
        standard="VM0042",
        severity="required",
        predicate=_check_frequency,
    ),
    ChecklistItem(
        id="soc-qaqc",
        category="Quality",
        requirement="QA/QC including lab duplicates and reference samples",
        description="Quality assurance protocols documented.",
        standard="VM0042 / FAO",
        severity="recommended",
        predicate=_check_qaqc,
    ),
    ChecklistItem(
        id="soc-statistical",
        category="Design",
        requirement="Minimum 5 composite samples per stratum",
        description="Statistical adequacy per FAO guidelines.",
        standard="FAO Voluntary Guidelines",
        severity="required",
        predicate=_check_samples,
    ),
)


def run_checklist(
    submission: UploadFormData | NormalizedSubmission,
    items: Sequence[ChecklistItem] = SOIL_CARBON_CHECKLIST,
) -> List[ChecklistResult]:
    """Evaluate every checklist item against ``submission``."""
    if isinstance(submission, UploadFormData):
        submission = normalize_submission(submission)
    return [ChecklistResult(item=item, result=item.evaluate(submission)) for item in items]


def compute_score(results: Sequence[ChecklistResult]) -> int:
    """Weighted 0-100 compliance score.

    Required items carry 90 points and recommended items 10; when the
    catalogue has no recommended items their 10 points are granted. A
    catalogue without required items scores 0.
    """
    required = [r for r in results if r.item.severity == "required"]
    recommended = [r for r in results if r.item.severity == "recommended"]
    if not required:
        return 0

    required_ok = sum(1 for r in required if r.result == "compliant")
    required_score = required_ok / len(required) * REQUIRED_WEIGHT

    if recommended:
        recommended_ok = sum(1 for r in recommended if r.result == "compliant")
        recommended_score = recommended_ok / len(recommended) * RECOMMENDED_WEIGHT
    else:
        recommended_score = RECOMMENDED_WEIGHT

    return max(0, min(100, round_int(required_score + recommended_score)))


def score_label(score: float) -> str:
    if score >= 80:
        return "Claims-ready"
    if score >= 50:
        return "Needs attention"
    return "Significant gaps"


def group_by_category(
    results: Sequence[ChecklistResult],
) -> Dict[str, List[ChecklistResult]]:
    """Group results by item category, keeping first-seen category order."""
    grouped: Dict[str, List[ChecklistResult]] = {}
    for r in results:
        grouped.setdefault(r.item.category, []).append(r)
    return grouped
