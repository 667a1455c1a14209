from __future__ import annotations

"""Soil-carbon monitoring submission records.

:class:`UploadFormData` mirrors what a grantee enters when uploading
monitoring results; :class:`NormalizedSubmission` is the reduced set of facts
the compliance checklist predicates evaluate.
"""

import json
import os
import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List

import yaml


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


@dataclass
class UploadFormData:
    """User-entered monitoring submission."""

    # Sampling design
    number_of_strata: int | None = None
    stratification_factors: List[str] = field(default_factory=list)
    samples_per_stratum: int | None = None
    max_depth_cm: float | None = 30
    depth_intervals: List[str] = field(default_factory=list)
    # Laboratory
    lab_method: str = ""
    lab_name: str = ""
    bulk_density_approach: str = ""
    qaqc_methods: List[str] = field(default_factory=list)
    # Spatial
    gps_coordinates: bool = False
    gps_file_uploaded: bool = False
    # Timing
    baseline_date: str = ""
    current_measurement_date: str = ""
    project_start_year: int | None = None
    verification_frequency_years: float | None = None
    # Results
    mean_soc: float | None = None
    soc_change_from_baseline: float | None = None
    confidence_interval: float | None = None
    results_file_uploaded: bool = False
    # Documentation
    sampling_protocol_uploaded: bool = False
    lab_report_uploaded: bool = False
    additional_notes: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadFormData":
        """Create form data from a mapping with camelCase or snake_case keys.

        Unknown keys are ignored; missing keys keep their defaults.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            name = _snake_case(key)
            # "meanSOC" -> "mean_s_o_c"; collapse acronym splits
            name = re.sub(r"s_o_c", "soc", name)
            name = re.sub(r"q_a_q_c|qa_qc", "qaqc", name)
            name = re.sub(r"g_p_s", "gps", name)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str) -> "UploadFormData":
        """Load form data from a YAML or JSON file."""
        ext = os.path.splitext(path)[1].lower()
        with open(path, "r", encoding="utf-8") as f:
            if ext in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif ext == ".json":
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported submission format: {ext}")
        if not isinstance(data, dict):
            raise ValueError(f"Submission file {path} did not produce a mapping")
        return cls.from_dict(data)


@dataclass(frozen=True)
class NormalizedSubmission:
    """Facts derived from :class:`UploadFormData` for checklist predicates."""

    max_depth_cm: float = 0
    lab_method: str | None = None
    bulk_density_measured: bool = False
    gps_coordinates: bool = False
    stratification_documented: bool = False
    baseline_year: int | None = None
    project_start_year: int | None = None
    verification_frequency_years: float = 99
    qaqc_documented: bool = False
    samples_per_stratum: int = 0


__all__ = ["UploadFormData", "NormalizedSubmission"]
