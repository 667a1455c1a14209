from __future__ import annotations

"""Restoration assessment records for single projects and portfolios."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class ProjectDescriptor:
    """Minimal project metadata needed to assess a site."""

    id: str
    name: str
    commodity: str
    hectares: float
    lat: float
    lng: float
    country: str | None = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectDescriptor":
        """Create a descriptor from a table row or mapping."""
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            commodity=str(data.get("commodity") or "multi"),
            hectares=float(data.get("hectares") or 0.0),
            lat=float(data["lat"]),
            lng=float(data["lng"]),
            country=data.get("country") or None,
        )


@dataclass
class DegradationAssessment:
    """SOC deficit, restoration potential and priority for one project.

    ``priority_rank`` stays ``0`` until a portfolio ranking assigns it.
    """

    project_id: str
    current_soc_t_per_ha: float
    soil_texture: str
    reference_soc_t_per_ha: float
    soc_deficit_t_per_ha: float
    soc_deficit_percent: int
    potential_soc_gain_t_per_ha: float
    potential_co2e_t_per_ha: float
    time_to_restore_years: int
    carbon_value_usd_per_ha: int
    productivity_gain_percent: int
    priority_score: int
    priority_rank: int = 0
    climate_zone: str | None = None
    practice: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the record with the camelCase keys used in responses."""
        return {
            "projectId": self.project_id,
            "currentSOC_tPerHa": self.current_soc_t_per_ha,
            "soilTexture": self.soil_texture,
            "referenceSOC_tPerHa": self.reference_soc_t_per_ha,
            "socDeficit_tPerHa": self.soc_deficit_t_per_ha,
            "socDeficit_percent": self.soc_deficit_percent,
            "potentialSOC_gain_tPerHa": self.potential_soc_gain_t_per_ha,
            "potentialCO2e_tPerHa": self.potential_co2e_t_per_ha,
            "timeToRestore_years": self.time_to_restore_years,
            "carbonValue_usdPerHa": self.carbon_value_usd_per_ha,
            "productivityGain_percent": self.productivity_gain_percent,
            "priorityScore": self.priority_score,
            "priorityRank": self.priority_rank,
            "climateZone": self.climate_zone,
            "practice": self.practice,
        }


@dataclass
class RankedAssessment(DegradationAssessment):
    """Assessment enriched with project metadata for landscape tables."""

    project_name: str | None = None
    country: str | None = None
    commodity: str | None = None
    hectares: float | None = None

    @classmethod
    def from_assessment(
        cls, assessment: DegradationAssessment, project: ProjectDescriptor
    ) -> "RankedAssessment":
        return cls(
            **asdict(assessment),
            project_name=project.name,
            country=project.country,
            commodity=project.commodity,
            hectares=project.hectares,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "projectName": self.project_name,
                "country": self.country,
                "commodity": self.commodity,
                "hectares": self.hectares,
            }
        )
        return data


@dataclass(frozen=True)
class ProjectError:
    """Failure attributed to a single project in a batch."""

    project_id: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"projectId": self.project_id, "error": self.error}


@dataclass
class PortfolioResult:
    """Ranked assessments plus the per-project failures of one batch run."""

    assessments: List[DegradationAssessment] = field(default_factory=list)
    errors: List[ProjectError] = field(default_factory=list)
    total_projects: int = 0
    success_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "assessments": [a.to_dict() for a in self.assessments],
            "totalProjects": self.total_projects,
            "successCount": self.success_count,
            "errors": [e.to_dict() for e in self.errors],
        }


__all__ = [
    "ProjectDescriptor",
    "DegradationAssessment",
    "RankedAssessment",
    "ProjectError",
    "PortfolioResult",
]
