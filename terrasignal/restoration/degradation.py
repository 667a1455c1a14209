"""SOC deficit, restoration potential and priority scoring for one project."""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Mapping

from terrasignal.core.utils import round_half_up, round_int
from terrasignal.schemas.assessment import DegradationAssessment

CLIMATE_ZONES: tuple[str, ...] = ("arid", "semi_arid", "sub_humid", "humid")

# Reference (undegraded) SOC stocks in t C/ha for 0-30 cm by texture and
# climate zone, from published literature values. Columns follow CLIMATE_ZONES.
_REFERENCE_ROWS: dict[str, tuple[float, ...]] = {
    "Sand": (12, 20, 35, 45),
    "Loamy Sand": (15, 25, 40, 50),
    "Sandy Loam": (20, 35, 55, 70),
    "Loam": (25, 45, 65, 85),
    "Silt Loam": (25, 45, 65, 85),
    "Silt": (22, 40, 60, 78),
    "Sandy Clay Loam": (28, 42, 60, 78),
    "Clay Loam": (30, 50, 75, 95),
    "Silty Clay Loam": (30, 50, 75, 95),
    "Sandy Clay": (32, 48, 70, 88),
    "Silty Clay": (33, 52, 78, 98),
    "Clay": (35, 55, 80, 100),
}
REFERENCE_SOC: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        texture: MappingProxyType(dict(zip(CLIMATE_ZONES, row)))
        for texture, row in _REFERENCE_ROWS.items()
    }
)
DEFAULT_TEXTURE = "Loam"
DEFAULT_REFERENCE_SOC = 45.0

# SOC accumulation under regenerative practices, t C/ha/yr
ACCUMULATION_RATES: Mapping[str, float] = MappingProxyType(
    {
        "rotational_grazing": 0.5,
        "cover_cropping": 0.4,
        "no_till_organic": 0.3,
        "agroforestry": 0.8,
        "grassland_restoration": 0.6,
    }
)
DEFAULT_ACCUMULATION_RATE = 0.5

COMMODITY_PRACTICE: Mapping[str, str] = MappingProxyType(
    {
        "cashmere": "rotational_grazing",
        "wool": "rotational_grazing",
        "cotton": "cover_cropping",
        "leather": "grassland_restoration",
        "multi": "grassland_restoration",
    }
)
DEFAULT_PRACTICE = "grassland_restoration"

CARBON_PRICE_USD_PER_TCO2 = 15.0
C_TO_CO2 = 3.67
RECOVERABLE_FRACTION = 0.8
FALLBACK_RESTORE_YEARS = 20
MAX_PRODUCTIVITY_GAIN = 30

# Priority score components (points)
MAX_DEGRADATION_POINTS = 40
MAX_SCALE_POINTS = 30
MAX_FEASIBILITY_POINTS = 30
SCALE_POINTS_PER_DECADE = 6
REFERENCE_RATE = 0.8


def classify_climate_zone(annual_precip_mm: float) -> str:
    """Return the climate zone for a mean annual precipitation in mm."""
    if annual_precip_mm < 250:
        return "arid"
    if annual_precip_mm < 500:
        return "semi_arid"
    if annual_precip_mm < 1000:
        return "sub_humid"
    return "humid"


def reference_soc(soil_texture: str, climate_zone: str) -> float:
    """Look up the reference SOC stock; unknown textures use the Loam row."""
    row = REFERENCE_SOC.get(soil_texture, REFERENCE_SOC[DEFAULT_TEXTURE])
    return float(row.get(climate_zone, DEFAULT_REFERENCE_SOC))


def soc_deficit(reference: float, current: float) -> float:
    """Return the non-negative SOC gap between reference and current stock."""
    return max(0.0, reference - current)


def practice_for(commodity: str) -> str:
    return COMMODITY_PRACTICE.get(commodity, DEFAULT_PRACTICE)


def accumulation_rate(practice: str) -> float:
    return ACCUMULATION_RATES.get(practice, DEFAULT_ACCUMULATION_RATE)


def priority_score(deficit_percent: float, hectares: float, acc_rate: float) -> int:
    """Composite 0-100 score of degradation severity, scale and feasibility."""
    degradation = min(MAX_DEGRADATION_POINTS, deficit_percent)
    scale = min(
        MAX_SCALE_POINTS, math.log10(max(hectares, 1)) * SCALE_POINTS_PER_DECADE
    )
    feasibility = min(
        MAX_FEASIBILITY_POINTS, acc_rate / REFERENCE_RATE * MAX_FEASIBILITY_POINTS
    )
    return max(0, min(100, round_int(degradation + scale + feasibility)))


def assess_degradation(
    project_id: str,
    current_soc: float,
    soil_texture: str,
    annual_precip_mm: float,
    commodity: str,
    hectares: float,
    *,
    carbon_price: float = CARBON_PRICE_USD_PER_TCO2,
) -> DegradationAssessment:
    """Assess SOC degradation and restoration value for one project.

    Only 80% of the deficit is treated as recoverable. ``hectares`` must be
    finite and non-negative; values below 1 ha score as 1 ha.
    """
    zone = classify_climate_zone(annual_precip_mm)
    reference = reference_soc(soil_texture, zone)

    deficit = soc_deficit(reference, current_soc)
    deficit_percent = round_int(deficit / reference * 100) if reference > 0 else 0

    practice = practice_for(commodity)
    acc_rate = accumulation_rate(practice)

    potential_gain = deficit * RECOVERABLE_FRACTION
    potential_co2e = round_half_up(potential_gain * C_TO_CO2, 1)
    time_to_restore = (
        math.ceil(potential_gain / acc_rate) if acc_rate > 0 else FALLBACK_RESTORE_YEARS
    )
    carbon_value = round_int(potential_co2e * carbon_price)
    productivity_gain = min(MAX_PRODUCTIVITY_GAIN, round_int(deficit_percent * 0.5))

    return DegradationAssessment(
        project_id=project_id,
        current_soc_t_per_ha=round_half_up(current_soc, 1),
        soil_texture=soil_texture,
        reference_soc_t_per_ha=reference,
        soc_deficit_t_per_ha=round_half_up(deficit, 1),
        soc_deficit_percent=deficit_percent,
        potential_soc_gain_t_per_ha=round_half_up(potential_gain, 1),
        potential_co2e_t_per_ha=potential_co2e,
        time_to_restore_years=time_to_restore,
        carbon_value_usd_per_ha=carbon_value,
        productivity_gain_percent=productivity_gain,
        priority_score=priority_score(deficit_percent, hectares, acc_rate),
        priority_rank=0,
        climate_zone=zone,
        practice=practice,
    )
