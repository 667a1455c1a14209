"""Conversion of SoilGrids layer payloads into :class:`SoilProfile` records.

SoilGrids reports integer-scaled values ("mapped units"). The conversion
factors to natural units are fixed:

========  ==============  =================
property  mapped unit     divide by
========  ==============  =================
soc       dg/kg           10  -> g/kg
bdod      cg/cm3          100 -> g/cm3
phh2o     pH * 10         10
cec       mmol(c)/kg      10  -> cmol(c)/kg
sand etc  g/kg            10  -> percent
========  ==============  =================
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

from terrasignal.core.utils import mean, round_half_up, round_int
from terrasignal.schemas.soil import DepthLayer, SoilProfile
from .texture import classify_texture

SOIL_PROPERTIES: tuple[str, ...] = ("soc", "phh2o", "sand", "silt", "clay", "bdod", "cec")
DEPTHS: tuple[str, ...] = ("0-5cm", "5-15cm", "15-30cm", "30-60cm", "60-100cm")
DEPTH_THICKNESS_CM: Dict[str, int] = {
    "0-5cm": 5,
    "5-15cm": 10,
    "15-30cm": 15,
    "30-60cm": 30,
    "60-100cm": 40,
}
TOPSOIL_DEPTHS = DEPTHS[:3]  # 0-30 cm

SOC_FACTOR = 10
BULK_DENSITY_FACTOR = 100
PH_FACTOR = 10
CEC_FACTOR = 10
FRACTION_FACTOR = 10

DEFAULT_BULK_DENSITY = 1.3


def _layer_value(
    layers: List[Dict[str, Any]], prop: str, depth_label: str
) -> float | None:
    layer = next((lyr for lyr in layers if lyr.get("name") == prop), None)
    if layer is None:
        return None
    depth = next(
        (d for d in layer.get("depths", []) if d.get("label") == depth_label), None
    )
    if depth is None:
        return None
    value = (depth.get("values") or {}).get("mean")
    return None if value is None else float(value)


def _topsoil_values(layers: List[Dict[str, Any]], prop: str) -> List[float]:
    values = (_layer_value(layers, prop, d) for d in TOPSOIL_DEPTHS)
    return [v for v in values if v is not None]


def process_soilgrids(payload: Dict[str, Any]) -> SoilProfile:
    """Convert a SoilGrids ``properties/query`` response into a profile.

    Missing SOC readings count as 0 g/kg and missing bulk density as
    1.3 g/cm3. The SOC stock covers 0-30 cm:
    ``sum(soc[g/kg] * bd[g/cm3] * thickness[cm] * 0.1)``.
    """
    layers = (payload.get("properties") or {}).get("layers") or []

    depth_profile = []
    for depth in DEPTHS:
        soc_raw = _layer_value(layers, "soc", depth)
        bd_raw = _layer_value(layers, "bdod", depth)
        soc = soc_raw / SOC_FACTOR if soc_raw is not None else 0.0
        bd = bd_raw / BULK_DENSITY_FACTOR if bd_raw is not None else DEFAULT_BULK_DENSITY
        depth_profile.append(
            DepthLayer(depth=depth, soc=soc, bulk_density=round_half_up(bd, 2))
        )

    topsoil = depth_profile[: len(TOPSOIL_DEPTHS)]
    soc_stock = sum(
        layer.soc * layer.bulk_density * DEPTH_THICKNESS_CM[layer.depth] * 0.1
        for layer in topsoil
    )

    def _fraction(prop: str) -> int:
        values = _topsoil_values(layers, prop)
        return round_int(mean(values) / FRACTION_FACTOR) if values else 0

    sand, silt, clay = _fraction("sand"), _fraction("silt"), _fraction("clay")

    ph_values = _topsoil_values(layers, "phh2o")
    cec_values = _topsoil_values(layers, "cec")

    return SoilProfile(
        soc_stock_t_per_ha=round_half_up(soc_stock, 1),
        texture_class=classify_texture(sand, silt, clay),
        ph=round_half_up(mean(ph_values) / PH_FACTOR, 1) if ph_values else 0.0,
        bulk_density=round_half_up(mean(layer.bulk_density for layer in topsoil), 2),
        sand=sand,
        silt=silt,
        clay=clay,
        cec=round_half_up(mean(cec_values) / CEC_FACTOR, 1) if cec_values else 0.0,
        depth_profile=tuple(depth_profile),
    )


# Literature estimates by latitude band: (SOC t/ha, sand, silt, clay, pH, bulk density)
FALLBACK_BANDS: Dict[str, tuple[float, int, int, int, float, float]] = {
    "temperate": (28, 42, 35, 23, 7.2, 1.32),
    "subtropical": (22, 48, 30, 22, 6.8, 1.38),
    "tropical": (18, 38, 32, 30, 5.9, 1.25),
}
FALLBACK_DEPTH_MULTIPLIERS: tuple[float, ...] = (1.3, 1.1, 1.0, 0.7, 0.4)


def fallback_band(lat: float) -> str:
    """Return the latitude band used for literature soil estimates."""
    abs_lat = abs(lat)
    if abs_lat > 40:
        return "temperate"
    if abs_lat > 25:
        return "subtropical"
    return "tropical"


def fallback_soil_profile(lat: float, lng: float) -> SoilProfile:
    """Estimate a soil profile from published regional values.

    Used when SoilGrids cannot be reached. SOC varies by up to +/-10% with
    longitude so neighbouring projects do not receive identical estimates.
    """
    base_soc, sand, silt, clay, ph, bd = FALLBACK_BANDS[fallback_band(lat)]
    variation = ((math.sin(lng * 0.1) + 1) / 2) * 0.2 - 0.1
    base_soc = round_half_up(base_soc * (1 + variation), 1)

    depth_profile = tuple(
        DepthLayer(
            depth=depth,
            soc=round_half_up(base_soc * mult, 1),
            bulk_density=round_half_up(bd + i * 0.03, 2),
        )
        for i, (depth, mult) in enumerate(zip(DEPTHS, FALLBACK_DEPTH_MULTIPLIERS))
    )
    return SoilProfile(
        soc_stock_t_per_ha=base_soc,
        texture_class=classify_texture(sand, silt, clay),
        ph=ph,
        bulk_density=bd,
        sand=sand,
        silt=silt,
        clay=clay,
        cec=round_half_up(clay * 0.6 + base_soc * 0.3, 1),
        depth_profile=depth_profile,
        is_fallback=True,
    )
