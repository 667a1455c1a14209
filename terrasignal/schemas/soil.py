from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

# Soil records share the canonical units of the processed SoilGrids output:
# SOC stock in t C/ha (0-30 cm), concentrations in g/kg, bulk density in
# g/cm3, texture fractions in percent and CEC in cmol(c)/kg.


@dataclass(frozen=True)
class DepthLayer:
    """SOC concentration and bulk density for one depth band."""

    depth: str  # e.g. "0-5cm"
    soc: float  # g/kg
    bulk_density: float  # g/cm3

    def to_dict(self) -> Dict[str, Any]:
        return {"depth": self.depth, "soc": self.soc, "bulkDensity": self.bulk_density}


@dataclass(frozen=True)
class SoilProfile:
    """Topsoil summary for one location."""

    soc_stock_t_per_ha: float
    texture_class: str
    ph: float
    bulk_density: float
    sand: float
    silt: float
    clay: float
    cec: float
    depth_profile: tuple[DepthLayer, ...] = field(default_factory=tuple)
    is_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "socStock_tPerHa": self.soc_stock_t_per_ha,
            "textureClass": self.texture_class,
            "pH": self.ph,
            "bulkDensity": self.bulk_density,
            "sand": self.sand,
            "silt": self.silt,
            "clay": self.clay,
            "cec": self.cec,
            "depthProfile": [layer.to_dict() for layer in self.depth_profile],
            "isFallback": self.is_fallback,
        }


__all__ = ["DepthLayer", "SoilProfile"]
