"""Soil texture classification and soil-profile processing."""

from .texture import TEXTURE_CLASSES, classify_texture
from .profile import fallback_soil_profile, process_soilgrids

__all__ = [
    "TEXTURE_CLASSES",
    "classify_texture",
    "fallback_soil_profile",
    "process_soilgrids",
]
