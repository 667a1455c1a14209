from __future__ import annotations

"""Client for ISRIC SoilGrids 2.0 point queries."""

from terrasignal.schemas.soil import SoilProfile
from terrasignal.soil.profile import (
    DEPTHS,
    SOIL_PROPERTIES,
    fallback_soil_profile,
    process_soilgrids,
)
from .base import BaseClient, ProviderError


class SoilGridsClient(BaseClient):
    """Fetch layered soil properties, falling back to literature estimates.

    SoilGrids is a beta service and is frequently unavailable; any failure
    is logged and replaced by :func:`fallback_soil_profile` with
    ``is_fallback=True``.
    """

    provider = "SoilGrids"
    url_key = "soilgrids"
    SOURCE = "ISRIC SoilGrids 2.0 (250m resolution)"
    FALLBACK_SOURCE = (
        "Estimated from regional literature values (SoilGrids API unavailable)"
    )

    def __init__(self, config=None, **kwargs) -> None:
        super().__init__(config, **kwargs)
        if "timeout" not in kwargs:
            self.timeout = float(self.config.get("soil_timeout", 15))

    def fetch_raw(self, lat: float, lng: float) -> dict:
        params = {
            "lat": lat,
            "lon": lng,
            "property": list(SOIL_PROPERTIES),
            "depth": list(DEPTHS),
            "value": "mean",
        }
        return self.get_json(self.base_url, params)

    def get_soil(self, lat: float, lng: float) -> SoilProfile:
        """Return the processed soil profile for ``lat``/``lng``."""
        try:
            payload = self.fetch_raw(lat, lng)
            return process_soilgrids(payload)
        except (ProviderError, KeyError, TypeError, AttributeError) as err:
            self.logger.warning(
                "No soil data for (%s, %s), using fallback values: %s",
                lat,
                lng,
                err,
                extra={"provider": self.provider},
            )
            return fallback_soil_profile(lat, lng)
