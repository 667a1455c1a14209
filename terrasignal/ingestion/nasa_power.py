from __future__ import annotations

"""Client for NASA POWER monthly point data (agroclimatology community)."""

from datetime import date
from typing import Dict

from terrasignal.core.utils import round_half_up
from terrasignal.schemas.climate import SolarSummary
from .base import BaseClient, ProviderError

POWER_PARAMETERS = ("ALLSKY_SFC_SW_DWN", "CLRSKY_DAYS", "WS2M")
POWER_FILL_VALUE = -999


def average_monthly(values: Dict[str, float] | None) -> float:
    """Mean of the monthly values, ignoring the -999 fill value."""
    valid = [v for v in (values or {}).values() if v != POWER_FILL_VALUE]
    return round_half_up(sum(valid) / len(valid), 2) if valid else 0.0


class NasaPowerClient(BaseClient):
    """Fetch solar radiation, clear-sky days and wind speed averages."""

    provider = "NASA POWER"
    url_key = "nasa_power"

    def get_summary(
        self, lat: float, lng: float, today: date | None = None
    ) -> SolarSummary:
        """Average the last five complete years for ``lat``/``lng``."""
        end_year = (today or date.today()).year - 1
        params = {
            "parameters": ",".join(POWER_PARAMETERS),
            "community": "AG",
            "longitude": lng,
            "latitude": lat,
            "start": end_year - 4,
            "end": end_year,
            "format": "JSON",
        }
        data = self.get_json(self.base_url, params)
        parameters = ((data or {}).get("properties") or {}).get("parameter")
        if not parameters:
            raise ProviderError(self.provider, "no parameter data returned")
        return SolarSummary(
            solar_radiation=average_monthly(parameters.get("ALLSKY_SFC_SW_DWN")),
            clear_sky_days=average_monthly(parameters.get("CLRSKY_DAYS")),
            wind_speed=average_monthly(parameters.get("WS2M")),
        )
