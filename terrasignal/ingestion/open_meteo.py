from __future__ import annotations

"""Client for the Open-Meteo historical weather (ERA5) archive."""

from datetime import date

from terrasignal.schemas.climate import OPEN_METEO_FIELDS, ClimateObservationSeries
from .base import BaseClient


def default_window(today: date | None = None, years: int = 5) -> tuple[str, str]:
    """Return ISO start/end dates covering the last ``years`` years."""
    end = today or date.today()
    try:
        start = end.replace(year=end.year - years)
    except ValueError:  # 29 February
        start = end.replace(year=end.year - years, day=28)
    return start.isoformat(), end.isoformat()


class OpenMeteoClient(BaseClient):
    """Fetch daily temperature, precipitation and ET0 for a point."""

    provider = "Open-Meteo"
    url_key = "open_meteo"
    SOURCE = "Open-Meteo Historical Weather API (ERA5)"

    def get_climate(
        self,
        lat: float,
        lng: float,
        start: str | None = None,
        end: str | None = None,
    ) -> ClimateObservationSeries:
        """Return the daily series for ``lat``/``lng``.

        Without explicit dates the last five years up to today are requested.
        """
        years = int(self.config.get("default_window_years", 5))
        default_start, default_end = default_window(years=years)
        params = {
            "latitude": lat,
            "longitude": lng,
            "start_date": start or default_start,
            "end_date": end or default_end,
            "daily": ",".join(OPEN_METEO_FIELDS),
            "timezone": "auto",
        }
        self.logger.info(
            "Requesting climate for (%s, %s) %s..%s",
            lat,
            lng,
            params["start_date"],
            params["end_date"],
            extra={"provider": self.provider},
        )
        payload = self.get_json(self.base_url, params)
        return ClimateObservationSeries.from_open_meteo(payload)
