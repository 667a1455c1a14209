from __future__ import annotations

"""Single-source lookups wrapped in ``success``/``data``/``source`` envelopes."""

from typing import Any, Dict

from terrasignal.analytics.climate import process_climate
from terrasignal.core.config import ConfigManager
from terrasignal.ingestion.open_meteo import OpenMeteoClient
from terrasignal.ingestion.soilgrids import SoilGridsClient
from terrasignal.ingestion.worldbank import WorldBankClient


def climate_response(
    lat: float,
    lng: float,
    start: str | None = None,
    end: str | None = None,
    *,
    client: OpenMeteoClient | None = None,
    config: ConfigManager | None = None,
) -> Dict[str, Any]:
    """Fetch and aggregate daily climate for a point."""
    client = client or OpenMeteoClient(config)
    climate = process_climate(client.get_climate(lat, lng, start, end))
    return {
        "success": True,
        "data": climate.to_dict(),
        "source": OpenMeteoClient.SOURCE,
        "coordinates": {"lat": lat, "lng": lng},
    }


def soil_response(
    lat: float,
    lng: float,
    *,
    client: SoilGridsClient | None = None,
    config: ConfigManager | None = None,
) -> Dict[str, Any]:
    client = client or SoilGridsClient(config)
    soil = client.get_soil(lat, lng)
    return {
        "success": True,
        "data": soil.to_dict(),
        "source": (
            SoilGridsClient.FALLBACK_SOURCE if soil.is_fallback else SoilGridsClient.SOURCE
        ),
        "isFallback": soil.is_fallback,
        "coordinates": {"lat": lat, "lng": lng},
    }


def commodity_response(
    commodity: str,
    *,
    client: WorldBankClient | None = None,
    config: ConfigManager | None = None,
) -> Dict[str, Any]:
    client = client or WorldBankClient(config)
    data = client.get_prices(commodity)
    return {
        "success": True,
        "data": data.to_dict(),
        "source": (
            WorldBankClient.SOURCE if data.prices else WorldBankClient.CONTEXT_SOURCE
        ),
    }
