from __future__ import annotations

"""Climate context for an observed SOC change at a location."""

import logging
from typing import Any, Dict

from terrasignal.analytics.anomaly import monthly_anomalies, select_window
from terrasignal.analytics.climate import process_climate
from terrasignal.core.config import ConfigManager
from terrasignal.ingestion.open_meteo import OpenMeteoClient
from terrasignal.interpretation.context import build_monitoring_context
from terrasignal.interpretation.rules import generate_interpretation
from terrasignal.services.base import BaseService


class InterpretationService(BaseService):
    """Fetch climate, compare the monitoring window and run the rules."""

    def __init__(
        self,
        config: ConfigManager | None = None,
        *,
        climate_client: OpenMeteoClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(config, logger)
        self.climate_client = climate_client or OpenMeteoClient(self.config)

    def interpret(
        self,
        lat: float,
        lng: float,
        window_start: str,
        window_end: str,
        *,
        soc_change: float | None = None,
        soc_change_percent: float | None = None,
    ) -> Dict[str, Any]:
        """Return the monitoring context, anomalies and interpretations.

        ``window_start`` and ``window_end`` are ``YYYY-MM`` month keys.
        """
        climate = process_climate(self.climate_client.get_climate(lat, lng))
        ctx, anomalies = build_monitoring_context(
            climate,
            window_start,
            window_end,
            soc_change=soc_change,
            soc_change_percent=soc_change_percent,
        )
        window = select_window(climate.monthly_data, window_start, window_end)
        interpretations = generate_interpretation(ctx)
        self.logger.info(
            "%d interpretations for window %s..%s",
            len(interpretations),
            window_start,
            window_end,
        )
        return {
            "success": True,
            "context": ctx.to_dict(),
            "anomalies": anomalies.to_dict(),
            "monthlyAnomalies": [
                m.to_dict() for m in monthly_anomalies(window, climate.monthly_data)
            ],
            "interpretations": [i.to_dict() for i in interpretations],
        }
