"""Assembly of a :class:`MonitoringContext` from processed climate data."""

from __future__ import annotations

from terrasignal.analytics.anomaly import compute_anomalies, select_window
from terrasignal.schemas.climate import ProcessedClimate
from terrasignal.schemas.context import AnomalySummary, MonitoringContext

MOISTURE_DEFICIT_PCT = -20.0


def build_monitoring_context(
    climate: ProcessedClimate,
    window_start: str,
    window_end: str,
    *,
    soc_change: float | None = None,
    soc_change_percent: float | None = None,
) -> tuple[MonitoringContext, AnomalySummary]:
    """Compare the ``YYYY-MM`` monitoring window with the full record.

    Drought is flagged when the processed series recorded any drought
    event; a moisture deficit when precipitation fell more than 20% short.
    """
    window = select_window(climate.monthly_data, window_start, window_end)
    anomalies = compute_anomalies(window, climate.monthly_data)
    ctx = MonitoringContext(
        soc_change=soc_change,
        soc_change_percent=soc_change_percent,
        precip_anomaly=anomalies.precip_anomaly,
        temp_anomaly=anomalies.temp_anomaly,
        drought_occurred=climate.drought_events > 0,
        moisture_deficit=anomalies.precip_anomaly < MOISTURE_DEFICIT_PCT,
    )
    return ctx, anomalies
