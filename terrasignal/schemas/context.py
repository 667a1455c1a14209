from __future__ import annotations

"""Inputs and outputs of the climate-context interpretation."""

from dataclasses import dataclass
from typing import Any, Dict, Literal

Severity = Literal["positive", "neutral", "warning", "alert"]


@dataclass(frozen=True)
class AnomalySummary:
    """Monitoring-window deviation from the calendar-month baseline."""

    precip_anomaly: float  # percent, negative = deficit
    temp_anomaly: float  # degC

    def to_dict(self) -> Dict[str, Any]:
        return {"precipAnomaly": self.precip_anomaly, "tempAnomaly": self.temp_anomaly}


@dataclass(frozen=True)
class MonthlyAnomaly:
    """Deviation of one monitoring month from its calendar-month baseline."""

    month: str
    temp_diff: float
    precip_diff: float
    baseline_temp: float
    baseline_precip: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "tempDiff": self.temp_diff,
            "precipDiff": self.precip_diff,
            "baselineTemp": self.baseline_temp,
            "baselinePrecip": self.baseline_precip,
        }


@dataclass(frozen=True)
class MonitoringContext:
    """SOC change observed in a monitoring period and its climate backdrop."""

    soc_change: float | None  # t C/ha change from baseline
    soc_change_percent: float | None
    precip_anomaly: float
    temp_anomaly: float
    drought_occurred: bool
    moisture_deficit: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "socChange": self.soc_change,
            "socChangePercent": self.soc_change_percent,
            "precipAnomaly": self.precip_anomaly,
            "tempAnomaly": self.temp_anomaly,
            "droughtOccurred": self.drought_occurred,
            "moistureDeficit": self.moisture_deficit,
        }


@dataclass(frozen=True)
class Interpretation:
    headline: str
    body: str
    severity: Severity

    def to_dict(self) -> Dict[str, Any]:
        return {"headline": self.headline, "body": self.body, "severity": self.severity}


__all__ = [
    "Severity",
    "AnomalySummary",
    "MonthlyAnomaly",
    "MonitoringContext",
    "Interpretation",
]
