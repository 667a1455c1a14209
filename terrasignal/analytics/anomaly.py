"""Comparison of a monitoring window against the calendar-month baseline."""

from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

from terrasignal.core.utils import round_half_up
from terrasignal.schemas.climate import MonthlyClimate
from terrasignal.schemas.context import AnomalySummary, MonthlyAnomaly


def _calendar_month(month_key: str) -> str:
    return month_key[5:7]


def baseline_by_calendar_month(
    months: Sequence[MonthlyClimate],
) -> Dict[str, Dict[str, float]]:
    """Return mean temperature and precipitation per calendar month (``MM``)."""
    if not months:
        return {}
    df = pd.DataFrame(
        {
            "cal": [_calendar_month(m.month) for m in months],
            "temp": [m.temp_mean for m in months],
            "precip": [m.precipitation for m in months],
        }
    )
    grouped = df.groupby("cal").mean()
    return {
        str(cal): {"temp": float(row["temp"]), "precip": float(row["precip"])}
        for cal, row in grouped.iterrows()
    }


def select_window(
    months: Sequence[MonthlyClimate], start: str, end: str
) -> List[MonthlyClimate]:
    """Return the months whose ``YYYY-MM`` key lies within ``[start, end]``."""
    return [m for m in months if start <= m.month <= end]


def compute_anomalies(
    monitoring_months: Sequence[MonthlyClimate],
    all_months: Sequence[MonthlyClimate],
) -> AnomalySummary:
    """Deviation of the monitoring window from the multi-year baseline.

    Each monitoring month is compared with the mean of the same calendar
    month across ``all_months``. Precipitation is compared as window totals
    (one baseline mean per monitoring month) and reported in percent;
    temperature as the mean per-month difference in degC.
    """
    if not monitoring_months or not all_months:
        return AnomalySummary(precip_anomaly=0.0, temp_anomaly=0.0)

    baseline = baseline_by_calendar_month(all_months)
    total_monitoring = 0.0
    total_baseline = 0.0
    temp_diffs: List[float] = []
    for m in monitoring_months:
        ref = baseline.get(_calendar_month(m.month))
        if ref is None:
            continue
        total_monitoring += m.precipitation
        total_baseline += ref["precip"]
        temp_diffs.append(m.temp_mean - ref["temp"])

    precip_anomaly = (
        (total_monitoring - total_baseline) / total_baseline * 100
        if total_baseline > 0
        else 0.0
    )
    temp_anomaly = sum(temp_diffs) / len(temp_diffs) if temp_diffs else 0.0
    return AnomalySummary(
        precip_anomaly=round_half_up(precip_anomaly, 1),
        temp_anomaly=round_half_up(temp_anomaly, 2),
    )


def monthly_anomalies(
    monitoring_months: Sequence[MonthlyClimate],
    all_months: Sequence[MonthlyClimate],
) -> List[MonthlyAnomaly]:
    """Per-month deviations of the monitoring window, for reporting."""
    baseline = baseline_by_calendar_month(all_months)
    rows = []
    for m in monitoring_months:
        ref = baseline.get(_calendar_month(m.month))
        if ref is None:
            continue
        rows.append(
            MonthlyAnomaly(
                month=m.month,
                temp_diff=round_half_up(m.temp_mean - ref["temp"], 2),
                precip_diff=round_half_up(m.precipitation - ref["precip"], 1),
                baseline_temp=round_half_up(ref["temp"], 1),
                baseline_precip=round_half_up(ref["precip"], 1),
            )
        )
    return rows
