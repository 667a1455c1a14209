"""
Module `analytics.climate` turns a daily weather series into the monthly and
annual statistics used across the package: calendar aggregates, drought
events, growing-season length and linear trends.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

import pandas as pd

from terrasignal.core.logger import Logger
from terrasignal.core.utils import round_half_up, round_int
from terrasignal.schemas.climate import (
    AnnualTotal,
    ClimateObservationSeries,
    DailyObservation,
    MonthlyClimate,
    ProcessedClimate,
    YearRange,
)
from .trend import linear_slope

log = Logger.get_logger(__name__)

DROUGHT_STREAK_DAYS = 30
DROUGHT_PRECIP_FRACTION = 0.5
GROWING_TEMP_THRESHOLD = 5.0
DEFAULT_WINDOW_YEARS = 5
MEASUREMENT_COLUMNS = ["temp_mean", "temp_min", "temp_max", "precipitation"]


def default_year_range(today: date | None = None) -> YearRange:
    """Return the fallback window of the last five years."""
    year = (today or date.today()).year
    return YearRange(start=year - DEFAULT_WINDOW_YEARS, end=year)


def _as_frame(
    series: ClimateObservationSeries | pd.DataFrame | Iterable[DailyObservation],
) -> pd.DataFrame:
    if isinstance(series, pd.DataFrame):
        df = series.copy()
        df["date"] = pd.to_datetime(df["date"])
        for col in MEASUREMENT_COLUMNS:
            if col not in df.columns:
                df[col] = float("nan")
            df[col] = pd.to_numeric(df[col], errors="coerce")
    elif isinstance(series, ClimateObservationSeries):
        df = series.to_dataframe()
    else:
        df = ClimateObservationSeries(tuple(series)).to_dataframe()
    return df.sort_values("date", kind="stable").reset_index(drop=True)


def count_drought_events(precip: Iterable[float], normal_daily: float) -> int:
    """Count dry spells of at least 30 consecutive days.

    A day is dry when it receives less than half the normal daily
    precipitation. An event is counted once, on the day its streak reaches
    30; longer streaks do not count again until a wet day resets them.
    """
    threshold = normal_daily * DROUGHT_PRECIP_FRACTION
    events = 0
    streak = 0
    for p in precip:
        if p < threshold:
            streak += 1
            if streak == DROUGHT_STREAK_DAYS:
                events += 1
        else:
            streak = 0
    return events


def longest_warm_run(temps: Iterable[float | None]) -> int:
    """Return the longest run of days with mean temperature above 5 degC."""
    best = 0
    run = 0
    for t in temps:
        if t is not None and not pd.isna(t) and t > GROWING_TEMP_THRESHOLD:
            run += 1
            best = max(best, run)
        else:
            run = 0
    return best


def process_climate(
    series: ClimateObservationSeries | pd.DataFrame | Iterable[DailyObservation],
    *,
    today: date | None = None,
) -> ProcessedClimate:
    """Aggregate a daily observation series into :class:`ProcessedClimate`.

    Missing precipitation counts as 0 mm; missing temperatures are skipped
    in means and break growing-season runs. Days with no measurement at all
    still count, so their months appear with zero values. An empty or all-null
    series yields zeros, empty sequences and the default five-year window
    rather than an error.
    """
    df = _as_frame(series)
    if df.empty or df[MEASUREMENT_COLUMNS].isna().to_numpy().all():
        log.debug("No climate measurements; returning zeroed aggregates")
        return ProcessedClimate(
            mean_temp=0.0,
            annual_precip=0.0,
            drought_events=0,
            growing_season_days=0,
            precip_trend=0.0,
            temp_trend=0.0,
            monthly_data=(),
            annual_precip_totals=(),
            year_range=default_year_range(today),
        )

    df["year"] = df["date"].dt.year
    df["month"] = df["date"].dt.strftime("%Y-%m")
    precip = df["precipitation"].fillna(0.0)

    mean_temp = df["temp_mean"].mean()
    mean_temp = 0.0 if pd.isna(mean_temp) else float(mean_temp)

    yearly = precip.groupby(df["year"]).sum().sort_index()
    annual_totals = tuple(
        AnnualTotal(year=int(y), total=round_int(t)) for y, t in yearly.items()
    )
    avg_precip = (
        sum(a.total for a in annual_totals) / len(annual_totals) if annual_totals else 0.0
    )

    monthly = (
        df.assign(precip_filled=precip)
        .groupby("month", sort=True)
        .agg(
            temp_mean=("temp_mean", "mean"),
            temp_min=("temp_min", "mean"),
            temp_max=("temp_max", "mean"),
            precipitation=("precip_filled", "sum"),
        )
    )

    def _temp(value) -> float:
        return 0.0 if pd.isna(value) else round_half_up(float(value), 1)

    monthly_data = tuple(
        MonthlyClimate(
            month=str(key),
            year=int(str(key)[:4]),
            temp_mean=_temp(row.temp_mean),
            temp_min=_temp(row.temp_min),
            temp_max=_temp(row.temp_max),
            precipitation=round_int(float(row.precipitation)),
        )
        for key, row in monthly.iterrows()
    )
    log.debug("Aggregated %d days into %d months", len(df), len(monthly_data))

    drought_events = count_drought_events(precip.tolist(), avg_precip / 365)

    growing = [
        longest_warm_run(grp["temp_mean"].tolist())
        for _, grp in df.groupby("year", sort=True)
    ]
    growing_season_days = round_int(sum(growing) / len(growing)) if growing else 0

    precip_trend = linear_slope(
        [a.year for a in annual_totals], [a.total for a in annual_totals]
    )
    annual_temp = df.dropna(subset=["temp_mean"]).groupby("year")["temp_mean"].mean()
    temp_trend = linear_slope(
        annual_temp.index.tolist(), annual_temp.tolist()
    )

    years = [a.year for a in annual_totals]
    year_range = (
        YearRange(start=min(years), end=max(years))
        if years
        else default_year_range(today)
    )

    return ProcessedClimate(
        mean_temp=round_half_up(mean_temp, 1),
        annual_precip=round_half_up(avg_precip, 1),
        drought_events=drought_events,
        growing_season_days=growing_season_days,
        precip_trend=round_half_up(precip_trend, 1),
        temp_trend=round_half_up(temp_trend, 2),
        monthly_data=monthly_data,
        annual_precip_totals=annual_totals,
        year_range=year_range,
    )
