from __future__ import annotations

"""Climate observation and aggregate records.

Daily observations arrive from the weather provider as parallel arrays; they
are normalised here into :class:`DailyObservation` rows so the aggregation
code can work on a single tabular shape.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Sequence

import pandas as pd

# Open-Meteo daily variable -> DailyObservation attribute
OPEN_METEO_FIELDS: Dict[str, str] = {
    "temperature_2m_mean": "temp_mean",
    "temperature_2m_min": "temp_min",
    "temperature_2m_max": "temp_max",
    "precipitation_sum": "precipitation",
    "et0_fao_evapotranspiration": "evapotranspiration",
}

OBSERVATION_COLUMNS = [
    "date",
    "temp_mean",
    "temp_min",
    "temp_max",
    "precipitation",
    "evapotranspiration",
]


@dataclass(frozen=True)
class DailyObservation:
    """One day of weather; any measurement may be missing."""

    date: date
    temp_mean: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    precipitation: float | None = None
    evapotranspiration: float | None = None


@dataclass(frozen=True)
class ClimateObservationSeries:
    """Chronologically ordered daily observations for one location."""

    observations: tuple[DailyObservation, ...] = ()
    latitude: float | None = None
    longitude: float | None = None

    def __len__(self) -> int:
        return len(self.observations)

    @classmethod
    def from_open_meteo(cls, payload: Dict[str, Any]) -> "ClimateObservationSeries":
        """Build a series from an Open-Meteo archive response."""
        daily = payload.get("daily") or {}
        times: Sequence[str] = daily.get("time") or []
        columns = {
            attr: list(daily.get(name) or []) for name, attr in OPEN_METEO_FIELDS.items()
        }

        def _at(values: List[Any], i: int) -> float | None:
            if i >= len(values) or values[i] is None:
                return None
            return float(values[i])

        rows = tuple(
            DailyObservation(
                date=date.fromisoformat(t[:10]),
                **{attr: _at(values, i) for attr, values in columns.items()},
            )
            for i, t in enumerate(times)
        )
        return cls(rows, payload.get("latitude"), payload.get("longitude"))

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "ClimateObservationSeries":
        """Build a series from a frame with :data:`OBSERVATION_COLUMNS`."""
        frame = df.copy()
        frame["date"] = pd.to_datetime(frame["date"])
        frame = frame.sort_values("date")
        rows = []
        for rec in frame.to_dict("records"):
            values = {
                col: (None if pd.isna(rec.get(col)) else float(rec[col]))
                for col in OBSERVATION_COLUMNS[1:]
            }
            rows.append(DailyObservation(date=rec["date"].date(), **values))
        return cls(tuple(rows))

    def to_dataframe(self) -> pd.DataFrame:
        """Return the observations as a DataFrame (missing values as NaN)."""
        if not self.observations:
            return pd.DataFrame(columns=OBSERVATION_COLUMNS).astype(
                {c: "float64" for c in OBSERVATION_COLUMNS[1:]}
            )
        df = pd.DataFrame(
            [
                {col: getattr(obs, col) for col in OBSERVATION_COLUMNS}
                for obs in self.observations
            ],
            columns=OBSERVATION_COLUMNS,
        )
        df["date"] = pd.to_datetime(df["date"])
        for col in OBSERVATION_COLUMNS[1:]:
            df[col] = pd.to_numeric(df[col], errors="coerce")
        return df


@dataclass(frozen=True)
class MonthlyClimate:
    """Calendar-month aggregate of daily observations."""

    month: str  # "YYYY-MM"
    year: int
    temp_mean: float
    temp_min: float
    temp_max: float
    precipitation: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "year": self.year,
            "tempMean": self.temp_mean,
            "tempMin": self.temp_min,
            "tempMax": self.temp_max,
            "precipitation": self.precipitation,
        }


@dataclass(frozen=True)
class AnnualTotal:
    year: int
    total: float


@dataclass(frozen=True)
class YearRange:
    start: int
    end: int


@dataclass(frozen=True)
class ProcessedClimate:
    """Derived climate statistics for one location and period."""

    mean_temp: float
    annual_precip: float
    drought_events: int
    growing_season_days: int
    precip_trend: float  # mm/yr
    temp_trend: float  # degC/yr
    monthly_data: tuple[MonthlyClimate, ...] = field(default_factory=tuple)
    annual_precip_totals: tuple[AnnualTotal, ...] = field(default_factory=tuple)
    year_range: YearRange | None = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the record with camelCase keys for JSON responses."""
        return {
            "meanTemp": self.mean_temp,
            "annualPrecip": self.annual_precip,
            "droughtEvents": self.drought_events,
            "growingSeasonDays": self.growing_season_days,
            "precipTrend": self.precip_trend,
            "tempTrend": self.temp_trend,
            "monthlyData": [m.to_dict() for m in self.monthly_data],
            "annualPrecipTotals": [
                {"year": a.year, "total": a.total} for a in self.annual_precip_totals
            ],
            "yearRange": (
                {"start": self.year_range.start, "end": self.year_range.end}
                if self.year_range
                else None
            ),
        }


@dataclass(frozen=True)
class SolarSummary:
    """Five-year averages from NASA POWER."""

    solar_radiation: float  # kWh/m2/day
    clear_sky_days: float
    wind_speed: float  # m/s

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solarRadiation": self.solar_radiation,
            "clearSkyDays": self.clear_sky_days,
            "windSpeed": self.wind_speed,
        }


__all__ = [
    "OPEN_METEO_FIELDS",
    "OBSERVATION_COLUMNS",
    "DailyObservation",
    "ClimateObservationSeries",
    "MonthlyClimate",
    "AnnualTotal",
    "YearRange",
    "ProcessedClimate",
    "SolarSummary",
]
