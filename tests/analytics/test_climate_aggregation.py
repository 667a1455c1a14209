from datetime import date, timedelta

import pandas as pd
import pytest

from terrasignal.analytics.climate import (
    count_drought_events,
    longest_warm_run,
    process_climate,
)
from terrasignal.schemas.climate import ClimateObservationSeries, DailyObservation


@pytest.mark.parametrize("days,expected", [(29, 0), (30, 1), (31, 1), (60, 1)])
def test_drought_counted_once_per_streak(days, expected):
    assert count_drought_events([0.0] * days, normal_daily=1.0) == expected


def test_drought_streak_resets_on_wet_day():
    precip = [0.0] * 30 + [5.0] + [0.0] * 30
    assert count_drought_events(precip, normal_daily=1.0) == 2


def test_longest_warm_run_skips_missing():
    assert longest_warm_run([6, 7, None, 8, 9, 10, 4]) == 3
    assert longest_warm_run([]) == 0


def test_empty_series_returns_zeros_and_default_window():
    result = process_climate(ClimateObservationSeries(), today=date(2026, 3, 1))
    assert result.mean_temp == 0.0
    assert result.annual_precip == 0.0
    assert result.drought_events == 0
    assert result.growing_season_days == 0
    assert result.monthly_data == ()
    assert result.annual_precip_totals == ()
    assert (result.year_range.start, result.year_range.end) == (2021, 2026)


def test_all_null_series_returns_zeros():
    series = ClimateObservationSeries(
        tuple(DailyObservation(date=date(2022, 1, d)) for d in range(1, 11))
    )
    result = process_climate(series, today=date(2026, 3, 1))
    assert result.mean_temp == 0.0
    assert result.annual_precip == 0.0
    assert result.precip_trend == 0.0
    assert result.temp_trend == 0.0
    assert result.monthly_data == ()
    assert result.annual_precip_totals == ()


def test_monthly_data_one_entry_per_month_ascending(make_series):
    result = process_climate(make_series("2020-01-01", [1.0] * 91))
    months = [m.month for m in result.monthly_data]
    assert months == ["2020-01", "2020-02", "2020-03"]
    assert [m.precipitation for m in result.monthly_data] == [31, 29, 31]
    assert result.monthly_data[0].temp_mean == pytest.approx(10.0)
    assert result.monthly_data[0].temp_max == pytest.approx(15.0)


def test_annual_precip_is_mean_of_totals():
    obs = [
        DailyObservation(date=date(2019 + i, 1, 1), temp_mean=10.0, precipitation=100.0 * (i + 1))
        for i in range(5)
    ]
    result = process_climate(obs)

    totals = [a.total for a in result.annual_precip_totals]
    assert totals == [100, 200, 300, 400, 500]
    assert result.annual_precip == pytest.approx(sum(totals) / len(totals))
    assert result.precip_trend == pytest.approx(100.0)
    assert result.temp_trend == pytest.approx(0.0)
    assert (result.year_range.start, result.year_range.end) == (2019, 2023)


def test_drought_detected_in_series(make_series):
    result = process_climate(make_series("2021-01-01", [0.0] * 40 + [2.0] * 325))
    assert result.drought_events == 1
    assert result.annual_precip == pytest.approx(650.0)


def test_growing_season_does_not_cross_years(make_series):
    result = process_climate(make_series("2020-12-22", [1.0] * 20, temp=12.0))
    assert result.growing_season_days == 10


def test_accepts_dataframe():
    df = pd.DataFrame(
        {
            "date": ["2021-02-01", "2021-01-01"],
            "temp_mean": [4.0, 2.0],
            "precipitation": [None, 3.0],
        }
    )
    result = process_climate(df)
    assert [m.month for m in result.monthly_data] == ["2021-01", "2021-02"]
    assert result.mean_temp == pytest.approx(3.0)
    assert result.annual_precip == pytest.approx(3.0)


def _days(start, values):
    """Observations from ``start``; ``None`` entries are days with no data."""
    first = date.fromisoformat(start)
    out = []
    for i, v in enumerate(values):
        day = first + timedelta(days=i)
        if v is None:
            out.append(DailyObservation(date=day))
        else:
            temp, precip = v
            out.append(DailyObservation(date=day, temp_mean=temp, precipitation=precip))
    return out


def test_empty_day_extends_dry_streak():
    values = [(10.0, 0.0)] * 29 + [None] + [(10.0, 2.0)] * 335
    result = process_climate(_days("2021-01-01", values))
    assert result.drought_events == 1


def test_empty_day_breaks_warm_run():
    values = [(12.0, 1.0)] * 100 + [None] + [(12.0, 1.0)] * 99
    result = process_climate(_days("2021-01-01", values))
    assert result.growing_season_days == 100


def test_month_of_empty_days_keeps_its_entry():
    values = [(3.0, 1.0)] * 31 + [None] * 28
    result = process_climate(_days("2021-01-01", values))
    assert [m.month for m in result.monthly_data] == ["2021-01", "2021-02"]
    february = result.monthly_data[1]
    assert february.precipitation == 0
    assert february.temp_mean == 0.0
    assert result.monthly_data[0].precipitation == 31
