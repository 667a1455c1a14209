# pylint: disable=missing-module-docstring,missing-function-docstring,invalid-name,unused-argument,redefined-outer-name
from datetime import date, timedelta

import pytest

from terrasignal.schemas.assessment import ProjectDescriptor
from terrasignal.schemas.climate import ClimateObservationSeries, DailyObservation
from terrasignal.schemas.soil import DepthLayer, SoilProfile


class FakeResponse:
    """Minimal stand-in for :class:`requests.Response`."""

    def __init__(self, payload=None, status_code=200, reason="OK", json_error=None):
        self._payload = payload
        self.status_code = status_code
        self.reason = reason
        self._json_error = json_error

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class FakeSession:
    """Session returning queued responses (or raising queued exceptions)."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def no_sleep(monkeypatch):
    sleeps = []
    monkeypatch.setattr("time.sleep", sleeps.append)
    return sleeps


def daily_series(start, precip, temp=10.0):
    """Build a series with one observation per value of ``precip``."""
    d0 = date.fromisoformat(start)
    return ClimateObservationSeries(
        tuple(
            DailyObservation(
                date=d0 + timedelta(days=i),
                temp_mean=temp,
                temp_min=temp - 5,
                temp_max=temp + 5,
                precipitation=p,
            )
            for i, p in enumerate(precip)
        )
    )


@pytest.fixture
def make_series():
    return daily_series


@pytest.fixture
def clay_soil():
    return SoilProfile(
        soc_stock_t_per_ha=60.0,
        texture_class="Clay",
        ph=6.5,
        bulk_density=1.3,
        sand=20,
        silt=20,
        clay=60,
        cec=25.0,
        depth_profile=(DepthLayer("0-5cm", 20.0, 1.3),),
    )


@pytest.fixture
def projects():
    return [
        ProjectDescriptor("p1", "Gobi Steppe", "cashmere", 50000, 44.5, 103.2, "Mongolia"),
        ProjectDescriptor("p2", "Chaco Ranch", "leather", 12000, -23.1, -61.0, "Argentina"),
        ProjectDescriptor("p3", "Deccan Cotton", "cotton", 800, 19.9, 75.3, "India"),
    ]


@pytest.fixture
def response_cls():
    return FakeResponse


@pytest.fixture
def session_cls():
    return FakeSession
