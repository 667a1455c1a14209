from unittest.mock import MagicMock

import pytest

from terrasignal.ingestion.base import ProviderError
from terrasignal.schemas.climate import SolarSummary
from terrasignal.schemas.commodity import CommodityPriceData
from terrasignal.services.profile import ProfileService, find_project


@pytest.fixture
def clients(make_series, clay_soil):
    climate = MagicMock()
    # 1200 mm over one year -> humid
    climate.get_climate.return_value = make_series("2023-01-01", [1200 / 365] * 365)
    soil = MagicMock()
    soil.get_soil.return_value = clay_soil
    commodity = MagicMock()
    commodity.get_prices.return_value = CommodityPriceData("cotton", context_text="x")
    nasa = MagicMock()
    nasa.get_summary.return_value = SolarSummary(5.2, 10.0, 3.1)
    return {
        "climate_client": climate,
        "soil_client": soil,
        "commodity_client": commodity,
        "nasa_client": nasa,
    }


def test_profile_for_coordinates(clients):
    out = ProfileService(**clients).build(12.5, 77.0)

    assert out["success"] is True
    assert out["coordinates"] == {"lat": 12.5, "lng": 77.0}
    assert out["project"] is None
    assert out["errors"] == {"climate": None, "soil": None, "commodity": None, "nasa": None}
    assert out["nasa"]["solarRadiation"] == 5.2
    deg = out["degradation"]
    assert deg["projectId"] == "custom"
    assert deg["socDeficit_tPerHa"] == 40.0
    assert deg["carbonValue_usdPerHa"] == 1761
    clients["commodity_client"].get_prices.assert_called_once_with("cotton")


def test_profile_for_project(clients, projects):
    project = find_project(projects, "p1")
    out = ProfileService(**clients).build(project=project)
    assert out["coordinates"] == {"lat": 44.5, "lng": 103.2}
    assert out["project"]["name"] == "Gobi Steppe"
    assert out["degradation"]["projectId"] == "p1"
    clients["commodity_client"].get_prices.assert_called_once_with("cashmere")


def test_source_failures_are_reported_by_name(clients):
    clients["climate_client"].get_climate.side_effect = ProviderError("Open-Meteo", "HTTP 502")
    clients["nasa_client"].get_summary.side_effect = RuntimeError("timeout")
    out = ProfileService(**clients).build(1.0, 2.0)

    assert out["climate"] is None
    assert out["errors"]["climate"] == "Open-Meteo: HTTP 502"
    assert out["errors"]["nasa"] == "timeout"
    assert out["errors"]["soil"] is None
    assert out["soil"] is not None
    assert out["degradation"] is None


def test_requires_location(clients):
    with pytest.raises(ValueError):
        ProfileService(**clients).build()


def test_find_project_unknown(projects):
    with pytest.raises(KeyError):
        find_project(projects, "nope")
