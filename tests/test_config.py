"""Test suite for ConfigManager: verifying loading formats, defaults, and merging behavior."""

import json
import pytest

import yaml
import toml

from terrasignal.core.config import ConfigManager, ConfigValidationError


def test_defaults():
    """Scoring and batching defaults are available without a file."""
    cfg = ConfigManager()
    assert cfg.get_batch_size() == 4
    assert cfg.get_carbon_price() == 15.0
    assert cfg.get("default_commodity") == "cotton"
    assert cfg.get("soil_timeout") == 15
    assert ".parquet" in cfg.get("supported_project_formats")


def test_load_json(tmp_path):
    """Ensure JSON files load correctly and default values are returned for missing keys."""
    cfg_file = tmp_path / "cfg.json"
    data = {"portfolio_batch_size": 2, "carbon_price_usd_per_tco2": 22.5}
    cfg_file.write_text(json.dumps(data), encoding="utf-8")

    cfg = ConfigManager()
    cfg.load(str(cfg_file))

    assert cfg.get_batch_size() == 2
    assert cfg.get_carbon_price() == 22.5
    # missing key uses default
    assert cfg.get("missing", "def") == "def"


def test_load_yaml_provider_urls(tmp_path):
    """Verify a provider_urls mapping overrides only the named endpoints."""
    cfg_file = tmp_path / "cfg.yaml"
    data = {"provider_urls": {"soilgrids": "http://soil.local"}, "max_retries": 1}
    cfg_file.write_text(yaml.safe_dump(data), encoding="utf-8")

    cfg = ConfigManager(str(cfg_file))

    assert cfg.provider_url("soilgrids") == "http://soil.local"
    assert cfg.provider_url("open_meteo").startswith("https://archive-api.open-meteo.com")
    assert cfg.get("max_retries") == 1


def test_load_toml(tmp_path):
    """Check TOML file loading and value retrieval functionality."""
    cfg_file = tmp_path / "cfg.toml"
    data = {"default_commodity": "wool", "default_hectares": 250}
    cfg_file.write_text(toml.dumps(data), encoding="utf-8")

    cfg = ConfigManager()
    cfg.load(str(cfg_file))

    assert cfg.get("default_commodity") == "wool"
    assert cfg.get("default_hectares") == 250


def test_load_unsupported_extension(tmp_path):
    """Confirm that loading unsupported file extensions raises ConfigValidationError."""
    cfg_file = tmp_path / "cfg.txt"
    cfg_file.write_text("whatever", encoding="utf-8")

    cfg = ConfigManager()
    with pytest.raises(ConfigValidationError):
        cfg.load(str(cfg_file))


def test_load_invalid_content(tmp_path):
    """Ensure invalid JSON content triggers a ConfigValidationError."""
    cfg_file = tmp_path / "bad.json"
    cfg_file.write_text("not a json!", encoding="utf-8")

    cfg = ConfigManager()
    with pytest.raises(ConfigValidationError):
        cfg.load(str(cfg_file))


def test_load_non_mapping(tmp_path):
    cfg_file = tmp_path / "list.yaml"
    cfg_file.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError):
        ConfigManager(str(cfg_file))


def test_unknown_provider():
    with pytest.raises(ConfigValidationError):
        ConfigManager().provider_url("nowhere")


def test_merge_configs():
    """Test merging two ConfigManager instances combines configs and endpoints."""
    cfg1 = ConfigManager()
    cfg1.config = {"a": 1}
    cfg1.supported_project_formats = [".csv", ".json"]

    cfg2 = ConfigManager()
    cfg2.config = {"b": 2}
    cfg2.supported_project_formats = [".json", ".parquet"]
    cfg2.provider_urls["nasa_power"] = "http://power.local"

    cfg1.merge(cfg2)

    assert cfg1.get("a") == 1
    assert cfg1.get("b") == 2
    # formats merged uniquely, preserving order
    assert cfg1.supported_project_formats == [".csv", ".json", ".parquet"]
    assert cfg1.provider_url("nasa_power") == "http://power.local"


def test_merge_wrong_type():
    """Assert merging with a non-ConfigManager object raises a TypeError."""
    cfg = ConfigManager()
    with pytest.raises(TypeError):
        cfg.merge("not a config manager")
