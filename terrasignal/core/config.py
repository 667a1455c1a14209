"""core.config
---------------

Configuration loader/manager for terrasignal. Provides a central API for
loading settings from YAML/TOML/JSON and retrieving them via
:py:meth:`ConfigManager.get`.
"""

import os
import json
import yaml
import toml


class ConfigValidationError(Exception):
    """Raised when configuration loading or validation fails."""


class ConfigManager:
    """
    Loads and manages configuration from file or defaults.
    Provides a central entry point for provider endpoints, batch sizes and
    the economic constants used by the restoration scoring.
    """

    # Upstream data providers
    PROVIDER_URLS: dict[str, str] = {
        "open_meteo": "https://archive-api.open-meteo.com/v1/archive",
        "soilgrids": "https://rest.isric.org/soilgrids/v2.0/properties/query",
        "world_bank": "https://api.worldbank.org/v2/country/WLD/indicator",
        "nasa_power": "https://power.larc.nasa.gov/api/temporal/monthly/point",
    }

    # Supported tabular inputs for project portfolios
    SUPPORTED_PROJECT_FORMATS: tuple[str, ...] = (
        ".csv",
        ".parquet",
        ".json",
        ".yaml",
        ".yml",
    )

    DEFAULT_BATCH_SIZE: int = 4
    DEFAULT_CARBON_PRICE: float = 15.0
    DEFAULT_HECTARES: float = 1000.0
    DEFAULT_COMMODITY: str = "cotton"
    DEFAULT_WINDOW_YEARS: int = 5

    def __init__(self, config_path=None):
        self.config = {
            "portfolio_batch_size": self.DEFAULT_BATCH_SIZE,
            "carbon_price_usd_per_tco2": self.DEFAULT_CARBON_PRICE,
            "default_hectares": self.DEFAULT_HECTARES,
            "default_commodity": self.DEFAULT_COMMODITY,
            "default_window_years": self.DEFAULT_WINDOW_YEARS,
            "http_timeout": 30,
            "soil_timeout": 15,
            "max_retries": 3,
        }
        self.provider_urls = dict(self.PROVIDER_URLS)
        self.supported_project_formats = list(self.SUPPORTED_PROJECT_FORMATS)
        if config_path:
            self.load(config_path)

    def load(self, path: str) -> None:
        """
        Load configuration from a file (YAML, TOML, or JSON).
        Overwrites existing keys in self.config; a ``provider_urls`` mapping
        is merged into the provider endpoints instead.
        """
        ext = os.path.splitext(path)[1].lower()
        try:
            with open(path, "r", encoding="utf-8") as f:
                if ext in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                elif ext == ".toml":
                    data = toml.load(f)
                elif ext == ".json":
                    data = json.load(f)
                else:
                    raise ConfigValidationError(f"Unsupported config format: {ext}")
        except Exception as e:
            raise ConfigValidationError(
                f"Failed to load config from {path}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise ConfigValidationError(f"Config file {path} did not produce a dict")
        urls = data.pop("provider_urls", None)
        if urls is not None:
            if not isinstance(urls, dict):
                raise ConfigValidationError("provider_urls must be a mapping")
            self.provider_urls.update(urls)
        self.config.update(data)

    def get(self, key, default=None):
        """
        Retrieve a configuration value by key, or return `default` if not present.
        This method retrieves both config parameters and default attributes like
        `provider_urls` and `supported_project_formats`.

        Args:
            key (str): The configuration parameter to look up.
            default:  The value to return if `key` is not found.
        """
        if key in self.config:
            return self.config.get(key, default)
        elif hasattr(self, key):
            return getattr(self, key)
        else:
            return default

    def merge(self, other: "ConfigManager") -> None:
        """
        Merge another ConfigManager into this one.
        Values in other.config override this.config, provider URLs likewise.
        """
        if not isinstance(other, ConfigManager):
            raise TypeError("Can only merge ConfigManager instances")
        self.config.update(other.config)
        self.provider_urls.update(other.provider_urls)
        self.supported_project_formats = list(
            dict.fromkeys(
                self.supported_project_formats + other.supported_project_formats
            )
        )

    def provider_url(self, name: str) -> str:
        """Return the base URL configured for provider ``name``."""
        try:
            return self.provider_urls[name]
        except KeyError as e:
            raise ConfigValidationError(f"Unknown provider: {name}") from e

    def get_batch_size(self) -> int:
        """Return the portfolio fan-out width (at least 1)."""
        return max(1, int(self.get("portfolio_batch_size", self.DEFAULT_BATCH_SIZE)))

    def get_carbon_price(self) -> float:
        """Return the carbon price in USD per tonne CO2e."""
        return float(self.get("carbon_price_usd_per_tco2", self.DEFAULT_CARBON_PRICE))
