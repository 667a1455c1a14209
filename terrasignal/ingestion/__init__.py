"""HTTP clients for the climate, soil, commodity and solar data providers."""

from .base import BaseClient, MissingDataError, ProviderError
from .nasa_power import NasaPowerClient
from .open_meteo import OpenMeteoClient
from .soilgrids import SoilGridsClient
from .worldbank import WorldBankClient

__all__ = [
    "BaseClient",
    "MissingDataError",
    "ProviderError",
    "NasaPowerClient",
    "OpenMeteoClient",
    "SoilGridsClient",
    "WorldBankClient",
]
