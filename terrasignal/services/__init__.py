"""Service-layer helpers producing the JSON envelopes used by the CLI."""

from importlib import import_module

__all__ = [
    "climate_response",
    "soil_response",
    "commodity_response",
    "ProfileService",
    "LandscapeService",
    "ComplianceService",
    "InterpretationService",
]


def __getattr__(name):
    if name in ("climate_response", "soil_response", "commodity_response"):
        return getattr(import_module(".responses", __name__), name)
    if name == "ProfileService":
        return import_module(".profile", __name__).ProfileService
    if name == "LandscapeService":
        return import_module(".landscape", __name__).LandscapeService
    if name == "ComplianceService":
        return import_module(".compliance", __name__).ComplianceService
    if name == "InterpretationService":
        return import_module(".interpretation", __name__).InterpretationService
    raise AttributeError(name)
