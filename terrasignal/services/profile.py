from __future__ import annotations

"""Combined climate, soil, market and solar profile for one location."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Iterable

from terrasignal.analytics.climate import process_climate
from terrasignal.core.config import ConfigManager
from terrasignal.ingestion.nasa_power import NasaPowerClient
from terrasignal.ingestion.open_meteo import OpenMeteoClient
from terrasignal.ingestion.soilgrids import SoilGridsClient
from terrasignal.ingestion.worldbank import WorldBankClient
from terrasignal.restoration.degradation import assess_degradation
from terrasignal.schemas.assessment import ProjectDescriptor
from terrasignal.services.base import BaseService

PROFILE_SOURCES = ("climate", "soil", "commodity", "nasa")


def find_project(
    projects: Iterable[ProjectDescriptor], project_id: str
) -> ProjectDescriptor:
    """Return the project with ``project_id`` or raise ``KeyError``."""
    for project in projects:
        if project.id == project_id:
            return project
    raise KeyError(f"Unknown project: {project_id}")


class ProfileService(BaseService):
    """Query all providers in parallel; each failure is kept per source."""

    def __init__(
        self,
        config: ConfigManager | None = None,
        *,
        climate_client: OpenMeteoClient | None = None,
        soil_client: SoilGridsClient | None = None,
        commodity_client: WorldBankClient | None = None,
        nasa_client: NasaPowerClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(config, logger)
        self.climate_client = climate_client or OpenMeteoClient(self.config)
        self.soil_client = soil_client or SoilGridsClient(self.config)
        self.commodity_client = commodity_client or WorldBankClient(self.config)
        self.nasa_client = nasa_client or NasaPowerClient(self.config)

    def build(
        self,
        lat: float | None = None,
        lng: float | None = None,
        *,
        project: ProjectDescriptor | None = None,
        commodity: str | None = None,
        hectares: float | None = None,
    ) -> Dict[str, Any]:
        """Build the profile for ``project`` or for raw coordinates.

        A project supplies coordinates, commodity and area; otherwise the
        configured default commodity and hectares apply. Degradation is
        assessed only when both soil and climate data were obtained.
        """
        if project is not None:
            lat, lng = project.lat, project.lng
            commodity, hectares = project.commodity, project.hectares
        if lat is None or lng is None:
            raise ValueError("Either a project or lat/lng coordinates are required")
        commodity = commodity or str(self.config.get("default_commodity", "cotton"))
        if hectares is None:
            hectares = float(self.config.get("default_hectares", 1000))

        jobs: Dict[str, Callable[[], Any]] = {
            "climate": lambda: process_climate(
                self.climate_client.get_climate(lat, lng)
            ),
            "soil": lambda: self.soil_client.get_soil(lat, lng),
            "commodity": lambda: self.commodity_client.get_prices(commodity),
            "nasa": lambda: self.nasa_client.get_summary(lat, lng),
        }
        values: Dict[str, Any] = {}
        errors: Dict[str, str | None] = {}
        with ThreadPoolExecutor(max_workers=len(jobs)) as ex:
            futures = {name: ex.submit(job) for name, job in jobs.items()}
            for name in PROFILE_SOURCES:
                try:
                    values[name] = futures[name].result()
                    errors[name] = None
                # pylint: disable=broad-exception-caught
                except Exception as err:
                    self.logger.warning(
                        "Profile source failed: %s", err, extra={"source": name}
                    )
                    values[name] = None
                    errors[name] = str(err)

        climate, soil = values["climate"], values["soil"]
        degradation = None
        if soil is not None and climate is not None:
            degradation = assess_degradation(
                project.id if project is not None else "custom",
                soil.soc_stock_t_per_ha,
                soil.texture_class,
                climate.annual_precip,
                commodity,
                hectares,
                carbon_price=self.config.get_carbon_price(),
            )

        def _dump(value):
            return value.to_dict() if value is not None else None

        return {
            "success": True,
            "coordinates": {"lat": lat, "lng": lng},
            "project": (
                {
                    "id": project.id,
                    "name": project.name,
                    "commodity": project.commodity,
                    "hectares": project.hectares,
                    "lat": project.lat,
                    "lng": project.lng,
                    "country": project.country,
                }
                if project is not None
                else None
            ),
            "climate": _dump(climate),
            "soil": _dump(soil),
            "commodity": _dump(values["commodity"]),
            "nasa": _dump(values["nasa"]),
            "degradation": _dump(degradation),
            "errors": errors,
        }
