from __future__ import annotations

"""Portfolio-wide degradation assessment and ranking."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, Iterable, List

import pandas as pd
import yaml

from terrasignal.analytics.climate import process_climate
from terrasignal.core.config import ConfigManager
from terrasignal.ingestion.base import MissingDataError
from terrasignal.ingestion.open_meteo import OpenMeteoClient
from terrasignal.ingestion.soilgrids import SoilGridsClient
from terrasignal.restoration.degradation import assess_degradation
from terrasignal.restoration.portfolio import rank_portfolio
from terrasignal.schemas.assessment import ProjectDescriptor, RankedAssessment
from terrasignal.services.base import BaseService

PROJECT_COLUMNS = ["id", "name", "commodity", "hectares", "lat", "lng", "country"]


def read_project_table(path: str) -> List[ProjectDescriptor]:
    """Load project descriptors from CSV, Parquet, JSON or YAML at *path*.

    Tabular formats need ``id``, ``lat`` and ``lng`` columns; JSON and YAML
    files hold a list of project mappings (optionally under ``projects``).
    """
    suffix = Path(path).suffix.lower()
    if suffix == ".parquet":
        df = pd.read_parquet(path)
    elif suffix == ".csv":
        df = pd.read_csv(path, dtype={"id": str})
    elif suffix in (".json", ".yaml", ".yml"):
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            data = data.get("projects")
        if not isinstance(data, list):
            raise ValueError(f"{path} must contain a list of projects")
        df = pd.DataFrame(data)
    else:
        raise ValueError(f"Unsupported project table format: {suffix}")

    missing = {"id", "lat", "lng"} - set(df.columns)
    if missing:
        raise ValueError(f"Project table is missing columns: {sorted(missing)}")
    df = df.astype(object).where(pd.notna(df), None)
    return [ProjectDescriptor.from_dict(row) for row in df.to_dict(orient="records")]


class LandscapeService(BaseService):
    """Assess every project's soil and climate, then rank the portfolio."""

    def __init__(
        self,
        config: ConfigManager | None = None,
        *,
        climate_client: OpenMeteoClient | None = None,
        soil_client: SoilGridsClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(config, logger)
        self.climate_client = climate_client or OpenMeteoClient(self.config)
        self.soil_client = soil_client or SoilGridsClient(self.config)

    def assess_one(self, project: ProjectDescriptor) -> RankedAssessment:
        """Fetch soil and climate concurrently and assess one project."""
        with ThreadPoolExecutor(max_workers=2) as ex:
            climate_future = ex.submit(
                lambda: process_climate(
                    self.climate_client.get_climate(project.lat, project.lng)
                )
            )
            soil_future = ex.submit(self.soil_client.get_soil, project.lat, project.lng)
            climate = soil = None
            try:
                climate = climate_future.result()
            # pylint: disable=broad-exception-caught
            except Exception as err:
                self.logger.warning(
                    "Climate unavailable: %s",
                    err,
                    extra={"project_id": project.id, "source": "climate"},
                )
            try:
                soil = soil_future.result()
            # pylint: disable=broad-exception-caught
            except Exception as err:
                self.logger.warning(
                    "Soil unavailable: %s",
                    err,
                    extra={"project_id": project.id, "source": "soil"},
                )

        if soil is None or climate is None:
            raise MissingDataError(
                f"Missing data: soil={str(soil is not None).lower()}, "
                f"climate={str(climate is not None).lower()}"
            )

        assessment = assess_degradation(
            project.id,
            soil.soc_stock_t_per_ha,
            soil.texture_class,
            climate.annual_precip,
            project.commodity,
            project.hectares,
            carbon_price=self.config.get_carbon_price(),
        )
        return RankedAssessment.from_assessment(assessment, project)

    def run(
        self, projects: Iterable[ProjectDescriptor], batch_size: int | None = None
    ) -> Dict[str, Any]:
        """Return the ranked portfolio envelope."""
        result = rank_portfolio(
            projects,
            self.assess_one,
            batch_size=batch_size or self.config.get_batch_size(),
            logger=self.logger,
        )
        return {"success": True, **result.to_dict()}
