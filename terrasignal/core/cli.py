"""
terrasignal CLI entrypoint: soil, climate and commodity lookups, restoration
assessments, portfolio ranking, submission checklists and climate context.
Every command prints a JSON document on stdout.
"""

import json
import sys

import click  # type: ignore
from click import echo

from terrasignal.core.config import ConfigManager
from terrasignal.core.logger import Logger
from terrasignal.restoration.degradation import assess_degradation
from terrasignal.schemas.submission import UploadFormData
from terrasignal.services.compliance import ComplianceService
from terrasignal.services.interpretation import InterpretationService
from terrasignal.services.landscape import LandscapeService, read_project_table
from terrasignal.services.profile import ProfileService, find_project
from terrasignal.services.responses import (
    climate_response,
    commodity_response,
    soil_response,
)
from terrasignal.soil.texture import classify_texture

logger = Logger.get_logger(__name__)

LATITUDE = click.FloatRange(-90, 90)
LONGITUDE = click.FloatRange(-180, 180)
PERCENT = click.FloatRange(0, 100)


def _emit(payload) -> None:
    echo(json.dumps(payload, indent=2))


def _fail(action: str, err: Exception) -> None:
    logger.error("%s failed", action, exc_info=True)
    echo(f"❌  {action} failed: {err}", err=True)
    sys.exit(1)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML, TOML or JSON configuration file",
)
@click.pass_context
def cli(ctx, config_path):
    """terrasignal: soil-carbon restoration intelligence toolkit."""
    Logger.setup()
    ctx.ensure_object(dict)
    ctx.obj["config"] = ConfigManager(config_path)


@cli.command()
@click.option("--lat", required=True, type=LATITUDE, help="Latitude")
@click.option("--lng", required=True, type=LONGITUDE, help="Longitude")
@click.option("--start", default=None, help="Start date (YYYY-MM-DD)")
@click.option("--end", default=None, help="End date (YYYY-MM-DD)")
@click.pass_context
def climate(ctx, lat, lng, start, end):
    """Aggregate historical daily climate for a point."""
    try:
        _emit(climate_response(lat, lng, start, end, config=ctx.obj["config"]))
    # pylint: disable=broad-exception-caught
    except Exception as e:
        _fail("Climate lookup", e)


@cli.command()
@click.option("--lat", required=True, type=LATITUDE, help="Latitude")
@click.option("--lng", required=True, type=LONGITUDE, help="Longitude")
@click.pass_context
def soil(ctx, lat, lng):
    """Soil profile from SoilGrids (or literature estimates)."""
    try:
        _emit(soil_response(lat, lng, config=ctx.obj["config"]))
    # pylint: disable=broad-exception-caught
    except Exception as e:
        _fail("Soil lookup", e)


@cli.command()
@click.argument("name")
@click.pass_context
def commodity(ctx, name):
    """Price series or market context for commodity NAME."""
    try:
        _emit(commodity_response(name.lower(), config=ctx.obj["config"]))
    # pylint: disable=broad-exception-caught
    except Exception as e:
        _fail("Commodity lookup", e)


@cli.command()
@click.option("--project-id", default=None, help="Project id to look up")
@click.option(
    "--projects",
    "projects_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Project table used with --project-id",
)
@click.option("--lat", type=LATITUDE, default=None, help="Latitude")
@click.option("--lng", type=LONGITUDE, default=None, help="Longitude")
@click.option("--commodity", "commodity_name", default=None, help="Commodity")
@click.option("--hectares", type=click.FloatRange(min=0), default=None)
@click.pass_context
def profile(ctx, project_id, projects_path, lat, lng, commodity_name, hectares):
    """Combined climate, soil, market and solar profile for a site."""
    project = None
    if project_id:
        if not projects_path:
            raise click.BadParameter(
                "--projects is required with --project-id", param_hint="--projects"
            )
        try:
            project = find_project(read_project_table(projects_path), project_id)
        except (KeyError, ValueError) as e:
            raise click.BadParameter(str(e), param_hint="--project-id") from e
    elif lat is None or lng is None:
        raise click.UsageError("Either --project-id or --lat/--lng are required")

    try:
        svc = ProfileService(ctx.obj["config"], logger=logger)
        _emit(
            svc.build(
                lat,
                lng,
                project=project,
                commodity=commodity_name,
                hectares=hectares,
            )
        )
    # pylint: disable=broad-exception-caught
    except Exception as e:
        _fail("Profile", e)


@cli.command()
@click.argument("projects_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--batch-size", type=click.IntRange(min=1), default=None)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the JSON result to this file instead of stdout",
)
@click.pass_context
def landscape(ctx, projects_file, batch_size, output):
    """Assess and rank every project in PROJECTS_FILE."""
    try:
        projects = read_project_table(projects_file)
        svc = LandscapeService(ctx.obj["config"], logger=logger)
        result = svc.run(projects, batch_size=batch_size)
    # pylint: disable=broad-exception-caught
    except Exception as e:
        _fail("Landscape analysis", e)
        return

    if output is None:
        _emit(result)
        return
    with open(output, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    echo(
        f"✅  {result['successCount']}/{result['totalProjects']} projects "
        f"ranked, written to {output}"
    )


@cli.command()
@click.argument("sand", type=PERCENT)
@click.argument("silt", type=PERCENT)
@click.argument("clay", type=PERCENT)
def texture(sand, silt, clay):
    """USDA texture class for SAND/SILT/CLAY percentages."""
    _emit(
        {
            "sand": sand,
            "silt": silt,
            "clay": clay,
            "textureClass": classify_texture(sand, silt, clay),
        }
    )


@cli.command()
@click.option("--soc", required=True, type=float, help="Current SOC stock, t C/ha")
@click.option("--texture", "soil_texture", required=True, help="Texture class")
@click.option("--precip", required=True, type=float, help="Annual precipitation, mm")
@click.option("--commodity", "commodity_name", default=None)
@click.option("--hectares", type=click.FloatRange(min=0), default=None)
@click.option("--project-id", default="custom", show_default=True)
@click.pass_context
def assess(ctx, soc, soil_texture, precip, commodity_name, hectares, project_id):
    """Degradation assessment from known soil and climate values."""
    config = ctx.obj["config"]
    result = assess_degradation(
        project_id,
        soc,
        soil_texture,
        precip,
        commodity_name or str(config.get("default_commodity", "cotton")),
        hectares if hectares is not None else float(config.get("default_hectares", 1000)),
        carbon_price=config.get_carbon_price(),
    )
    _emit(result.to_dict())


@cli.command()
@click.argument("form_file", type=click.Path(exists=True, dir_okay=False))
def checklist(form_file):
    """Score a monitoring submission (YAML or JSON) against the checklist."""
    try:
        form = UploadFormData.from_file(form_file)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="FORM_FILE") from e
    _emit(ComplianceService(logger=logger).validate(form))


@cli.command()
@click.option("--lat", required=True, type=LATITUDE, help="Latitude")
@click.option("--lng", required=True, type=LONGITUDE, help="Longitude")
@click.option("--window-start", required=True, help="First monitoring month (YYYY-MM)")
@click.option("--window-end", required=True, help="Last monitoring month (YYYY-MM)")
@click.option("--soc-change", type=float, default=None, help="SOC change, t C/ha")
@click.option("--soc-change-percent", type=float, default=None)
@click.pass_context
def interpret(
    ctx, lat, lng, window_start, window_end, soc_change, soc_change_percent
):
    """Explain an SOC change with the monitoring-period climate."""
    try:
        svc = InterpretationService(ctx.obj["config"], logger=logger)
        _emit(
            svc.interpret(
                lat,
                lng,
                window_start,
                window_end,
                soc_change=soc_change,
                soc_change_percent=soc_change_percent,
            )
        )
    # pylint: disable=broad-exception-caught
    except Exception as e:
        _fail("Interpretation", e)


if __name__ == "__main__":
    cli()
