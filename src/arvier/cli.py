"""
Command line entry point: simulate a season and print irrigation advice.

Examples:
    arvier-simulate --crop apple --weather-csv weather.csv
    arvier-simulate --crop pasture --latitude 45.70 --longitude 7.03 --year 2023 \\
        --irrigation 2023-07-02:25 --output season.csv
"""
import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

import yaml

from arvier.core.config import ArvierConfig, configure_logging, get_config, set_config
from arvier.core.exceptions import ArvierError, ConfigurationError, ErrorContext
from arvier.crops import get_crop_config, list_crops, load_crop_catalog
from arvier.data.contracts import IrrigationEvent
from arvier.data.sources.weather import OpenMeteoArchiveSource, load_weather_csv
from arvier.irrigation.advice import assess_irrigation_need, soil_moisture_status
from arvier.physics.water_balance import moisture_percent
from arvier.simulation.engine import run_simulation

logger = logging.getLogger(__name__)


def parse_irrigation(value: str) -> IrrigationEvent:
    """Parse ``YYYY-MM-DD:MM`` into an IrrigationEvent"""
    try:
        day, amount = value.rsplit(":", 1)
        return IrrigationEvent(date=date.fromisoformat(day), amount_mm=float(amount))
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"Irrigation must look like YYYY-MM-DD:MM, got '{value}'"
        ) from e


def _load_config(path: Path) -> ArvierConfig:
    """Read a YAML configuration, reporting any failure as ConfigurationError"""
    try:
        return ArvierConfig.from_yaml(path)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Cannot load configuration: {e}",
            ErrorContext(component="cli", operation="load_config"),
        ) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arvier-simulate",
        description="Simulate crop water demand from daily weather",
    )
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--crop", help="Crop name (default from configuration)")

    weather = parser.add_argument_group("weather")
    weather.add_argument("--weather-csv", type=Path, help="CSV with daily weather")
    weather.add_argument("--latitude", type=float)
    weather.add_argument("--longitude", type=float)
    weather.add_argument("--year", type=int, help="Simulate a full historical year")
    weather.add_argument("--season-start", type=date.fromisoformat,
                         help="Season start (YYYY-MM-DD) for the current season")

    parser.add_argument("--irrigation", type=parse_irrigation, action="append", default=[],
                        help="Irrigation event as YYYY-MM-DD:MM (repeatable)")
    parser.add_argument("--pasture", dest="pasture", action="store_true", default=None,
                        help="Force pasture cycle mode")
    parser.add_argument("--no-pasture", dest="pasture", action="store_false",
                        help="Disable pasture cycle mode")
    parser.add_argument("--output", type=Path, help="Write daily results to CSV")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if args.config:
            set_config(_load_config(args.config))
        config = get_config()
        configure_logging(config.logging)

        catalog = load_crop_catalog(config.crop_catalog_path) if config.crop_catalog_path else None
        crop_name = args.crop or config.default_crop
        crop = get_crop_config(crop_name, catalog)
        is_pasture = crop.multi_cycle if args.pasture is None else args.pasture

        if args.weather_csv:
            weather = load_weather_csv(args.weather_csv)
        elif args.latitude is not None and args.longitude is not None:
            source = OpenMeteoArchiveSource(config.weather)
            if args.year:
                series = source.fetch_year(args.latitude, args.longitude, args.year)
            else:
                series = source.fetch_season(args.latitude, args.longitude, args.season_start)
            logger.info(f"Weather grid elevation: {series.elevation_m} m")
            weather = series.records
        else:
            print("Either --weather-csv or --latitude/--longitude is required", file=sys.stderr)
            return 2

        result = run_simulation(
            weather, crop,
            irrigation_events=args.irrigation,
            is_pasture=is_pasture,
            settings=config.simulation,
        )

    except ArvierError as e:
        print(str(e), file=sys.stderr)
        return 1

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        result.to_dataframe().to_csv(args.output)

    summary = result.summary
    print(f"Crop: {crop_name} (available: {', '.join(list_crops(catalog))})")
    print(f"Total GDD: {summary.total_gdd:.0f}")
    print(f"Total ETc: {summary.total_etc:.0f} mm")
    print(f"Total precipitation: {summary.total_precipitation:.0f} mm")
    print(f"Total irrigation: {summary.total_irrigation:.0f} mm")
    print(f"Net water deficit: {summary.net_water_deficit:.0f} mm "
          f"({summary.days_with_deficit} days)")
    print(f"Phase: {summary.peak_phase_reached}")

    latest = result.latest
    if latest is not None:
        percent = moisture_percent(latest.soil_water, config.simulation.soil_water_max_mm)
        advice = assess_irrigation_need(
            summary.net_water_deficit, latest.kc, latest.current_phase,
            summary.days_with_deficit,
        )
        print(f"Soil moisture: {percent:.0f}% ({soil_moisture_status(percent).value})")
        print(f"Advice: {advice.urgency.value}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
