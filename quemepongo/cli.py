"""CLI entry point for the weather outlook service."""

import argparse
import asyncio
import logging

from quemepongo.config.loader import get_config_value, load_config, set_config_value
from quemepongo.config.schema import AppConfig
from quemepongo.ingest.geocoding_client import GeocodingClient, GeocodingError
from quemepongo.ingest.open_meteo_client import OpenMeteoClient
from quemepongo.models.weather import Coordinates, MissingCoordinatesError
from quemepongo.pipeline.outlook_pipeline import build_outlook
from quemepongo.reporting.formatters import format_outlook_json, format_outlook_text

DEFAULT_CONFIG = "config/quemepongo.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="quemepongo",
        description="Forecast vs. historical projection, and what to wear",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "--set", action="append", default=[], metavar="KEY=VALUE",
        help="Override a config value, e.g. projection.years=3",
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    # outlook
    out_p = sub.add_parser("outlook", help="Print the outlook for a place")
    out_p.add_argument("--place", help="Place name to geocode (first match)")
    out_p.add_argument("--lat", type=float)
    out_p.add_argument("--lon", type=float)
    out_p.add_argument("--hours", type=int, help="Hours ahead")
    out_p.add_argument("--json", action="store_true", help="JSON output")

    # geocode
    geo_p = sub.add_parser("geocode", help="Search a place name")
    geo_p.add_argument("name")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Display one config value")
    get_p.add_argument("key")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    for kv in args.set:
        if "=" not in kv:
            print(f"Error: use key=value format, got {kv!r}")
            return 1
        key, value = kv.split("=", 1)
        try:
            config = set_config_value(config, key.strip(), value.strip())
        except Exception as e:
            print(f"Error: {e}")
            return 1

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "outlook":
        return asyncio.run(_cmd_outlook(config, args))
    elif args.command == "geocode":
        return asyncio.run(_cmd_geocode(config, args))
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from quemepongo.api import create_app

    uvicorn.run(create_app(config), host=args.host, port=args.port)
    return 0


async def _cmd_outlook(config: AppConfig, args) -> int:
    place = ""
    lat, lon = args.lat, args.lon
    if args.place:
        try:
            matches = await GeocodingClient(config.geocoding).search(args.place)
        except GeocodingError as e:
            print(f"Error: {e}")
            return 1
        if not matches:
            print(f"No place found for {args.place!r}")
            return 1
        place = matches[0].name
        lat, lon = matches[0].lat, matches[0].lon

    try:
        coords = Coordinates.require(lat, lon)
    except MissingCoordinatesError:
        print("Error: give --place or both --lat and --lon")
        return 1

    hours = args.hours or config.dashboard.default_hours
    client = OpenMeteoClient(config.openmeteo)
    outlook = await build_outlook(client, coords, hours, config)
    if args.json:
        print(format_outlook_json(outlook))
    else:
        print(format_outlook_text(outlook, place))
    return 0 if not outlook.errors else 1


async def _cmd_geocode(config: AppConfig, args) -> int:
    try:
        matches = await GeocodingClient(config.geocoding).search(args.name)
    except GeocodingError as e:
        print(f"Error: {e}")
        return 1
    for m in matches:
        print(f"{m.lat:.4f},{m.lon:.4f}  {m.name}")
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        print(value)
        return 0
    else:
        print("Use: config show | config get key")
        return 1
