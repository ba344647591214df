"""CLI entry point for the weather client."""

import argparse
import logging
import sys

from weathercli.config.defaults import DEFAULT_CONFIG_PATH, VERSION
from weathercli.config.loader import (
    ConfigError,
    MissingCredentialError,
    load_config,
    resolve_api_key,
)
from weathercli.config.schema import AppConfig
from weathercli.ingest.owm_client import OwmClient
from weathercli.ingest.query_resolver import is_favorites_token, split_city_args
from weathercli.ingest.weather_fetcher import WeatherFetcher
from weathercli.models.weather import UnitSelector
from weathercli.pipeline.query_pipeline import QueryPipeline
from weathercli.reporting.formatters import FORMATTERS, format_favorites_text
from weathercli.storage.favorites_repo import CorruptFavoritesError, FavoritesRepo


def _unit_arg(value: str) -> UnitSelector:
    try:
        return UnitSelector.from_flag(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weathercli",
        description="Gets current weather information for one or more cities",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "-c", "--city", action="append", metavar="CITY",
        help="City to query; repeatable, comma-separated lists accepted. "
        "Use 'favorites' to query all saved favorites",
    )
    parser.add_argument(
        "-u", "--unit", type=_unit_arg, default=None, metavar="UNIT",
        help="Temperature unit: C for Celsius, F for Fahrenheit",
    )
    parser.add_argument(
        "-d", "--details", action="store_true",
        help="Show visibility, wind, clouds, pressure and min/max temperature",
    )
    parser.add_argument(
        "--format", choices=sorted(FORMATTERS), default="text",
        help="Output format for weather reports",
    )
    parser.add_argument(
        "--add-favorite", action="append", metavar="CITY",
        help="Save a city to favorites",
    )
    parser.add_argument(
        "--remove-favorite", action="append", metavar="CITY",
        help="Remove a city from favorites",
    )
    parser.add_argument(
        "--list-favorites", action="store_true", help="Show saved favorites"
    )
    parser.add_argument(
        "--config", default=str(DEFAULT_CONFIG_PATH), help="Config YAML path"
    )
    parser.add_argument("--favorites-file", help="Favorites JSON path")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Log progress (-v) or debug output (-vv) to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _setup_logging(config, args.verbose)

    favorites = FavoritesRepo(args.favorites_file or config.favorites_path)
    tokens = split_city_args(args.city)
    has_favorites_cmd = bool(
        args.add_favorite or args.remove_favorite or args.list_favorites
    )

    if not tokens and not has_favorites_cmd:
        if not config.default_city:
            parser.print_help()
            return 1
        tokens = [config.default_city]

    status = _cmd_favorites(favorites, args) if has_favorites_cmd else 0
    if not tokens:
        return status
    return max(status, _cmd_query(config, favorites, tokens, args))


def _setup_logging(config: AppConfig, verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, config.log_level.value)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # httpx logs full request URLs, appid included
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    logging.getLogger("httpcore").setLevel(max(level, logging.WARNING))


def _cmd_favorites(favorites: FavoritesRepo, args) -> int:
    """Apply add, remove, then list. A failing command does not stop the others."""
    status = 0
    for city in args.add_favorite or []:
        city = city.strip()
        if not city or is_favorites_token(city):
            print(f"Error: cannot add {city!r} to favorites", file=sys.stderr)
            status = 1
            continue
        try:
            if favorites.add(city):
                print(f"Added {city} to favorites")
            else:
                print(f"{city} is already in favorites")
        except (CorruptFavoritesError, OSError) as e:
            print(f"Error: could not add {city}: {e}", file=sys.stderr)
            status = 1

    for city in args.remove_favorite or []:
        try:
            removed = favorites.remove(city)
            if removed:
                print(f"Removed {city} from favorites")
            else:
                print(f"{city} was not in favorites")
        except (CorruptFavoritesError, OSError) as e:
            print(f"Error: could not remove {city}: {e}", file=sys.stderr)
            status = 1

    if args.list_favorites:
        try:
            print(format_favorites_text(favorites.list_favorites()))
        except (CorruptFavoritesError, OSError) as e:
            print(f"Error: could not list favorites: {e}", file=sys.stderr)
            status = 1
    return status


def _cmd_query(config: AppConfig, favorites: FavoritesRepo, tokens, args) -> int:
    client = OwmClient(
        base_url=config.provider.base_url,
        timeout=config.provider.timeout_seconds,
    )
    pipeline = QueryPipeline(WeatherFetcher(client), favorites)

    try:
        cities = pipeline.resolve(tokens)
    except (CorruptFavoritesError, OSError) as e:
        print(f"Error: could not read favorites: {e}", file=sys.stderr)
        return 1
    if not cities:
        print("No favorite cities saved.", file=sys.stderr)
        return 0

    try:
        api_key = resolve_api_key(config)
    except MissingCredentialError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    unit = args.unit or config.default_unit
    pipeline.run(cities, api_key, unit=unit, details=args.details, fmt=args.format)
    # Per-city failures are reported inline and do not affect the exit status.
    return 0


def run() -> None:
    """Console-script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    run()
