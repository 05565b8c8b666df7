"""Command-line entry point.

    solarglobe convert worldcities.csv resources/cities.json
    solarglobe find 18:30
    solarglobe sun
    solarglobe render --output results/now.png
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from solarglobe.cities import DatasetError, convert_cities, load_locations
from solarglobe.clock import apparent_solar_time, civil_time
from solarglobe.compute import compute_globe_state
from solarglobe.config import ConfigError, configure_logging, load_settings
from solarglobe.models import CityMatch
from solarglobe.renderers.static import save_static_map
from solarglobe.search import find_by_solar_time, parse_clock_time
from solarglobe.timecalc import ensure_utc, now_utc

logger = logging.getLogger(__name__)


def _instant(text: str | None) -> datetime:
    if text is None:
        return now_utc()
    return ensure_utc(datetime.fromisoformat(text))


def _cmd_convert(args: argparse.Namespace) -> int:
    count = convert_cities(Path(args.csv), Path(args.json))
    print(f"Successfully converted {count} cities.")
    return 0


def _cmd_find(args: argparse.Namespace) -> int:
    settings = args.settings
    hour, minute = parse_clock_time(args.time)
    instant = _instant(args.at)
    locations = load_locations(
        Path(args.cities) if args.cities else settings.cities_path
    )
    result = find_by_solar_time(
        hour, minute, locations, instant, settings.match_tolerance_minutes
    )
    if isinstance(result, CityMatch):
        city = result.location
        print(
            f"FOUND: {city.name}, {city.country} (diff {result.diff_minutes:.1f} min)"
        )
        print(f"  civil time : {civil_time(city.timezone, instant)} ({city.timezone})")
        print(f"  solar time : {apparent_solar_time(city.lon, instant)}")
        print(f"  position   : LAT {city.lat:.2f} | LON {city.lon:.2f}")
    else:
        print(f"NO CITY FOUND. SHOWING TIME ZONE AREA (approx LON {result.lon:.0f})")
        print(f"  solar time : {apparent_solar_time(result.lon, instant)}")
    return 0


def _cmd_sun(args: argparse.Namespace) -> int:
    state = compute_globe_state(_instant(args.at))
    print(f"UTC            {state.instant.isoformat()}")
    print(f"Sun  sub-point {state.sun_lat:+8.3f} {state.sun_lon:+9.3f}")
    print(f"Moon sub-point {state.moon_lat:+8.3f} {state.moon_lon:+9.3f}")
    print(f"Declination    {state.sun.declination:+8.3f}")
    print(f"Equation of time {state.sun.equation_of_time:+.2f} min")
    return 0


def _cmd_render(args: argparse.Namespace) -> int:
    state = compute_globe_state(_instant(args.at))
    try:
        locations = load_locations(
            Path(args.cities) if args.cities else args.settings.cities_path
        )
    except DatasetError as e:
        logger.warning("Rendering without cities: %s", e)
        locations = ()
    path = save_static_map(
        state, locations, Path(args.output) if args.output else None
    )
    print(f"Saved: {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solarglobe", description="Sun, Moon and solar-time tools."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("convert", help="Convert a worldcities CSV to cities.json")
    p.add_argument("csv")
    p.add_argument("json")
    p.set_defaults(func=_cmd_convert)

    p = sub.add_parser("find", help="Find where it is HH:MM by the Sun right now")
    p.add_argument("time", help="Target clock time, HH:MM")
    p.add_argument("--at", help="ISO instant to use instead of now (naive = UTC)")
    p.add_argument("--cities", help="cities.json path")
    p.set_defaults(func=_cmd_find)

    p = sub.add_parser("sun", help="Print Sun and Moon sub-points")
    p.add_argument("--at", help="ISO instant to use instead of now (naive = UTC)")
    p.set_defaults(func=_cmd_sun)

    p = sub.add_parser("render", help="Save a day/night map PNG")
    p.add_argument("--at", help="ISO instant to use instead of now (naive = UTC)")
    p.add_argument("--cities", help="cities.json path")
    p.add_argument("--output", help="PNG path")
    p.set_defaults(func=_cmd_render)

    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    try:
        args.settings = load_settings()
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    configure_logging(args.settings.log_level)

    try:
        return args.func(args)
    except (ValueError, DatasetError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
