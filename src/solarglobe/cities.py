"""City dataset: CSV ingestion with timezone tagging, JSON loading, marker level of detail."""

import csv
import json
import logging
import math
from collections.abc import Sequence
from pathlib import Path

from timezonefinder import TimezoneFinder

from solarglobe.models import Location

logger = logging.getLogger(__name__)

# worldcities.csv column layout
_COL_NAME = 0
_COL_LAT = 1
_COL_LON = 2
_COL_COUNTRY = 3
_COL_POPULATION = 7

# Marker LOD thresholds (camera distance in scene units)
LOD_NEAR = 20.0
LOD_MID = 35.0
LOD_MID_POPULATION = 100_000
LOD_FAR_POPULATION = 1_000_000

# Below this many cities most solar-time searches land on the fallback
SPARSE_DATASET_SIZE = 1000


class DatasetError(Exception):
    """City dataset missing or malformed."""


def geometric_timezone(lon: float) -> str:
    """``Etc/GMT±N`` estimate from longitude alone.

    Etc zones use the POSIX sign convention: east of Greenwich is ``GMT-N``.
    """
    offset = math.floor(lon / 15.0 + 0.5)
    sign = "-" if offset > 0 else "+"
    return f"Etc/GMT{sign}{abs(offset)}"


def resolve_timezone(finder: TimezoneFinder, lat: float, lon: float) -> str:
    """IANA zone id for a coordinate, falling back to ``geometric_timezone``."""
    try:
        tz_id = finder.timezone_at(lat=lat, lng=lon)
    except ValueError:
        tz_id = None
    if tz_id is None:
        tz_id = geometric_timezone(lon)
        logger.debug("No zone for (%.3f, %.3f), using %s", lat, lon, tz_id)
    return tz_id


def _parse_float(text: str) -> float | None:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def convert_cities(
    csv_path: Path, json_path: Path, finder: TimezoneFinder | None = None
) -> int:
    """Convert a worldcities-style CSV into the ``cities.json`` dataset.

    Rows with non-numeric coordinates are skipped. Each kept row is tagged
    with an IANA timezone id.

    Args:
        csv_path: Source CSV with a header row.
        json_path: Destination JSON array. Parent directories are created.
        finder: TimezoneFinder instance (a new one is built if None).

    Returns:
        Number of cities written.
    """
    finder = finder or TimezoneFinder()
    cities: list[dict] = []
    skipped = 0

    with csv_path.open(encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)  # header
        for row in reader:
            if len(row) < 3:
                continue
            lat = _parse_float(row[_COL_LAT])
            lon = _parse_float(row[_COL_LON])
            if lat is None or lon is None:
                skipped += 1
                continue
            population = None
            if len(row) > _COL_POPULATION:
                population = _parse_float(row[_COL_POPULATION])
            country = row[_COL_COUNTRY].strip() if len(row) > _COL_COUNTRY else ""
            cities.append(
                {
                    "name": row[_COL_NAME].strip(),
                    "lat": lat,
                    "lon": lon,
                    "population": population or 0,
                    "timezone": resolve_timezone(finder, lat, lon),
                    "country": country,
                }
            )

    json_path.parent.mkdir(parents=True, exist_ok=True)
    with json_path.open("w", encoding="utf-8") as f:
        json.dump(cities, f, ensure_ascii=False)

    logger.info(
        "Converted %d cities to %s (%d malformed rows skipped)",
        len(cities),
        json_path,
        skipped,
    )
    return len(cities)


def load_locations(path: Path) -> tuple[Location, ...]:
    """Load ``cities.json`` as an immutable, ordered tuple of Location.

    Records missing a name or with non-numeric coordinates are skipped.

    Raises:
        DatasetError: When the file cannot be read or is not a JSON array.
    """
    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise DatasetError(f"City dataset not found: {path}") from e
    except json.JSONDecodeError as e:
        raise DatasetError(f"City dataset is not valid JSON: {path}") from e
    except UnicodeDecodeError as e:
        raise DatasetError(f"City dataset is not UTF-8 text: {path}") from e
    except OSError as e:
        raise DatasetError(f"City dataset could not be read: {path} ({e})") from e
    if not isinstance(raw, list):
        raise DatasetError(f"City dataset must be a JSON array: {path}")

    locations: list[Location] = []
    for record in raw:
        try:
            lat = float(record["lat"])
            lon = float(record["lon"])
            name = str(record["name"])
        except (KeyError, TypeError, ValueError):
            logger.debug("Skipping malformed city record: %r", record)
            continue
        if not (math.isfinite(lat) and math.isfinite(lon)) or abs(lat) > 90.0:
            logger.debug("Skipping city with invalid coordinates: %r", record)
            continue
        locations.append(
            Location(
                name=name,
                lat=lat,
                lon=lon,
                population=_parse_float(str(record.get("population", 0))) or 0.0,
                timezone=str(record.get("timezone") or geometric_timezone(lon)),
                country=str(record.get("country", "")),
            )
        )

    logger.info("Loaded %d cities from %s", len(locations), path)
    if len(locations) < SPARSE_DATASET_SIZE:
        logger.warning(
            "Only %d cities loaded; run `solarglobe convert` on worldcities.csv "
            "and point SOLARGLOBE_CITIES_PATH at the result for useful search",
            len(locations),
        )
    return tuple(locations)


def visible_locations(
    locations: Sequence[Location], camera_distance: float
) -> tuple[Location, ...]:
    """Markers to draw at ``camera_distance``: everything close up, big cities far away."""
    if camera_distance < LOD_NEAR:
        return tuple(locations)
    if camera_distance < LOD_MID:
        threshold = LOD_MID_POPULATION
    else:
        threshold = LOD_FAR_POPULATION
    return tuple(loc for loc in locations if loc.population > threshold)
