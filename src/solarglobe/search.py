"""Reverse time lookup. Which place on Earth is at a given clock time right now?

Matching is done on local mean solar time, not on timezone offsets. Two
cities in one wide zone can be almost an hour apart by the Sun; solar time
tells the eastern edge from the western one.
"""

import logging
import re
from collections.abc import Sequence
from datetime import datetime

from solarglobe.clock import solar_minutes_of_day
from solarglobe.config import DEFAULT_MATCH_TOLERANCE
from solarglobe.models import CityMatch, FallbackPoint, Location, SearchResult
from solarglobe.timecalc import normalize180, utc_decimal_hours

logger = logging.getLogger(__name__)

_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


class InvalidClockTimeError(ValueError):
    """Hour/minute out of range or an unparsable clock string."""


def _check_clock(hour: int, minute: int) -> None:
    if not 0 <= hour <= 23:
        raise InvalidClockTimeError(f"hour must be in 0..23: {hour}")
    if not 0 <= minute <= 59:
        raise InvalidClockTimeError(f"minute must be in 0..59: {minute}")


def parse_clock_time(text: str) -> tuple[int, int]:
    """Parse ``"HH:MM"`` (24-hour) into (hour, minute).

    Raises:
        InvalidClockTimeError: On malformed text or out-of-range fields.
    """
    m = _CLOCK_RE.match(text)
    if m is None:
        raise InvalidClockTimeError(f"expected HH:MM, got {text!r}")
    hour, minute = int(m.group(1)), int(m.group(2))
    _check_clock(hour, minute)
    return hour, minute


def circular_minute_diff(a: float, b: float) -> float:
    """Distance between two minute-of-day values around the 24 h dial, [0, 720]."""
    diff = abs(a - b)
    if diff > 720.0:
        diff = 1440.0 - diff
    return diff


def fallback_longitude(hour: int, minute: int, instant: datetime) -> float:
    """Longitude whose mean solar time is ``hour:minute`` at ``instant``.

    The offset from UTC is wrapped into [-12, 12] hours before converting
    to degrees, then the longitude into (-180, 180].
    """
    offset = (hour + minute / 60.0) - utc_decimal_hours(instant)
    if offset < -12.0:
        offset += 24.0
    if offset > 12.0:
        offset -= 24.0
    return normalize180(offset * 15.0)


def find_by_solar_time(
    hour: int,
    minute: int,
    locations: Sequence[Location],
    instant: datetime,
    tolerance_minutes: float = DEFAULT_MATCH_TOLERANCE,
) -> SearchResult:
    """Find the location whose solar time is closest to ``hour:minute``.

    Linear scan in dataset order. Ties keep the first location seen, so the
    result is stable for a fixed dataset and instant.

    Args:
        hour: Target hour, 0..23.
        minute: Target minute, 0..59.
        locations: Read-only city dataset.
        instant: The "now" every location is evaluated at.
        tolerance_minutes: Largest accepted difference (inclusive).

    Returns:
        CityMatch when the closest city is within tolerance, otherwise a
        FallbackPoint on the equator at ``fallback_longitude``.

    Raises:
        InvalidClockTimeError: When hour or minute is out of range.
    """
    _check_clock(hour, minute)
    target = hour * 60 + minute

    best: Location | None = None
    min_diff = float("inf")
    for location in locations:
        diff = circular_minute_diff(solar_minutes_of_day(location.lon, instant), target)
        if diff < min_diff:
            min_diff = diff
            best = location

    if best is not None and min_diff <= tolerance_minutes:
        logger.debug(
            "%02d:%02d matched %s (diff %.1f min)", hour, minute, best.name, min_diff
        )
        return CityMatch(location=best, diff_minutes=min_diff)

    lon = fallback_longitude(hour, minute, instant)
    logger.debug(
        "%02d:%02d has no city within %.0f min, fallback lon %.1f",
        hour,
        minute,
        tolerance_minutes,
        lon,
    )
    return FallbackPoint(
        lat=0.0,
        lon=lon,
        best_diff_minutes=None if best is None else min_diff,
    )
