"""Wall-clock formatting: civil time per IANA zone, mean and apparent solar time."""

import logging
import math
from datetime import datetime

from pytz import UnknownTimeZoneError, timezone

from solarglobe.ephemeris import solar_parameters
from solarglobe.timecalc import days_since_j2000, ensure_utc, utc_decimal_hours

logger = logging.getLogger(__name__)

SENTINEL_TIME = "00:00:00"
_FORMAT = "%H:%M:%S"


def civil_time(timezone_id: str, instant: datetime) -> str:
    """Civil ``HH:MM:SS`` in ``timezone_id`` at ``instant``.

    Unknown zone ids are not an error for the caller: the sentinel
    ``"00:00:00"`` is returned and a warning logged.
    """
    try:
        zone = timezone(timezone_id)
    except UnknownTimeZoneError:
        logger.warning(
            "Unknown timezone id %r, reporting %s", timezone_id, SENTINEL_TIME
        )
        return SENTINEL_TIME
    return ensure_utc(instant).astimezone(zone).strftime(_FORMAT)


def _format_seconds_of_day(seconds: float) -> str:
    # Microsecond rounding first so float noise never drops a whole second
    whole = math.floor(round(seconds % 86400.0, 6)) % 86400
    hours, rest = divmod(whole, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def mean_solar_time(lon: float, instant: datetime) -> str:
    """Local mean time at ``lon``: UTC shifted by lon/15 hours."""
    seconds = utc_decimal_hours(instant) * 3600.0 + lon * 240.0
    return _format_seconds_of_day(seconds)


def apparent_solar_time(lon: float, instant: datetime) -> str:
    """True (sundial) time at ``lon``: mean solar time plus the Equation of Time."""
    eot = solar_parameters(days_since_j2000(instant)).equation_of_time
    seconds = utc_decimal_hours(instant) * 3600.0 + lon * 240.0 + eot * 60.0
    return _format_seconds_of_day(seconds)


def solar_minutes_of_day(lon: float, instant: datetime) -> float:
    """Local mean solar time at ``lon`` as minutes after midnight, [0, 1440)."""
    hours = (utc_decimal_hours(instant) + lon / 15.0) % 24.0
    minutes = hours * 60.0
    if minutes >= 1440.0:
        minutes = 0.0
    return minutes
