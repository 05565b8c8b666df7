"""Low-precision solar and lunar ephemerides.

Both series are the short almanac forms: the Sun is good to about 0.01°
and the Moon to well under a degree between 1950 and 2050. That is
plenty for placing lights and markers on a globe and for minute-level
solar clocks; nothing here aims at sub-arcsecond accuracy.

Every function takes its time arguments explicitly. Callers sample the
clock once per frame and pass the same instant to the Sun, the Moon and
the city search so the three never disagree.
"""

import math
from datetime import datetime

from solarglobe.models import LunarParameters, SolarParameters
from solarglobe.timecalc import (
    days_since_j2000,
    normalize180,
    normalize360,
    utc_decimal_hours,
)

_DEG = math.pi / 180.0


def _sin(deg: float) -> float:
    return math.sin(deg * _DEG)


def _cos(deg: float) -> float:
    return math.cos(deg * _DEG)


def obliquity(n: float) -> float:
    """Obliquity of the ecliptic in degrees, ``n`` days after J2000."""
    return 23.439 - 0.0000004 * n


def solar_parameters(n: float) -> SolarParameters:
    """Solar coordinates and the Equation of Time for day number ``n``.

    Args:
        n: Days since 2000-01-01T12:00Z (see ``timecalc.days_since_j2000``).

    Returns:
        SolarParameters. ``equation_of_time`` is in minutes: (L − α) wrapped
        into (-180, 180] then multiplied by 4 (one degree of rotation is
        four minutes of time).
    """
    mean_longitude = normalize360(280.460 + 0.9856474 * n)
    mean_anomaly = normalize360(357.528 + 0.9856003 * n)
    ecliptic_longitude = (
        mean_longitude
        + 1.915 * _sin(mean_anomaly)
        + 0.020 * _sin(2.0 * mean_anomaly)
    )
    eps = obliquity(n)

    right_ascension = normalize360(
        math.degrees(
            math.atan2(
                _cos(eps) * _sin(ecliptic_longitude), _cos(ecliptic_longitude)
            )
        )
    )
    declination = math.degrees(math.asin(_sin(eps) * _sin(ecliptic_longitude)))
    equation_of_time = normalize180(mean_longitude - right_ascension) * 4.0

    return SolarParameters(
        mean_longitude=mean_longitude,
        mean_anomaly=mean_anomaly,
        ecliptic_longitude=ecliptic_longitude,
        obliquity=eps,
        right_ascension=right_ascension,
        declination=declination,
        equation_of_time=equation_of_time,
    )


def subsolar_longitude(utc_hours: float, equation_of_time: float) -> float:
    """Longitude (degrees, (-180, 180]) where the apparent Sun is on the meridian.

    The mean Sun crosses Greenwich at 12:00 UTC and moves west 15° per
    hour; the Equation of Time (minutes / 4 = degrees) shifts it to the
    apparent Sun.
    """
    return normalize180((12.0 - utc_hours) * 15.0 + equation_of_time / 4.0)


def sun_subpoint(instant: datetime) -> tuple[float, float]:
    """Latitude/longitude (degrees) of the point with the Sun at the zenith."""
    params = solar_parameters(days_since_j2000(instant))
    lon = subsolar_longitude(utc_decimal_hours(instant), params.equation_of_time)
    return params.declination, lon


def greenwich_sidereal_time(n: float, utc_hours: float) -> float:
    """Greenwich Sidereal Time in degrees, [0, 360).

    Args:
        n: Days since J2000.
        utc_hours: Decimal hour of the UTC day.
    """
    return normalize360(100.46061837 + 0.9856473662862 * n + 15.0 * utc_hours)


def lunar_parameters(n: float, utc_hours: float) -> LunarParameters:
    """Lunar ecliptic and equatorial coordinates plus the sub-Earth longitude.

    Only the largest periodic terms are kept: the equation of the centre
    (6.289°) for longitude and the inclination term (5.128°) for latitude.
    """
    mean_longitude = normalize360(218.316 + 13.176396 * n)
    mean_anomaly = normalize360(134.963 + 13.064993 * n)
    argument_of_latitude = normalize360(93.272 + 13.229350 * n)

    lam = mean_longitude + 6.289 * _sin(mean_anomaly)
    beta = 5.128 * _sin(argument_of_latitude)
    eps = obliquity(n)

    # Ecliptic -> equatorial rotation about the vernal-equinox axis
    right_ascension = normalize360(
        math.degrees(
            math.atan2(
                _sin(lam) * _cos(eps) - math.tan(beta * _DEG) * _sin(eps),
                _cos(lam),
            )
        )
    )
    declination = math.degrees(
        math.asin(_sin(beta) * _cos(eps) + _cos(beta) * _sin(eps) * _sin(lam))
    )

    gst = greenwich_sidereal_time(n, utc_hours)
    sub_longitude = normalize180(right_ascension - gst)

    return LunarParameters(
        mean_longitude=mean_longitude,
        mean_anomaly=mean_anomaly,
        argument_of_latitude=argument_of_latitude,
        ecliptic_longitude=lam,
        ecliptic_latitude=beta,
        obliquity=eps,
        right_ascension=right_ascension,
        declination=declination,
        sidereal_time=gst,
        sub_longitude=sub_longitude,
    )


def moon_subpoint(instant: datetime) -> tuple[float, float]:
    """Latitude/longitude (degrees) of the point with the Moon at the zenith."""
    params = lunar_parameters(days_since_j2000(instant), utc_decimal_hours(instant))
    return params.declination, params.sub_longitude
