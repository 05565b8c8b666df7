"""Globe computation layer — Sun/Moon placement and per-frame state for the renderers."""

from datetime import datetime

from solarglobe.config import MOON_RADIUS, SUN_RADIUS
from solarglobe.ephemeris import lunar_parameters, solar_parameters, subsolar_longitude
from solarglobe.frame import GeoVector3, project
from solarglobe.models import GlobeState
from solarglobe.timecalc import days_since_j2000, ensure_utc, now_utc, utc_decimal_hours


def solar_position(instant: datetime, radius: float = SUN_RADIUS) -> GeoVector3:
    """Sun position in the globe frame, ``radius`` scene units from the centre."""
    state = compute_globe_state(instant)
    return project(state.sun_lat, state.sun_lon, radius)


def lunar_position(instant: datetime, radius: float = MOON_RADIUS) -> GeoVector3:
    """Moon position in the globe frame, ``radius`` scene units from the centre."""
    state = compute_globe_state(instant)
    return project(state.moon_lat, state.moon_lon, radius)


def sun_direction_unit_vector(instant: datetime) -> GeoVector3:
    """Unit vector from the Earth's centre toward the Sun, for lighting."""
    return compute_globe_state(instant).sun_direction


def compute_globe_state(instant: datetime | None = None) -> GlobeState:
    """Compute the Sun and Moon for one frame.

    Args:
        instant: The frame time. Sampled once from the clock if None; every
            quantity in the returned state derives from this single value.

    Returns:
        GlobeState with parameters, sub-points and frame vectors.
    """
    instant = ensure_utc(instant) if instant is not None else now_utc()
    n = days_since_j2000(instant)
    hours = utc_decimal_hours(instant)

    sun = solar_parameters(n)
    sun_lon = subsolar_longitude(hours, sun.equation_of_time)
    moon = lunar_parameters(n, hours)

    return GlobeState(
        instant=instant,
        sun=sun,
        moon=moon,
        sun_lat=sun.declination,
        sun_lon=sun_lon,
        moon_lat=moon.declination,
        moon_lon=moon.sub_longitude,
        sun_position=project(sun.declination, sun_lon, SUN_RADIUS),
        moon_position=project(moon.declination, moon.sub_longitude, MOON_RADIUS),
        sun_direction=project(sun.declination, sun_lon, 1.0).normalized(),
    )
