"""Data model definitions — explicit boundaries between ephemeris, search, and render layers."""

from dataclasses import dataclass
from datetime import datetime

from solarglobe.frame import GeoVector3


@dataclass(frozen=True)
class Location:
    """A single city record. Loaded once, never mutated."""

    name: str  # City name ("Tehran")
    lat: float  # Latitude (decimal degrees)
    lon: float  # Longitude (decimal degrees, east positive)
    population: float  # 0 when unknown
    timezone: str  # IANA zone id ("Asia/Tehran") or "Etc/GMT±N" estimate
    country: str


@dataclass(frozen=True)
class SolarParameters:
    """Low-precision solar coordinates for one instant. All angles in degrees."""

    mean_longitude: float  # L, [0, 360)
    mean_anomaly: float  # g, [0, 360)
    ecliptic_longitude: float  # λ, not normalized
    obliquity: float  # ε
    right_ascension: float  # α, [0, 360)
    declination: float  # δ, [-90, 90]
    equation_of_time: float  # Minutes, apparent minus mean solar time


@dataclass(frozen=True)
class LunarParameters:
    """Low-precision lunar coordinates for one instant. All angles in degrees."""

    mean_longitude: float  # Lm, [0, 360)
    mean_anomaly: float  # Mm, [0, 360)
    argument_of_latitude: float  # F, [0, 360)
    ecliptic_longitude: float  # λm
    ecliptic_latitude: float  # βm
    obliquity: float  # ε
    right_ascension: float  # αm, [0, 360)
    declination: float  # δm
    sidereal_time: float  # GST, [0, 360)
    sub_longitude: float  # Sub-Earth longitude, (-180, 180]


@dataclass(frozen=True)
class CityMatch:
    """Search hit: the city whose solar time is closest to the target."""

    location: Location
    diff_minutes: float  # Circular distance to the target, [0, 720]


@dataclass(frozen=True)
class FallbackPoint:
    """Search miss: an equatorial point on the meridian where the target time is now."""

    lat: float  # Always 0
    lon: float  # (-180, 180]
    best_diff_minutes: float | None  # Closest city diff, None for an empty dataset


SearchResult = CityMatch | FallbackPoint


@dataclass(frozen=True)
class GlobeState:
    """Everything the renderers need for one frame. Computed from a single instant."""

    instant: datetime  # UTC
    sun: SolarParameters
    moon: LunarParameters
    sun_lat: float
    sun_lon: float
    moon_lat: float
    moon_lon: float
    sun_position: GeoVector3  # Scaled by SUN_RADIUS
    moon_position: GeoVector3  # Scaled by MOON_RADIUS
    sun_direction: GeoVector3  # Unit vector, for lighting
