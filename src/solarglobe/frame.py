"""Geodetic projection: the single body-fixed frame shared by every placement.

Frame convention:
    +Y  polar axis, north positive
    +Z  longitude 0°, latitude 0° (prime meridian, facing the default camera)
    +X  longitude 90° E (longitude grows counter-clockwise seen from +Y)

City markers, the Sun direction used for lighting, and the Moon all go
through ``project`` / ``project_grid``; renderers must not re-derive the
trigonometry inline or lights and markers drift apart.
"""

import math
from dataclasses import dataclass

import numpy as np


class InvalidCoordinateError(ValueError):
    """Latitude out of range, non-finite angle, or non-positive radius."""


@dataclass(frozen=True)
class GeoVector3:
    """A point (or direction) in the globe frame."""

    x: float
    y: float
    z: float

    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> "GeoVector3":
        """Unit vector in the same direction. The zero vector has no direction."""
        length = self.norm()
        if length == 0.0:
            raise InvalidCoordinateError("cannot normalize a zero-length vector")
        return GeoVector3(self.x / length, self.y / length, self.z / length)

    def dot(self, other: "GeoVector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def scaled(self, factor: float) -> "GeoVector3":
        return GeoVector3(self.x * factor, self.y * factor, self.z * factor)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


POLAR_AXIS = GeoVector3(0.0, 1.0, 0.0)
PRIME_MERIDIAN_AXIS = GeoVector3(0.0, 0.0, 1.0)
EAST_AXIS = GeoVector3(1.0, 0.0, 0.0)


def _check(lat: float, lon: float, radius: float) -> None:
    if not (math.isfinite(lat) and math.isfinite(lon) and math.isfinite(radius)):
        raise InvalidCoordinateError(
            f"non-finite coordinate: lat={lat}, lon={lon}, radius={radius}"
        )
    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinateError(f"latitude out of range: {lat}")
    if radius <= 0.0:
        raise InvalidCoordinateError(f"radius must be positive: {radius}")


def project(lat: float, lon: float, radius: float = 1.0) -> GeoVector3:
    """Map geodetic (lat°, lon°) on a sphere of ``radius`` to a frame point.

    Args:
        lat: Latitude in degrees, [-90, 90].
        lon: Longitude in degrees, any finite value (east positive).
        radius: Sphere radius in scene units. Chosen by the rendering context.

    Returns:
        GeoVector3 with x = r·cos(lat)·sin(lon), y = r·sin(lat), z = r·cos(lat)·cos(lon).

    Raises:
        InvalidCoordinateError: On out-of-range latitude, non-finite input,
            or non-positive radius.
    """
    _check(lat, lon, radius)
    lat_rad = math.radians(lat)
    lon_rad = math.radians(lon)
    return GeoVector3(
        x=radius * math.cos(lat_rad) * math.sin(lon_rad),
        y=radius * math.sin(lat_rad),
        z=radius * math.cos(lat_rad) * math.cos(lon_rad),
    )


def unproject(vector: GeoVector3) -> tuple[float, float, float]:
    """Inverse of ``project``. Returns (lat°, lon° in (-180, 180], radius)."""
    radius = vector.norm()
    if radius == 0.0:
        raise InvalidCoordinateError("origin has no geodetic coordinates")
    lat = math.degrees(math.asin(max(-1.0, min(1.0, vector.y / radius))))
    lon = math.degrees(math.atan2(vector.x, vector.z))
    if lon == -180.0:
        lon = 180.0
    return lat, lon, radius


def project_grid(
    lats: np.ndarray, lons: np.ndarray, radius: float = 1.0
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorised ``project`` over broadcastable lat/lon arrays (degrees).

    Used by the renderers to build sphere meshes in the same frame as the
    scalar placements.
    """
    lats = np.asarray(lats, dtype=float)
    lons = np.asarray(lons, dtype=float)
    if not (np.all(np.isfinite(lats)) and np.all(np.isfinite(lons))):
        raise InvalidCoordinateError("non-finite coordinate in grid")
    if np.any(np.abs(lats) > 90.0):
        raise InvalidCoordinateError("latitude out of range in grid")
    if not (math.isfinite(radius) and radius > 0.0):
        raise InvalidCoordinateError(f"radius must be positive: {radius}")
    lat_rad = np.radians(lats)
    lon_rad = np.radians(lons)
    x = radius * np.cos(lat_rad) * np.sin(lon_rad)
    y = radius * np.sin(lat_rad) * np.ones_like(lon_rad)
    z = radius * np.cos(lat_rad) * np.cos(lon_rad)
    return x, y, z
