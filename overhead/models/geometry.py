"""
Point types shared by the decoder and the locator.

Both are immutable: geodetic points are built from external input,
Cartesian points only by the coordinate transform.
"""

from dataclasses import dataclass

METERS_PER_FOOT = 0.3048


@dataclass(frozen=True)
class GeodeticPoint:
    """Longitude/latitude in radians, altitude in meters above the ellipsoid."""
    longitude: float
    latitude: float
    altitude_meters: float


@dataclass(frozen=True)
class CartesianPoint:
    """Earth-centered, earth-fixed coordinates in meters."""
    x: float
    y: float
    z: float
