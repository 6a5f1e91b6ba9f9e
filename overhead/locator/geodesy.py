"""
WGS84 geodetic to ECEF conversion and straight-line distance.

Angles are radians throughout this module. Query and feed values arrive in
degrees and are converted by the callers (see selector.observer_point and
FlightRecord.to_geodetic).
"""

import math

from overhead.models.geometry import METERS_PER_FOOT, CartesianPoint, GeodeticPoint

# WGS84 ellipsoid
SEMI_MAJOR_AXIS_M = 6378137.0
ECCENTRICITY_SQUARED = 0.006694379990197619


def feet_to_meters(feet: float, meters_per_foot: float = METERS_PER_FOOT) -> float:
    return feet * meters_per_foot


def prime_vertical_radius(latitude: float) -> float:
    """Radius of curvature in the prime vertical, N(lat)."""
    return SEMI_MAJOR_AXIS_M / math.sqrt(
        1 - ECCENTRICITY_SQUARED * math.sin(latitude) ** 2
    )


def to_cartesian(longitude: float, latitude: float, altitude_meters: float) -> CartesianPoint:
    """
    Convert a geodetic position to ECEF coordinates.

    Args:
        longitude: Longitude in radians
        latitude: Latitude in radians
        altitude_meters: Height above the ellipsoid in meters

    Returns:
        CartesianPoint in meters. (0, 0, 0) maps to (6378137, 0, 0).
    """
    n = prime_vertical_radius(latitude)
    cos_lat = math.cos(latitude)

    return CartesianPoint(
        x=(n + altitude_meters) * cos_lat * math.cos(longitude),
        y=(n + altitude_meters) * cos_lat * math.sin(longitude),
        z=((1 - ECCENTRICITY_SQUARED) * n + altitude_meters) * math.sin(latitude),
    )


def geodetic_to_cartesian(point: GeodeticPoint) -> CartesianPoint:
    return to_cartesian(point.longitude, point.latitude, point.altitude_meters)


def distance(p1: CartesianPoint, p2: CartesianPoint) -> float:
    """Euclidean distance between two ECEF points in meters."""
    return math.sqrt(
        (p2.x - p1.x) ** 2 +
        (p2.y - p1.y) ** 2 +
        (p2.z - p1.z) ** 2
    )
