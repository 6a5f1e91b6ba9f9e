"""
Nearest-flight geometry: coordinate transform, distance, selection.
"""

from overhead.locator.geodesy import (
    CartesianPoint,
    GeodeticPoint,
    METERS_PER_FOOT,
    distance,
    feet_to_meters,
    to_cartesian,
)
from overhead.locator.selector import (
    observer_point,
    rank_by_distance,
    select_closest,
    select_closest_with_distance,
)

__all__ = [
    'CartesianPoint',
    'GeodeticPoint',
    'METERS_PER_FOOT',
    'distance',
    'feet_to_meters',
    'to_cartesian',
    'observer_point',
    'rank_by_distance',
    'select_closest',
    'select_closest_with_distance',
]
