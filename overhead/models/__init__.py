"""
In-memory data types for Overhead.

No persistence: every record lives for the duration of one query.
"""

from overhead.models.geometry import METERS_PER_FOOT, CartesianPoint, GeodeticPoint
from overhead.models.flight_record import FlightRecord

__all__ = [
    'METERS_PER_FOOT',
    'CartesianPoint',
    'GeodeticPoint',
    'FlightRecord',
]
