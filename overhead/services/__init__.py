"""
Query services: the nearest-flight pipeline and response formatting.
"""

from overhead.services.describer import FlightDescription, format_flight, NO_AIRCRAFT_MESSAGE
from overhead.services.nearest_flight import ClosestFlight, NearestFlightService, ObserverQuery

__all__ = [
    'FlightDescription',
    'format_flight',
    'NO_AIRCRAFT_MESSAGE',
    'ClosestFlight',
    'NearestFlightService',
    'ObserverQuery',
]
