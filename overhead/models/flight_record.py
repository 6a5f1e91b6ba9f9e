"""
FlightRecord - one aircraft from a single feed snapshot.

Records are built by the feed decoder and discarded at the end of the
request; nothing is cached between queries.

Design notes:
- Latitude/longitude keep the feed's degrees; `position` converts to the
  radians the coordinate transform expects
- Altitude stays in feet as reported and is converted on demand, so the
  observer and every candidate go through the same factor
- Descriptive codes are None when the feed row did not carry them
"""

import math
from dataclasses import asdict, dataclass
from typing import Optional

from overhead.models.geometry import METERS_PER_FOOT, GeodeticPoint


@dataclass(frozen=True)
class FlightRecord:
    """Decoded feed row. Required fields first, descriptive ones optional."""
    identifier: str
    latitude: float
    longitude: float
    altitude_feet: int

    aircraft_type_code: Optional[str] = None
    airline_code: Optional[str] = None
    origin_airport_code: Optional[str] = None
    destination_airport_code: Optional[str] = None

    icao24: Optional[str] = None
    heading: Optional[int] = None
    ground_speed_knots: Optional[int] = None
    squawk: Optional[str] = None
    registration: Optional[str] = None
    flight_number: Optional[str] = None
    callsign: Optional[str] = None
    on_ground: Optional[bool] = None

    def __repr__(self) -> str:
        return f'<FlightRecord {self.identifier} {self.callsign or "?"} @ {self.altitude_feet}ft>'

    def to_geodetic(self, meters_per_foot: float = METERS_PER_FOOT) -> GeodeticPoint:
        """Position in radians with altitude converted by `meters_per_foot`."""
        return GeodeticPoint(
            longitude=math.radians(self.longitude),
            latitude=math.radians(self.latitude),
            altitude_meters=self.altitude_feet * meters_per_foot,
        )

    @property
    def position(self) -> GeodeticPoint:
        return self.to_geodetic()

    # -------------------------------------------------------------------------
    # Display helpers
    # -------------------------------------------------------------------------

    @property
    def display_callsign(self) -> str:
        """Callsign for display, with fallback."""
        return (
            self.callsign
            or self.flight_number
            or self.registration
            or self.identifier
        )

    def to_dict(self) -> dict:
        return asdict(self)
