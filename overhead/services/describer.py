"""
Flight description - turns the winning record into display text.

Resolves the record's codes through the reference tables and formats the
single line the root endpoint returns:

    "<airline> <aircraft type> from <origin> to <destination>"

The from/to clauses are dropped when the airport is unresolved.
"""

from dataclasses import dataclass
from typing import Optional

from overhead.ingestion.reference_data import MetadataResolver
from overhead.models import FlightRecord

NO_AIRCRAFT_MESSAGE = 'no aircraft found nearby'


@dataclass
class FlightDescription:
    """Resolved names for a flight; empty string when unknown."""
    airline: str = ''
    aircraft_type: str = ''
    origin: str = ''
    destination: str = ''

    def to_text(self) -> str:
        parts = [p for p in (self.airline, self.aircraft_type) if p]
        if self.origin:
            parts.append(f'from {self.origin}')
        if self.destination:
            parts.append(f'to {self.destination}')
        return ' '.join(parts)


def describe_flight(record: FlightRecord, resolver: MetadataResolver) -> FlightDescription:
    return FlightDescription(
        airline=resolver.resolve_airline(record.airline_code),
        aircraft_type=resolver.resolve_aircraft_type(record.aircraft_type_code),
        origin=resolver.resolve_airport(record.origin_airport_code),
        destination=resolver.resolve_airport(record.destination_airport_code),
    )


def format_flight(record: Optional[FlightRecord], resolver: MetadataResolver) -> str:
    """
    Format the closest flight for display.

    Returns the fixed no-aircraft message when there is no record. A record
    whose codes all fail to resolve falls back to its callsign so the reply
    is never blank.
    """
    if record is None:
        return NO_AIRCRAFT_MESSAGE

    text = describe_flight(record, resolver).to_text()
    return text or record.display_callsign
