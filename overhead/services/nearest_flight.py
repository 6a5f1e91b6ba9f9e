"""
Nearest-flight query pipeline.

One synchronous pass per query:
1. Transform the observer position (once)
2. Fetch the feed snapshot around the observer
3. Decode rows into candidates
4. Select the closest candidate
5. Resolve its metadata

Feed and format failures propagate to the caller; an empty snapshot is a
normal outcome with no flight.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from overhead.ingestion.feed_client import FeedClient
from overhead.ingestion.feed_decoder import decode_feed
from overhead.ingestion.reference_data import MetadataResolver
from overhead.locator import observer_point, rank_by_distance, select_closest_with_distance
from overhead.models import FlightRecord
from overhead.services.describer import FlightDescription, describe_flight, format_flight

logger = logging.getLogger(__name__)


@dataclass
class ObserverQuery:
    """Observer position as received: degrees and feet."""
    longitude: float
    latitude: float
    altitude_feet: float


@dataclass
class ClosestFlight:
    """Result of one query. `record` is None when nothing was in range."""
    record: Optional[FlightRecord]
    distance_m: Optional[float]
    description: Optional[FlightDescription]
    text: str
    candidate_count: int
    nearby: List[dict] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.record is not None

    def to_dict(self) -> dict:
        result = {
            'found': self.found,
            'text': self.text,
            'candidate_count': self.candidate_count,
            'flight': None,
        }
        if self.record is not None:
            result['flight'] = {
                **self.record.to_dict(),
                'distance_m': round(self.distance_m, 1),
                'airline_name': self.description.airline,
                'aircraft_name': self.description.aircraft_type,
                'origin_name': self.description.origin,
                'destination_name': self.description.destination,
            }
        if self.nearby:
            result['nearby'] = self.nearby
        return result


class NearestFlightService:
    """
    Answers "which aircraft is closest to me?".

    Holds the shared feed client (and its session cookie) and the
    reference tables. Both are read-only across requests.
    """

    def __init__(self, feed_client: FeedClient, resolver: MetadataResolver):
        self.feed_client = feed_client
        self.resolver = resolver

    def find_candidates(self, query: ObserverQuery) -> List[FlightRecord]:
        """
        Fetch and decode the snapshot around the observer.

        Raises:
            UpstreamUnavailableError: feed fetch failed
            FeedFormatError: feed payload has the wrong shape
        """
        raw = self.feed_client.fetch_around(query.latitude, query.longitude)
        return decode_feed(raw)

    def find_closest(self, query: ObserverQuery, include_nearby: int = 0) -> ClosestFlight:
        """
        Run the full pipeline for one observer.

        Args:
            query: Observer position
            include_nearby: Also report this many nearest flights (JSON API)
        """
        start_time = time.perf_counter()

        observer = observer_point(query.longitude, query.latitude, query.altitude_feet)
        candidates = self.find_candidates(query)

        nearby = []
        if include_nearby > 0:
            ranked = rank_by_distance(observer, candidates)
            closest, closest_distance = ranked[0] if ranked else (None, None)
            nearby = [
                {
                    'identifier': record.identifier,
                    'callsign': record.display_callsign,
                    'distance_m': round(d, 1),
                }
                for record, d in ranked[:include_nearby]
            ]
        else:
            closest, closest_distance = select_closest_with_distance(observer, candidates)

        if closest is None:
            result = ClosestFlight(
                record=None,
                distance_m=None,
                description=None,
                text=format_flight(None, self.resolver),
                candidate_count=len(candidates),
                nearby=nearby,
            )
        else:
            result = ClosestFlight(
                record=closest,
                distance_m=closest_distance,
                description=describe_flight(closest, self.resolver),
                text=format_flight(closest, self.resolver),
                candidate_count=len(candidates),
                nearby=nearby,
            )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f'Closest of {len(candidates)} candidates: '
            f'{closest.identifier if closest else "none"} ({elapsed_ms:.0f} ms)'
        )
        return result
