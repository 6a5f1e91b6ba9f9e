"""
Nearest-neighbor selection over one feed snapshot.

Candidate counts are small (a single bounding box around the observer),
so selection is a plain linear scan.
"""

import logging
import math
from typing import Iterable, List, Optional, Tuple

from overhead.models import FlightRecord
from overhead.locator.geodesy import (
    METERS_PER_FOOT,
    CartesianPoint,
    distance,
    feet_to_meters,
    geodetic_to_cartesian,
    to_cartesian,
)

logger = logging.getLogger(__name__)


def observer_point(
    longitude: float,
    latitude: float,
    altitude_feet: float,
    meters_per_foot: float = METERS_PER_FOOT,
) -> CartesianPoint:
    """
    Build the observer's ECEF point from query values.

    Longitude/latitude are degrees, altitude is feet. The altitude must be
    converted with the same factor used for the candidates.
    """
    return to_cartesian(
        math.radians(longitude),
        math.radians(latitude),
        feet_to_meters(altitude_feet, meters_per_foot),
    )


def candidate_distance(
    observer: CartesianPoint,
    record: FlightRecord,
    meters_per_foot: float = METERS_PER_FOOT,
) -> float:
    """Distance in meters from the observer to one decoded flight."""
    return distance(observer, geodetic_to_cartesian(record.to_geodetic(meters_per_foot)))


def select_closest_with_distance(
    observer: CartesianPoint,
    candidates: Iterable[FlightRecord],
    meters_per_foot: float = METERS_PER_FOOT,
) -> Tuple[Optional[FlightRecord], Optional[float]]:
    """
    Return the closest candidate and its distance in meters.

    Both are None for an empty set. The first candidate seen wins on an
    exact tie.
    """
    best: Optional[FlightRecord] = None
    best_distance = math.inf

    for record in candidates:
        d = candidate_distance(observer, record, meters_per_foot)
        if d < best_distance:
            best_distance = d
            best = record

    if best is None:
        logger.debug('No candidates to select from')
        return None, None

    logger.debug(f'Closest flight {best.identifier} at {best_distance:.0f} m')
    return best, best_distance


def select_closest(
    observer: CartesianPoint,
    candidates: Iterable[FlightRecord],
    meters_per_foot: float = METERS_PER_FOOT,
) -> Optional[FlightRecord]:
    """Return the candidate closest to the observer, or None for an empty set."""
    return select_closest_with_distance(observer, candidates, meters_per_foot)[0]


def rank_by_distance(
    observer: CartesianPoint,
    candidates: Iterable[FlightRecord],
    meters_per_foot: float = METERS_PER_FOOT,
) -> List[Tuple[FlightRecord, float]]:
    """All candidates paired with their distance, nearest first."""
    ranked = [
        (record, candidate_distance(observer, record, meters_per_foot))
        for record in candidates
    ]
    # sort is stable, so equal distances keep feed order like select_closest
    ranked.sort(key=lambda pair: pair[1])
    return ranked
