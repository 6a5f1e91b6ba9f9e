"""
Flightradar24 zone feed decoder.

The feed is a JSON object keyed by feed-assigned flight ids. Each value is a
positional array; the index -> field mapping lives in FEED_FIELDS so that
upstream schema drift is a one-table edit.

Feed row format (array indices, * = required):
0: icao24             - ICAO24 hex address
1: latitude *         - WGS84 latitude (degrees)
2: longitude *        - WGS84 longitude (degrees)
3: heading            - Track (degrees)
4: altitude *         - Altitude (feet)
5: ground_speed       - Ground speed (knots)
6: squawk             - Transponder code
7: radar              - Receiving station (unused)
8: aircraft_type      - ICAO aircraft type code
9: registration       - Tail number
10: timestamp         - Unix time of last update (unused)
11: origin            - Departure airport IATA code
12: destination       - Arrival airport IATA code
13: flight_number     - IATA flight number
14: on_ground         - 1 when on the ground
15: vertical_speed    - Feet per minute (unused)
16: callsign          - ICAO callsign
17: glider flag       - (unused)
18: airline           - Airline ICAO code
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Union

from overhead.errors import FeedFormatError, PartialRecordError
from overhead.models import FlightRecord

logger = logging.getLogger(__name__)

# Top-level keys that describe the snapshot rather than a flight
BOOKKEEPING_KEYS = frozenset({'full_count', 'version', 'stats'})


class _Absent:
    """Marker for a field the row did not carry."""

    def __repr__(self) -> str:
        return 'ABSENT'

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass(frozen=True)
class FieldSpec:
    """One positional column of a feed row."""
    index: int
    name: str      # FlightRecord attribute
    kind: type     # float, int, str or bool
    required: bool = False


FEED_FIELDS = (
    FieldSpec(0, 'icao24', str),
    FieldSpec(1, 'latitude', float, required=True),
    FieldSpec(2, 'longitude', float, required=True),
    FieldSpec(3, 'heading', int),
    FieldSpec(4, 'altitude_feet', int, required=True),
    FieldSpec(5, 'ground_speed_knots', int),
    FieldSpec(6, 'squawk', str),
    FieldSpec(8, 'aircraft_type_code', str),
    FieldSpec(9, 'registration', str),
    FieldSpec(11, 'origin_airport_code', str),
    FieldSpec(12, 'destination_airport_code', str),
    FieldSpec(13, 'flight_number', str),
    FieldSpec(14, 'on_ground', bool),
    FieldSpec(16, 'callsign', str),
    FieldSpec(18, 'airline_code', str),
)


def _coerce(value: Any, kind: type) -> Any:
    """Narrow a JSON value to `kind`, or return ABSENT if it doesn't fit."""
    if value is None:
        return ABSENT

    if kind is str:
        if not isinstance(value, str):
            return ABSENT
        value = value.strip()
        return value or ABSENT

    if kind is bool:
        # feed sends 0/1 for flags
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        return ABSENT

    # JSON booleans are ints in Python; never accept them as numbers
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ABSENT

    # json.loads accepts NaN and Infinity
    if not math.isfinite(value):
        return ABSENT

    if kind is int:
        return int(value)
    return float(value)


def extract_field(row: List[Any], spec: FieldSpec) -> Any:
    """
    Read one column from a feed row.

    Returns the typed value or ABSENT. Short rows and mistyped values are
    both treated as absent; callers decide whether absence is fatal.
    """
    if spec.index >= len(row):
        return ABSENT
    return _coerce(row[spec.index], spec.kind)


def decode_record(identifier: str, row: Any) -> FlightRecord:
    """
    Decode a single feed row into a FlightRecord.

    Raises:
        PartialRecordError: row is not an array, or a required field is
            missing or not numeric
    """
    if not isinstance(row, list):
        raise PartialRecordError(identifier, 'row', f'is {type(row).__name__}, expected array')

    values: Dict[str, Any] = {}
    for spec in FEED_FIELDS:
        value = extract_field(row, spec)
        if value is ABSENT:
            if spec.required:
                reason = 'missing' if spec.index >= len(row) else f'invalid ({row[spec.index]!r})'
                raise PartialRecordError(identifier, spec.name, reason)
            continue
        values[spec.name] = value

    return FlightRecord(identifier=identifier, **values)


def parse_payload(raw: Union[bytes, str, Any]) -> Dict[str, Any]:
    """
    Parse raw feed bytes/text into the top-level object.

    Already-parsed objects are passed through the same shape check.

    Raises:
        FeedFormatError: not valid JSON, or not a JSON object
    """
    if isinstance(raw, (bytes, bytearray, str)):
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise FeedFormatError(f'Feed payload is not valid JSON: {e}') from e
    else:
        payload = raw

    if not isinstance(payload, dict):
        raise FeedFormatError(
            f'Feed payload is {type(payload).__name__}, expected object of arrays'
        )

    return payload


def decode_feed(raw: Union[bytes, str, Any]) -> List[FlightRecord]:
    """
    Decode a whole feed snapshot.

    Bookkeeping keys are skipped, malformed rows are dropped individually,
    and everything else becomes a candidate.

    Raises:
        FeedFormatError: the payload itself has the wrong shape
    """
    payload = parse_payload(raw)

    records: List[FlightRecord] = []
    dropped = 0

    for identifier, row in payload.items():
        if identifier in BOOKKEEPING_KEYS:
            continue

        try:
            records.append(decode_record(identifier, row))
        except PartialRecordError as e:
            dropped += 1
            logger.debug(f'Dropping feed row {e}')

    if dropped:
        logger.warning(f'Dropped {dropped} malformed feed row(s), kept {len(records)}')
    else:
        logger.debug(f'Decoded {len(records)} feed rows')

    return records
