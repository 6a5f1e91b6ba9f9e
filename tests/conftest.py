"""
Shared fixtures for Overhead tests.
"""

import json
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from overhead.ingestion.reference_data import MetadataResolver


# Dublin-ish observer used across tests (degrees, feet)
OBSERVER_LON = -6.2603
OBSERVER_LAT = 53.3498
OBSERVER_ALT_FT = 100.0


def feed_row(
    lat, lon, alt_ft,
    aircraft_type='A320', origin='LHR', destination='DUB',
    callsign='EIN155', airline='EIN',
):
    """Build a full 19-column feed row."""
    return [
        '4CA7B8',      # icao24
        lat,           # latitude
        lon,           # longitude
        275,           # heading
        alt_ft,        # altitude (ft)
        182,           # ground speed (kts)
        '2301',        # squawk
        'T-EIDW1',     # radar
        aircraft_type, # aircraft type
        'EI-DEO',      # registration
        1700000000,    # timestamp
        origin,        # origin IATA
        destination,   # destination IATA
        'EI155',       # flight number
        0,             # on ground
        -768,          # vertical speed
        callsign,      # callsign
        0,             # glider
        airline,       # airline ICAO
    ]


@pytest.fixture
def resolver():
    """Resolver with small in-memory tables."""
    return MetadataResolver(
        airlines={'EIN': 'Aer Lingus', 'RYR': 'Ryanair'},
        aircraft_types={'A320': 'Airbus A320', 'B738': 'Boeing 737-800'},
        airports={'LHR': 'London Heathrow Airport', 'DUB': 'Dublin Airport'},
    )


@pytest.fixture
def feed_payload():
    """Feed snapshot with two flights and the bookkeeping keys."""
    return {
        'full_count': 14233,
        'version': 4,
        '32a1f0c3': feed_row(53.42, -6.27, 3450),
        '32a1f7d9': feed_row(
            53.10, -6.60, 36000,
            aircraft_type='B738', origin='DUB', destination='MAD',
            callsign='RYR7RK', airline='RYR',
        ),
    }


@pytest.fixture
def feed_bytes(feed_payload):
    return json.dumps(feed_payload).encode('utf-8')


class FakeFeedClient:
    """Stands in for FeedClient; returns canned bytes or raises."""

    def __init__(self, body=b'{}', error=None):
        self.body = body
        self.error = error
        self.calls = []

    def fetch_around(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture
def fake_feed_client(feed_bytes):
    return FakeFeedClient(body=feed_bytes)
