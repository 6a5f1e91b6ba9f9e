"""
Overhead Package.

Finds the aircraft closest to an observer from the Flightradar24 zone feed
and describes it (airline, aircraft type, origin, destination).

Modules:
    api/         Flask endpoints (plain text and JSON)
    models/      Point types and the decoded FlightRecord
    ingestion/   Feed client, positional feed decoder, reference tables
    locator/     WGS84 transform, distance, nearest-neighbor selection
    services/    Query pipeline and response formatting
    errors.py    Exception types
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
