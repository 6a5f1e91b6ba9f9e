"""
Configuration management for Overhead.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class FeedConfig:
    """Flightradar24 zone feed settings."""
    feed_url: str = os.getenv(
        'FEED_URL', 'https://data-live.flightradar24.com/zones/fcgi/feed.js'
    )
    # Homepage that hands out the session cookie
    session_url: str = os.getenv('SESSION_URL', 'https://www.flightradar24.com')
    timeout_seconds: float = float(os.getenv('FEED_TIMEOUT_SECONDS', '10'))

    # Half-height of the query box in degrees; width is scaled by cos(lat)
    latitude_delta: float = float(os.getenv('LATITUDE_DELTA_DEGREES', '0.2'))


@dataclass(frozen=True)
class ReferenceDataConfig:
    """Static lookup tables (openflights.org derived, code,name rows)."""
    data_dir: str = os.getenv('DATA_DIR', 'data')
    airlines_file: str = 'airlines.csv'
    aircraft_types_file: str = 'planes.csv'
    airports_file: str = 'airports.csv'

    @property
    def airlines_path(self) -> Path:
        return Path(self.data_dir) / self.airlines_file

    @property
    def aircraft_types_path(self) -> Path:
        return Path(self.data_dir) / self.aircraft_types_file

    @property
    def airports_path(self) -> Path:
        return Path(self.data_dir) / self.airports_file


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    feed: FeedConfig
    reference_data: ReferenceDataConfig

    # Flask settings
    port: int
    debug: bool


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        feed=FeedConfig(),
        reference_data=ReferenceDataConfig(),
        port=int(os.getenv('PORT', '2107')),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
