"""
Reference table loader and code lookups.

Maps coded identifiers from the feed to display names:
- ICAO airline code   -> airline name      (airlines.csv)
- ICAO aircraft type  -> aircraft name     (planes.csv)
- IATA airport code   -> airport name      (airports.csv)

Tables are two-column CSV files (code,name) derived from openflights.org,
loaded once at startup and read-only afterwards.

Usage:
    from overhead.ingestion.reference_data import MetadataResolver

    resolver = MetadataResolver.from_config()
    resolver.resolve_aircraft_type('B738')  # 'Boeing 737-800'
"""

import csv
import logging
from pathlib import Path
from typing import Dict, Optional

from overhead.config import config

logger = logging.getLogger(__name__)


def load_code_table(csv_path: Path) -> Dict[str, str]:
    """
    Load a code,name CSV into a dict.

    Rows with fewer than two columns or an empty code are skipped; a repeated
    code keeps the last name seen. A missing file yields an empty table so
    the service can still answer (with blank names).

    Returns dict of code -> name.
    """
    if not csv_path.exists():
        logger.error(f'Reference table not found: {csv_path}')
        return {}

    logger.info(f'Loading {csv_path}')
    table: Dict[str, str] = {}
    skipped = 0

    with open(csv_path, 'r', encoding='utf-8', errors='ignore', newline='') as f:
        reader = csv.reader(f)

        for row in reader:
            if len(row) < 2 or not row[0].strip():
                skipped += 1
                continue
            table[row[0].strip().upper()] = row[1].strip()

    if skipped:
        logger.debug(f'Skipped {skipped} short rows in {csv_path}')
    logger.info(f'Loaded {len(table)} entries from {csv_path.name}')
    return table


class MetadataResolver:
    """
    Read-only lookups over the static reference tables.

    Unknown or absent codes resolve to an empty string, never an error.
    """

    def __init__(
        self,
        airlines: Optional[Dict[str, str]] = None,
        aircraft_types: Optional[Dict[str, str]] = None,
        airports: Optional[Dict[str, str]] = None,
    ):
        self._airlines = airlines or {}
        self._aircraft_types = aircraft_types or {}
        self._airports = airports or {}

    @classmethod
    def from_files(
        cls,
        airlines_path: Path,
        aircraft_types_path: Path,
        airports_path: Path,
    ) -> 'MetadataResolver':
        return cls(
            airlines=load_code_table(airlines_path),
            aircraft_types=load_code_table(aircraft_types_path),
            airports=load_code_table(airports_path),
        )

    @classmethod
    def from_config(cls) -> 'MetadataResolver':
        """Create resolver from the configured data directory."""
        ref = config.reference_data
        return cls.from_files(
            ref.airlines_path,
            ref.aircraft_types_path,
            ref.airports_path,
        )

    @staticmethod
    def _lookup(table: Dict[str, str], code: Optional[str]) -> str:
        if not code:
            return ''
        return table.get(code.strip().upper(), '')

    def resolve_airline(self, code: Optional[str]) -> str:
        """Airline name for an ICAO airline code."""
        return self._lookup(self._airlines, code)

    def resolve_aircraft_type(self, code: Optional[str]) -> str:
        """Aircraft name for an ICAO type designator."""
        return self._lookup(self._aircraft_types, code)

    def resolve_airport(self, iata_code: Optional[str]) -> str:
        """Airport name for an IATA airport code."""
        return self._lookup(self._airports, iata_code)

    @property
    def stats(self) -> dict:
        """Table sizes, for the health endpoint."""
        return {
            'airlines': len(self._airlines),
            'aircraft_types': len(self._aircraft_types),
            'airports': len(self._airports),
        }
