"""
Flightradar24 zone feed client.

Handles communication with the public feed.js endpoint, including:
- Session cookie acquisition (once, at startup)
- Bounding box queries around the observer
- Mapping transport and HTTP failures to UpstreamUnavailableError

The cookie is never refreshed. If the provider invalidates it, every query
fails until the process restarts.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import requests

from overhead.config import config
from overhead.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

# Fixed feed flags sent with every query
FEED_FLAGS = {
    'faa': 1,
    'satellite': 1,
    'mlat': 1,
    'flarm': 1,
    'adsb': 1,
    'gnd': 0,
    'air': 1,
    'vehicles': 0,
    'estimated': 1,
    'maxage': 14400,
    'gliders': 0,
    'stats': 0,
}


@dataclass
class BoundingBox:
    """
    Geographic bounding box for feed queries (degrees).

    The feed expects bounds=north,south,west,east.
    """
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    @classmethod
    def around(
        cls,
        center_lat: float,
        center_lon: float,
        latitude_delta: float,
    ) -> 'BoundingBox':
        """
        Create a box around a point.

        The longitude half-width is latitude_delta * cos(lat), a small-angle
        approximation rather than a geodesic one.
        """
        lon_delta = latitude_delta * math.cos(math.radians(center_lat))

        return cls(
            lat_min=center_lat - latitude_delta,
            lat_max=center_lat + latitude_delta,
            lon_min=center_lon - lon_delta,
            lon_max=center_lon + lon_delta,
        )

    def to_bounds(self) -> str:
        """Format as the feed's bounds parameter."""
        return f'{self.lat_max:f},{self.lat_min:f},{self.lon_min:f},{self.lon_max:f}'


@dataclass(frozen=True)
class SessionCookie:
    """
    Session cookie sent with every feed request.

    Acquired once and shared read-only between requests.
    """
    value: str

    @classmethod
    def acquire(
        cls,
        session: Optional[requests.Session] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> 'SessionCookie':
        """
        Fetch the provider homepage and keep the first Set-Cookie pair.

        Raises:
            UpstreamUnavailableError: homepage unreachable or no cookie set
        """
        session = session or requests.Session()
        url = url or config.feed.session_url
        timeout = timeout or config.feed.timeout_seconds

        try:
            response = session.get(url, timeout=timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f'Could not fetch session cookie from {url}: {e}')
            raise UpstreamUnavailableError(f'Session cookie request failed: {e}') from e

        header = response.headers.get('Set-Cookie')
        if not header:
            logger.error(f'No Set-Cookie header from {url} (status {response.status_code})')
            raise UpstreamUnavailableError('Provider did not set a session cookie')

        value = header.split(';')[0].strip()
        logger.info(f'Acquired session cookie {value.split("=")[0]}')
        return cls(value=value)

    def as_header(self) -> dict:
        return {'Cookie': self.value}


class FeedClient:
    """
    Client for the zone feed.

    Handles:
    - GET requests to feed.js with a bounding box
    - Sending the shared session cookie
    - Bounded request time (no retries)
    """

    def __init__(
        self,
        cookie: SessionCookie,
        feed_url: Optional[str] = None,
        timeout: Optional[float] = None,
        latitude_delta: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """Unset settings fall back to config.feed."""
        self.cookie = cookie
        self.feed_url = feed_url or config.feed.feed_url
        self.timeout = timeout if timeout is not None else config.feed.timeout_seconds
        self.latitude_delta = (
            latitude_delta if latitude_delta is not None else config.feed.latitude_delta
        )
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, cookie: Optional[SessionCookie] = None) -> 'FeedClient':
        """Create client from application configuration, acquiring a cookie if none given."""
        session = requests.Session()
        if cookie is None:
            cookie = SessionCookie.acquire(session=session)
        return cls(cookie=cookie, session=session)

    def bounding_box(self, latitude: float, longitude: float) -> BoundingBox:
        return BoundingBox.around(latitude, longitude, self.latitude_delta)

    def fetch(self, bbox: BoundingBox) -> bytes:
        """
        Fetch the raw feed snapshot for a bounding box.

        Returns:
            Response body bytes, undecoded

        Raises:
            UpstreamUnavailableError on network errors, timeouts or non-2xx
        """
        params = {'bounds': bbox.to_bounds(), **FEED_FLAGS}

        logger.debug(f'Fetching feed: {self.feed_url} bounds={params["bounds"]}')

        try:
            response = self.session.get(
                self.feed_url,
                params=params,
                headers=self.cookie.as_header(),
                timeout=self.timeout,
            )
            response.raise_for_status()

        except requests.exceptions.Timeout as e:
            logger.error(f'Feed request timed out after {self.timeout}s')
            raise UpstreamUnavailableError('Flight feed timed out') from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else '?'
            if status in (401, 403):
                logger.error(f'Feed rejected session cookie ({status}); restart to acquire a new one')
            else:
                logger.error(f'Feed API error: {status}')
            raise UpstreamUnavailableError(f'Flight feed returned HTTP {status}') from e
        except requests.exceptions.RequestException as e:
            logger.error(f'Feed request failed: {e}')
            raise UpstreamUnavailableError(f'Flight feed request failed: {e}') from e

        logger.debug(f'Received {len(response.content)} bytes from feed')
        return response.content

    def fetch_around(self, latitude: float, longitude: float) -> bytes:
        """
        Fetch the snapshot around a center point.

        Convenience method that constructs the bounding box from the
        configured latitude delta.
        """
        return self.fetch(self.bounding_box(latitude, longitude))
