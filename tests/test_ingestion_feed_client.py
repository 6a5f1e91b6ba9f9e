"""
Tests for the zone feed client and session cookie.
"""

import math
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
import requests
from requests.exceptions import ConnectionError, Timeout

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from overhead.config import config
from overhead.errors import UpstreamUnavailableError
from overhead.ingestion.feed_client import BoundingBox, FeedClient, SessionCookie


def make_response(status_code=200, content=b'{}', headers=None):
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.url = 'https://feed.example.test/feed.js'
    if headers:
        response.headers.update(headers)
    return response


@pytest.fixture
def cookie():
    return SessionCookie(value='_frPl=abc123')


@pytest.fixture
def mock_session():
    return Mock(spec=requests.Session)


class TestBoundingBox:
    """Tests for BoundingBox.around."""

    def test_center_in_box(self):
        bbox = BoundingBox.around(53.35, -6.26, 0.2)
        assert bbox.lat_min < 53.35 < bbox.lat_max
        assert bbox.lon_min < -6.26 < bbox.lon_max

    def test_latitude_delta_fixed(self):
        bbox = BoundingBox.around(53.35, -6.26, 0.2)
        assert bbox.lat_max - bbox.lat_min == pytest.approx(0.4)

    def test_longitude_delta_scaled_by_cos(self):
        bbox = BoundingBox.around(60.0, 10.0, 0.2)
        assert bbox.lon_max - 10.0 == pytest.approx(0.2 * math.cos(math.radians(60.0)))

    def test_equator_is_square(self):
        bbox = BoundingBox.around(0.0, 0.0, 0.2)
        assert bbox.lon_max == pytest.approx(0.2)

    def test_bounds_order(self):
        """Feed wants north,south,west,east."""
        bbox = BoundingBox(lat_min=1.0, lat_max=2.0, lon_min=3.0, lon_max=4.0)
        assert bbox.to_bounds() == '2.000000,1.000000,3.000000,4.000000'


class TestSessionCookie:
    """Tests for SessionCookie.acquire."""

    def test_keeps_first_pair(self, mock_session):
        mock_session.get.return_value = make_response(
            headers={'Set-Cookie': '_frPl=abc123; expires=Thu, 01 Jan 2099 00:00:00 GMT; path=/'}
        )
        cookie = SessionCookie.acquire(session=mock_session, url='https://example.test')
        assert cookie.value == '_frPl=abc123'
        assert cookie.as_header() == {'Cookie': '_frPl=abc123'}

    def test_no_cookie_header(self, mock_session):
        mock_session.get.return_value = make_response()
        with pytest.raises(UpstreamUnavailableError):
            SessionCookie.acquire(session=mock_session, url='https://example.test')

    def test_network_error(self, mock_session):
        mock_session.get.side_effect = ConnectionError('unreachable')
        with pytest.raises(UpstreamUnavailableError):
            SessionCookie.acquire(session=mock_session, url='https://example.test')


class TestFeedClient:
    """Tests for FeedClient.fetch."""

    def test_returns_body_bytes(self, cookie, mock_session):
        mock_session.get.return_value = make_response(content=b'{"version": 4}')
        client = FeedClient(cookie, feed_url='https://feed.example.test/feed.js', session=mock_session)

        body = client.fetch_around(53.35, -6.26)

        assert body == b'{"version": 4}'

    def test_sends_cookie_and_bounds(self, cookie, mock_session):
        mock_session.get.return_value = make_response()
        client = FeedClient(cookie, feed_url='https://feed.example.test/feed.js',
                            timeout=5, session=mock_session)

        client.fetch(BoundingBox(lat_min=1.0, lat_max=2.0, lon_min=3.0, lon_max=4.0))

        args, kwargs = mock_session.get.call_args
        assert args[0] == 'https://feed.example.test/feed.js'
        assert kwargs['headers'] == {'Cookie': '_frPl=abc123'}
        assert kwargs['params']['bounds'] == '2.000000,1.000000,3.000000,4.000000'
        assert kwargs['params']['gnd'] == 0
        assert kwargs['timeout'] == 5

    def test_defaults_from_config(self, cookie, mock_session):
        """Omitted settings come from the feed section of the app config."""
        client = FeedClient(cookie, session=mock_session)
        assert client.feed_url == config.feed.feed_url
        assert client.timeout == config.feed.timeout_seconds
        assert client.latitude_delta == config.feed.latitude_delta

    def test_from_config_uses_config_values(self, cookie):
        client = FeedClient.from_config(cookie=cookie)
        assert client.feed_url == config.feed.feed_url
        assert client.timeout == config.feed.timeout_seconds
        assert client.latitude_delta == config.feed.latitude_delta
        assert client.cookie is cookie

    def test_uses_configured_delta(self, cookie, mock_session):
        client = FeedClient(cookie, latitude_delta=0.5, session=mock_session)
        bbox = client.bounding_box(10.0, 20.0)
        assert bbox.lat_max == pytest.approx(10.5)

    @pytest.mark.parametrize('status', [401, 403, 500, 503])
    def test_http_error(self, cookie, mock_session, status):
        mock_session.get.return_value = make_response(status_code=status)
        client = FeedClient(cookie, session=mock_session)

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            client.fetch_around(53.35, -6.26)
        assert str(status) in str(exc_info.value)

    def test_timeout(self, cookie, mock_session):
        mock_session.get.side_effect = Timeout()
        client = FeedClient(cookie, session=mock_session)

        with pytest.raises(UpstreamUnavailableError):
            client.fetch_around(53.35, -6.26)

    def test_connection_error(self, cookie, mock_session):
        mock_session.get.side_effect = ConnectionError('reset')
        client = FeedClient(cookie, session=mock_session)

        with pytest.raises(UpstreamUnavailableError):
            client.fetch_around(53.35, -6.26)

    def test_no_retry(self, cookie, mock_session):
        mock_session.get.return_value = make_response(status_code=503)
        client = FeedClient(cookie, session=mock_session)

        with pytest.raises(UpstreamUnavailableError):
            client.fetch_around(53.35, -6.26)
        assert mock_session.get.call_count == 1
