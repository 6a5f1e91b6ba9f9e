"""
Closest-flight endpoints.

Provides endpoints for:
- GET /             - Plain-text description of the closest aircraft
- GET /api/closest  - Same query as JSON, with distance and resolved names

Both take query parameters longitude, latitude (degrees) and altitude (feet).
"""

import logging
import math
import time

from flask import Blueprint, Response, current_app, jsonify, request

from overhead.errors import FeedFormatError, InvalidQueryError, UpstreamUnavailableError
from overhead.services.nearest_flight import NearestFlightService, ObserverQuery

logger = logging.getLogger(__name__)

closest_bp = Blueprint('closest', __name__)

FEED_UNAVAILABLE_MESSAGE = 'flight feed unavailable'
FEED_MALFORMED_MESSAGE = 'flight feed returned an unexpected payload'


def _float_arg(name: str) -> float:
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        raise InvalidQueryError(f'{name} is required')
    try:
        value = float(raw)
    except ValueError:
        raise InvalidQueryError(f'{name} must be a number')
    if not math.isfinite(value):
        raise InvalidQueryError(f'{name} must be finite')
    return value


def parse_observer_query() -> ObserverQuery:
    """
    Read the observer position from the request arguments.

    Raises:
        InvalidQueryError: missing, non-numeric or out-of-range values
    """
    longitude = _float_arg('longitude')
    latitude = _float_arg('latitude')
    altitude = _float_arg('altitude')

    # Validate ranges
    if not (-90 <= latitude <= 90):
        raise InvalidQueryError('latitude must be between -90 and 90')
    if not (-180 <= longitude <= 180):
        raise InvalidQueryError('longitude must be between -180 and 180')

    return ObserverQuery(longitude=longitude, latitude=latitude, altitude_feet=altitude)


def _service() -> NearestFlightService:
    return current_app.config['NEAREST_FLIGHT_SERVICE']


@closest_bp.route('/', methods=['GET'])
def closest_text():
    """
    Describe the closest aircraft in one line of plain text.

    "<airline> <aircraft type> from <origin> to <destination>", or
    "no aircraft found nearby".
    """
    logger.info('GET received')

    try:
        query = parse_observer_query()
        result = _service().find_closest(query)
    except InvalidQueryError as e:
        return Response(str(e), status=400, mimetype='text/plain')
    except UpstreamUnavailableError:
        return Response(FEED_UNAVAILABLE_MESSAGE, status=502, mimetype='text/plain')
    except FeedFormatError as e:
        logger.error(f'Feed format error: {e}')
        return Response(FEED_MALFORMED_MESSAGE, status=502, mimetype='text/plain')

    return Response(result.text, mimetype='text/plain')


@closest_bp.route('/api/closest', methods=['GET'])
def closest_json():
    """
    Closest aircraft as JSON.

    Query parameters:
    - longitude, latitude, altitude: observer position (required)
    - nearby: int, also list this many nearest flights (default 0, max 50)

    Response includes query timing for latency awareness.
    """
    start_time = time.perf_counter()

    try:
        query = parse_observer_query()
        nearby = min(max(int(request.args.get('nearby', 0)), 0), 50)
    except InvalidQueryError as e:
        return jsonify({'error': str(e)}), 400
    except ValueError:
        return jsonify({'error': 'nearby must be an integer'}), 400

    try:
        result = _service().find_closest(query, include_nearby=nearby)
    except UpstreamUnavailableError as e:
        return jsonify({'error': FEED_UNAVAILABLE_MESSAGE, 'detail': str(e)}), 502
    except FeedFormatError as e:
        logger.error(f'Feed format error: {e}')
        return jsonify({'error': FEED_MALFORMED_MESSAGE, 'detail': str(e)}), 502

    body = result.to_dict()
    body['observer'] = {
        'longitude': query.longitude,
        'latitude': query.latitude,
        'altitude_ft': query.altitude_feet,
    }
    body['query_time_ms'] = round((time.perf_counter() - start_time) * 1000, 2)

    return jsonify(body)
