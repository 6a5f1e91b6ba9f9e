"""
Overhead Flask Application.

Main entry point for the web service. Initializes:
- Reference tables (airlines, aircraft types, airports)
- Feed session cookie
- API routes

Usage:
    python -m overhead.app

Or with gunicorn:
    gunicorn 'overhead.app:create_app()'
"""

import logging
from typing import Optional

from flask import Flask, Response
from flask_cors import CORS

from overhead.config import config
from overhead.api import closest_bp
from overhead.errors import UpstreamUnavailableError
from overhead.ingestion import FeedClient, MetadataResolver
from overhead.services import NearestFlightService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(service: Optional[NearestFlightService] = None) -> Flask:
    """
    Application factory for Flask.

    Args:
        service: Pre-built query service. Built from config if None, which
                 loads the reference tables and acquires the session cookie.
                 Pass one in for testing.

    Returns:
        Configured Flask application instance.

    Raises:
        UpstreamUnavailableError: the session cookie could not be acquired
    """
    app = Flask(__name__)

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    if service is None:
        logger.info('Loading reference tables...')
        resolver = MetadataResolver.from_config()

        logger.info('Acquiring feed session cookie...')
        try:
            feed_client = FeedClient.from_config()
        except UpstreamUnavailableError:
            logger.critical('Cannot start without a feed session cookie')
            raise

        service = NearestFlightService(feed_client, resolver)

    app.config['NEAREST_FLIGHT_SERVICE'] = service

    # Register API blueprints
    app.register_blueprint(closest_bp)

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'status': 'ok', 'reference_tables': service.resolver.stats}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return Response('Incorrect method', status=405, mimetype='text/plain')

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    logger.info(f'Server started on http://localhost:{config.port}')

    app.run(
        host='0.0.0.0',
        port=config.port,
        debug=config.debug,
        use_reloader=False,  # Reloader would acquire a second cookie
    )


if __name__ == '__main__':
    run_development_server()
