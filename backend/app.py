"""
Mini Flight Radar Flask Application.

Main entry point for the web application. Initializes:
- Flight gateway (primary + fallback upstream providers)
- API routes
- Static file serving for the radar page

Usage:
    python -m backend.app

Or with gunicorn:
    gunicorn 'backend.app:create_app()'
"""

import logging
from typing import Optional

from flask import Flask, send_from_directory
from flask_cors import CORS

from backend.config import config
from backend.api import flights_bp
from backend.ingestion import FlightGateway

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(gateway: Optional[FlightGateway] = None) -> Flask:
    """
    Application factory for Flask.

    Args:
        gateway: Flight gateway to serve snapshots from. Built from
                 configuration when None; pass one in for testing.

    Returns:
        Configured Flask application instance.
    """
    # Create Flask app
    app = Flask(
        __name__,
        static_folder='../frontend',
        static_url_path='',
    )

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    app.config['FLIGHT_GATEWAY'] = gateway or FlightGateway.from_config()
    logger.info(
        'Upstream providers: '
        + ' -> '.join(f'{p.name} ({p.timeout:g}s)' for p in config.upstream.providers)
    )

    # Register API blueprints
    app.register_blueprint(flights_bp)

    # -------------------------------------------------------------------------
    # Frontend routes
    # -------------------------------------------------------------------------

    @app.route('/')
    def index():
        """Serve the radar map view."""
        return send_from_directory(app.static_folder, 'index.html')

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'status': 'ok'}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    logger.info(f'Starting Mini Flight Radar on http://localhost:{config.port}')
    logger.info(f'Map view: http://localhost:{config.port}/')

    app.run(
        host='0.0.0.0',
        port=config.port,
        debug=config.debug,
    )


if __name__ == '__main__':
    run_development_server()
