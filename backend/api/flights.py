"""
Flight data API endpoints.

Provides endpoints for:
- GET /api/flights - Current airborne flights from the first provider that answers

Upstream failures are reported in the JSON body only. The status is
always 200 so the map client never has to special-case a provider outage.
"""

import logging
import time

from flask import Blueprint, current_app, jsonify

from backend.ingestion import FlightGateway, FlightSnapshot

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')


def _get_gateway() -> FlightGateway:
    gateway = current_app.config.get('FLIGHT_GATEWAY')
    if gateway is None:
        gateway = FlightGateway.from_config()
        current_app.config['FLIGHT_GATEWAY'] = gateway
    return gateway


@flights_bp.route('', methods=['GET'])
def list_flights():
    """
    List all currently airborne flights.

    Response:
    - {"time", "flights", "source", "count"} when a provider answered
    - {"error", "flights": [], "count": 0} when none did
    """
    start_time = time.perf_counter()

    try:
        snapshot = _get_gateway().get_flights()
    except Exception as e:
        logger.exception('Unexpected error building flight snapshot')
        snapshot = FlightSnapshot.failed(f'Error fetching flight data: {e}')

    query_time_ms = (time.perf_counter() - start_time) * 1000
    logger.debug(f'/api/flights served {snapshot.count} flights in {query_time_ms:.1f}ms')

    return jsonify(snapshot.to_dict()), 200
