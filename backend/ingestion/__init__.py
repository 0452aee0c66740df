"""
Data ingestion module for Mini Flight Radar.

Handles calling the upstream state-vector providers, parsing state
vectors, and packaging them into snapshots for the API layer.
"""

from backend.ingestion.gateway import FlightGateway, FlightSnapshot
from backend.ingestion.provider_client import ProviderClient, ProviderError
from backend.ingestion.state_vectors import StateVector, normalize_states

__all__ = [
    'FlightGateway',
    'FlightSnapshot',
    'ProviderClient',
    'ProviderError',
    'StateVector',
    'normalize_states',
]
