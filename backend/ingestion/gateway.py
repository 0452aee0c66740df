"""
Flight data gateway - one snapshot per request, from whichever provider answers.

Pipeline stages:
1. Fetch: try the primary provider, then the fallback (sequentially)
2. Normalize: positional state vectors -> named flight records
3. Package: wrap in a FlightSnapshot tagged with the answering provider

The gateway holds no state between requests. Upstream failures never
escape as exceptions: when every provider fails the snapshot carries an
error message instead of flights.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import requests

from backend.config import config
from backend.ingestion.provider_client import ProviderClient, ProviderError
from backend.ingestion.state_vectors import normalize_states

logger = logging.getLogger(__name__)

ALL_PROVIDERS_FAILED = 'Failed to fetch flight data from both APIs'


@dataclass
class FlightSnapshot:
    """
    One complete set of airborne aircraft, as served by /api/flights.

    Either `source` is set (a provider answered) or `error` is set.
    """
    flights: List[dict] = field(default_factory=list)
    time: Optional[int] = None
    source: Optional[str] = None
    error: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.flights)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, message: str) -> 'FlightSnapshot':
        return cls(error=message)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        if not self.ok:
            return {
                'error': self.error,
                'flights': [],
                'count': 0,
            }
        return {
            'time': self.time,
            'flights': self.flights,
            'source': self.source,
            'count': self.count,
        }


def _failure_message(error: ProviderError) -> str:
    """Human-readable message for the last provider failure."""
    if error.is_http_status:
        return ALL_PROVIDERS_FAILED
    return f'Error fetching flight data: {error}'


class FlightGateway:
    """
    Produces FlightSnapshots over an ordered list of providers.

    The first provider to answer successfully wins; later providers are
    only called after every earlier one has failed.
    """

    def __init__(
        self,
        clients: Optional[Sequence[ProviderClient]] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the gateway.

        Args:
            clients: Provider clients in priority order (created from
                     config if None)
            session: HTTP session shared by the config-created clients
        """
        if clients is None:
            session = session or requests.Session()
            clients = [
                ProviderClient(provider, session=session)
                for provider in config.upstream.providers
            ]
        self.clients = list(clients)

    @classmethod
    def from_config(cls) -> 'FlightGateway':
        """Create gateway from application configuration."""
        return cls()

    def get_flights(self) -> FlightSnapshot:
        """
        Fetch and normalize the current set of airborne flights.

        Never raises; returns an error snapshot when no provider answers.
        """
        last_error: Optional[ProviderError] = None

        for index, client in enumerate(self.clients):
            if index > 0:
                logger.info(f'Falling back to {client.name} provider')

            try:
                api_time, states_raw = client.get_states()
            except ProviderError as e:
                last_error = e
                continue

            flights = normalize_states(states_raw)
            snapshot = FlightSnapshot(
                flights=flights,
                time=api_time if api_time is not None else int(time.time()),
                source=client.name,
            )
            logger.info(f'Serving {snapshot.count} flights from {client.name}')
            return snapshot

        if last_error is None:
            logger.error('No upstream providers configured')
            return FlightSnapshot.failed(ALL_PROVIDERS_FAILED)

        logger.error(f'All upstream providers failed, last error: {last_error}')
        return FlightSnapshot.failed(_failure_message(last_error))
