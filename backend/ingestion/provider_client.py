"""
Upstream state-vector provider client.

Handles communication with providers that serve the OpenSky
`/states/all` response shape:

    {"time": 1700000000, "states": [[...17 fields...], ...]}

No authentication, no bounding box: the whole world is requested in a
single GET.
"""

import logging
from typing import Any, List, Optional, Tuple

import requests

from backend.config import ProviderConfig

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when a provider cannot deliver a usable response."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code

    @property
    def is_http_status(self) -> bool:
        """True when the provider answered, but with a non-success status."""
        return self.status_code is not None


class ProviderClient:
    """
    Client for a single state-vector provider.

    Handles:
    - GET requests with a per-provider timeout
    - Non-success status detection
    - JSON decoding of the response body
    """

    def __init__(
        self,
        provider: ProviderConfig,
        session: Optional[requests.Session] = None,
    ):
        self.provider = provider
        self.session = session or requests.Session()

    @property
    def name(self) -> str:
        return self.provider.name

    def get_states(self) -> Tuple[Optional[int], List[Any]]:
        """
        Fetch current raw state vectors.

        Returns:
            Tuple of (provider_timestamp, raw state vector arrays).
            provider_timestamp is None when the provider omits it.

        Raises:
            ProviderError on network errors, timeouts, non-success
            statuses and undecodable bodies.
        """
        logger.debug(f'Fetching states from {self.name}: {self.provider.url}')

        try:
            response = self.session.get(self.provider.url, timeout=self.provider.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning(f'{self.name} API timeout after {self.provider.timeout}s')
            raise ProviderError(self.name, f'{self.name} timed out') from e
        except requests.exceptions.RequestException as e:
            logger.warning(f'{self.name} request failed: {e}')
            raise ProviderError(self.name, f'{self.name} request failed: {e}') from e

        if not response.ok:
            if response.status_code == 429:
                logger.warning(f'{self.name} rate limit exceeded')
            else:
                logger.warning(f'{self.name} API error: {response.status_code}')
            raise ProviderError(
                self.name,
                f'{self.name} returned HTTP {response.status_code}',
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f'{self.name} returned invalid JSON: {e}')
            raise ProviderError(self.name, f'{self.name} returned invalid JSON') from e

        if not isinstance(data, dict):
            raise ProviderError(self.name, f'{self.name} returned an unexpected payload')

        states_raw = data.get('states') or []
        if not isinstance(states_raw, list):
            raise ProviderError(self.name, f'{self.name} returned states in an unexpected format')

        logger.info(f'Received {len(states_raw)} state vectors from {self.name}')

        return data.get('time'), states_raw
