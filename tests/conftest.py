"""Shared fixtures: fake HTTP sessions, state vector builders, a manual clock."""

from typing import Any, Callable, List, Optional, Union

import pytest
import requests

from backend.config import ProviderConfig
from backend.ingestion import ProviderClient


class FakeResponse:
    """Just enough of requests.Response for our clients."""

    def __init__(self, status_code: int = 200, json_data: Any = None, invalid_json: bool = False):
        self.status_code = status_code
        self._json_data = json_data
        self._invalid_json = invalid_json

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._invalid_json:
            raise ValueError('Expecting value: line 1 column 1 (char 0)')
        return self._json_data


class FakeSession:
    """
    Replays queued outcomes for successive GETs.

    Each outcome is a FakeResponse to return, an exception to raise, or
    a callable invoked with the call arguments that returns either.
    """

    def __init__(self, *outcomes: Union[FakeResponse, Exception, Callable]):
        self.outcomes: List = list(outcomes)
        self.calls: List[dict] = []

    def get(self, url, timeout=None, **kwargs):
        self.calls.append({'url': url, 'timeout': timeout, **kwargs})
        if not self.outcomes:
            raise AssertionError(f'Unexpected GET {url}')
        outcome = self.outcomes.pop(0)
        if callable(outcome) and not isinstance(outcome, FakeResponse):
            outcome = outcome(url, timeout)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class ManualClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_state(
    icao24: str = 'abc123',
    callsign: Optional[str] = 'BAW123  ',
    latitude: Optional[float] = 51.47,
    longitude: Optional[float] = -0.45,
    on_ground: Any = False,
    heading: Optional[float] = 270.0,
    **overrides,
) -> list:
    """Build a raw 17-field state vector with realistic defaults."""
    fields = {
        'icao24': icao24,
        'callsign': callsign,
        'origin_country': 'United Kingdom',
        'time_position': 1700000000,
        'last_contact': 1700000001,
        'longitude': longitude,
        'latitude': latitude,
        'baro_altitude': 10668.0,
        'on_ground': on_ground,
        'velocity': 231.5,
        'true_track': heading,
        'vertical_rate': -0.33,
        'sensors': None,
        'geo_altitude': 10980.4,
        'squawk': '4521',
        'spi': False,
        'position_source': 0,
    }
    fields.update(overrides)
    return list(fields.values())


def make_flight(icao24: str, latitude: float = 50.0, longitude: float = 10.0, heading: Optional[float] = 90.0, **extra) -> dict:
    """Build a NormalizedFlight as served by /api/flights."""
    flight = {
        'icao24': icao24,
        'callsign': f'TST{icao24[:3].upper()}',
        'country': 'Germany',
        'time_position': 1700000000,
        'last_contact': 1700000001,
        'longitude': longitude,
        'latitude': latitude,
        'baro_altitude': 9144.0,
        'on_ground': False,
        'velocity': 220.0,
        'heading': heading,
        'vertical_rate': 0.0,
        'sensors': None,
        'geo_altitude': 9300.0,
        'squawk': '1000',
        'spi': False,
        'position_source': 0,
    }
    flight.update(extra)
    return flight


def provider_client(name: str, session: FakeSession, timeout: float = 15) -> ProviderClient:
    return ProviderClient(
        ProviderConfig(name=name, url=f'https://{name}.example/states/all', timeout=timeout),
        session=session,
    )


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def timeout_error():
    return requests.exceptions.Timeout('read timed out')


@pytest.fixture
def connection_error():
    return requests.exceptions.ConnectionError('connection refused')
