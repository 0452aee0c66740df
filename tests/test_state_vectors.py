"""Tests for state vector parsing and the airborne/position filter."""

import pytest

from backend.ingestion.state_vectors import MISSING_CALLSIGN, StateVector, normalize_states
from conftest import make_state

FLIGHT_KEYS = [
    'icao24', 'callsign', 'country', 'time_position', 'last_contact',
    'longitude', 'latitude', 'baro_altitude', 'on_ground', 'velocity',
    'heading', 'vertical_rate', 'sensors', 'geo_altitude', 'squawk',
    'spi', 'position_source',
]


class TestFilter:
    """Vectors that cannot be drawn as airborne aircraft are dropped."""

    @pytest.mark.parametrize('overrides', [
        {'on_ground': True},
        {'on_ground': 1},
        {'longitude': None},
        {'latitude': None},
        {'longitude': 0},
        {'latitude': 0.0},
    ])
    def test_dropped(self, overrides):
        states = [make_state('keep01'), make_state('drop01', **overrides)]

        flights = normalize_states(states)

        assert [f['icao24'] for f in flights] == ['keep01']

    def test_none_states_is_empty(self):
        assert normalize_states(None) == []

    def test_malformed_vectors_are_skipped(self):
        states = [['short', 'vector'], None, 'abc', make_state('ok0001')]

        flights = normalize_states(states)

        assert [f['icao24'] for f in flights] == ['ok0001']

    def test_from_array_rejects_short_arrays(self):
        assert StateVector.from_array(make_state()[:16]) is None


class TestTransform:
    def test_fields_copied_verbatim(self):
        raw = make_state(
            'a1b2c3',
            callsign='DLH4AB',
            sensors=[1, 2],
            squawk='7000',
            spi=True,
            position_source=2,
        )

        flight = normalize_states([raw])[0]

        assert list(flight.keys()) == FLIGHT_KEYS
        assert list(flight.values()) == raw

    def test_callsign_is_trimmed(self):
        flight = normalize_states([make_state(callsign='  EZY12  ')])[0]
        assert flight['callsign'] == 'EZY12'

    @pytest.mark.parametrize('callsign', ['', '        ', None])
    def test_blank_callsign_uses_sentinel(self, callsign):
        flight = normalize_states([make_state(callsign=callsign)])[0]
        assert flight['callsign'] == MISSING_CALLSIGN == 'N/A'

    def test_heading_comes_from_true_track(self):
        flight = normalize_states([make_state(heading=123.4)])[0]
        assert flight['heading'] == 123.4

    def test_order_preserved(self):
        states = [make_state(f'ac{i:04d}') for i in range(5)]
        assert [f['icao24'] for f in normalize_states(states)] == [f'ac{i:04d}' for i in range(5)]
