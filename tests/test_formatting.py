"""Tests for popup field formatting."""

import pytest

from mapsync.formatting import (
    compass_point,
    format_altitude,
    format_heading,
    format_popup,
    format_velocity,
    format_vertical_rate,
    round_half_up,
)
from conftest import make_flight


class TestCompass:
    @pytest.mark.parametrize('heading, expected', [
        (0, 'N'),
        (180, 'S'),
        (359, 'N'),
        (90, 'E'),
        (270, 'W'),
        (11.25, 'NNE'),
        (11.2, 'N'),
        (348.75, 'N'),
        (225, 'SW'),
        (720, 'N'),
    ])
    def test_compass_point(self, heading, expected):
        assert compass_point(heading) == expected

    def test_format_heading(self):
        assert format_heading(0) == '0° N'
        assert format_heading(92.4) == '92° E'
        assert format_heading(359.6) == '360° N'

    def test_missing_heading(self):
        assert format_heading(None) == 'N/A'


class TestMeasures:
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(-2.5) == -2

    @pytest.mark.parametrize('value', [None, 0, 0.0])
    def test_zero_or_missing_is_not_available(self, value):
        assert format_altitude(value) == 'N/A'
        assert format_velocity(value) == 'N/A'
        assert format_vertical_rate(value) == 'N/A'

    def test_units(self):
        assert format_altitude(10668.3) == '10668 m'
        assert format_velocity(231.5) == '232 m/s'
        assert format_vertical_rate(-3.2) == '-3 m/s'


class TestPopup:
    def test_contains_formatted_fields(self):
        popup = format_popup(make_flight('abc123', latitude=51.47123, longitude=-0.454, heading=180.0))

        assert '<h3>TSTABC</h3>' in popup
        assert '<td>ICAO:</td><td>abc123</td>' in popup
        assert '<td>Latitude:</td><td>51.4712</td>' in popup
        assert '<td>Longitude:</td><td>-0.4540</td>' in popup
        assert '<td>Altitude:</td><td>9144 m</td>' in popup
        assert '<td>Speed:</td><td>220 m/s</td>' in popup
        assert '<td>Heading:</td><td>180° S</td>' in popup
        assert '<td>Vertical Rate:</td><td>N/A</td>' in popup
        assert '<td>Country:</td><td>Germany</td>' in popup

    def test_escapes_markup(self):
        popup = format_popup(make_flight('abc123', callsign='<b>X</b>', country=None))

        assert '<b>X</b>' not in popup
        assert '&lt;b&gt;X&lt;/b&gt;' in popup
        assert '<td>Country:</td><td>N/A</td>' in popup
