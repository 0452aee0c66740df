"""
Display formatting for marker popups.

Values arrive in the units the gateway serves (meters, m/s, degrees).
Zero and missing readings both render as N/A for altitude, speed and
vertical rate; heading only treats a missing value as N/A, so due north
still shows.
"""

import math
from html import escape
from typing import Optional

NOT_AVAILABLE = 'N/A'

COMPASS_POINTS = (
    'N', 'NNE', 'NE', 'ENE', 'E', 'ESE', 'SE', 'SSE',
    'S', 'SSW', 'SW', 'WSW', 'W', 'WNW', 'NW', 'NNW',
)
COMPASS_SECTOR_DEGREES = 360.0 / len(COMPASS_POINTS)  # 22.5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (not to even)."""
    return int(math.floor(value + 0.5))


def compass_point(heading: float) -> str:
    """16-point compass label for a heading in degrees (wraps past 360)."""
    index = round_half_up(heading / COMPASS_SECTOR_DEGREES) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


def _format_measure(value: Optional[float], unit: str) -> str:
    if not value:
        return NOT_AVAILABLE
    return f'{round_half_up(value)} {unit}'


def format_altitude(altitude: Optional[float]) -> str:
    return _format_measure(altitude, 'm')


def format_velocity(velocity: Optional[float]) -> str:
    return _format_measure(velocity, 'm/s')


def format_vertical_rate(vertical_rate: Optional[float]) -> str:
    return _format_measure(vertical_rate, 'm/s')


def format_heading(heading: Optional[float]) -> str:
    """e.g. '92° E', or N/A if the heading is not reported."""
    if heading is None:
        return NOT_AVAILABLE
    return f'{round_half_up(heading)}° {compass_point(heading)}'


def format_coordinate(value: Optional[float]) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f'{value:.4f}'


def format_popup(flight: dict) -> str:
    """
    Build the HTML popup body for a flight marker.

    Mirrors the fields shown on the radar page: callsign header, then
    identity, position and telemetry rows.
    """
    rows = [
        ('ICAO', escape(str(flight.get('icao24')))),
        ('Latitude', format_coordinate(flight.get('latitude'))),
        ('Longitude', format_coordinate(flight.get('longitude'))),
        ('Altitude', format_altitude(flight.get('baro_altitude'))),
        ('Speed', format_velocity(flight.get('velocity'))),
        ('Heading', format_heading(flight.get('heading'))),
        ('Vertical Rate', format_vertical_rate(flight.get('vertical_rate'))),
        ('Country', escape(str(flight.get('country') or NOT_AVAILABLE))),
    ]
    table = ''.join(f'<tr><td>{label}:</td><td>{value}</td></tr>' for label, value in rows)
    callsign = escape(str(flight.get('callsign') or NOT_AVAILABLE))
    return (
        '<div style="min-width: 250px;">'
        f'<h3>{callsign}</h3>'
        f'<table class="popup-table">{table}</table>'
        '</div>'
    )
