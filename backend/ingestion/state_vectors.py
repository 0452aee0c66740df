"""
State vector parsing and normalization.

Upstream providers deliver each aircraft as a positional array
(OpenSky state vector format):
0: icao24          - ICAO24 hex address
1: callsign        - Callsign (8 chars max, space padded)
2: origin_country  - Country of registration
3: time_position   - Unix timestamp of last position update
4: last_contact    - Unix timestamp of last message
5: longitude       - WGS84 longitude
6: latitude        - WGS84 latitude
7: baro_altitude   - Barometric altitude (meters)
8: on_ground       - Boolean
9: velocity        - Ground speed (m/s)
10: true_track     - Track angle (degrees, 0=north)
11: vertical_rate  - Vertical rate (m/s)
12: sensors        - Sensor IDs (array)
13: geo_altitude   - Geometric altitude (meters)
14: squawk         - Transponder code
15: spi            - Special position indicator
16: position_source - 0=ADS-B, 1=ASTERIX, 2=MLAT, 3=FLARM

The array is turned into a StateVector right at the parse boundary so
nothing downstream depends on field positions.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

logger = logging.getLogger(__name__)

STATE_VECTOR_FIELDS = 17
MISSING_CALLSIGN = 'N/A'


@dataclass
class StateVector:
    """
    Parsed state vector from an upstream provider.

    Values are kept exactly as reported; any of them may be None.
    """
    icao24: Any
    callsign: Any
    origin_country: Any
    time_position: Any
    last_contact: Any
    longitude: Any
    latitude: Any
    baro_altitude: Any
    on_ground: Any
    velocity: Any
    true_track: Any
    vertical_rate: Any
    sensors: Any
    geo_altitude: Any
    squawk: Any
    spi: Any
    position_source: Any

    @classmethod
    def from_array(cls, arr: Any) -> Optional['StateVector']:
        """
        Parse a positional state vector array.

        Returns None if the value is not a sequence of at least 17 fields.
        """
        if not isinstance(arr, (list, tuple)) or len(arr) < STATE_VECTOR_FIELDS:
            return None
        return cls(*arr[:STATE_VECTOR_FIELDS])

    @property
    def is_airborne_with_position(self) -> bool:
        """
        Whether this vector can be placed on the map.

        Uses truthiness on purpose: a 0.0 coordinate is treated the same
        as a missing one, matching what the map has always shown.
        """
        return not self.on_ground and bool(self.longitude) and bool(self.latitude)

    @property
    def display_callsign(self) -> str:
        """Callsign with surrounding padding removed, or the N/A sentinel."""
        if self.callsign is None:
            return MISSING_CALLSIGN
        return str(self.callsign).strip() or MISSING_CALLSIGN

    def to_flight(self) -> dict:
        """Convert to the named-field record served by /api/flights."""
        return {
            'icao24': self.icao24,
            'callsign': self.display_callsign,
            'country': self.origin_country,
            'time_position': self.time_position,
            'last_contact': self.last_contact,
            'longitude': self.longitude,
            'latitude': self.latitude,
            'baro_altitude': self.baro_altitude,
            'on_ground': self.on_ground,
            'velocity': self.velocity,
            'heading': self.true_track,
            'vertical_rate': self.vertical_rate,
            'sensors': self.sensors,
            'geo_altitude': self.geo_altitude,
            'squawk': self.squawk,
            'spi': self.spi,
            'position_source': self.position_source,
        }


def normalize_states(states_raw: Optional[Iterable[Any]]) -> List[dict]:
    """
    Turn raw provider state vectors into flight records.

    Vectors that are on the ground or have no usable position are dropped,
    as are malformed entries.
    """
    flights = []
    dropped = 0

    for arr in states_raw or []:
        sv = StateVector.from_array(arr)
        if sv is None:
            logger.debug(f'Skipping malformed state vector: {arr!r}')
            dropped += 1
            continue
        if not sv.is_airborne_with_position:
            dropped += 1
            continue
        flights.append(sv.to_flight())

    logger.debug(f'Normalized {len(flights)} flights ({dropped} dropped)')
    return flights
