"""
Configuration for the map sync client.

Same conventions as the gateway: environment variables (optionally from
a .env file) with defaults, collected into frozen dataclasses.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CENTER = (20.0, 0.0)


def _parse_location(value: str) -> Optional[Tuple[float, float]]:
    """Parse 'lat,lon' string into tuple, or None if empty/invalid."""
    if not value:
        return None
    try:
        lat, lon = value.split(',')
        return (float(lat.strip()), float(lon.strip()))
    except (ValueError, AttributeError):
        return None


@dataclass(frozen=True)
class PollingConfig:
    """Gateway polling settings."""
    gateway_url: str = os.getenv('GATEWAY_URL', 'http://localhost:5000/api/flights')
    interval: float = float(os.getenv('POLL_INTERVAL_SECONDS', '5'))
    timeout: float = float(os.getenv('POLL_TIMEOUT_SECONDS', '10'))


@dataclass(frozen=True)
class AnimationConfig:
    """
    Marker movement smoothing.

    The duration stays just under the poll interval so a marker arrives
    before the next snapshot lands.
    """
    duration: float = float(os.getenv('ANIMATION_DURATION_SECONDS', '4.9'))
    tick: float = float(os.getenv('ANIMATION_TICK_SECONDS', '0.033'))  # ~30 updates/s


@dataclass(frozen=True)
class MapConfig:
    """Initial map viewpoint and base layer."""
    center: Tuple[float, float] = _parse_location(os.getenv('MAP_CENTER', '')) or DEFAULT_CENTER
    zoom: int = int(os.getenv('MAP_ZOOM', '3'))
    tile_url: str = 'https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png'
    tile_attribution: str = '© OpenStreetMap contributors'
    max_zoom: int = 19


@dataclass(frozen=True)
class ClientConfig:
    """Main client configuration."""
    polling: PollingConfig
    animation: AnimationConfig
    map: MapConfig


def load_config() -> ClientConfig:
    """Load all client configuration."""
    return ClientConfig(
        polling=PollingConfig(),
        animation=AnimationConfig(),
        map=MapConfig(),
    )


# Singleton instance
config = load_config()
