"""
Configuration management for Mini Flight Radar.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class ProviderConfig:
    """A single upstream state-vector provider."""
    name: str
    url: str
    timeout: float


@dataclass(frozen=True)
class UpstreamConfig:
    """
    Upstream providers, tried in order.

    The primary is the public OpenSky feed; the demo feed serves the same
    `{"time": ..., "states": [...]}` shape and is only used when OpenSky
    fails or answers with a non-success status.
    """
    primary: ProviderConfig = ProviderConfig(
        name='opensky',
        url=os.getenv('OPENSKY_URL', 'https://opensky-network.org/api/states/all'),
        timeout=float(os.getenv('OPENSKY_TIMEOUT_SECONDS', '15')),
    )
    fallback: ProviderConfig = ProviderConfig(
        name='demo',
        url=os.getenv('DEMO_URL', 'https://deskplan.lv/flight/all.json'),
        timeout=float(os.getenv('DEMO_TIMEOUT_SECONDS', '10')),
    )

    @property
    def providers(self):
        return (self.primary, self.fallback)


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    upstream: UpstreamConfig

    # Flask settings
    secret_key: str
    debug: bool
    port: int


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        upstream=UpstreamConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
        port=int(os.getenv('PORT', '5000')),
    )


# Singleton instance
config = load_config()
