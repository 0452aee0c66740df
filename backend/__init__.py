"""
Mini Flight Radar Backend Package.

Live flight gateway built with Flask and requests.

Modules:
    api/         REST endpoint serving the current flight snapshot
    ingestion/   Upstream provider clients, state vector normalization,
                 and the primary/fallback gateway
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
