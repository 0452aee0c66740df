"""
API module for Mini Flight Radar.

Provides REST endpoints for:
- Flight data (current airborne snapshot)
"""

from backend.api.flights import flights_bp

__all__ = ['flights_bp']
