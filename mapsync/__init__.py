"""
Map sync client for Mini Flight Radar.

Modules:
    client.py      Polling lifecycle (initialize / poll / start / stop)
    sync.py        Marker registry reconciliation against a snapshot
    animation.py   Linear marker movement between polls
    view.py        In-process map with Leaflet-style marker operations
    formatting.py  Popup field formatting (units, compass points)
    config.py      Configuration from environment variables
"""

from mapsync.client import ClientState, MapSyncClient
from mapsync.sync import MarkerEntry, SyncResult, sync_markers

__version__ = '1.0.0'

__all__ = ['ClientState', 'MapSyncClient', 'MarkerEntry', 'SyncResult', 'sync_markers']
