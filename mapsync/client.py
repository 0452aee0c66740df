"""
Map sync client - keeps a map's markers in step with the flight gateway.

Lifecycle:
    UNINITIALIZED --initialize()--> MAP_READY --start_polling()--> POLLING
    POLLING --stop_polling()--> STOPPED

There is no error state. A failed poll is logged and the markers from
the last good snapshot stay on the map until a later poll succeeds.
"""

import itertools
import logging
import threading
from enum import Enum
from typing import Optional

import requests

from mapsync.animation import Animator
from mapsync.config import ClientConfig, config as default_config
from mapsync.sync import MarkerRegistry, SyncResult, sync_markers
from mapsync.view import MapView

logger = logging.getLogger(__name__)


class ClientState(str, Enum):
    UNINITIALIZED = 'uninitialized'
    MAP_READY = 'map_ready'
    POLLING = 'polling'
    STOPPED = 'stopped'


class MapSyncClient:
    """
    Polls /api/flights and reconciles the marker registry with each snapshot.

    Polls run on a background thread, marker animation on the animator's
    thread. Each poll is numbered; a response that comes back after a
    newer one has already been applied is dropped.
    """

    def __init__(
        self,
        client_config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
        view: Optional[MapView] = None,
        animator: Optional[Animator] = None,
    ):
        self.config = client_config or default_config
        self.session = session or requests.Session()
        self.view = view or MapView()
        self.animator = animator or Animator(tick_interval=self.config.animation.tick)

        self.registry: MarkerRegistry = {}
        self.state = ClientState.UNINITIALIZED
        self.last_result: Optional[SyncResult] = None

        self._sync_lock = threading.Lock()
        self._poll_seq = itertools.count(1)
        self._applied_seq = 0

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        # Statistics, bumped from the poller thread and direct poll() calls
        self._stats_lock = threading.Lock()
        self._poll_count = 0
        self._error_count = 0
        self._discarded_count = 0

    # -------------------------------------------------------------------------
    # Map setup
    # -------------------------------------------------------------------------

    def initialize(self) -> MapView:
        """Center the map on the default viewpoint and add the base tile layer."""
        if self.state is not ClientState.UNINITIALIZED:
            logger.warning(f'initialize() called in state {self.state.value}, ignoring')
            return self.view

        map_config = self.config.map
        self.view.set_view(map_config.center, map_config.zoom)
        self.view.add_tile_layer(
            map_config.tile_url,
            attribution=map_config.tile_attribution,
            max_zoom=map_config.max_zoom,
        )
        self.state = ClientState.MAP_READY
        logger.info(f'Map ready at {map_config.center} zoom {map_config.zoom}')
        return self.view

    # -------------------------------------------------------------------------
    # Polling
    # -------------------------------------------------------------------------

    def poll(self) -> Optional[SyncResult]:
        """
        Fetch one snapshot from the gateway and apply it.

        Returns the SyncResult, or None when nothing was applied (request
        failed, unexpected body, or superseded by a newer poll). A body
        carrying an upstream error is still applied: its empty flight list
        clears the map, as the radar page does.
        """
        seq = next(self._poll_seq)
        self._count('_poll_count')
        url = self.config.polling.gateway_url
        logger.debug(f'Poll #{seq}: fetching {url}')

        try:
            response = self.session.get(url, timeout=self.config.polling.timeout)
            if not response.ok:
                self._count('_error_count')
                logger.error(f'Poll #{seq}: API error {response.status_code}')
                return None
            data = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            self._count('_error_count')
            logger.error(f'Poll #{seq}: error fetching flights: {e}')
            return None

        flights = data.get('flights') if isinstance(data, dict) else None
        if not isinstance(flights, list):
            logger.warning(f'Poll #{seq}: no flights in response')
            return None

        if data.get('error'):
            logger.warning(f'Poll #{seq}: gateway reported: {data["error"]}')

        with self._sync_lock:
            if seq < self._applied_seq:
                self._count('_discarded_count')
                logger.info(f'Poll #{seq}: superseded by #{self._applied_seq}, discarding')
                return None
            self._applied_seq = seq
            return self._sync_locked(flights)

    def sync(self, flights: list) -> SyncResult:
        """Reconcile the markers on the map with `flights`."""
        with self._sync_lock:
            return self._sync_locked(flights)

    def _count(self, name: str) -> None:
        with self._stats_lock:
            setattr(self, name, getattr(self, name) + 1)

    def _sync_locked(self, flights: list) -> SyncResult:
        result = sync_markers(
            self.registry,
            flights,
            self.view,
            animator=self.animator,
            duration=self.config.animation.duration,
        )
        self.last_result = result
        logger.info(f'Update complete: {result.summary()}')
        return result

    def _run_polling(self) -> None:
        interval = self.config.polling.interval
        logger.info(f'Starting polling (interval={interval}s)')

        while True:
            try:
                self.poll()
            except Exception:
                self._count('_error_count')
                logger.exception('Poll failed unexpectedly')
            if self._stop_event.wait(interval):
                break

        logger.info('Polling stopped')

    def start_polling(self) -> None:
        """Poll once immediately, then every poll interval, in the background."""
        if self._thread and self._thread.is_alive():
            logger.warning('Polling already running')
            return

        if self.state is ClientState.UNINITIALIZED:
            self.initialize()

        self._stop_event.clear()
        self.animator.start()
        self._thread = threading.Thread(
            target=self._run_polling,
            name='mapsync-poller',
            daemon=True,
        )
        self.state = ClientState.POLLING
        self._thread.start()

    def stop_polling(self) -> None:
        """Cancel the polling timer and stop animating."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=self.config.polling.timeout + 5)
            self._thread = None
        self.animator.stop()
        self.state = ClientState.STOPPED

    @property
    def stats(self) -> dict:
        """Get polling statistics."""
        with self._stats_lock:
            counts = {
                'poll_count': self._poll_count,
                'error_count': self._error_count,
                'discarded_count': self._discarded_count,
            }
        return {
            'state': self.state.value,
            **counts,
            'markers': len(self.registry),
            'animating': self.animator.active_count,
        }
