"""
Marker movement smoothing between polls.

Each update moves a marker linearly from where it is currently drawn to
its newly reported position over a fixed duration. A single animator
thread advances every running animation at the tick rate (~30 updates
per second), so hundreds of moving markers cost one thread.

Animations only ever touch a marker's displayed position; the flight
records held by the sync registry are never modified.
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional

from mapsync.view import LatLng, Marker

logger = logging.getLogger(__name__)


class PositionAnimation:
    """Linear interpolation of one marker from `start` to `end`."""

    def __init__(
        self,
        marker: Marker,
        start: LatLng,
        end: LatLng,
        duration: float,
        started_at: float,
    ):
        self.marker = marker
        self.start = start
        self.end = end
        self.duration = duration
        self.started_at = started_at
        self.finished = False

    def progress(self, now: float) -> float:
        """Fraction of the animation elapsed at `now`, clamped to [0, 1]."""
        if self.duration <= 0:
            return 1.0
        return min(max((now - self.started_at) / self.duration, 0.0), 1.0)

    def position_at(self, progress: float) -> LatLng:
        if progress >= 1.0:
            return self.end
        return LatLng(
            self.start.lat + (self.end.lat - self.start.lat) * progress,
            self.start.lng + (self.end.lng - self.start.lng) * progress,
        )

    def step(self, now: float) -> bool:
        """
        Move the marker to its position at `now`.

        Returns True once the end point has been reached; later calls
        are no-ops.
        """
        if self.finished:
            return True
        progress = self.progress(now)
        self.marker.set_latlng(self.position_at(progress))
        self.finished = progress >= 1.0
        return self.finished


class Animator:
    """
    Drives position animations from one background thread.

    Starting a new animation for a marker replaces the one in flight.
    The new animation starts from wherever the marker is drawn at that
    moment, so the motion stays continuous.
    """

    def __init__(
        self,
        tick_interval: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.tick_interval = tick_interval
        self.clock = clock

        self._animations: Dict[Marker, PositionAnimation] = {}
        # Re-entrant: a marker update made while ticking may start a new animation
        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def animate(
        self,
        marker: Marker,
        start: LatLng,
        end: LatLng,
        duration: float,
    ) -> PositionAnimation:
        """Begin moving `marker` from `start` to `end`, drawing the first frame now."""
        with self._lock:
            animation = PositionAnimation(marker, start, end, duration, started_at=self.clock())
            if animation.step(animation.started_at):
                self._animations.pop(marker, None)
            else:
                self._animations[marker] = animation
        return animation

    def cancel(self, marker: Marker) -> None:
        """Stop animating a marker (e.g. because it was removed from the map)."""
        with self._lock:
            self._animations.pop(marker, None)

    @property
    def active_count(self) -> int:
        with self._lock:
            return len(self._animations)

    def tick(self) -> int:
        """
        Advance every running animation once.

        Returns the number of animations still running.
        """
        now = self.clock()
        with self._lock:
            for marker, animation in list(self._animations.items()):
                # Skip animations replaced earlier in this tick
                if self._animations.get(marker) is not animation:
                    continue
                if animation.step(now) and self._animations.get(marker) is animation:
                    del self._animations[marker]
            return len(self._animations)

    def _run(self) -> None:
        logger.debug(f'Animator running (tick={self.tick_interval}s)')
        while not self._stop_event.wait(self.tick_interval):
            try:
                self.tick()
            except Exception:
                logger.exception('Animation tick failed')
        logger.debug('Animator stopped')

    def start(self) -> None:
        """Start the animator thread."""
        if self._thread and self._thread.is_alive():
            logger.warning('Animator already running')
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name='mapsync-animator', daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the animator thread. Markers stay where they were last drawn."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None
        with self._lock:
            self._animations.clear()
