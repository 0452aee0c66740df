"""
Marker reconciliation - makes the map match the latest snapshot.

The registry maps icao24 -> MarkerEntry and lives for as long as the
map does. Each snapshot is applied in two passes:

1. Remove: identifiers in the registry but not in the snapshot lose
   their marker and their entry.
2. Upsert: identifiers already in the registry keep their marker, which
   is animated to the new position and gets a fresh icon and popup;
   new identifiers get a new marker.

Per-identifier operations are independent, so ordering within a pass
does not matter.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from mapsync.animation import Animator
from mapsync.formatting import format_popup
from mapsync.view import LatLng, MapView, Marker, flight_icon

logger = logging.getLogger(__name__)


@dataclass
class MarkerEntry:
    """The marker drawn for an aircraft and the flight record behind it."""
    marker: Marker
    flight: dict


MarkerRegistry = Dict[str, MarkerEntry]


@dataclass
class SyncResult:
    """Outcome of applying one snapshot."""
    registry: MarkerRegistry
    added: int = 0
    updated: int = 0
    removed: int = 0

    @property
    def total(self) -> int:
        return len(self.registry)

    def summary(self) -> str:
        return (
            f'{self.added} added, {self.updated} updated, {self.removed} removed. '
            f'Total on map: {self.total}'
        )


def _is_placeable(flight: dict) -> bool:
    if not isinstance(flight, dict) or not flight.get('icao24'):
        return False
    return isinstance(flight.get('latitude'), (int, float)) and isinstance(
        flight.get('longitude'), (int, float)
    )


def sync_markers(
    registry: MarkerRegistry,
    flights: Iterable[dict],
    view: MapView,
    animator: Optional[Animator] = None,
    duration: float = 0.0,
) -> SyncResult:
    """
    Reconcile `registry` and the markers on `view` with `flights`.

    Args:
        registry: icao24 -> MarkerEntry, updated in place
        flights: NormalizedFlight records from the latest snapshot
        view: Map the markers live on
        animator: Moves updated markers smoothly; without one they jump
        duration: Animation duration in seconds

    Returns:
        SyncResult carrying the updated registry and per-pass counts.
    """
    incoming: List[dict] = []
    for flight in flights:
        if _is_placeable(flight):
            incoming.append(flight)
        else:
            logger.debug(f'Ignoring flight without identifier or position: {flight!r}')

    result = SyncResult(registry=registry)
    incoming_ids = {flight['icao24'] for flight in incoming}

    # Removal pass
    for icao24 in [key for key in registry if key not in incoming_ids]:
        entry = registry.pop(icao24)
        if animator is not None:
            animator.cancel(entry.marker)
        view.remove_layer(entry.marker)
        result.removed += 1

    # Upsert pass
    for flight in incoming:
        icao24 = flight['icao24']
        target = LatLng(flight['latitude'], flight['longitude'])
        icon = flight_icon(flight.get('heading'))
        popup = format_popup(flight)

        entry = registry.get(icao24)
        if entry is not None:
            current = entry.marker.get_latlng()
            if animator is not None:
                animator.animate(entry.marker, current, target, duration)
            else:
                entry.marker.set_latlng(target)
            entry.marker.set_icon(icon)
            entry.marker.set_popup_content(popup)
            entry.flight = flight
            result.updated += 1
        else:
            marker = view.add_marker(target, icon, popup)
            registry[icao24] = MarkerEntry(marker=marker, flight=flight)
            result.added += 1

    return result
