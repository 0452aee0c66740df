"""
In-process map view.

Holds the same state a Leaflet map does for our purposes: a viewpoint,
a base tile layer and a set of markers, each with a position, an icon
and popup content. Marker methods follow Leaflet's marker API so the
sync code reads the same whether it drives this view or a browser map.

All mutation goes through the view's lock: the poller and the animator
touch markers from different threads.
"""

import logging
import threading
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)


class LatLng(NamedTuple):
    lat: float
    lng: float


@dataclass(frozen=True)
class FlightIcon:
    """Div icon for an aircraft marker, rotated to the aircraft heading."""
    html: str
    rotation: float
    size: Tuple[int, int] = (10, 10)
    class_name: str = 'flight-marker'
    popup_anchor: Tuple[int, int] = (0, -5)


def flight_icon(heading: Optional[float]) -> FlightIcon:
    """Marker icon for a heading in degrees (unrotated if unknown)."""
    rotation = float(heading) if heading is not None else 0.0
    html = (
        '<div style="width:8px;height:8px;background:#000;border-radius:50%;margin:1px;'
        f'transform:rotate({rotation:g}deg);"></div>'
    )
    return FlightIcon(html=html, rotation=rotation)


@dataclass(frozen=True)
class TileLayer:
    url: str
    attribution: str
    max_zoom: int


class Marker:
    """A positioned aircraft marker. Create via MapView.add_marker."""

    def __init__(self, view: 'MapView', latlng: LatLng, icon: FlightIcon, popup: str):
        self._view = view
        self._latlng = latlng
        self.icon = icon
        self.popup = popup

    def get_latlng(self) -> LatLng:
        with self._view.lock:
            return self._latlng

    def set_latlng(self, latlng: Tuple[float, float]) -> None:
        with self._view.lock:
            self._latlng = LatLng(*latlng)

    def set_icon(self, icon: FlightIcon) -> None:
        with self._view.lock:
            self.icon = icon

    def set_popup_content(self, popup: str) -> None:
        with self._view.lock:
            self.popup = popup

    def __repr__(self) -> str:
        return f'<Marker ({self._latlng.lat:.4f}, {self._latlng.lng:.4f})>'


class MapView:
    """A single map: viewpoint, base layer and markers."""

    def __init__(self):
        self.lock = threading.RLock()
        self.center: Optional[LatLng] = None
        self.zoom: Optional[int] = None
        self.tile_layer: Optional[TileLayer] = None
        self._markers: List[Marker] = []

    def set_view(self, center: Tuple[float, float], zoom: int) -> 'MapView':
        with self.lock:
            self.center = LatLng(*center)
            self.zoom = zoom
        return self

    def add_tile_layer(self, url: str, attribution: str, max_zoom: int) -> TileLayer:
        with self.lock:
            self.tile_layer = TileLayer(url=url, attribution=attribution, max_zoom=max_zoom)
        return self.tile_layer

    def add_marker(self, latlng: Tuple[float, float], icon: FlightIcon, popup: str) -> Marker:
        with self.lock:
            marker = Marker(self, LatLng(*latlng), icon, popup)
            self._markers.append(marker)
        return marker

    def remove_layer(self, marker: Marker) -> None:
        with self.lock:
            try:
                self._markers.remove(marker)
            except ValueError:
                logger.debug(f'{marker!r} was not on the map')

    def has_layer(self, marker: Marker) -> bool:
        with self.lock:
            return marker in self._markers

    @property
    def markers(self) -> List[Marker]:
        with self.lock:
            return list(self._markers)
