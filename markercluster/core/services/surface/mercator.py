"""
Headless Web Mercator map surface.

``MercatorMap`` implements the ``MapSurface`` protocol entirely in process:
a viewport of ``width`` x ``height`` pixels centred on a geographic point at
an integer zoom level, using the 256-pixel tile Web Mercator projection.
It is what the tests and the command-line script cluster against, and it can
back server-side rendering of clusters.

Pixel coordinates are relative to the top-left corner of the viewport, with
y growing downwards.
"""

# Standard Library Imports
import math
from logging import Logger
from typing import Any, List, Tuple

# Internal Imports
from markercluster.core.exceptions.services.surface import ProjectionUnavailableError
from markercluster.core.models.geo.latlng import LatLng, LatLngBounds, Point
from markercluster.core.services.surface.base import (
    Callback,
    DeferredQueue,
    EventBus,
    Overlay,
    Subscription,
)
from markercluster.utils.constants import (
    DEFAULT_HISTORY_LIMIT,
    MAX_MERCATOR_SINE,
    MAX_ZOOM,
    MIN_ZOOM,
    TILE_SIZE,
    MapEvent,
)
from markercluster.utils.logging import get_logger

# Initialize logger
logger: Logger = get_logger(__name__)


def world_size(zoom: int) -> float:
    """Width and height of the whole world in pixels at ``zoom``."""
    return TILE_SIZE * (2**zoom)


def project(point: LatLng, zoom: int) -> Tuple[float, float]:
    """Project a geographic point to world pixel coordinates.

    Args:
        point: Geographic point
        zoom: Zoom level

    Returns:
        Tuple[float, float]: (x, y) in world pixels
    """
    size = world_size(zoom)
    siny = math.sin(math.radians(point.lat))
    siny = min(max(siny, -MAX_MERCATOR_SINE), MAX_MERCATOR_SINE)
    x = (point.lng + 180.0) / 360.0 * size
    y = (0.5 - math.log((1 + siny) / (1 - siny)) / (4 * math.pi)) * size
    return x, y


def unproject(x: float, y: float, zoom: int) -> LatLng:
    """Convert world pixel coordinates back to a geographic point."""
    size = world_size(zoom)
    lng = x / size * 360.0 - 180.0
    n = math.pi - 2 * math.pi * y / size
    lat = math.degrees(math.atan(math.sinh(n)))
    return LatLng(lat, lng)


class MercatorMap:
    """In-process map surface with a Web Mercator projection.

    Attributes:
        center: Geographic center of the viewport
        zoom: Current zoom level
        width: Viewport width in pixels
        height: Viewport height in pixels
        loaded: Whether the projection is available
        overlays: Overlays currently attached, in attachment order
        overlay_log: Most recent ("attach" | "detach", overlay) entries
        fit_history: Most recent bounds passed to ``fit_bounds``
        history_limit: Entries kept in each history list
    """

    def __init__(
        self,
        center: LatLng,
        zoom: int = 10,
        width: int = 1024,
        height: int = 768,
        loaded: bool = True,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        """Initialize the surface.

        Args:
            center: Geographic center of the viewport
            zoom: Initial zoom level
            width: Viewport width in pixels
            height: Viewport height in pixels
            loaded: Start with the projection available (default: True)
            history_limit: Entries kept in ``overlay_log`` and ``fit_history``
        """
        self.center = center
        self.zoom = self._clamp_zoom(zoom)
        self.width = width
        self.height = height
        self.loaded = loaded
        self.overlays: List[Overlay] = []
        self.overlay_log: List[Tuple[str, Overlay]] = []
        self.fit_history: List[LatLngBounds] = []
        self.history_limit = history_limit
        self._bus = EventBus()
        self._queue = DeferredQueue()

    @staticmethod
    def _clamp_zoom(zoom: int) -> int:
        return int(min(max(zoom, MIN_ZOOM), MAX_ZOOM))

    def _require_projection(self) -> None:
        if not self.loaded:
            raise ProjectionUnavailableError()

    def _top_left(self) -> Tuple[float, float]:
        cx, cy = project(self.center, self.zoom)
        return cx - self.width / 2, cy - self.height / 2

    # Projection

    def from_lat_lng_to_pixel(self, point: LatLng) -> Point:
        self._require_projection()
        x, y = project(point, self.zoom)
        left, top = self._top_left()
        return Point(x - left, y - top)

    def from_pixel_to_lat_lng(self, pixel: Point) -> LatLng:
        self._require_projection()
        left, top = self._top_left()
        return unproject(pixel.x + left, pixel.y + top, self.zoom)

    # Viewport

    def get_bounds(self) -> LatLngBounds:
        """Get the geographic bounds of the viewport.

        Raises:
            ProjectionUnavailableError: If the surface has not loaded
        """
        self._require_projection()
        sw = self.from_pixel_to_lat_lng(Point(0, self.height))
        ne = self.from_pixel_to_lat_lng(Point(self.width, 0))
        if self.width >= world_size(self.zoom):
            sw, ne = LatLng(sw.lat, -180.0), LatLng(ne.lat, 180.0)
        return LatLngBounds(sw=sw, ne=ne)

    def get_zoom(self) -> int:
        return self.zoom

    def set_zoom(self, zoom: int) -> None:
        """Change the zoom level, then report the viewport as settled."""
        zoom = self._clamp_zoom(zoom)
        if zoom != self.zoom:
            self.zoom = zoom
            self.trigger(self, MapEvent.ZOOM_CHANGED)
        self.idle()

    def pan_to(self, center: LatLng) -> None:
        self.center = center
        self.idle()

    def set_view(self, center: LatLng, zoom: int) -> None:
        self.center = center
        self.set_zoom(zoom)

    def fit_bounds(self, bounds: LatLngBounds) -> None:
        """Center on ``bounds`` at the highest zoom that shows all of it.

        Args:
            bounds: Geographic bounds to show; empty bounds are ignored
        """
        if bounds.is_empty:
            return
        self._record(self.fit_history, bounds.model_copy())

        lng_span = (bounds.ne.lng - bounds.sw.lng) % 360.0
        full_world = bounds.sw.lng <= -180.0 and bounds.ne.lng >= 180.0
        if lng_span == 0 and (bounds.crosses_antimeridian or full_world):
            lng_span = 360.0
        zoom = MIN_ZOOM
        for candidate in range(MAX_ZOOM, MIN_ZOOM - 1, -1):
            size = world_size(candidate)
            _, north_y = project(bounds.ne, candidate)
            _, south_y = project(bounds.sw, candidate)
            if lng_span / 360.0 * size <= self.width and south_y - north_y <= self.height:
                zoom = candidate
                break

        logger.debug(f"Fitting viewport to {bounds} at zoom {zoom}")
        self.set_view(bounds.get_center(), zoom)

    def idle(self) -> None:
        """Report that the viewport has settled after a change."""
        self.trigger(self, MapEvent.IDLE)

    def load(self) -> None:
        """Make the projection available and add pending overlays."""
        if self.loaded:
            return
        self.loaded = True
        for overlay in list(self.overlays):
            overlay.on_add()
        self.idle()

    # Events

    def add_listener(self, target: Any, event: str, callback: Callback) -> Subscription:
        return self._bus.add_listener(target, event, callback)

    def trigger(self, target: Any, event: str, *args: Any) -> int:
        return self._bus.trigger(target, event, *args)

    def listener_count(self, target: Any, event: str) -> int:
        return self._bus.listener_count(target, event)

    # Overlays

    def is_attached(self, overlay: Overlay) -> bool:
        return any(o is overlay for o in self.overlays)

    def attach_overlay(self, overlay: Overlay) -> None:
        if self.is_attached(overlay):
            return
        self.overlays.append(overlay)
        self._record(self.overlay_log, ("attach", overlay))
        if self.loaded:
            overlay.on_add()

    def detach_overlay(self, overlay: Overlay) -> None:
        if not self.is_attached(overlay):
            return
        self.overlays = [o for o in self.overlays if o is not overlay]
        self._record(self.overlay_log, ("detach", overlay))
        overlay.on_remove()

    def _record(self, history: list, entry) -> None:
        history.append(entry)
        if len(history) > self.history_limit:
            del history[: len(history) - self.history_limit]

    # Scheduling

    def schedule(self, callback: Callback) -> None:
        self._queue.schedule(callback)

    @property
    def pending_tasks(self) -> int:
        return len(self._queue)

    def run_pending(self) -> int:
        """Run deferred work, as the host loop would on its next turn."""
        return self._queue.run_pending()

    def overlays_of_type(self, overlay_type: type) -> List[Any]:
        return [o for o in self.overlays if isinstance(o, overlay_type)]

    def __repr__(self) -> str:
        return (
            f"MercatorMap(center={self.center}, zoom={self.zoom}, "
            f"size={self.width}x{self.height}, loaded={self.loaded})"
        )


def make_map(
    lat: float,
    lng: float,
    zoom: int = 10,
    width: int = 1024,
    height: int = 768,
    loaded: bool = True,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> MercatorMap:
    """Create a ``MercatorMap`` centred on (lat, lng)."""
    return MercatorMap(
        LatLng(lat, lng),
        zoom=zoom,
        width=width,
        height=height,
        loaded=loaded,
        history_limit=history_limit,
    )
