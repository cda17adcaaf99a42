"""Marker clustering service."""

# Standard Library Imports
from logging import Logger
from typing import Dict, Iterable, List, Optional, Set

# Internal Imports
from markercluster.core.exceptions.services.clustering import InvalidOptionError
from markercluster.core.models.geo.latlng import LatLngBounds
from markercluster.core.models.geo.marker import Marker
from markercluster.core.models.spatial.assignments import MarkerAssignments
from markercluster.core.models.spatial.cluster import Cluster
from markercluster.core.models.spatial.style import IconStyle, build_default_styles
from markercluster.core.services.clustering.bounds import BoundsAdapter
from markercluster.core.services.clustering.calculators import (
    SummaryCalculator,
    default_summary_calculator,
)
from markercluster.core.services.clustering.options import ClustererOptions
from markercluster.core.services.clustering.strategies import (
    AssignmentStrategy,
    default_assignment_strategy,
)
from markercluster.core.services.surface.base import MapSurface, Subscription
from markercluster.utils.constants import MapEvent
from markercluster.utils.logging import get_logger

# Initialize logger
logger: Logger = get_logger(__name__)


class MarkerClusterer:
    """Service for clustering the markers shown on a map surface.

    The clusterer owns every marker it was given and the current partition of
    the visible ones into clusters. It is an overlay on the host surface:
    clustering starts once the surface adds it (``on_add``) and is then
    recomputed on every ``idle`` notification. Only markers inside the
    viewport padded by ``grid_size`` pixels, and not yet assigned, are fed
    to the assignment strategy, so a settled viewport costs nothing to
    redraw. A zoom change tears every cluster down first.

    Attributes:
        options: The options the clusterer was created with
        assignments: Marker to cluster id table for the current pass
        previous_zoom: Last zoom level seen
    """

    def __init__(
        self,
        surface: MapSurface,
        markers: Optional[Iterable[Marker]] = None,
        options: Optional[ClustererOptions] = None,
        calculator: Optional[SummaryCalculator] = None,
        assignment_strategy: Optional[AssignmentStrategy] = None,
    ):
        """Initialize the clusterer and attach it to ``surface``.

        Args:
            surface: The host map surface
            markers: Markers to cluster (optional)
            options: Clustering options (default: ``ClustererOptions()``)
            calculator: Summary calculator (default: logarithmic)
            assignment_strategy: Assignment strategy (default: nearest cluster)
        """
        self.options = options or ClustererOptions()
        self._surface = surface
        self._grid_size = self.options.grid_size
        self._min_cluster_size = self.options.min_cluster_size
        self._max_zoom = self.options.max_zoom
        self._zoom_on_click = self.options.zoom_on_click
        self._average_center = self.options.average_center
        self._styles: List[IconStyle] = list(self.options.styles) or build_default_styles(
            self.options.image_path, self.options.image_extension
        )
        self._calculator = calculator or default_summary_calculator
        self._assignment_strategy = assignment_strategy or default_assignment_strategy
        self._bounds_adapter = BoundsAdapter(surface, self._grid_size)

        self._markers: List[Marker] = []
        self._marker_ids: Set[int] = set()
        self._clusters: List[Cluster] = []
        self._pending_disposal: List[Cluster] = []
        self._next_cluster_id = 0
        self._ready = False
        self._closed = False
        self.assignments = MarkerAssignments()
        self.previous_zoom = surface.get_zoom()

        self._drag_subscriptions: Dict[int, Subscription] = {}
        self._subscriptions: List[Subscription] = [
            surface.add_listener(surface, MapEvent.ZOOM_CHANGED, self._on_zoom_changed),
            surface.add_listener(surface, MapEvent.IDLE, self.redraw),
        ]
        surface.attach_overlay(self)

        if markers:
            self.add_markers(list(markers))

    # Overlay lifecycle

    def on_add(self) -> None:
        """Called by the surface once its projection is available."""
        self.set_ready(True)

    def on_remove(self) -> None:
        logger.debug("Clusterer detached from surface")

    def set_ready(self, ready: bool) -> None:
        """Mark the clusterer ready; the first transition clusters markers."""
        if self._ready:
            return
        self._ready = ready
        if ready:
            logger.info(f"Clusterer ready with {len(self._markers)} markers")
        self.create_clusters()

    # Accessors

    @property
    def surface(self) -> MapSurface:
        return self._surface

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def markers(self) -> List[Marker]:
        return list(self._markers)

    @property
    def total_markers(self) -> int:
        return len(self._markers)

    @property
    def clusters(self) -> List[Cluster]:
        return list(self._clusters)

    @property
    def total_clusters(self) -> int:
        return len(self._clusters)

    @property
    def grid_size(self) -> int:
        return self._grid_size

    @grid_size.setter
    def grid_size(self, size: int) -> None:
        if size < 1:
            raise InvalidOptionError("grid_size", size, "must be at least 1 pixel")
        self._grid_size = size
        self._bounds_adapter.grid_size = size

    @property
    def min_cluster_size(self) -> int:
        return self._min_cluster_size

    @min_cluster_size.setter
    def min_cluster_size(self, size: int) -> None:
        if size < 1:
            raise InvalidOptionError("min_cluster_size", size, "must be at least 1")
        self._min_cluster_size = size

    @property
    def max_zoom(self) -> Optional[int]:
        return self._max_zoom

    @max_zoom.setter
    def max_zoom(self, zoom: Optional[int]) -> None:
        if zoom is not None and zoom < 0:
            raise InvalidOptionError("max_zoom", zoom, "must be None or non-negative")
        self._max_zoom = zoom

    @property
    def styles(self) -> List[IconStyle]:
        return self._styles

    @styles.setter
    def styles(self, styles: List[IconStyle]) -> None:
        self._styles = list(styles)

    @property
    def calculator(self) -> SummaryCalculator:
        return self._calculator

    @calculator.setter
    def calculator(self, calculator: SummaryCalculator) -> None:
        self._calculator = calculator

    @property
    def assignment_strategy(self) -> AssignmentStrategy:
        return self._assignment_strategy

    @assignment_strategy.setter
    def assignment_strategy(self, strategy: AssignmentStrategy) -> None:
        self._assignment_strategy = strategy

    @property
    def zoom_on_click(self) -> bool:
        return self._zoom_on_click

    @property
    def average_center(self) -> bool:
        return self._average_center

    def is_assigned(self, marker: Marker) -> bool:
        return self.assignments.is_assigned(marker)

    # Markers

    def add_marker(self, marker: Marker, no_redraw: bool = False) -> None:
        """Add a single marker.

        Args:
            marker: The marker to add
            no_redraw: Skip reclustering (for bulk loads)
        """
        self._push_marker(marker)
        if not no_redraw:
            self.redraw()

    def add_markers(self, markers: Iterable[Marker], no_redraw: bool = False) -> None:
        """Add several markers, reclustering once at the end.

        Args:
            markers: The markers to add
            no_redraw: Skip reclustering (for bulk loads)
        """
        for marker in markers:
            self._push_marker(marker)
        if not no_redraw:
            self.redraw()

    def _push_marker(self, marker: Marker) -> None:
        if id(marker) in self._marker_ids:
            logger.debug(f"Ignoring duplicate add of {marker}")
            return
        self.assignments.release(marker)
        if marker.draggable and id(marker) not in self._drag_subscriptions:
            self._drag_subscriptions[id(marker)] = self._surface.add_listener(
                marker, MapEvent.DRAG_END, lambda *_: self._on_marker_dragged(marker)
            )
        self._markers.append(marker)
        self._marker_ids.add(id(marker))

    def _on_marker_dragged(self, marker: Marker) -> None:
        # The marker may now belong to a different cluster
        self.assignments.release(marker)
        self.repaint()

    def _remove_marker(self, marker: Marker) -> bool:
        if id(marker) not in self._marker_ids:
            logger.debug(f"Cannot remove unknown {marker}")
            return False
        marker.set_map(None)
        index = next(i for i, m in enumerate(self._markers) if m is marker)
        del self._markers[index]
        self._marker_ids.discard(id(marker))
        self.assignments.release(marker)
        subscription = self._drag_subscriptions.pop(id(marker), None)
        if subscription is not None:
            subscription.remove()
        return True

    def remove_marker(self, marker: Marker, no_redraw: bool = False) -> bool:
        """Remove a marker and rebuild the clusters.

        Removal cannot be handled incrementally, since the marker's former
        cluster-mates may now belong elsewhere, so the viewport is reset.

        Args:
            marker: The marker to remove (matched by identity)
            no_redraw: Skip the reset and reclustering

        Returns:
            bool: Whether the marker was found and removed
        """
        removed = self._remove_marker(marker)
        if removed and not no_redraw:
            self.reset_viewport()
            self.redraw()
        return removed

    def remove_markers(self, markers: Iterable[Marker], no_redraw: bool = False) -> bool:
        """Remove several markers, rebuilding the clusters once.

        Returns:
            bool: Whether at least one marker was removed
        """
        removed = False
        for marker in list(markers):
            removed = self._remove_marker(marker) or removed
        if removed and not no_redraw:
            self.reset_viewport()
            self.redraw()
        return removed

    def clear_markers(self) -> None:
        """Remove every marker and cluster, hiding the markers."""
        self.reset_viewport(hide_markers=True)
        for subscription in self._drag_subscriptions.values():
            subscription.remove()
        self._drag_subscriptions.clear()
        self._markers = []
        self._marker_ids.clear()

    def fit_map_to_markers(self) -> None:
        """Fit the viewport to every marker. No-op without markers."""
        if not self._markers:
            return
        bounds = LatLngBounds.from_points(m.position for m in self._markers)
        self._surface.fit_bounds(bounds)

    # Clustering

    def get_extended_bounds(
        self, bounds: LatLngBounds, padding: Optional[int] = None
    ) -> LatLngBounds:
        """Pad ``bounds`` by ``padding`` pixels (default: ``grid_size``)."""
        return self._bounds_adapter.get_extended_bounds(bounds, padding)

    def create_cluster(self) -> Cluster:
        """Create an empty cluster owned by this clusterer.

        The caller is responsible for appending it to the cluster list.
        """
        cluster = Cluster(self, id=self._next_cluster_id)
        self._next_cluster_id += 1
        return cluster

    def reset_viewport(self, hide_markers: bool = False) -> None:
        """Destroy every cluster and mark every marker unassigned.

        Args:
            hide_markers: Also take every marker off the map
        """
        for cluster in self._clusters:
            cluster.remove()
        if hide_markers:
            for marker in self._markers:
                marker.set_map(None)
        self.assignments.clear()
        self._clusters = []
        logger.debug("Viewport reset")

    def repaint(self) -> None:
        """Recluster from scratch without a gap between old and new icons.

        The old clusters are removed on a later turn of the host loop, after
        the new ones have been drawn.
        """
        old_clusters = self._clusters
        self._clusters = []
        self.reset_viewport()
        self.redraw()
        self._pending_disposal.extend(old_clusters)
        self._surface.schedule(self._dispose_pending)
        logger.debug(f"Repaint scheduled disposal of {len(old_clusters)} clusters")

    def _dispose_pending(self) -> None:
        while self._pending_disposal:
            self._pending_disposal.pop(0).remove()

    def redraw(self) -> None:
        self.create_clusters()

    def create_clusters(self) -> None:
        """Assign every unassigned marker inside the padded viewport.

        No-op until the clusterer is ready.
        """
        if not self._ready or self._closed:
            return

        viewport = self._surface.get_bounds()
        bounds = self.get_extended_bounds(LatLngBounds(sw=viewport.sw, ne=viewport.ne))

        placed = 0
        for marker in self.assignments.get_unassigned(self._markers):
            if not bounds.contains(marker.position):
                continue
            self._assignment_strategy(marker, self._clusters, self)
            if not self.assignments.is_assigned(marker):
                logger.warning(f"Assignment strategy left {marker} unassigned")
            placed += 1

        if placed:
            logger.debug(
                f"Placed {placed} markers; {len(self._clusters)} clusters in view"
            )

    def _on_zoom_changed(self) -> None:
        zoom = self._surface.get_zoom()
        if zoom != self.previous_zoom:
            logger.debug(f"Zoom changed from {self.previous_zoom} to {zoom}")
            self.previous_zoom = zoom
            self.reset_viewport()

    # Teardown

    def close(self) -> None:
        """Release every subscription and detach from the surface. Idempotent."""
        if self._closed:
            return
        for subscription in self._subscriptions:
            subscription.remove()
        for subscription in self._drag_subscriptions.values():
            subscription.remove()
        self._subscriptions = []
        self._drag_subscriptions.clear()
        self.reset_viewport()
        self._dispose_pending()
        self._surface.detach_overlay(self)
        self._closed = True

    def __enter__(self) -> "MarkerClusterer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"MarkerClusterer(markers={len(self._markers)}, "
            f"clusters={len(self._clusters)}, ready={self._ready})"
        )
