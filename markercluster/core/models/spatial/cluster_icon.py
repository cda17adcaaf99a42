"""Aggregate icon state for a cluster."""

# Standard Library Imports
from logging import Logger
from typing import TYPE_CHECKING, Any, Optional

# Internal Imports
from markercluster.core.models.geo.latlng import LatLng, Point
from markercluster.core.models.spatial.style import ClusterSummary, IconStyle
from markercluster.utils.constants import MapEvent
from markercluster.utils.logging import get_logger

if TYPE_CHECKING:
    from markercluster.core.models.spatial.cluster import Cluster

# Initialize logger
logger: Logger = get_logger(__name__)


class ClusterIcon:
    """Decides what the rendering layer draws for one cluster.

    The icon is an overlay on the host surface. It holds the cluster center,
    the summary from the calculator, the style tier chosen from the summary
    index and a visible flag. Every state change is announced with an
    ``icon_changed`` event on the owning clusterer, carrying the icon.

    Attributes:
        cluster: The cluster this icon stands for
        padding: Grid size of the cluster, in pixels
        center: Where the icon is anchored
        summary: Label and style bucket, once computed
        style: Style tier picked from ``summary.index``
        visible: Whether the aggregate icon should be drawn
        attached: Whether the host surface has added the overlay
    """

    def __init__(self, cluster: "Cluster", padding: int = 0):
        self.cluster = cluster
        self.padding = padding or 0
        self.center: Optional[LatLng] = None
        self.summary: Optional[ClusterSummary] = None
        self.style: Optional[IconStyle] = None
        self.visible = False
        self.attached = False
        self._surface = cluster.clusterer.surface
        self._surface.attach_overlay(self)

    # Overlay lifecycle

    def on_add(self) -> None:
        self.attached = True
        self._notify()

    def on_remove(self) -> None:
        self.visible = False
        self.attached = False
        self._notify()

    def remove(self) -> None:
        """Detach the icon from the surface. Safe to call repeatedly."""
        self._surface.detach_overlay(self)

    # State

    def set_center(self, center: Optional[LatLng]) -> None:
        self.center = center

    def set_summary(self, summary: ClusterSummary) -> None:
        self.summary = summary
        self.use_style()

    def use_style(self) -> None:
        """Pick the style tier for the current summary index.

        Index 1 selects the first tier; out of range indexes are clamped.
        """
        styles = self.cluster.clusterer.styles
        if not styles or self.summary is None:
            self.style = None
            return
        index = max(0, self.summary.index - 1)
        index = min(len(styles) - 1, index)
        self.style = styles[index]

    def show(self) -> None:
        self.visible = True
        self._notify()

    def hide(self) -> None:
        if self.visible:
            self.visible = False
            self._notify()

    @property
    def text(self) -> Optional[str]:
        return self.summary.text if self.summary is not None else None

    def get_position(self) -> Optional[Point]:
        """Get the pixel position of the icon's top-left corner.

        The style size is subtracted from the projected ``center``, unless the
        style sets an ``icon_anchor``, which is then subtracted instead.

        Returns:
            Optional[Point]: None until the icon is attached with a center
        """
        if not self.attached or self.center is None:
            return None
        pos = self._surface.from_lat_lng_to_pixel(self.center)
        if self.style is None:
            return pos
        if self.style.icon_anchor is not None:
            return pos.offset(-self.style.icon_anchor[0], -self.style.icon_anchor[1])
        return pos.offset(-self.style.width, -self.style.height)

    # Interaction

    def activate(self, event: Optional[Any] = None) -> None:
        """Handle a click on the icon.

        Triggers ``clusterclick`` on the clusterer with the cluster and the
        input event, then zooms to the cluster when zoom-on-click is enabled.

        Args:
            event: The host's input event, passed through untouched
        """
        clusterer = self.cluster.clusterer
        self._surface.trigger(clusterer, MapEvent.CLUSTER_CLICK, self.cluster, event)
        if clusterer.zoom_on_click:
            self._surface.fit_bounds(self.cluster.get_bounds())

    def _notify(self) -> None:
        self._surface.trigger(self.cluster.clusterer, MapEvent.ICON_CHANGED, self)

    def __repr__(self) -> str:
        return (
            f"ClusterIcon(cluster={self.cluster.id}, text={self.text!r}, "
            f"visible={self.visible}, attached={self.attached})"
        )
