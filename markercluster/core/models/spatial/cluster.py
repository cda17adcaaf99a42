"""Cluster model for marker aggregation."""

# Standard Library Imports
from logging import Logger
from typing import TYPE_CHECKING, Any, List, Optional

# Third Party Imports
from pydantic import BaseModel, Field, PrivateAttr

# Internal Imports
from markercluster.core.exceptions.models.cluster import ClusterRemovedError
from markercluster.core.models.geo.latlng import LatLng, LatLngBounds
from markercluster.core.models.geo.marker import Marker
from markercluster.core.models.spatial.cluster_icon import ClusterIcon
from markercluster.utils.logging import get_logger

if TYPE_CHECKING:
    from markercluster.core.services.clustering.marker_clusterer import MarkerClusterer

# Initialize logger
logger: Logger = get_logger(__name__)


class Cluster(BaseModel):
    """An aggregation of markers that fall within one grid cell.

    Grid size, minimum size and center mode are copied from the clusterer
    when the cluster is created and stay fixed for its lifetime.

    Attributes:
        id: Creation order within the owning clusterer
        grid_size: Padding around the center, in pixels
        min_size: Member count at which the aggregate icon replaces markers
        average_center: Whether the center follows the mean member position
        center: Cluster center, None until the first member joins
        bounds: Center padded by ``grid_size`` pixels; the acceptance region
        markers: Members in join order
    """

    id: int = Field(..., description="Creation order within the owning clusterer.")
    grid_size: int = Field(..., gt=0, description="Padding around the center.")
    min_size: int = Field(..., ge=1, description="Minimum size to aggregate.")
    average_center: bool = Field(
        default=True, description="Whether the center follows the mean position."
    )
    center: Optional[LatLng] = Field(default=None, description="Cluster center.")
    bounds: Optional[LatLngBounds] = Field(
        default=None, description="Center padded by grid_size pixels."
    )
    markers: List[Marker] = Field(
        default_factory=list, description="Members in join order."
    )

    _clusterer: Any = PrivateAttr(default=None)
    _icon: Optional[ClusterIcon] = PrivateAttr(default=None)
    _removed: bool = PrivateAttr(default=False)

    def __init__(self, clusterer: "MarkerClusterer", **data: Any) -> None:
        """Initialize a cluster owned by ``clusterer``.

        Args:
            clusterer: The owning clusterer
            **data: Field overrides; ``grid_size``, ``min_size`` and
                ``average_center`` default to the clusterer's settings
        """
        data.setdefault("grid_size", clusterer.grid_size)
        data.setdefault("min_size", clusterer.min_cluster_size)
        data.setdefault("average_center", clusterer.average_center)
        super().__init__(**data)
        self._clusterer = clusterer
        self._icon = ClusterIcon(self, self.grid_size)

    @property
    def clusterer(self) -> "MarkerClusterer":
        return self._clusterer

    @property
    def icon(self) -> ClusterIcon:
        return self._icon

    @property
    def removed(self) -> bool:
        return self._removed

    @property
    def size(self) -> int:
        return len(self.markers)

    def is_already_member(self, marker: Marker) -> bool:
        return any(m is marker for m in self.markers)

    def add_marker(self, marker: Marker) -> bool:
        """Add a marker to the cluster.

        Moves the center when average-center mode is on and recomputes the
        padded bounds. Members stay on the map while the cluster is smaller
        than ``min_size``; reaching ``min_size`` hides all of them at once and
        later members are hidden as they join.

        Args:
            marker: The marker to add

        Returns:
            bool: False if the marker was already a member

        Raises:
            ClusterRemovedError: If the cluster has been removed
        """
        if self._removed:
            raise ClusterRemovedError(self.id)
        if self.is_already_member(marker):
            return False

        if self.center is None:
            self.center = marker.position
            self._calculate_bounds()
        elif self.average_center:
            n = len(self.markers) + 1
            lat = (self.center.lat * (n - 1) + marker.position.lat) / n
            lng = (self.center.lng * (n - 1) + marker.position.lng) / n
            self.center = LatLng(lat, lng)
            self._calculate_bounds()

        self._clusterer.assignments.assign(marker, self.id)
        self.markers.append(marker)

        surface = self._clusterer.surface
        size = len(self.markers)
        if size < self.min_size and marker.map is not surface:
            marker.set_map(surface)
        if size == self.min_size:
            for member in self.markers:
                member.set_map(None)
        if size >= self.min_size:
            marker.set_map(None)

        self.refresh_icon()
        return True

    def _calculate_bounds(self) -> None:
        point_bounds = LatLngBounds(sw=self.center, ne=self.center)
        self.bounds = self._clusterer.get_extended_bounds(point_bounds, self.grid_size)

    def is_in_bounds(self, marker: Marker) -> bool:
        """Check whether a marker falls inside the padded acceptance region."""
        if self.bounds is None:
            return False
        return self.bounds.contains(marker.position)

    def get_bounds(self) -> LatLngBounds:
        """Get the tight bounds of the center and every member.

        Returns:
            LatLngBounds: Empty for a cluster without members
        """
        if self.center is None:
            return LatLngBounds()
        bounds = LatLngBounds(sw=self.center, ne=self.center)
        for marker in self.markers:
            bounds.extend(marker.position)
        return bounds

    def remove(self) -> None:
        """Detach the aggregate icon and drop all members. Idempotent."""
        if self._removed:
            return
        self._icon.remove()
        self.markers.clear()
        self._removed = True

    def refresh_icon(self) -> None:
        """Re-evaluate what the cluster shows at the current zoom.

        Above the clusterer's max zoom every member is shown and the
        aggregate icon is hidden. Below ``min_size`` the icon is hidden.
        Otherwise the icon shows the calculator's summary at the center.
        """
        if self._removed:
            return

        surface = self._clusterer.surface
        max_zoom = self._clusterer.max_zoom
        if max_zoom is not None and surface.get_zoom() > max_zoom:
            for marker in self.markers:
                marker.set_map(surface)
            self._icon.hide()
            return

        if len(self.markers) < self.min_size:
            self._icon.hide()
            return

        num_styles = len(self._clusterer.styles)
        summary = self._clusterer.calculator(self.markers, num_styles)
        self._icon.set_center(self.center)
        self._icon.set_summary(summary)
        self._icon.show()

    def __len__(self) -> int:
        """Returns the number of markers in the cluster.

        Returns:
            int: The number of markers in the cluster.
        """
        return len(self.markers)

    def __str__(self) -> str:
        return f"Cluster-{self.id} ({len(self.markers)} markers at {self.center})"

    def __repr__(self) -> str:
        return self.__str__()
