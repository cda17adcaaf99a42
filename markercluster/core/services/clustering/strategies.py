"""
Marker assignment strategies.

A strategy places one marker: it either adds it to an existing cluster or
creates a new cluster for it and appends that to the live cluster list.
Any callable with the ``AssignmentStrategy`` signature can be passed to the
clusterer.
"""

# Standard Library Imports
from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence, Tuple

# Third Party Imports
import numpy as np

# Internal Imports
from markercluster.core.models.geo.marker import Marker
from markercluster.core.models.spatial.cluster import Cluster
from markercluster.utils.constants import MAX_DISTANCE_KM
from markercluster.utils.geo import haversine_km_many

if TYPE_CHECKING:
    from markercluster.core.services.clustering.marker_clusterer import MarkerClusterer


class AssignmentStrategy(Protocol):
    """Places a marker into ``clusters``; must leave it assigned."""

    def __call__(
        self, marker: Marker, clusters: List[Cluster], clusterer: "MarkerClusterer"
    ) -> None: ...


def find_nearest_cluster(
    marker: Marker,
    clusters: Sequence[Cluster],
    max_distance_km: float = MAX_DISTANCE_KM,
) -> Tuple[Optional[Cluster], float]:
    """Find the cluster whose center is closest to a marker.

    Clusters without a center are skipped. When several clusters are equally
    close the first one in ``clusters`` wins.

    Args:
        marker: The marker to place
        clusters: Candidate clusters, in creation order
        max_distance_km: Distances at or above this never match

    Returns:
        Tuple[Optional[Cluster], float]: The nearest cluster (or None) and
        its great-circle distance in km (``max_distance_km`` if None)
    """
    candidates = [c for c in clusters if c.center is not None]
    if not candidates:
        return None, max_distance_km

    distances = haversine_km_many(
        marker.position.lat,
        marker.position.lng,
        [(c.center.lat, c.center.lng) for c in candidates],
    )
    # argmin returns the first occurrence of the minimum
    best = int(np.argmin(distances))
    if distances[best] < max_distance_km:
        return candidates[best], float(distances[best])
    return None, max_distance_km


class NearestClusterStrategy:
    """Join the nearest cluster if the marker is inside its padded bounds.

    The nearest cluster by great-circle distance can still reject the
    marker, because pixel padding covers a different geographic extent at
    different latitudes. A rejected marker starts a new cluster.
    """

    def __init__(self, max_distance_km: float = MAX_DISTANCE_KM):
        self.max_distance_km = max_distance_km

    def __call__(
        self, marker: Marker, clusters: List[Cluster], clusterer: "MarkerClusterer"
    ) -> None:
        nearest, _ = find_nearest_cluster(marker, clusters, self.max_distance_km)
        if nearest is not None and nearest.is_in_bounds(marker):
            nearest.add_marker(marker)
            return

        cluster = clusterer.create_cluster()
        cluster.add_marker(marker)
        clusters.append(cluster)


default_assignment_strategy = NearestClusterStrategy()
