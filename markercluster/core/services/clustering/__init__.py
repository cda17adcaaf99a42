# markercluster/core/services/clustering/__init__.py
"""Clustering services package."""

from markercluster.core.services.clustering.bounds import BoundsAdapter
from markercluster.core.services.clustering.calculators import (
    LogarithmicSummaryCalculator,
    SummaryCalculator,
)
from markercluster.core.services.clustering.marker_clusterer import MarkerClusterer
from markercluster.core.services.clustering.options import ClustererOptions
from markercluster.core.services.clustering.strategies import (
    AssignmentStrategy,
    NearestClusterStrategy,
    find_nearest_cluster,
)

__all__ = [
    "AssignmentStrategy",
    "BoundsAdapter",
    "ClustererOptions",
    "LogarithmicSummaryCalculator",
    "MarkerClusterer",
    "NearestClusterStrategy",
    "SummaryCalculator",
    "find_nearest_cluster",
]
