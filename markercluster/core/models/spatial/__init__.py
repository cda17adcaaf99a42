# markercluster/core/models/spatial/__init__.py
"""Spatial models package."""

from markercluster.core.models.spatial.assignments import MarkerAssignments
from markercluster.core.models.spatial.cluster import Cluster
from markercluster.core.models.spatial.cluster_icon import ClusterIcon
from markercluster.core.models.spatial.style import (
    ClusterSummary,
    IconStyle,
    build_default_styles,
)

__all__ = [
    "Cluster",
    "ClusterIcon",
    "ClusterSummary",
    "IconStyle",
    "MarkerAssignments",
    "build_default_styles",
]
