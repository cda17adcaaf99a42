"""
Tabular reports of a clusterer's state.

Methods:
    summarize_clusters: One row per live cluster.
    summarize_markers: One row per marker, with its cluster and visibility.
"""

# Standard Library Imports
from logging import Logger
from typing import Any, Dict, List

# Third Party Imports
import pandas as pd

# Internal Imports
from markercluster.core.services.clustering.marker_clusterer import MarkerClusterer
from markercluster.utils.logging import get_logger

# Initialize logger
logger: Logger = get_logger(__name__)

CLUSTER_COLUMNS = [
    "cluster_id",
    "size",
    "center_lat",
    "center_lng",
    "icon_visible",
    "summary_text",
    "style_index",
    "south",
    "west",
    "north",
    "east",
]

MARKER_COLUMNS = ["uid", "title", "lat", "lng", "cluster_id", "on_map"]


def summarize_clusters(clusterer: MarkerClusterer) -> pd.DataFrame:
    """Summarize the clusterer's live clusters.

    The bounds columns hold the tight bounding box of each cluster (center
    plus members), the box a click on the cluster zooms to.

    Args:
        clusterer: The clusterer to report on

    Returns:
        pd.DataFrame: One row per cluster, in creation order
    """
    rows: List[Dict[str, Any]] = []
    for cluster in clusterer.clusters:
        icon = cluster.icon
        bounds = cluster.get_bounds()
        rows.append(
            {
                "cluster_id": cluster.id,
                "size": cluster.size,
                "center_lat": cluster.center.lat if cluster.center is not None else None,
                "center_lng": cluster.center.lng if cluster.center is not None else None,
                "icon_visible": icon.visible,
                "summary_text": icon.text if icon.visible else None,
                "style_index": icon.summary.index if icon.visible else None,
                "south": None if bounds.is_empty else bounds.sw.lat,
                "west": None if bounds.is_empty else bounds.sw.lng,
                "north": None if bounds.is_empty else bounds.ne.lat,
                "east": None if bounds.is_empty else bounds.ne.lng,
            }
        )

    df = pd.DataFrame(rows, columns=CLUSTER_COLUMNS)
    logger.debug(f"Summarized {len(df)} clusters")
    return df


def summarize_markers(clusterer: MarkerClusterer) -> pd.DataFrame:
    """Summarize every marker known to the clusterer.

    Args:
        clusterer: The clusterer to report on

    Returns:
        pd.DataFrame: One row per marker; ``cluster_id`` is missing for
        markers outside the last clustered viewport
    """
    rows = [
        {
            "uid": str(marker.uid),
            "title": marker.title,
            "lat": marker.position.lat,
            "lng": marker.position.lng,
            "cluster_id": clusterer.assignments.cluster_of(marker),
            "on_map": marker.on_map,
        }
        for marker in clusterer.markers
    ]
    df = pd.DataFrame(rows, columns=MARKER_COLUMNS)
    df["cluster_id"] = df["cluster_id"].astype("Int64")
    return df
