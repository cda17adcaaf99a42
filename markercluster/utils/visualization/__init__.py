"""Visualization utilities package."""

from markercluster.utils.visualization.clusters import plot_clusters

__all__ = ["plot_clusters"]
