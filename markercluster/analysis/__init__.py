# markercluster/analysis/__init__.py
"""
Analysis package for reporting on clustering results.

This package turns the live state of a clusterer into pandas tables.
"""

from markercluster.analysis.cluster_report import summarize_clusters, summarize_markers

__all__ = ["summarize_clusters", "summarize_markers"]
