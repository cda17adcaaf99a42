# markercluster/core/exceptions/models/cluster.py
"""
Exceptions for the cluster model.

Classes:
    ClusterError: Base exception for the cluster model.
    ClusterRemovedError: Raised when a removed cluster is mutated.
"""


class ClusterError(Exception):
    """Base exception for the cluster model."""

    pass


class ClusterRemovedError(ClusterError):
    """Exception raised when a marker is added to a removed cluster."""

    def __init__(self, cluster_id: int):
        self.cluster_id = cluster_id
        super().__init__(f"Cluster {cluster_id} has been removed.")
