"""Marker-to-cluster assignment table."""

# Standard Library Imports
from typing import Dict, Iterable, List, Optional

# Internal Imports
from markercluster.core.models.geo.marker import Marker


class MarkerAssignments:
    """Tracks which cluster each marker was placed in during the current pass.

    The table lives on the clusterer so that marker objects, which belong to
    the application, are never mutated for bookkeeping. Entries are keyed by
    marker identity, like membership everywhere else: two marker objects
    sharing a ``uid`` (e.g. a ``model_copy``) are tracked separately. The
    clusterer keeps every marker it tracks alive. A marker with no entry is
    unassigned.
    """

    def __init__(self):
        self._assignments: Dict[int, int] = {}  # id(marker) -> cluster id

    def __len__(self) -> int:
        return len(self._assignments)

    def is_assigned(self, marker: Marker) -> bool:
        return id(marker) in self._assignments

    def cluster_of(self, marker: Marker) -> Optional[int]:
        """Get the id of the cluster the marker is assigned to, if any."""
        return self._assignments.get(id(marker))

    def assign(self, marker: Marker, cluster_id: int) -> None:
        self._assignments[id(marker)] = cluster_id

    def release(self, marker: Marker) -> None:
        """Mark a marker as unassigned. Unknown markers are ignored."""
        self._assignments.pop(id(marker), None)

    def clear(self) -> None:
        self._assignments.clear()

    def get_unassigned(self, markers: Iterable[Marker]) -> List[Marker]:
        """Get the markers that have no assignment, preserving order."""
        return [m for m in markers if id(m) not in self._assignments]
