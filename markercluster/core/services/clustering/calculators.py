"""
Cluster summary calculators.

A calculator turns a cluster's members into the label and style bucket of
its aggregate icon. Any callable with the ``SummaryCalculator`` signature
can be passed to the clusterer.
"""

# Standard Library Imports
import math
from typing import Protocol, Sequence

# Internal Imports
from markercluster.core.models.geo.marker import Marker
from markercluster.core.models.spatial.style import ClusterSummary


class SummaryCalculator(Protocol):
    """Computes the aggregate icon summary of a cluster. Must not mutate."""

    def __call__(self, markers: Sequence[Marker], num_styles: int) -> ClusterSummary: ...


class LogarithmicSummaryCalculator:
    """Labels a cluster with its member count and buckets it by magnitude.

    1-9 members map to index 1, 10-99 to index 2 and so on, capped at the
    number of available styles.
    """

    def __call__(self, markers: Sequence[Marker], num_styles: int) -> ClusterSummary:
        count = len(markers)
        index = int(math.floor(math.log10(count))) + 1 if count > 0 else 0
        index = min(max(index, 0), max(num_styles, 0))
        return ClusterSummary(text=str(count), index=index)


default_summary_calculator = LogarithmicSummaryCalculator()
