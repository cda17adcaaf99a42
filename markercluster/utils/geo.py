# markercluster/utils/geo.py
"""
Geodesic helpers.

Methods:
    haversine_km_many: Great-circle distances from one point to many points.
"""

# Standard Library Imports
import math
from typing import Sequence, Tuple

# Third Party Imports
import numpy as np

# Internal Imports
from markercluster.utils.constants import EARTH_RADIUS_KM


def haversine_km_many(
    lat: float, lng: float, others: Sequence[Tuple[float, float]]
) -> np.ndarray:
    """Calculate great-circle distances from one point to many.

    Args:
        lat: Latitude of the origin (degrees)
        lng: Longitude of the origin (degrees)
        others: Sequence of (lat, lng) pairs

    Returns:
        np.ndarray: Distances in kilometres, in the order of ``others``
    """
    if len(others) == 0:
        return np.empty(0, dtype=float)

    coords = np.radians(np.asarray(others, dtype=float))
    lat1 = math.radians(lat)
    d_lat = coords[:, 0] - lat1
    d_lng = coords[:, 1] - math.radians(lng)
    a = (
        np.sin(d_lat / 2) ** 2
        + math.cos(lat1) * np.cos(coords[:, 0]) * np.sin(d_lng / 2) ** 2
    )
    # Clip guards sqrt(1 - a) against rounding just above 1
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
