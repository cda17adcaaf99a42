# markercluster/core/models/geo/__init__.py
"""Geographic models package."""

from markercluster.core.models.geo.latlng import LatLng, LatLngBounds, Point
from markercluster.core.models.geo.marker import Marker

__all__ = ["LatLng", "LatLngBounds", "Marker", "Point"]
