# markercluster/utils/constants.py
"""
Constants for the package.

This module contains defaults and event names used throughout the clusterer.
"""

# Standard Library Imports
from enum import Enum
from typing import Final, Tuple

# Clustering defaults
DEFAULT_GRID_SIZE: Final[int] = 60  # pixels
DEFAULT_MIN_CLUSTER_SIZE: Final[int] = 2
DEFAULT_ZOOM_ON_CLICK: Final[bool] = True
DEFAULT_AVERAGE_CENTER: Final[bool] = True

# Icon style defaults
DEFAULT_IMAGE_PATH: Final[str] = "../images/m"
DEFAULT_IMAGE_EXTENSION: Final[str] = "png"
DEFAULT_ICON_SIZES: Final[Tuple[int, ...]] = (53, 56, 66, 78, 90)
DEFAULT_TEXT_COLOR: Final[str] = "black"
DEFAULT_TEXT_SIZE: Final[int] = 11

# Geodesy
EARTH_RADIUS_KM: Final[float] = 6371.0
MAX_DISTANCE_KM: Final[float] = 40000.0  # larger than any great-circle distance

# Web Mercator
TILE_SIZE: Final[int] = 256
MAX_MERCATOR_SINE: Final[float] = 0.9999
MIN_ZOOM: Final[int] = 0
MAX_ZOOM: Final[int] = 22

# Test surface
DEFAULT_HISTORY_LIMIT: Final[int] = 256


class MapEvent(str, Enum):
    """Notification names exchanged with the host map surface."""

    IDLE = "idle"
    ZOOM_CHANGED = "zoom_changed"
    DRAG_END = "dragend"
    CLUSTER_CLICK = "clusterclick"
    ICON_CHANGED = "icon_changed"
