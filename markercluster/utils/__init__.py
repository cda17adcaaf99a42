# markercluster/utils/__init__.py
"""
Utility functions and classes for the package.
"""

from markercluster.utils.geo import haversine_km_many
from markercluster.utils.logging import get_logger, setup_logging

__all__ = [
    # Geo
    "haversine_km_many",
    # Logging
    "get_logger",
    "setup_logging",
]
