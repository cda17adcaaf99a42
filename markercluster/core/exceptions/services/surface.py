# markercluster/core/exceptions/services/surface.py
"""
Exceptions for map surface implementations.

This module provides custom exceptions for host surface errors.
"""


class SurfaceError(Exception):
    """Base exception for map surface errors."""

    pass


class ProjectionUnavailableError(SurfaceError):
    """Exception raised when the projection is used before the surface loads."""

    def __init__(
        self, message: str = "Map projection is not available until the map loads."
    ) -> None:
        self.message: str = message
        super().__init__(self.message)
