# markercluster/core/exceptions/models/geo.py
"""
Exceptions for the geo models.

Classes:
    GeoError: Base exception for the geo models.
    EmptyBoundsError: Raised when a value is requested from empty bounds.
"""


class GeoError(Exception):
    """Base exception for the geo models."""

    pass


class EmptyBoundsError(GeoError):
    """Exception raised when a value is requested from empty bounds."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot compute {operation} of empty bounds.")
