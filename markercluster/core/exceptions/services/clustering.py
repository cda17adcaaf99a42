# markercluster/core/exceptions/services/clustering.py
"""
Exceptions for the clustering service.

Classes:
    ClustererError: Base exception for the clustering service.
    InvalidOptionError: Raised when an option is set to an invalid value.
    OptionsFileError: Raised when an options file cannot be loaded.
"""

# Standard Library Imports
from typing import Any


class ClustererError(Exception):
    """Base exception for the clustering service."""

    pass


class InvalidOptionError(ClustererError):
    """Exception raised when an option is set to an invalid value."""

    def __init__(self, option: str, value: Any, reason: str):
        self.option = option
        self.value = value
        super().__init__(f"Invalid value {value!r} for option '{option}': {reason}")


class OptionsFileError(ClustererError):
    """Exception raised when an options file cannot be loaded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Failed to load options from {path}: {reason}")
