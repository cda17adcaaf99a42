# markercluster/utils/logging.py
"""
Logging utilities for the package.

Methods:
    setup_logging: Configure logging for scripts and applications.
    get_logger: Get a logger instance under the package namespace.
"""

# Standard Library Imports
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_level: Optional[str] = "INFO",
    log_file: Optional[str] = None,
) -> None:
    """
    Configure logging for a script or application embedding the clusterer.

    The library itself never calls this; it only emits records through
    loggers obtained from ``get_logger``.

    Args:
        log_level: Logging level (e.g., "INFO", "DEBUG", "WARNING").
        log_file: Path to an additional log file (optional).
    """
    level = getattr(logging, log_level.upper()) if log_level else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logging.getLogger("markercluster").addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.
    """
    return logging.getLogger(name)
