"""Observability module for curriculint.

Provides structured logging.
"""

from curriculint.observability.logging import (
    close_file_logging,
    configure_logging,
    get_logger,
)

__all__ = [
    "close_file_logging",
    "configure_logging",
    "get_logger",
]
