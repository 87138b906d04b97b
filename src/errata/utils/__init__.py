"""
Utility helpers shared across errata packages.
"""

from .logging import configure_logging, get_correlation_id, get_logger, set_correlation_id
from .naming import camel_to_snake, humanize

__all__ = [
    "camel_to_snake",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "humanize",
    "set_correlation_id",
]
