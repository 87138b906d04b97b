"""
Error collections exposed at the package level.
"""

from .collection import Errors
from .entries import BASE, Detail, FailureEntry, HasDetails
from .messages import DEFAULT_MESSAGES, generate_message

__all__ = [
    "BASE",
    "DEFAULT_MESSAGES",
    "Detail",
    "Errors",
    "FailureEntry",
    "HasDetails",
    "generate_message",
]
