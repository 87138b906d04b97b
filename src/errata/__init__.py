"""
errata public package initialization.

Attribute-keyed error collections that merge deterministically, plus a
renderer for developer-facing diagnostic text.
"""

from .config import ErrataConfig, get_config, set_config  # noqa: F401
from .core import (
    BooleanField,
    Field,
    IntegerField,
    Model,
    ModelConfigurationError,
    StringField,
    Subject,
)  # noqa: F401
from .diagnostics import DiagnosticRenderer, Fix, Issue, mark_bad_lines  # noqa: F401
from .errors import BASE, Detail, Errors, FailureEntry, HasDetails  # noqa: F401
from .exceptions import ErrataError, ErrorKind  # noqa: F401

__all__ = [
    "BASE",
    "BooleanField",
    "Detail",
    "DiagnosticRenderer",
    "ErrataConfig",
    "ErrataError",
    "ErrorKind",
    "Errors",
    "FailureEntry",
    "Field",
    "Fix",
    "HasDetails",
    "IntegerField",
    "Issue",
    "Model",
    "ModelConfigurationError",
    "StringField",
    "Subject",
    "get_config",
    "mark_bad_lines",
    "set_config",
]
