"""
Error kinds raised by errata itself.

Every failure is an :class:`ErrataError` tagged with an :class:`ErrorKind`.
Kinds form a shallow tree through :attr:`ErrorKind.base`, so callers can
catch broadly and branch with :meth:`ErrataError.is_kind`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    ERROR = "error"
    PROGRAMMER = "programmer"
    INVALID_DETAIL = "invalid_detail"
    INVALID_ATTRIBUTE = "invalid_attribute"
    INVALID_MOVE = "invalid_move"
    CONFIGURATION = "configuration"
    INVALID_SUBJECT = "invalid_subject"

    @property
    def base(self) -> Optional["ErrorKind"]:
        return _BASE_KINDS.get(self)

    def lineage(self) -> tuple["ErrorKind", ...]:
        """Return this kind followed by each of its bases up to ``ERROR``."""
        chain = [self]
        current = self.base
        while current is not None:
            chain.append(current)
            current = current.base
        return tuple(chain)


_BASE_KINDS: dict[ErrorKind, ErrorKind] = {
    ErrorKind.PROGRAMMER: ErrorKind.ERROR,
    ErrorKind.INVALID_DETAIL: ErrorKind.PROGRAMMER,
    ErrorKind.INVALID_ATTRIBUTE: ErrorKind.PROGRAMMER,
    ErrorKind.INVALID_MOVE: ErrorKind.PROGRAMMER,
    ErrorKind.CONFIGURATION: ErrorKind.ERROR,
    ErrorKind.INVALID_SUBJECT: ErrorKind.ERROR,
}


class ErrataError(Exception):
    """
    Single exception type for errata failures; ``kind`` says what went wrong.
    """

    def __init__(self, kind: ErrorKind, message: str = "", **context: Any) -> None:
        self.kind = kind
        self.context: dict[str, Any] = dict(context)
        super().__init__(message or kind.value)

    def is_kind(self, kind: ErrorKind) -> bool:
        return kind in self.kind.lineage()

    @property
    def errors(self) -> Any:
        """Error collection attached to ``INVALID_SUBJECT`` failures, if any."""
        return self.context.get("errors")

    def __repr__(self) -> str:
        return f"ErrataError({self.kind.name}, {str(self)!r})"
