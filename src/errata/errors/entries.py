"""
Value types stored inside an error collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence, runtime_checkable

from ..exceptions import ErrataError, ErrorKind

BASE = "base"

# Keys that would shadow the error code inside a detail's options.
RESERVED_OPTION_KEYS = frozenset({"code", "error"})


def check_attribute(attribute: Any) -> str:
    if not isinstance(attribute, str) or not attribute:
        raise ErrataError(
            ErrorKind.INVALID_ATTRIBUTE,
            f"Attribute names must be non-empty strings, got {attribute!r}",
            attribute=attribute,
        )
    return attribute


def check_code(code: Any) -> str:
    if not isinstance(code, str) or not code:
        raise ErrataError(
            ErrorKind.INVALID_DETAIL,
            f"Error codes must be non-empty strings, got {code!r}",
            code=code,
        )
    return code


def check_options(options: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    if options is None:
        return {}
    if not isinstance(options, Mapping):
        raise ErrataError(
            ErrorKind.INVALID_DETAIL,
            f"Detail options must be a mapping, got {type(options).__name__}",
        )
    for key in options:
        if not isinstance(key, str):
            raise ErrataError(
                ErrorKind.INVALID_DETAIL, f"Detail option keys must be strings, got {key!r}"
            )
        if key in RESERVED_OPTION_KEYS:
            raise ErrataError(
                ErrorKind.INVALID_DETAIL,
                f"Detail options may not carry the error code (found '{key}')",
                options=dict(options),
            )
    return dict(options)


@dataclass(frozen=True)
class Detail:
    """
    Structured metadata for a failure: an error code plus renderer context.

    A detail without a code carries no structure and is dropped when it is
    attached to a :class:`FailureEntry`.
    """

    code: Optional[str] = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.code is not None:
            check_code(self.code)
        object.__setattr__(self, "options", check_options(self.options))

    @property
    def is_detailed(self) -> bool:
        return self.code is not None

    def matches(self, code: str, options: Mapping[str, Any]) -> bool:
        return self.code == code and dict(self.options) == dict(options)

    def to_dict(self) -> dict[str, Any]:
        if self.code is None:
            return dict(self.options)
        return {"error": self.code, **self.options}


@dataclass(frozen=True)
class FailureEntry:
    message: str
    detail: Optional[Detail] = None

    def __post_init__(self) -> None:
        if not isinstance(self.message, str):
            raise ErrataError(
                ErrorKind.INVALID_DETAIL,
                f"Failure messages must be strings, got {self.message!r}",
            )
        if self.detail is not None and not self.detail.is_detailed:
            object.__setattr__(self, "detail", None)

    @property
    def code(self) -> Optional[str]:
        return self.detail.code if self.detail else None


@runtime_checkable
class HasDetails(Protocol):
    """
    Collections exposing structured details aligned with their messages.
    """

    @property
    def messages(self) -> Mapping[str, Sequence[str]]: ...

    @property
    def details(self) -> Mapping[str, Sequence[Optional[Detail]]]: ...
