"""
Process-wide configuration for errata.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .exceptions import ErrataError, ErrorKind
from .utils.logging import DEFAULT_LOG_LEVEL, parse_log_level

ENV_PREFIX = "ERRATA_"


def _parse_log_level(value: str, *, key: str) -> int:
    level = parse_log_level(value)
    if level is None:
        raise ErrataError(ErrorKind.CONFIGURATION, f"Invalid log level for '{key}': {value!r}")
    return level


def _check_format(value: str) -> str:
    if "{message}" not in value:
        raise ErrataError(
            ErrorKind.CONFIGURATION,
            f"full_message_format must contain '{{message}}': {value!r}",
        )
    try:
        value.format(attribute="attribute", message="message")
    except (KeyError, IndexError, ValueError) as exc:
        raise ErrataError(
            ErrorKind.CONFIGURATION,
            f"full_message_format may only use {{attribute}} and {{message}}: {value!r}",
        ) from exc
    return value


def _check_marker(value: str, *, key: str) -> str:
    if len(value) != 1:
        raise ErrataError(
            ErrorKind.CONFIGURATION,
            f"Line marker '{key}' must be a single character, got {value!r}",
        )
    return value


@dataclass(frozen=True)
class ErrataConfig:
    """
    Formatting knobs shared by error collections and diagnostic renderers.
    """

    full_message_format: str = "{attribute} {message}"
    bad_line_marker: str = ">"
    ok_line_marker: str = " "
    log_level: int = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        _check_format(self.full_message_format)
        _check_marker(self.bad_line_marker, key="bad_line_marker")
        _check_marker(self.ok_line_marker, key="ok_line_marker")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "ErrataConfig":
        """
        Build a config from ``ERRATA_*`` environment variables. Keyword
        overrides win over the environment.
        """

        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        if f"{ENV_PREFIX}FULL_MESSAGE_FORMAT" in env:
            values["full_message_format"] = env[f"{ENV_PREFIX}FULL_MESSAGE_FORMAT"]
        if f"{ENV_PREFIX}BAD_LINE_MARKER" in env:
            values["bad_line_marker"] = env[f"{ENV_PREFIX}BAD_LINE_MARKER"]
        if f"{ENV_PREFIX}OK_LINE_MARKER" in env:
            values["ok_line_marker"] = env[f"{ENV_PREFIX}OK_LINE_MARKER"]
        if f"{ENV_PREFIX}LOG_LEVEL" in env:
            key = f"{ENV_PREFIX}LOG_LEVEL"
            values["log_level"] = _parse_log_level(env[key], key=key)
        values.update(overrides)
        return cls(**values)

    def with_overrides(self, **changes: Any) -> "ErrataConfig":
        return replace(self, **changes)


_config: ErrataConfig | None = None


def get_config() -> ErrataConfig:
    global _config
    if _config is None:
        _config = ErrataConfig.from_env()
    return _config


def set_config(config: ErrataConfig | None) -> None:
    """Replace the process default; ``None`` re-reads the environment on next use."""
    global _config
    _config = config
