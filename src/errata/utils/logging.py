"""Structured logging helpers for errata."""

from __future__ import annotations

import logging
import os
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping, Optional

LOG_LEVEL_ENV = "ERRATA_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def parse_log_level(value: str) -> int | None:
    """Return the numeric level for a name or number, or ``None`` if unknown."""
    normalized = value.strip().upper()
    if normalized in LOG_LEVELS:
        return LOG_LEVELS[normalized]
    try:
        return int(normalized)
    except ValueError:
        return None


def resolve_log_level(environ: Optional[Mapping[str, str]] = None) -> int:
    # Runs at import time, so an unusable value falls back instead of raising.
    env = os.environ if environ is None else environ
    raw = env.get(LOG_LEVEL_ENV)
    if raw is None:
        return DEFAULT_LOG_LEVEL
    level = parse_log_level(raw)
    return DEFAULT_LOG_LEVEL if level is None else level


def configure_logging(level: int | None = None) -> None:
    logger = logging.getLogger("errata")
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(resolve_log_level() if level is None else level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"errata.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or str(uuid.uuid4())
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    cid = _correlation_id.get()
    if cid is None:
        cid = set_correlation_id()
    return cid


@contextmanager
def merge_scope() -> Iterator[str]:
    """
    Tag every record logged during one merge with a fresh correlation id,
    restoring the caller's id afterwards.
    """
    token = _correlation_id.set(str(uuid.uuid4()))
    try:
        yield get_correlation_id()
    finally:
        _correlation_id.reset(token)
