"""
Naming utilities for errata.
"""

import re


_FIRST_CAP_RE = re.compile("(.)([A-Z][a-z]+)")
_ALL_CAP_RE = re.compile("([a-z0-9])([A-Z])")


def camel_to_snake(name: str) -> str:
    step1 = _FIRST_CAP_RE.sub(r"\1_\2", name)
    return _ALL_CAP_RE.sub(r"\1_\2", step1).lower()


def humanize(name: str) -> str:
    """
    Turn an attribute name such as ``firstName`` or ``first_name_id`` into
    ``First name`` for use in full messages.
    """
    snake = camel_to_snake(name)
    if snake.endswith("_id") and snake != "_id":
        snake = snake[: -len("_id")]
    words = snake.replace("_", " ").strip()
    if not words:
        return name
    return words[0].upper() + words[1:]
