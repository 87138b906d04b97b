"""
Default English messages for well-known error codes.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..exceptions import ErrataError, ErrorKind
from ..utils.naming import humanize

DEFAULT_MESSAGES: dict[str, str] = {
    "accepted": "must be accepted",
    "blank": "can't be blank",
    "confirmation": "doesn't match {attribute}",
    "empty": "can't be empty",
    "equal_to": "must be equal to {count}",
    "even": "must be even",
    "exclusion": "is reserved",
    "greater_than": "must be greater than {count}",
    "greater_than_or_equal_to": "must be greater than or equal to {count}",
    "inclusion": "is not included in the list",
    "invalid": "is invalid",
    "invalid_type": "is not a valid {type}",
    "less_than": "must be less than {count}",
    "less_than_or_equal_to": "must be less than or equal to {count}",
    "missing": "is required",
    "not_a_number": "is not a number",
    "not_an_integer": "must be an integer",
    "odd": "must be odd",
    "present": "must be blank",
    "taken": "has already been taken",
    "too_long": "is too long (maximum is {count} characters)",
    "too_short": "is too short (minimum is {count} characters)",
    "wrong_length": "is the wrong length (should be {count} characters)",
}


def generate_message(code: str, options: Mapping[str, Any]) -> str:
    """
    Render the default message for ``code``, interpolating ``options``.

    Unknown codes fall back to the humanized code in lower case.
    """

    template = DEFAULT_MESSAGES.get(code)
    if template is None:
        return humanize(code).lower()
    try:
        return template.format(**options)
    except KeyError as exc:
        raise ErrataError(
            ErrorKind.INVALID_DETAIL,
            f"Message for error code '{code}' requires option {exc.args[0]!r}",
            code=code,
        ) from exc
