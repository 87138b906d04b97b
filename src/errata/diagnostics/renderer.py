"""
Developer-facing diagnostic text with marked code snippets.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from ..config import ErrataConfig, get_config
from ..utils.logging import get_logger

logger = get_logger("diagnostics")

BadLines = Union[range, Iterable[int]]

GENERATED_CODE_NOTE = "(The code above is generated and may not be identical to yours.)"

_ISSUE_TEMPLATE = textwrap.dedent(
    """
    ## Issue

    {desc}
    """
)

_ISSUE_CODE_TEMPLATE = textwrap.dedent(
    """
    {code}

    {note}
    """
)

_FIX_TEMPLATE = textwrap.dedent(
    """
    ## Fix

    {desc}
    """
)


@dataclass(frozen=True)
class Issue:
    desc: str
    code: Optional[str] = None
    lines: Optional[BadLines] = None
    first_line: int = 0


@dataclass(frozen=True)
class Fix:
    desc: str
    code: Optional[str] = None
    condition: Optional[Callable[[], bool]] = None

    def applies(self) -> bool:
        if self.condition is None:
            return True
        return bool(self.condition())


def _line_indices(bad_lines: Optional[BadLines], first_line: int) -> frozenset[int]:
    if bad_lines is None:
        return frozenset()
    if isinstance(bad_lines, range):
        return frozenset(index - first_line for index in bad_lines)
    return frozenset(bad_lines)


def mark_bad_lines(
    code: str,
    bad_lines: Optional[BadLines] = None,
    *,
    first_line: int = 0,
    config: Optional[ErrataConfig] = None,
) -> str:
    """
    Prefix every line of ``code`` with the bad marker when its zero-based
    index is in ``bad_lines`` and with the ok marker otherwise.

    A ``range`` is read in a line-number space starting at ``first_line``
    (``range(3, 5)`` with ``first_line=1`` marks indices 2 and 3); any other
    iterable holds zero-based indices already.
    """

    settings = config or get_config()
    bad = _line_indices(bad_lines, first_line)
    marked = []
    for index, line in enumerate(code.splitlines()):
        marker = settings.bad_line_marker if index in bad else settings.ok_line_marker
        marked.append(f"{marker} {line}" if line else marker)
    return "\n".join(marked)


class DiagnosticRenderer:
    """
    Render an issue, and optionally its fix, as Markdown-ish diagnostic text.

    Usage::

        renderer = DiagnosticRenderer(
            "Missing filter",
            Issue("No filter named 'age' exists.", code=source, lines={2}),
            fix=Fix("Declare the filter.", code=fixed_source),
        )
        print(renderer.render())
    """

    def __init__(
        self,
        title: str,
        issue: Issue,
        fix: Optional[Fix] = None,
        *,
        config: Optional[ErrataConfig] = None,
    ) -> None:
        self.title = title
        self.issue = issue
        self.fix = fix
        self._config = config

    def __repr__(self) -> str:
        return f"<DiagnosticRenderer {self.title!r}>"

    def __str__(self) -> str:
        return self.render()

    @property
    def config(self) -> ErrataConfig:
        return self._config or get_config()

    def mark_bad_lines(self, code: str, bad_lines: Optional[BadLines] = None, *, first_line: int = 0) -> str:
        return mark_bad_lines(code, bad_lines, first_line=first_line, config=self.config)

    def render(self) -> str:
        sections = [self._issue_section()]
        fix_section = self._fix_section()
        if fix_section:
            sections.append(fix_section)
        text = "\n\n".join(sections).strip()
        return f"\n{text}\n"

    def _issue_section(self) -> str:
        parts = [_ISSUE_TEMPLATE.format(desc=self.issue.desc).strip("\n")]
        if self.issue.code:
            marked = self.mark_bad_lines(
                self.issue.code, self.issue.lines, first_line=self.issue.first_line
            )
            parts.append(
                _ISSUE_CODE_TEMPLATE.format(code=marked, note=GENERATED_CODE_NOTE).strip("\n")
            )
        return "\n\n".join(parts)

    def _fix_section(self) -> str:
        if self.fix is None:
            return ""
        if not self.fix.applies():
            logger.debug("Fix for '%s' suppressed by its condition", self.title)
            return ""
        parts = [_FIX_TEMPLATE.format(desc=self.fix.desc).strip("\n")]
        if self.fix.code:
            parts.append(self.mark_bad_lines(self.fix.code))
        return "\n\n".join(parts)
