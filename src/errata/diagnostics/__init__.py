"""
Diagnostic text rendering.
"""

from .renderer import GENERATED_CODE_NOTE, DiagnosticRenderer, Fix, Issue, mark_bad_lines

__all__ = ["DiagnosticRenderer", "Fix", "GENERATED_CODE_NOTE", "Issue", "mark_bad_lines"]
