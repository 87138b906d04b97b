"""
Protocol for objects that own attributes errors can be attached to.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Subject(Protocol):
    def has_attribute(self, name: str) -> bool: ...
