"""Formatting kinds for descriptive strings."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["StringKind"]


class StringKind(IntEnum):
    """The formatting or encoding scheme of a string."""

    PLAIN = 0
    MARKDOWN = 1

    def __str__(self) -> str:
        return self.name