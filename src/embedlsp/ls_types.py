"""
LSP-shaped value types shared by the region model and the projector.
"""

from typing import NotRequired, TypedDict


class Position(TypedDict):
    """
    A zero-based line/character position in a text document.

    `character` counts Unicode code points (Python string indices), not the UTF-16 code units LSP clients use
    by default; the two differ after astral characters such as emoji. Callers talking to UTF-16 clients must
    convert columns (or negotiate the "utf-32" position encoding).
    """

    line: int
    character: int


class Range(TypedDict):
    """A range in a text document, from `start` (inclusive) to `end` (exclusive)."""

    start: Position
    end: Position


class LanguageRange(Range):
    """A range of a composite document tagged with the language of its content."""

    languageId: str
    attributeValue: NotRequired[bool]
    """Set (to True) only if the range stems from an attribute value inside a markup region."""


def create_position(line: int, character: int) -> Position:
    return Position(line=line, character=character)


def create_range(start: Position, end: Position) -> Range:
    return Range(start=start, end=end)
