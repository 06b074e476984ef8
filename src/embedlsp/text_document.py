"""
Immutable text document snapshots with offset/position conversion.

A `TextDocument` is used both for the composite document handed to the projector by the
protocol layer and for the virtual documents the projector produces.
"""

from bisect import bisect_right
from typing import Self

from embedlsp.ls_types import Position, create_position


def compute_line_offsets(text: str) -> list[int]:
    """
    Computes the offsets at which lines start.

    Line breaks are "\\n", "\\r\\n" and "\\r", a "\\r\\n" pair counting as a single break.

    :param text: the text to compute line offsets for
    :return: the start offset of each line; the first entry is always 0
    """
    result = [0]
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\r":
            if i + 1 < n and text[i + 1] == "\n":
                i += 1
            result.append(i + 1)
        elif ch == "\n":
            result.append(i + 1)
        i += 1
    return result


class TextDocument:
    """
    An immutable snapshot of a text document's content, labeled with an uri, a language id and a version.

    Offsets and characters are measured in code points; see `Position`.
    """

    def __init__(self, uri: str, language_id: str, version: int, text: str) -> None:
        self._uri = uri
        self._language_id = language_id
        self._version = version
        self._text = text
        self._line_offsets = compute_line_offsets(text)

    @classmethod
    def create(cls, uri: str, language_id: str, version: int, text: str) -> Self:
        return cls(uri, language_id, version, text)

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def language_id(self) -> str:
        return self._language_id

    @property
    def version(self) -> int:
        return self._version

    @property
    def line_count(self) -> int:
        return len(self._line_offsets)

    def get_text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}[uri={self._uri!r}, language_id={self._language_id!r}, version={self._version}]"

    def offset_at(self, position: Position) -> int:
        """
        Converts a position into a character offset.

        The conversion is total: lines before the first line map to offset 0, lines after the last line
        map to the length of the text, and characters beyond the end of a line are clamped to the
        start of the next line.

        :param position: the position to convert
        :return: the corresponding offset in [0, len(text)]
        """
        line = position["line"]
        if line >= len(self._line_offsets):
            return len(self._text)
        elif line < 0:
            return 0
        line_offset = self._line_offsets[line]
        next_line_offset = self._line_offsets[line + 1] if line + 1 < len(self._line_offsets) else len(self._text)
        return max(min(line_offset + position["character"], next_line_offset), line_offset)

    def position_at(self, offset: int) -> Position:
        """
        Converts a character offset into a position, clamping the offset to [0, len(text)].

        :param offset: the offset to convert
        :return: the corresponding position
        """
        offset = max(min(offset, len(self._text)), 0)
        line = bisect_right(self._line_offsets, offset) - 1
        return create_position(line, offset - self._line_offsets[line])
