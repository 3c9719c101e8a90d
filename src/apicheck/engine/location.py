from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from itertools import accumulate

from apicheck.engine.types import SourceLocation, SourceRange


@dataclass(frozen=True, slots=True)
class LineIndex:
    """
    Lines of one source and the `str` offset each of them starts at.

    Rows are separated by `\\n` only; a `\\r` before it stays part of the line.
    Build it once per source and share it across every lookup.
    """

    lines: tuple[str, ...]
    starts: tuple[int, ...]

    @classmethod
    def of(cls, source: str) -> LineIndex:
        lines = tuple(source.split("\n"))
        starts = tuple(accumulate((len(line) + 1 for line in lines[:-1]), initial=0))
        return cls(lines=lines, starts=starts)

    def location(self, offset: int) -> SourceLocation:
        row = bisect_right(self.starts, offset) - 1
        return SourceLocation(row=row, col=offset - self.starts[row])


def to_location(range: SourceRange, source: str, index: LineIndex | None = None) -> SourceLocation:
    """Translate the start offset of `range` into a zero-based (row, col)."""

    if index is None:
        index = LineIndex.of(source)
    return index.location(max(0, min(range.start, len(source))))


def slice_text(range: SourceRange, source: str) -> str:
    start = max(0, range.start)
    end = min(range.end, len(source))
    return source[start:end]


def _utf8_width(char: str) -> int:
    code = ord(char)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


class ByteOffsets:
    """
    Maps UTF-8 byte offsets (as reported by tree-sitter) of one source to
    `str` indexes. ASCII sources map one to one and build no table.
    """

    __slots__ = ("_starts",)

    def __init__(self, source: str) -> None:
        # _starts[i] is the byte offset of source[i]; the last entry is the total.
        self._starts: list[int] | None = None
        if not source.isascii():
            self._starts = list(accumulate((_utf8_width(c) for c in source), initial=0))

    def to_char(self, offset: int) -> int:
        if self._starts is None:
            return offset
        return max(0, bisect_right(self._starts, offset) - 1)


def byte_to_char_offset(source: str, offset: int) -> int:
    return ByteOffsets(source).to_char(offset)
