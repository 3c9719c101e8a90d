from __future__ import annotations

from collections.abc import Sequence

from apicheck.engine.location import LineIndex, slice_text, to_location
from apicheck.engine.types import Diagnostic, Match, SourceLocation

FRAGMENT_CONTEXT_LINES = 3


def fragment_window(row: int, lines: Sequence[str], *, context: int = FRAGMENT_CONTEXT_LINES) -> tuple[int, str]:
    """
    Return `(first_row, text)` for the lines around `row`.

    The window is `[row - context, row + context]` clamped to the source; the
    leading spaces shared by every line in the window are removed.
    """

    last = max(0, len(lines) - 1)
    start = max(0, row - context)
    end = min(last, row + context)
    window = list(lines[start : end + 1])
    indent = min((len(line) - len(line.lstrip(" ")) for line in window), default=0)
    return start, "\n".join(line[indent:] for line in window)


def build_diagnostic(match: Match, source: str, index: LineIndex | None = None) -> Diagnostic:
    """Pass a shared `index` when building many diagnostics for one source."""

    if index is None:
        index = LineIndex.of(source)
    node_range = match.node.range
    node_location = to_location(node_range, source, index)
    fragment_row, fragment = fragment_window(node_location.row, index.lines)
    return Diagnostic(
        node_location=node_location,
        fragment_location=SourceLocation(row=fragment_row, col=0),
        error_sentence=fragment,
        error_word=slice_text(node_range, source),
        range=node_range,
        rule=match.rule,
    )
