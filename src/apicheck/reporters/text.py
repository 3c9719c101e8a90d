from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from apicheck.engine.types import Diagnostic
from apicheck.utils import safe_relpath

if TYPE_CHECKING:
    from apicheck.scanner import FileReport


def format_title(diagnostic: Diagnostic) -> str:
    loc = diagnostic.node_location
    return f"code:{loc.row}:{loc.col} - error Find invalid api invoke '{diagnostic.error_word}'."


def numbered_fragment(diagnostic: Diagnostic) -> list[tuple[int, str]]:
    first = diagnostic.fragment_location.row + 1
    return list(enumerate(diagnostic.error_sentence.split("\n"), start=first))


def format_diagnostic(diagnostic: Diagnostic) -> str:
    out = [format_title(diagnostic), ""]
    out.extend(f"{line_no} {line}" for line_no, line in numbered_fragment(diagnostic))
    out.append("")
    return "\n".join(out) + "\n"


def format_diagnostics(diagnostics: Iterable[Diagnostic]) -> str:
    """Render diagnostics as annotated text; returns the string, prints nothing."""

    return "".join(format_diagnostic(d) for d in diagnostics)


def render_text(reports: Sequence[FileReport], *, project_root: Path) -> str:
    """Plain-text report; a file header is added when more than one file is checked."""

    chunks: list[str] = []
    with_headers = len(reports) > 1
    for report in reports:
        if report.ok:
            continue
        if with_headers:
            chunks.append(f"{safe_relpath(report.path, project_root)}\n")
        if report.error is not None:
            chunks.append(f"error: {report.error}\n\n")
        chunks.append(format_diagnostics(report.diagnostics))
    return "".join(chunks)
