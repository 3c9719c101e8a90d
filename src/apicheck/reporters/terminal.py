from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from apicheck import __version__
from apicheck.engine.types import Diagnostic
from apicheck.reporters.text import format_title, numbered_fragment
from apicheck.scanner import FileReport
from apicheck.utils import safe_relpath


def render_terminal(
    reports: Sequence[FileReport], *, project_root: Path, console: Console, show_details: bool = True
) -> None:
    header = Text()
    header.append("apicheck ", style="bold")
    header.append(f"v{__version__}", style="dim")
    header.append(" · unsupported API usage", style="dim")
    console.print(Panel(header, subtitle=f"Checked {len(reports)} files", border_style="cyan"))

    if not show_details:
        _print_summary(reports, console=console)
        return

    for report in reports:
        if report.ok:
            continue
        console.print(Text(safe_relpath(report.path, project_root), style="bold"))
        if report.error is not None:
            console.print(Text(f"  ✖ {report.error}", style="bold red"))
        for diagnostic in report.diagnostics:
            _print_diagnostic(console, diagnostic)
        console.print()

    _print_summary(reports, console=console)


def _print_diagnostic(console: Console, diagnostic: Diagnostic) -> None:
    console.print(Text(format_title(diagnostic), style="red"))
    console.print()

    width = len(str(diagnostic.fragment_location.row + diagnostic.error_sentence.count("\n") + 1))
    for line_no, line in numbered_fragment(diagnostic):
        row = Text()
        row.append(f"  {line_no:>{width}} │ ", style="dim")
        row.append(line)
        if line_no == diagnostic.node_location.row + 1:
            row.highlight_words([diagnostic.error_word], style="bold yellow")
        console.print(row)
    console.print()


def _print_summary(reports: Sequence[FileReport], *, console: Console) -> None:
    total = sum(len(r.diagnostics) for r in reports)
    failed = sum(1 for r in reports if r.error is not None)
    console.print(Text("─" * 60, style="dim"))
    style = "bold green" if total == 0 and failed == 0 else "bold red"
    console.print(Text(f"Found {total} invalid API invoke(s) in {len(reports)} file(s)", style=style))
    if failed:
        console.print(Text(f"{failed} file(s) could not be analyzed", style="red"))
    console.print(Text("─" * 60, style="dim"))
