from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from apicheck.analyzer import analyze
from apicheck.engine.types import AnalysisError, Diagnostic
from apicheck.rules.ruleset import RuleSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileReport:
    path: Path
    diagnostics: tuple[Diagnostic, ...] = ()
    error: str | None = None  # set when the file could not be read or parsed

    @property
    def ok(self) -> bool:
        return self.error is None and not self.diagnostics


def check_file(path: Path, rule_set: RuleSet) -> FileReport:
    """
    Analyze one file. Read and parse failures are captured on the report so a
    multi-file run can still report the other files.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("cannot read %s: %s", path, exc)
        return FileReport(path=path, error=f"Cannot read file: {exc}")

    try:
        diagnostics = analyze(text, rule_set)
    except AnalysisError as exc:
        logger.debug("analysis failed for %s: %s", path, exc)
        return FileReport(path=path, error=str(exc))
    return FileReport(path=path, diagnostics=diagnostics)


def check_files(
    paths: Iterable[Path],
    rule_set: RuleSet,
    *,
    workers: int | None = None,
    on_file_done: Callable[[Path], None] | None = None,
) -> list[FileReport]:
    """
    Analyze each file independently; results keep the input order.
    """

    path_list = list(paths)
    effective_workers = workers or 1

    if effective_workers <= 1 or len(path_list) <= 1:
        reports: list[FileReport] = []
        for path in path_list:
            reports.append(check_file(path, rule_set))
            if on_file_done is not None:
                on_file_done(path)
        return reports

    max_workers = min(max(1, effective_workers), len(path_list))
    check = partial(check_file, rule_set=rule_set)
    reports = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for path, report in zip(path_list, executor.map(check, path_list), strict=True):
            reports.append(report)
            if on_file_done is not None:
                on_file_done(path)
    return reports
