from __future__ import annotations

from pathlib import Path

from apicheck.rules.ruleset import RuleSet
from apicheck.scanner import check_file, check_files


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_check_file_collects_diagnostics(tmp_path: Path, symbol_rules: RuleSet) -> None:
    path = _write(tmp_path / "a.js", "var it = xs[Symbol.iterator]();\n")
    report = check_file(path, symbol_rules)
    assert report.error is None
    assert [d.error_word for d in report.diagnostics] == ["Symbol.iterator"]
    assert report.ok is False


def test_check_file_captures_parse_and_read_errors(tmp_path: Path, symbol_rules: RuleSet) -> None:
    broken = _write(tmp_path / "broken.js", "{ invalid +++")
    report = check_file(broken, symbol_rules)
    assert report.diagnostics == ()
    assert report.error is not None and "Syntax error" in report.error

    missing = check_file(tmp_path / "missing.js", symbol_rules)
    assert missing.error is not None and missing.error.startswith("Cannot read file")


def test_check_files_keeps_input_order_with_workers(tmp_path: Path, symbol_rules: RuleSet) -> None:
    paths = []
    for i in range(6):
        body = "Symbol.iterator();\n" * i
        paths.append(_write(tmp_path / f"f{i}.js", body or "var x = 1;\n"))

    done: list[Path] = []
    serial = check_files(paths, symbol_rules)
    parallel = check_files(paths, symbol_rules, workers=3, on_file_done=done.append)

    assert [r.path for r in parallel] == paths
    assert [len(r.diagnostics) for r in parallel] == [0, 1, 2, 3, 4, 5]
    assert parallel == serial
    assert done == paths
