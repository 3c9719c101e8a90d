from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from apicheck import __version__
from apicheck.engine.types import Diagnostic
from apicheck.scanner import FileReport
from apicheck.utils import safe_relpath

REPORT_SCHEMA_VERSION = 1


def render_json(reports: Sequence[FileReport], *, project_root: Path) -> str:
    payload = {
        "schema_version": REPORT_SCHEMA_VERSION,
        "tool": {"name": "apicheck", "version": __version__},
        "total": sum(len(r.diagnostics) for r in reports),
        "files": [_report_to_dict(r, project_root=project_root) for r in reports],
    }
    return json.dumps(payload, indent=2, sort_keys=False)


def _report_to_dict(report: FileReport, *, project_root: Path) -> dict[str, Any]:
    return {
        "path": safe_relpath(report.path, project_root),
        "error": report.error,
        "diagnostics": [diagnostic_to_dict(d) for d in report.diagnostics],
    }


def diagnostic_to_dict(d: Diagnostic) -> dict[str, Any]:
    return {
        "error_word": d.error_word,
        "node_location": {"row": d.node_location.row, "col": d.node_location.col},
        "fragment_location": {"row": d.fragment_location.row, "col": d.fragment_location.col},
        "error_sentence": d.error_sentence,
        "range": None if d.range is None else {"start": d.range.start, "end": d.range.end},
        "rule": None if d.rule is None else {"object": d.rule.object, "property": d.rule.property},
    }
