from __future__ import annotations

from pathlib import Path

import pytest

from apicheck.rules.ruleset import RuleSet


@pytest.fixture()
def symbol_rules() -> RuleSet:
    return RuleSet.from_mapping({"memberExpression": [{"object": "Symbol", "property": "iterator"}]})


@pytest.fixture()
def rule_file(tmp_path: Path) -> Path:
    path = tmp_path / "rules" / "symbol.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        '{"memberExpression": [{"object": "Symbol", "property": "iterator"}]}\n',
        encoding="utf-8",
    )
    return path
