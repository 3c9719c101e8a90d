from __future__ import annotations

from pathlib import Path

import pytest

from apicheck.config import ApiCheckConfig, ConfigError, load_config, resolve_rule_set
from apicheck.engine.types import Rule
from apicheck.rules.ruleset import RuleFileError


def _pyproject(tmp_path: Path, body: str) -> None:
    (tmp_path / "pyproject.toml").write_text(body.lstrip(), encoding="utf-8")


def test_load_config_defaults_when_no_pyproject(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config == ApiCheckConfig()
    assert config.builtin == "all"
    assert config.format == "text"


def test_load_config_defaults_without_tool_table(tmp_path: Path) -> None:
    _pyproject(tmp_path, '[project]\nname = "x"\n')
    assert load_config(tmp_path) == ApiCheckConfig()


def test_load_config_reads_tool_table(tmp_path: Path) -> None:
    _pyproject(
        tmp_path,
        """
[tool.apicheck]
builtin = ["symbol", "array"]
rules = ["rules/custom.json"]
format = "JSON"
workers = 4
""",
    )
    config = load_config(tmp_path)
    assert config.builtin == ("symbol", "array")
    assert config.rules == ("rules/custom.json",)
    assert config.format == "json"
    assert config.workers == 4


@pytest.mark.parametrize(
    "body",
    [
        '[tool.apicheck]\nbuiltin = "symbol"\n',
        '[tool.apicheck]\nbuiltin = ["nope"]\n',
        '[tool.apicheck]\nrules = "custom.json"\n',
        '[tool.apicheck]\nformat = "sarif"\n',
        "[tool.apicheck]\nworkers = 0\n",
        "[tool.apicheck]\nworkers = true\n",
        "[tool.apicheck\n",
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, body: str) -> None:
    _pyproject(tmp_path, body)
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_resolve_rule_set_merges_builtins_then_files(tmp_path: Path, rule_file: Path) -> None:
    config = ApiCheckConfig(builtin=("array",), rules=(str(rule_file.relative_to(tmp_path)),))
    rules = resolve_rule_set(config, project_dir=tmp_path)
    labels = [r.label for r in rules.member_expression_rules]
    assert labels[0] == "Array.from"
    assert labels[-1] == "Symbol.iterator"
    assert Rule("Array", "of") in rules.member_expression_rules


def test_resolve_rule_set_without_builtins(tmp_path: Path, rule_file: Path) -> None:
    config = ApiCheckConfig(builtin=(), rules=(str(rule_file),))
    rules = resolve_rule_set(config, project_dir=tmp_path)
    assert rules.member_expression_rules == (Rule("Symbol", "iterator"),)


def test_resolve_rule_set_reports_missing_rule_file(tmp_path: Path) -> None:
    config = ApiCheckConfig(builtin=(), rules=("missing.json",))
    with pytest.raises(RuleFileError):
        resolve_rule_set(config, project_dir=tmp_path)
