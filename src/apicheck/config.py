from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from apicheck.rules.builtin import builtin_rule_names, builtin_rule_sets
from apicheck.rules.ruleset import RuleSet, load_rule_files, merge_rule_sets


class ConfigError(ValueError):
    """Raised when an `[tool.apicheck]` configuration table is invalid."""


DEFAULT_BUILTIN = "all"
DEFAULT_FORMAT = "text"
DEFAULT_WORKERS = 1
OUTPUT_FORMATS: tuple[str, ...] = ("text", "terminal", "json")


@dataclass(frozen=True, slots=True)
class ApiCheckConfig:
    builtin: str | tuple[str, ...] = DEFAULT_BUILTIN
    rules: tuple[str, ...] = ()
    format: str = DEFAULT_FORMAT
    workers: int = DEFAULT_WORKERS


def load_config(project_dir: Path | str = ".") -> ApiCheckConfig:
    """
    Load configuration from `pyproject.toml` within `project_dir`.

    If no file / no `[tool.apicheck]` table exists, returns defaults.
    """

    pyproject_path = Path(project_dir) / "pyproject.toml"
    if not pyproject_path.exists():
        return ApiCheckConfig()

    try:
        data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {exc}") from exc

    tool_table = data.get("tool", {})
    if not isinstance(tool_table, dict):
        return ApiCheckConfig()

    table = tool_table.get("apicheck", {})
    if not isinstance(table, dict) or not table:
        return ApiCheckConfig()

    return _parse_apicheck_table(table)


def _validate_str_list(value: Any, *, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or any(not isinstance(v, str) for v in value):
        raise ConfigError(f"`{field_name}` must be a list of strings.")
    return tuple(value)


def _parse_builtin(value: Any) -> str | tuple[str, ...]:
    if isinstance(value, str):
        if value.strip().lower() != "all":
            raise ConfigError('`tool.apicheck.builtin` must be "all" or a list of rule set names.')
        return DEFAULT_BUILTIN
    names = _validate_str_list(value, field_name="tool.apicheck.builtin")
    known = builtin_rule_names()
    for name in names:
        if name.strip().lower() not in known:
            raise ConfigError(f"`tool.apicheck.builtin` contains unknown rule set {name!r}. Available: {', '.join(known)}.")
    return names


def _parse_apicheck_table(table: dict[str, Any]) -> ApiCheckConfig:
    builtin = _parse_builtin(table.get("builtin", DEFAULT_BUILTIN))
    rules = _validate_str_list(table.get("rules", []), field_name="tool.apicheck.rules")

    fmt = table.get("format", DEFAULT_FORMAT)
    if not isinstance(fmt, str) or fmt.strip().lower() not in OUTPUT_FORMATS:
        raise ConfigError(f"`tool.apicheck.format` must be one of: {', '.join(OUTPUT_FORMATS)}.")

    workers = table.get("workers", DEFAULT_WORKERS)
    if not isinstance(workers, int) or isinstance(workers, bool) or workers < 1:
        raise ConfigError("`tool.apicheck.workers` must be a positive integer.")

    return ApiCheckConfig(builtin=builtin, rules=rules, format=fmt.strip().lower(), workers=workers)


def resolve_rule_set(config: ApiCheckConfig, *, project_dir: Path | str = ".") -> RuleSet:
    """
    Build the effective rule set: built-ins first, then rule files in order.

    Relative rule file paths resolve against `project_dir`.
    """

    base = Path(project_dir)
    paths = [p if p.is_absolute() else base / p for p in (Path(r) for r in config.rules)]
    return merge_rule_sets(builtin_rule_sets(config.builtin), load_rule_files(paths))
