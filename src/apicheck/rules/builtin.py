from __future__ import annotations

import json
from collections.abc import Iterable
from functools import lru_cache
from importlib import resources

from apicheck.engine.types import InvalidRuleSet
from apicheck.rules.ruleset import RuleSet, combine_rule_sets

_DATA_PACKAGE = "apicheck.rules"
_DATA_DIR = "data"


@lru_cache(maxsize=1)
def builtin_rule_names() -> tuple[str, ...]:
    data_dir = resources.files(_DATA_PACKAGE).joinpath(_DATA_DIR)
    names = [entry.name.removesuffix(".json") for entry in data_dir.iterdir() if entry.name.endswith(".json")]
    return tuple(sorted(names))


@lru_cache(maxsize=32)
def builtin_rule_set(name: str) -> RuleSet:
    normalized = name.strip().lower()
    if normalized not in builtin_rule_names():
        raise InvalidRuleSet(
            f"Unknown built-in rule set: {name!r}. Available: {', '.join(builtin_rule_names())}."
        )
    text = resources.files(_DATA_PACKAGE).joinpath(_DATA_DIR, f"{normalized}.json").read_text(encoding="utf-8")
    return RuleSet.from_mapping(json.loads(text))


def builtin_rule_sets(names: str | Iterable[str]) -> RuleSet:
    """
    Merge built-in rule sets in the given order.

    `"all"` selects every bundled rule set in alphabetical order.
    """

    if isinstance(names, str):
        selected = builtin_rule_names() if names.strip().lower() == "all" else (names,)
    else:
        selected = tuple(names)
    return combine_rule_sets(builtin_rule_set(n) for n in selected)
