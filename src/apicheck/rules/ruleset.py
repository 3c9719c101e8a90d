from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from apicheck.engine.types import InvalidRuleSet, Rule

logger = logging.getLogger(__name__)

MEMBER_EXPRESSION_CATEGORY = "memberExpression"
KNOWN_CATEGORIES = frozenset({MEMBER_EXPRESSION_CATEGORY})


class RuleFileError(InvalidRuleSet):
    """Raised when a JSON rule file cannot be read or has the wrong shape."""


@dataclass(frozen=True, slots=True)
class RuleSet:
    """
    Disallowed API usages grouped by rule category.

    Only `memberExpression` drives analysis today; other categories are kept
    so that merging never drops data from a rule file.
    """

    categories: Mapping[str, tuple[Rule, ...]] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def member_expression_rules(self) -> tuple[Rule, ...]:
        return self.categories.get(MEMBER_EXPRESSION_CATEGORY, ())

    def is_empty(self) -> bool:
        return not any(self.categories.values())

    @classmethod
    def from_rules(cls, rules: Iterable[Rule]) -> RuleSet:
        return cls(MappingProxyType({MEMBER_EXPRESSION_CATEGORY: tuple(rules)}))

    @classmethod
    def from_mapping(cls, value: Any) -> RuleSet:
        """
        Validate a loosely-typed rule mapping (as found in JSON rule files).

        Expected shape: `{"memberExpression": [{"object": str, "property": str}, ...]}`.
        """

        if isinstance(value, RuleSet):
            return value
        if value is None or not isinstance(value, Mapping):
            raise InvalidRuleSet("Rule set must be a mapping of rule category to a list of rules.")

        categories: dict[str, tuple[Rule, ...]] = {}
        for key, entries in value.items():
            if not isinstance(key, str):
                raise InvalidRuleSet("Rule categories must be strings.")
            if not isinstance(entries, (list, tuple)):
                raise InvalidRuleSet(f"`{key}` must be a list of rules.")
            if key not in KNOWN_CATEGORIES:
                logger.debug("keeping unknown rule category %r (%d entries)", key, len(entries))
            categories[key] = tuple(_parse_rule(entry, category=key, index=idx) for idx, entry in enumerate(entries))
        return cls(MappingProxyType(categories))

    def to_mapping(self) -> dict[str, list[dict[str, str]]]:
        return {
            key: [{"object": rule.object, "property": rule.property} for rule in rules]
            for key, rules in self.categories.items()
        }


EMPTY_RULE_SET = RuleSet()


def _parse_rule(entry: Any, *, category: str, index: int) -> Rule:
    if isinstance(entry, Rule):
        return entry
    if not isinstance(entry, Mapping):
        raise InvalidRuleSet(f"`{category}[{index}]` must be an object with `object` and `property`.")
    obj = entry.get("object")
    prop = entry.get("property")
    if not isinstance(obj, str) or not isinstance(prop, str):
        raise InvalidRuleSet(f"`{category}[{index}]` needs string `object` and `property` fields.")
    return Rule(object=obj, property=prop)


def merge_rule_sets(first: RuleSet, second: RuleSet) -> RuleSet:
    """
    Union the category keys of two rule sets.

    Categories present in both are concatenated, `first` entries before
    `second` entries; categories present in one side pass through unchanged.
    """

    merged: dict[str, tuple[Rule, ...]] = dict(first.categories)
    for key, rules in second.categories.items():
        if key in merged:
            merged[key] = merged[key] + rules
        else:
            merged[key] = rules
    return RuleSet(MappingProxyType(merged))


def combine_rule_sets(sources: Iterable[RuleSet | Mapping[str, Any]]) -> RuleSet:
    combined = EMPTY_RULE_SET
    for source in sources:
        combined = merge_rule_sets(combined, RuleSet.from_mapping(source))
    return combined


def load_rule_file(path: Path | str) -> RuleSet:
    rule_path = Path(path)
    try:
        data = json.loads(rule_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuleFileError(f"Cannot read rule file {rule_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RuleFileError(f"Invalid JSON in rule file {rule_path}: {exc}") from exc

    try:
        rule_set = RuleSet.from_mapping(data)
    except InvalidRuleSet as exc:
        raise RuleFileError(f"{rule_path}: {exc}") from exc

    logger.debug("loaded %d member rule(s) from %s", len(rule_set.member_expression_rules), rule_path)
    return rule_set


def load_rule_files(paths: Iterable[Path | str]) -> RuleSet:
    return combine_rule_sets(load_rule_file(p) for p in paths)
