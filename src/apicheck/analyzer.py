from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from apicheck.engine.diagnostics import build_diagnostic
from apicheck.engine.location import LineIndex
from apicheck.engine.tree_sitter import parse
from apicheck.engine.types import Diagnostic, InvalidRuleSet, InvalidSource
from apicheck.engine.walker import collect_matches
from apicheck.rules.ruleset import RuleSet

logger = logging.getLogger(__name__)


def analyze(source: Any, rule_set: RuleSet | Mapping[str, Any] | None) -> tuple[Diagnostic, ...]:
    """
    Report every executed use of an API listed in `rule_set`.

    `rule_set` may be a `RuleSet` or a mapping in the JSON rule-file shape.
    Raises `InvalidRuleSet`, `InvalidSource` or `ParseError`; no partial
    result is returned on failure. An empty tuple means no violations.
    """

    if rule_set is None or not isinstance(rule_set, (RuleSet, Mapping)):
        raise InvalidRuleSet("Rule set must be a mapping of rule category to a list of rules.")
    rules = RuleSet.from_mapping(rule_set)
    if source is None or not isinstance(source, str):
        raise InvalidSource(f"Source must be a string, got {type(source).__name__}.")

    tree = parse(source)
    matches = collect_matches(tree, rules, source)
    index = LineIndex.of(source)
    diagnostics = tuple(build_diagnostic(m, source, index) for m in matches)
    logger.debug(
        "analyzed %d char(s) against %d rule(s): %d diagnostic(s)",
        len(source),
        len(rules.member_expression_rules),
        len(diagnostics),
    )
    return diagnostics
