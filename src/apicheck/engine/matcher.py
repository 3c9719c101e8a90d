from __future__ import annotations

from typing import Any

from apicheck.engine.classifier import MEMBER_EXPRESSION, SUBSCRIPT_EXPRESSION
from apicheck.engine.types import Rule
from apicheck.rules.ruleset import RuleSet

_OBJECT_TYPES = frozenset({"identifier"})
_PROPERTY_TYPES = {
    MEMBER_EXPRESSION: ("property", frozenset({"property_identifier"})),
    # `a[b]`: tree-sitter resolves a bare identifier index to `identifier`.
    SUBSCRIPT_EXPRESSION: ("index", frozenset({"identifier"})),
}


def member_pair(node: Any) -> tuple[str, str] | None:
    """
    Return `(object_name, property_name)` for a static member access.

    Returns None when either side is not a simple identifier (`a.b.c`,
    `f().x`, `a["b"]`, `a[i + 1]`, ...).
    """

    shape = _PROPERTY_TYPES.get(getattr(node, "type", ""))
    if shape is None:
        return None
    property_field, property_types = shape

    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name(property_field)
    if obj is None or prop is None:
        return None
    if obj.type not in _OBJECT_TYPES or prop.type not in property_types:
        return None
    return _node_name(obj), _node_name(prop)


def matches(node: Any, rule_set: RuleSet) -> bool:
    return matching_rule(node, rule_set) is not None


def matching_rule(node: Any, rule_set: RuleSet) -> Rule | None:
    pair = member_pair(node)
    if pair is None:
        return None
    object_name, property_name = pair
    for rule in rule_set.member_expression_rules:
        if rule.object == object_name and rule.property == property_name:
            return rule
    return None


def _node_name(node: Any) -> str:
    text = node.text
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return str(text)
