from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from apicheck.engine.classifier import MEMBER_ACCESS_TYPES, is_executed
from apicheck.engine.location import ByteOffsets
from apicheck.engine.matcher import matching_rule, member_pair
from apicheck.engine.types import Match, MemberAccess, NodeRef, SourceRange
from apicheck.rules.ruleset import RuleSet

Visitor = Callable[[Any, Any, list[Any]], None]


def walk_with_ancestors(tree: Any, visitors: Mapping[str, Visitor], state: Any = None) -> None:
    """
    Depth-first, pre-order walk over the named nodes of a tree-sitter tree.

    For each node whose `type` has a visitor, calls `visitor(node, state,
    ancestors)` where `ancestors` runs root-to-leaf and excludes the node.
    The ancestor list is one buffer reused for the whole walk: visitors must
    copy whatever they keep.
    """

    root = getattr(tree, "root_node", tree)
    ancestors: list[Any] = []
    # (node, depth) pairs; depth is the length `ancestors` must have on entry.
    stack: list[tuple[Any, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        del ancestors[depth:]

        visitor = visitors.get(node.type)
        if visitor is not None:
            visitor(node, state, ancestors)

        children = [c for c in getattr(node, "children", []) if getattr(c, "is_named", True)]
        if not children:
            continue
        ancestors.append(node)
        for child in reversed(children):
            stack.append((child, depth + 1))


class _MatchCollector:
    def __init__(self, rule_set: RuleSet, source: str) -> None:
        self.rule_set = rule_set
        self.offsets = ByteOffsets(source)
        self.matches: list[Match] = []

    def visit_member_access(self, node: Any, _state: Any, ancestors: list[Any]) -> None:
        rule = matching_rule(node, self.rule_set)
        if rule is None:
            return
        snapshot = tuple(self._node_ref(a) for a in ancestors)
        if not is_executed(snapshot):
            return
        self.matches.append(Match(node=self._member_access(node), ancestors=snapshot, rule=rule))

    def _range(self, node: Any) -> SourceRange:
        return SourceRange(
            start=self.offsets.to_char(node.start_byte),
            end=self.offsets.to_char(node.end_byte),
        )

    def _node_ref(self, node: Any) -> NodeRef:
        return NodeRef(type=node.type, range=self._range(node))

    def _member_access(self, node: Any) -> MemberAccess:
        pair = member_pair(node)
        object_name, property_name = pair if pair is not None else (None, None)
        return MemberAccess(
            type=node.type,
            range=self._range(node),
            object_name=object_name,
            property_name=property_name,
        )


def collect_matches(tree: Any, rule_set: RuleSet, source: str) -> tuple[Match, ...]:
    """
    Return every executed member access listed in `rule_set`, in traversal order.

    Nodes and ancestor chains are copied into owned records inside the visitor
    callback; nothing returned references the live tree.
    """

    collector = _MatchCollector(rule_set, source)
    visitors = {node_type: collector.visit_member_access for node_type in MEMBER_ACCESS_TYPES}
    walk_with_ancestors(tree, visitors)
    return tuple(collector.matches)
