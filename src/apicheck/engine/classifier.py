from __future__ import annotations

from collections.abc import Sequence
from typing import Any

MEMBER_EXPRESSION = "member_expression"
SUBSCRIPT_EXPRESSION = "subscript_expression"
CALL_EXPRESSION = "call_expression"
PARENTHESIZED_EXPRESSION = "parenthesized_expression"

# `a.b` and the computed form `a[b]`.
MEMBER_ACCESS_TYPES = frozenset({MEMBER_EXPRESSION, SUBSCRIPT_EXPRESSION})


def is_member_access(node: Any) -> bool:
    return getattr(node, "type", None) in MEMBER_ACCESS_TYPES


def is_call_expression(node: Any) -> bool:
    return getattr(node, "type", None) == CALL_EXPRESSION


def is_executed(ancestors: Sequence[Any]) -> bool:
    """
    Decide whether a matched member access is actually read or invoked.

    `ancestors` runs root-to-leaf and excludes the matched node. A usage counts
    when it is the object/index of a further member access
    (`a[Symbol.iterator]`) or sits in call position (`Symbol.iterator()`).
    Anything else, e.g. `typeof Symbol.iterator === "undefined"`, is treated
    as feature detection and dropped.
    """

    return _is_nested_property(ancestors) or _is_call_left(ancestors)


def _parent(ancestors: Sequence[Any]) -> Any | None:
    # `(Symbol.iterator)()` keeps its parentheses as a node; look through them.
    for node in reversed(ancestors):
        if getattr(node, "type", None) != PARENTHESIZED_EXPRESSION:
            return node
    return None


def _is_nested_property(ancestors: Sequence[Any]) -> bool:
    return is_member_access(_parent(ancestors))


def _is_call_left(ancestors: Sequence[Any]) -> bool:
    # tree-sitter hangs the callee directly off `call_expression`, whereas
    # arguments sit one level deeper under an `arguments` node.
    return is_call_expression(_parent(ancestors))
