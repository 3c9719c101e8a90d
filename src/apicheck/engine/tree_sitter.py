from __future__ import annotations

import threading
from functools import lru_cache
from typing import Any, Protocol

import tree_sitter_javascript
from tree_sitter import Language, Parser

from apicheck.engine.location import byte_to_char_offset
from apicheck.engine.types import AnalysisError


class SyntaxTree(Protocol):
    # tree-sitter Tree exposes `root_node`; we treat nodes structurally.
    root_node: Any


class ParseError(AnalysisError):
    """Raised when the source is not syntactically valid JavaScript."""

    def __init__(self, message: str, *, offset: int, row: int, col: int) -> None:
        super().__init__(message)
        self.offset = offset
        self.row = row
        self.col = col


@lru_cache(maxsize=1)
def _get_language() -> Language:
    return Language(tree_sitter_javascript.language())


_PARSER_LOCAL = threading.local()


def _get_parser() -> Parser:
    """
    Return a per-thread JavaScript Parser instance.

    tree-sitter Parser objects are not thread-safe; sharing a single cached
    Parser across threads can lead to crashes or corrupted parse output.
    """

    parser: Parser | None = getattr(_PARSER_LOCAL, "parser", None)
    if parser is None:
        parser = Parser(_get_language())
        _PARSER_LOCAL.parser = parser
    return parser


def parse(source: str) -> SyntaxTree:
    """
    Parse JavaScript source with tree-sitter.

    tree-sitter recovers from syntax errors by inserting ERROR / MISSING nodes;
    any such node turns into a `ParseError` pointing at the first one.
    """

    tree: SyntaxTree = _get_parser().parse(source.encode("utf-8"))
    root = tree.root_node
    if getattr(root, "has_error", False):
        bad = _first_error_node(root) or root
        row, col = bad.start_point
        kind = "missing" if getattr(bad, "is_missing", False) else "unexpected"
        raise ParseError(
            f"Syntax error: {kind} token at {row + 1}:{col + 1}",
            offset=byte_to_char_offset(source, bad.start_byte),
            row=row,
            col=col,
        )
    return tree


def _first_error_node(root: Any) -> Any | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or getattr(node, "is_missing", False):
            return node
        if getattr(node, "has_error", True):
            stack.extend(reversed(getattr(node, "children", [])))
    return None
