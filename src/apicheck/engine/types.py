from __future__ import annotations

from dataclasses import dataclass


class AnalysisError(ValueError):
    """Base class for errors that abort a single `analyze` call."""


class InvalidRuleSet(AnalysisError):
    """Raised when a rule set is missing or not a mapping of rule categories."""


class InvalidSource(AnalysisError):
    """Raised when the source argument is missing or not a string."""


@dataclass(frozen=True, slots=True)
class SourceRange:
    start: int  # 0-based, inclusive
    end: int  # 0-based, exclusive


@dataclass(frozen=True, slots=True)
class SourceLocation:
    row: int  # 0-based
    col: int  # 0-based


@dataclass(frozen=True, slots=True)
class Rule:
    object: str
    property: str

    @property
    def label(self) -> str:
        return f"{self.object}.{self.property}"


@dataclass(frozen=True, slots=True)
class NodeRef:
    """Owned snapshot of one syntax-tree node: its kind and where it sits."""

    type: str
    range: SourceRange


@dataclass(frozen=True, slots=True)
class MemberAccess:
    """
    Owned snapshot of a member-access node (`a.b` or `a[b]`).

    `object_name` / `property_name` are None when the corresponding sub-node
    is not a simple identifier.
    """

    type: str
    range: SourceRange
    object_name: str | None = None
    property_name: str | None = None


@dataclass(frozen=True, slots=True)
class Match:
    node: MemberAccess
    ancestors: tuple[NodeRef, ...]  # root-to-leaf, excluding `node`
    rule: Rule


@dataclass(frozen=True, slots=True)
class Diagnostic:
    node_location: SourceLocation
    fragment_location: SourceLocation
    error_sentence: str
    error_word: str
    range: SourceRange | None = None
    rule: Rule | None = None
