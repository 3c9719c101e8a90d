from __future__ import annotations

__version__ = "0.1.0"

from apicheck.analyzer import analyze  # noqa: E402
from apicheck.engine.tree_sitter import ParseError  # noqa: E402
from apicheck.engine.types import (  # noqa: E402
    AnalysisError,
    Diagnostic,
    InvalidRuleSet,
    InvalidSource,
    Rule,
    SourceLocation,
    SourceRange,
)
from apicheck.reporters.text import format_diagnostics  # noqa: E402
from apicheck.rules.ruleset import RuleSet, combine_rule_sets, merge_rule_sets  # noqa: E402

__all__ = [
    "AnalysisError",
    "Diagnostic",
    "InvalidRuleSet",
    "InvalidSource",
    "ParseError",
    "Rule",
    "RuleSet",
    "SourceLocation",
    "SourceRange",
    "__version__",
    "analyze",
    "combine_rule_sets",
    "format_diagnostics",
    "merge_rule_sets",
]
