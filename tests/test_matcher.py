from __future__ import annotations

import pytest
from helpers import FakeNode, member

from apicheck.engine.matcher import matches, matching_rule, member_pair
from apicheck.engine.types import Rule
from apicheck.rules.ruleset import RuleSet


def test_member_pair_extracts_static_access() -> None:
    assert member_pair(member("Symbol", "iterator")) == ("Symbol", "iterator")


def test_matches_exact_pair(symbol_rules: RuleSet) -> None:
    assert matches(member("Symbol", "iterator"), symbol_rules) is True
    assert matching_rule(member("Symbol", "iterator"), symbol_rules) == Rule("Symbol", "iterator")


@pytest.mark.parametrize(
    ("obj", "prop"),
    [("symbol", "iterator"), ("Symbol", "Iterator"), ("Symbol", "iter"), ("Sym", "iterator")],
)
def test_matching_is_case_sensitive_and_exact(symbol_rules: RuleSet, obj: str, prop: str) -> None:
    assert matches(member(obj, prop), symbol_rules) is False


def test_computed_identifier_index_matches(symbol_rules: RuleSet) -> None:
    node = FakeNode(
        "subscript_expression",
        text="Symbol[iterator]",
        fields={
            "object": FakeNode("identifier", text="Symbol"),
            "index": FakeNode("identifier", text="iterator", start_byte=7),
        },
    )
    assert matches(node, symbol_rules) is True


def test_dynamic_access_never_matches(symbol_rules: RuleSet) -> None:
    string_index = FakeNode(
        "subscript_expression",
        text='Symbol["iterator"]',
        fields={"object": FakeNode("identifier", text="Symbol"), "index": FakeNode("string", text='"iterator"')},
    )
    nested_object = FakeNode(
        "member_expression",
        text="window.Symbol.iterator",
        fields={"object": member("window", "Symbol"), "property": FakeNode("property_identifier", text="iterator")},
    )
    call_object = FakeNode(
        "member_expression",
        text="Symbol().iterator",
        fields={"object": FakeNode("call_expression", text="Symbol()"), "property": FakeNode("property_identifier", text="iterator")},
    )
    everything = RuleSet.from_rules([Rule("Symbol", "iterator"), Rule("window", "Symbol")])
    for node in (string_index, nested_object, call_object):
        assert member_pair(node) is None
        assert matches(node, symbol_rules) is False
        assert matches(node, everything) is False


def test_non_member_nodes_and_missing_children_do_not_match(symbol_rules: RuleSet) -> None:
    assert matches(FakeNode("identifier", text="Symbol"), symbol_rules) is False
    assert matches(FakeNode("member_expression", text="Symbol."), symbol_rules) is False


def test_empty_rule_set_matches_nothing() -> None:
    assert matches(member("Symbol", "iterator"), RuleSet()) is False
