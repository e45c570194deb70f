"""Tests for the association_rules() function."""

from __future__ import annotations

import pandas as pd
import pytest

from basketminer import AprioriMiner, ItemSet, Lift, Output, RuleSet, apriori, association_rules


@pytest.fixture
def output(data1: list[list[str]]) -> Output:
    return apriori(data1, min_support=0.5)


def test_default(output: Output) -> None:
    rules = association_rules(output)
    assert isinstance(rules, RuleSet)
    assert len(rules) == 14


def test_min_confidence(output: Output) -> None:
    assert len(association_rules(output.frequent_item_sets, min_confidence=1.0)) == 5


def test_from_dataframe(output: Output) -> None:
    frame = output.frequent_item_sets.to_dataframe()
    assert association_rules(frame, min_confidence=0.6) == association_rules(output, min_confidence=0.6)


def test_from_polars_dataframe(output: Output) -> None:
    pytest.importorskip("polars")
    frame = output.frequent_item_sets.to_polars()
    assert len(association_rules(frame, min_confidence=1.0)) == 5


def test_from_mapping(data1: list[list[str]]) -> None:
    mapping = AprioriMiner().find_frequent_item_sets(data1, 0.5)
    assert len(association_rules(mapping)) == 14


def test_metric_filter(output: Output) -> None:
    rules = association_rules(output, metric="lift", min_threshold=1.2)
    assert len(rules) == 8
    assert all(Lift().evaluate(rule) >= 1.2 for rule in rules)


def test_metric_without_threshold(output: Output) -> None:
    with pytest.raises(ValueError, match="min_threshold"):
        association_rules(output, metric="lift")


def test_unknown_metric(output: Output) -> None:
    with pytest.raises(ValueError, match="Metric must be one of"):
        association_rules(output, metric="zhangs_metric", min_threshold=0.0)


def test_dataframe_columns() -> None:
    with pytest.raises(ValueError, match="'support' column"):
        association_rules(pd.DataFrame({"itemsets": [("a",)]}))
    with pytest.raises(ValueError, match="'itemsets' column"):
        association_rules(pd.DataFrame({"support": [0.5]}))


def test_filtered_dataframe_keeps_rules_with_known_body() -> None:
    # the singleton "a" was filtered out, "b" is still there
    frame = pd.DataFrame({"support": [0.5, 0.5], "itemsets": [("a", "b"), ("b",)]})
    rules = association_rules(frame, metric="confidence", min_threshold=1.0)

    assert len(rules) == 1
    rule = rules.first()
    assert list(rule.body) == ["b"]
    assert list(rule.head) == ["a"]
    assert Lift().evaluate(rule) == 0.0


def test_empty_dataframe() -> None:
    frame = pd.DataFrame({"support": [], "itemsets": []})
    assert len(association_rules(frame)) == 0


def test_invalid_input() -> None:
    with pytest.raises(TypeError):
        association_rules(42)
    with pytest.raises(ValueError):
        association_rules(None)


def test_to_dataframe(output: Output) -> None:
    frame = association_rules(output, min_confidence=1.0).to_dataframe(["confidence", "lift"])

    assert list(frame.columns) == ["antecedents", "consequents", "confidence", "lift"]
    assert (frame["confidence"] == 1.0).all()
    assert (("coffee",), ("milk",)) in set(zip(frame["antecedents"], frame["consequents"]))


def test_rule_supports_come_from_item_sets(output: Output) -> None:
    for rule in association_rules(output):
        assert rule.support == output.frequent_item_sets.get(ItemSet(rule.items)).support
