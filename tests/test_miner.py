"""Tests for the Apriori frequent item set miner."""

from __future__ import annotations

import itertools
import random
from collections.abc import Iterator

import pytest

from basketminer import AprioriMiner, ItemSet, TransactionSource
from basketminer._candidates import apriori_gen
from conftest import brute_force_supports


def _as_supports(result: dict[ItemSet, ItemSet]) -> dict[frozenset, float]:
    return {key.as_frozenset(): value.support for key, value in result.items()}


class TestAprioriGen:
    def test_prefix_join(self) -> None:
        level = [(0, 1), (0, 2), (1, 2), (1, 3)]
        candidates = list(apriori_gen(level))
        # (1, 2, 3) lacks its subset (2, 3)
        assert candidates == [((0, 1, 2), (0, 1), (0, 2))]

    def test_singletons(self) -> None:
        candidates = sorted(c for c, _, _ in apriori_gen([(0,), (1,), (2,)]))
        assert candidates == [(0, 1), (0, 2), (1, 2)]

    def test_empty(self) -> None:
        assert list(apriori_gen([])) == []


class TestAprioriMiner:
    def test_data1(self, data1: list[list[str]]) -> None:
        result = _as_supports(AprioriMiner().find_frequent_item_sets(data1, 0.5))

        assert result == {
            frozenset({"coffee"}): 0.75,
            frozenset({"milk"}): 0.75,
            frozenset({"sugar"}): 0.75,
            frozenset({"bread"}): 0.5,
            frozenset({"coffee", "milk"}): 0.75,
            frozenset({"milk", "sugar"}): 0.5,
            frozenset({"coffee", "sugar"}): 0.5,
            frozenset({"bread", "sugar"}): 0.5,
            frozenset({"coffee", "milk", "sugar"}): 0.5,
        }

    def test_data2(self, data2: list[list[str]]) -> None:
        result = _as_supports(AprioriMiner().find_frequent_item_sets(data2, 0.25))

        assert result == {
            frozenset({"beer"}): 0.5,
            frozenset({"chips"}): 0.75,
            frozenset({"pizza"}): 0.5,
            frozenset({"wine"}): 0.5,
            frozenset({"beer", "chips"}): 0.5,
            frozenset({"beer", "wine"}): 0.25,
            frozenset({"chips", "wine"}): 0.25,
            frozenset({"chips", "pizza"}): 0.25,
            frozenset({"pizza", "wine"}): 0.25,
            frozenset({"beer", "chips", "wine"}): 0.25,
        }

    def test_keys_and_values_are_frozen_item_sets(self, data1: list[list[str]]) -> None:
        result = AprioriMiner().find_frequent_item_sets(data1, 0.5)
        for key, value in result.items():
            assert type(key) is ItemSet
            assert key == value
            assert value.support == key.support

    def test_zero_support_keeps_only_present_combinations(self, data2: list[list[str]]) -> None:
        result = _as_supports(AprioriMiner().find_frequent_item_sets(data2, 0.0))
        assert result == brute_force_supports(data2, 0.0)
        assert frozenset({"beer", "pizza"}) not in result

    def test_full_support(self, data1: list[list[str]]) -> None:
        assert AprioriMiner().find_frequent_item_sets(data1, 1.0) == {}

        result = AprioriMiner().find_frequent_item_sets([["a", "b"], ["a", "b", "c"]], 1.0)
        assert _as_supports(result) == {frozenset({"a"}): 1.0, frozenset({"b"}): 1.0, frozenset({"a", "b"}): 1.0}

    def test_empty_source(self) -> None:
        assert AprioriMiner().find_frequent_item_sets([], 0.5) == {}

    def test_empty_transactions(self) -> None:
        result = AprioriMiner().find_frequent_item_sets([[], ["a"], []], 0.3)
        assert _as_supports(result) == {frozenset({"a"}): pytest.approx(1 / 3)}

    def test_duplicate_items_count_once(self) -> None:
        result = AprioriMiner().find_frequent_item_sets([["a", "a", "b"], ["b"]], 0.5)
        assert _as_supports(result) == {frozenset({"a"}): 0.5, frozenset({"b"}): 1.0, frozenset({"a", "b"}): 0.5}

    def test_mixed_item_types(self) -> None:
        result = AprioriMiner().find_frequent_item_sets([[1, "a"], [1, "a", 2.5]], 1.0)
        assert _as_supports(result) == {frozenset({1}): 1.0, frozenset({"a"}): 1.0, frozenset({1, "a"}): 1.0}

    def test_max_len(self, data1: list[list[str]]) -> None:
        result = AprioriMiner(max_len=1).find_frequent_item_sets(data1, 0.5)
        assert len(result) == 4
        assert all(len(item_set) == 1 for item_set in result)

        assert len(AprioriMiner(max_len=2).find_frequent_item_sets(data1, 0.5)) == 8

    def test_invalid_max_len(self) -> None:
        with pytest.raises(ValueError, match="max_len"):
            AprioriMiner(max_len=0)

    @pytest.mark.parametrize("min_support", [-0.01, 1.01])
    def test_invalid_min_support(self, data1: list[list[str]], min_support: float) -> None:
        with pytest.raises(ValueError, match="min_support"):
            AprioriMiner().find_frequent_item_sets(data1, min_support)

    def test_none_source(self) -> None:
        with pytest.raises(ValueError, match="source"):
            AprioriMiner().find_frequent_item_sets(None, 0.5)

    def test_one_shot_source(self, data1: list[list[str]]) -> None:
        with pytest.raises(TypeError):
            AprioriMiner().find_frequent_item_sets(iter(data1), 0.5)

    def test_source_must_be_stable(self) -> None:
        class Shrinking(TransactionSource):
            def __init__(self) -> None:
                self.passes = 0

            def __iter__(self) -> Iterator[list[str]]:
                self.passes += 1
                yield ["a", "b"]
                if self.passes == 1:
                    yield ["a", "b"]

        with pytest.raises(RuntimeError, match="same transactions"):
            AprioriMiner().find_frequent_item_sets(Shrinking(), 0.5)

    def test_io_errors_propagate(self) -> None:
        class Broken(TransactionSource):
            def __iter__(self) -> Iterator[list[str]]:
                raise OSError("disk on fire")

        with pytest.raises(OSError, match="disk on fire"):
            AprioriMiner().find_frequent_item_sets(Broken(), 0.5)

    def test_one_pass_per_level(self, data1: list[list[str]]) -> None:
        class Counting(TransactionSource):
            passes = 0

            def __iter__(self) -> Iterator[list[str]]:
                Counting.passes += 1
                return iter(data1)

        AprioriMiner().find_frequent_item_sets(Counting(), 0.5)
        # one pass each for sizes 1, 2 and 3; no candidate of size 4 is generated
        assert Counting.passes == 3

    def test_verbose(self, data1: list[list[str]], capsys: pytest.CaptureFixture[str]) -> None:
        AprioriMiner(verbose=1).find_frequent_item_sets(data1, 0.5)
        assert "Found 4 frequent item sets of size 1" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


def _random_transactions(seed: int, n: int = 40, n_items: int = 8) -> list[list[int]]:
    rng = random.Random(seed)
    return [rng.sample(range(n_items), rng.randint(0, 5)) for _ in range(n)]


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("min_support", [0.05, 0.1, 0.3])
def test_matches_brute_force(seed: int, min_support: float) -> None:
    transactions = _random_transactions(seed)
    result = AprioriMiner().find_frequent_item_sets(transactions, min_support)
    assert _as_supports(result) == pytest.approx(brute_force_supports(transactions, min_support))


@pytest.mark.parametrize("seed", range(3))
def test_downward_closure_and_monotone_support(seed: int) -> None:
    result = AprioriMiner().find_frequent_item_sets(_random_transactions(seed), 0.1)

    for item_set in result.values():
        for size in range(1, len(item_set)):
            for subset in itertools.combinations(item_set.items, size):
                parent = result.get(ItemSet(subset))
                assert parent is not None
                assert parent.support >= item_set.support


def test_idempotent(data2: list[list[str]]) -> None:
    miner = AprioriMiner()
    first = miner.find_frequent_item_sets(data2, 0.25)
    second = miner.find_frequent_item_sets(data2, 0.25)
    assert _as_supports(first) == _as_supports(second)
