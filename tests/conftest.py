"""pytest configuration and shared fixtures."""

from __future__ import annotations

import itertools
import os
import sys
from collections.abc import Hashable, Sequence
from pathlib import Path

import pytest

# Ensure tests/ dir is on path so the helpers below can be imported by test modules
sys.path.insert(0, os.path.dirname(__file__))

# ---------------------------------------------------------------------------
# Reference data sets
# ---------------------------------------------------------------------------

DATA1 = [
    ["milk", "sugar", "coffee"],
    ["coffee", "milk", "sugar", "bread"],
    ["coffee", "milk"],
    ["bread", "sugar"],
]

DATA2 = [
    ["beer", "chips", "wine"],
    ["beer", "chips"],
    ["chips", "pizza"],
    ["pizza", "wine"],
]

# numeric items, used for the threshold searches
DATA3 = [
    [1, 2, 3, 4],
    [1, 2, 3],
    [1, 2],
    [1, 5],
    [2, 3, 5],
    [1, 2, 3, 5],
]

DATA4 = [
    [10, 20],
    [10, 30],
    [20, 30],
    [10, 20, 30],
    [40],
]


@pytest.fixture
def data1() -> list[list[str]]:
    return [list(txn) for txn in DATA1]


@pytest.fixture
def data2() -> list[list[str]]:
    return [list(txn) for txn in DATA2]


@pytest.fixture
def data3() -> list[list[int]]:
    return [list(txn) for txn in DATA3]


@pytest.fixture
def data4() -> list[list[int]]:
    return [list(txn) for txn in DATA4]


@pytest.fixture
def data1_file(tmp_path: Path) -> Path:
    """DATA1 written as a transaction file, with a comment and blank lines."""
    path = tmp_path / "data1.txt"
    lines = ["# coffee shop", ""] + [" ".join(txn) for txn in DATA1] + ["", "   "]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def brute_force_supports(transactions: Sequence[Sequence[Hashable]], min_support: float) -> dict[frozenset, float]:
    """Every item combination occurring in at least one transaction with support >= *min_support*."""
    n = len(transactions)
    counts: dict[frozenset, int] = {}

    for txn in transactions:
        items = sorted(set(txn), key=str)
        for size in range(1, len(items) + 1):
            for combination in itertools.combinations(items, size):
                key = frozenset(combination)
                counts[key] = counts.get(key, 0) + 1

    return {key: count / n for key, count in counts.items() if count / n >= min_support - 1e-9}
