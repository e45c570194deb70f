"""Level-wise Apriori search for frequent item sets."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import TYPE_CHECKING, Any

from ._candidates import Ranks, apriori_gen
from ._validation import ensure_at_least, ensure_unit_interval
from .itemset import Item, ItemSet, canonical_order
from .metrics import TOLERANCE, calculate_support
from .transactions import as_source

if TYPE_CHECKING:
    from .transactions import TransactionSource


logger = logging.getLogger(__name__)


class FrequentItemSetMiner(ABC):
    """Finds all item sets whose support reaches a threshold."""

    @abstractmethod
    def find_frequent_item_sets(self, source: Any, min_support: float) -> dict[ItemSet, ItemSet]:
        """Return every frequent item set, keyed by itself.

        Parameters
        ----------
        source:
            A :class:`~basketminer.transactions.TransactionSource` or anything
            :func:`~basketminer.transactions.as_source` accepts.
        min_support:
            Minimum support within ``[0, 1]``.
        """


class _TransactionalItemSet:
    """An item set under construction: its item ranks and the positions of the transactions containing it."""

    __slots__ = ("ranks", "transactions")

    def __init__(self, ranks: Ranks, transactions: set[int]) -> None:
        self.ranks = ranks
        self.transactions = transactions

    def support(self, n_transactions: int) -> float:
        return calculate_support(n_transactions, len(self.transactions))

    def freeze(self, items: list[Item], n_transactions: int) -> ItemSet:
        return ItemSet((items[rank] for rank in self.ranks), self.support(n_transactions))


class AprioriMiner(FrequentItemSetMiner):
    """Apriori with a per-item-set membership index.

    Every level costs one full pass over the source.  The first pass counts
    the single items; each further pass counts the candidates built by joining
    frequent item sets of the previous level that share all but their last
    item.  The membership index of a candidate's parents restricts which
    transactions have to be tested.

    Parameters
    ----------
    max_len:
        Maximum size of the returned item sets.  ``None`` means no limit
        beyond the longest transaction.
    verbose:
        Print one progress line per level when > 0.
    """

    def __init__(self, max_len: int | None = None, verbose: int = 0) -> None:
        if max_len is not None:
            ensure_at_least(max_len, 1, "max_len")
        self.max_len = max_len
        self.verbose = verbose

    def _log(self, message: str, *args: Any) -> None:
        logger.debug(message, *args)
        if self.verbose:
            print(f"[{time.strftime('%X')}] " + message % args)

    def find_frequent_item_sets(self, source: Any, min_support: float) -> dict[ItemSet, ItemSet]:
        source = as_source(source)
        ensure_unit_interval(min_support, "min_support")

        n_transactions, max_size, occurrences = self._count_items(source)

        if n_transactions == 0:
            self._log("Source is empty, no frequent item sets")
            return {}

        def is_frequent(transactions: set[int]) -> bool:
            return bool(transactions) and calculate_support(n_transactions, len(transactions)) >= min_support - TOLERANCE

        singletons = [item for item, tids in occurrences.items() if is_frequent(tids)]
        items = list(canonical_order(singletons))
        level = {(rank,): _TransactionalItemSet((rank,), occurrences[item]) for rank, item in enumerate(items)}

        if self.max_len is not None:
            max_size = min(max_size, self.max_len)

        result: dict[ItemSet, ItemSet] = {}
        size = 1

        while level:
            self._log("Found %d frequent item sets of size %d", len(level), size)

            for candidate in level.values():
                item_set = candidate.freeze(items, n_transactions)
                result[item_set] = item_set

            if size >= max_size:
                break

            candidates = self._generate_candidates(level)
            self._log("Generated %d candidates of size %d", len(candidates), size + 1)

            if not candidates:
                break

            self._count_candidates(source, candidates, items, n_transactions)
            level = {ranks: candidate for ranks, candidate in candidates.items() if is_frequent(candidate.transactions)}
            size += 1

        logger.debug("Mined %d frequent item sets from %d transactions", len(result), n_transactions)
        return result

    @staticmethod
    def _count_items(source: TransactionSource) -> tuple[int, int, dict[Item, set[int]]]:
        occurrences: defaultdict[Item, set[int]] = defaultdict(set)
        n_transactions = 0
        max_size = 0

        for tid, transaction in enumerate(source):
            items = set(transaction)
            max_size = max(max_size, len(items))
            for item in items:
                occurrences[item].add(tid)
            n_transactions += 1

        return n_transactions, max_size, occurrences

    @staticmethod
    def _generate_candidates(level: dict[Ranks, _TransactionalItemSet]) -> dict[Ranks, _TransactionalItemSet]:
        candidates: dict[Ranks, _TransactionalItemSet] = {}

        for ranks, left, right in apriori_gen(level):
            potential = level[left].transactions & level[right].transactions
            if potential:
                # holds the transactions to test until the next pass replaces it
                candidates[ranks] = _TransactionalItemSet(ranks, potential)

        return candidates

    @staticmethod
    def _count_candidates(
        source: TransactionSource,
        candidates: dict[Ranks, _TransactionalItemSet],
        items: list[Item],
        n_transactions: int,
    ) -> None:
        by_transaction: defaultdict[int, list[_TransactionalItemSet]] = defaultdict(list)

        for candidate in candidates.values():
            for tid in candidate.transactions:
                by_transaction[tid].append(candidate)
            candidate.transactions = set()

        seen = 0
        for tid, transaction in enumerate(source):
            seen += 1
            to_test = by_transaction.get(tid)
            if not to_test:
                continue

            present = set(transaction)
            for candidate in to_test:
                if all(items[rank] in present for rank in candidate.ranks):
                    candidate.transactions.add(tid)

        if seen != n_transactions:
            raise RuntimeError(
                f"The transaction source yielded {seen} transactions, expected {n_transactions}. "
                "Sources must produce the same transactions on every traversal."
            )
