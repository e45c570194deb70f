"""Level-wise candidate generation shared by the item-set miner and the rule generator.

Candidates are represented as strictly increasing tuples of integer ranks.
Two ``k``-tuples sharing their first ``k - 1`` ranks are joined into one
``k + 1``-tuple, which is kept only if every ``k``-subset is present in the
previous level (downward closure).
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator

Ranks = tuple[int, ...]


def apriori_gen(level: Iterable[Ranks]) -> Iterator[tuple[Ranks, Ranks, Ranks]]:
    """Yield ``(candidate, left, right)`` for every candidate of the next level.

    *left* and *right* are the two parents the candidate was joined from.
    Each candidate is produced exactly once.
    """
    retained = set(level)
    by_prefix: defaultdict[Ranks, list[int]] = defaultdict(list)

    for ranks in retained:
        by_prefix[ranks[:-1]].append(ranks[-1])

    for prefix, last in by_prefix.items():
        last.sort()

        for i, a in enumerate(last):
            left = prefix + (a,)

            for b in last[i + 1 :]:
                candidate = left + (b,)

                # the two subsets dropping `a` or `b` are the parents themselves
                if all(candidate[:j] + candidate[j + 1 :] in retained for j in range(len(prefix))):
                    yield candidate, left, prefix + (b,)
