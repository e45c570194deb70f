"""Derivation of association rules from frequent item sets."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Union

from ._candidates import Ranks, apriori_gen
from ._validation import ensure_not_none, ensure_unit_interval
from .itemset import ItemSet
from .metrics import TOLERANCE, calculate_confidence
from .results import FrequentItemSets, RuleSet
from .rule import AssociationRule

logger = logging.getLogger(__name__)

FrequentItemSetsLike = Union[Mapping[ItemSet, ItemSet], FrequentItemSets, Iterable[ItemSet]]


def _as_lookup(frequent_item_sets: FrequentItemSetsLike) -> dict[ItemSet, ItemSet]:
    if isinstance(frequent_item_sets, Mapping):
        return dict(frequent_item_sets)
    return {item_set: item_set for item_set in frequent_item_sets}


class AssociationRuleGenerator(ABC):
    """Turns frequent item sets into association rules."""

    @abstractmethod
    def generate_association_rules(
        self, frequent_item_sets: FrequentItemSetsLike, min_confidence: float
    ) -> RuleSet: ...


class ConfidenceRuleGenerator(AssociationRuleGenerator):
    """Generate every rule ``body -> head`` whose confidence reaches a threshold.

    For each frequent item set the heads are grown level-wise, starting with
    single items.  A head of size ``m + 1`` is only tried if all of its
    ``m``-item subsets produced a rule, since moving items from the body to
    the head can only lower the confidence.

    Body and head supports are looked up in the frequent item sets.  A split
    whose body is absent is skipped since its confidence is unknown; an absent
    head gets support 0.0, which lift and conviction report as 0.0.
    """

    def generate_association_rules(self, frequent_item_sets: FrequentItemSetsLike, min_confidence: float) -> RuleSet:
        ensure_not_none(frequent_item_sets, "frequent_item_sets")
        ensure_unit_interval(min_confidence, "min_confidence")

        lookup = _as_lookup(frequent_item_sets)
        rules = RuleSet()

        for item_set in lookup.values():
            if len(item_set) > 1:
                self._generate_rules(item_set, lookup, min_confidence, rules)

        logger.debug("Generated %d rules from %d frequent item sets", len(rules), len(lookup))
        return rules

    @staticmethod
    def _generate_rules(
        item_set: ItemSet,
        lookup: dict[ItemSet, ItemSet],
        min_confidence: float,
        rules: RuleSet,
    ) -> None:
        items = item_set.items
        all_items = item_set.as_frozenset()

        def try_head(ranks: Ranks) -> bool:
            head_items = frozenset(items[rank] for rank in ranks)
            body = lookup.get(ItemSet(all_items - head_items))
            if body is None:
                return False

            head = ItemSet(head_items)
            head = lookup.get(head, head)

            if calculate_confidence(body.support, item_set.support) < min_confidence - TOLERANCE:
                return False

            rules.add(AssociationRule(body, head, item_set.support))
            return True

        heads: list[Ranks] = [(rank,) for rank in range(len(items)) if try_head((rank,))]
        head_size = 1

        while heads and head_size + 1 < len(items):
            heads = [ranks for ranks, _, _ in apriori_gen(heads) if try_head(ranks)]
            head_size += 1
