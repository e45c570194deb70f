"""Threshold searches wrapping the miner and the rule generator.

When a number of results is requested, the wrapped engine is run repeatedly
with a threshold lowered step by step from the configured maximum towards
the configured minimum, until enough results have been found.  The largest
result seen so far is kept; on ties the earlier one, found at the higher
threshold, wins.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sized
from typing import Any, TypeVar

from ._validation import ensure_not_none
from .config import Configuration
from .itemset import ItemSet
from .metrics import TOLERANCE
from .miner import AprioriMiner, FrequentItemSetMiner
from .results import RuleSet
from .rule_generator import AssociationRuleGenerator, ConfidenceRuleGenerator

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Sized)


class _AbstractTask:
    def __init__(self, configuration: Configuration, verbose: int = 0) -> None:
        ensure_not_none(configuration, "configuration")
        self.configuration = configuration
        self.verbose = verbose

    def _log(self, message: str, *args: Any) -> None:
        logger.debug(message, *args)
        if self.verbose:
            print(f"[{time.strftime('%X')}] " + message % args)

    def _search(
        self,
        run: Callable[[float], R],
        empty: R,
        count: int,
        min_threshold: float,
        max_threshold: float,
        delta: float,
        name: str,
    ) -> R:
        if count == 0:
            return run(min_threshold)

        best = empty
        found_any = False
        step = 0
        threshold = max_threshold

        while threshold >= min_threshold - TOLERANCE and len(best) < count:
            result = run(max(threshold, min_threshold))
            self._log("%s %.4f: %d results (requested %d)", name, threshold, len(result), count)

            if not found_any or len(result) > len(best):
                best = result
                found_any = True

            step += 1
            threshold = max_threshold - step * delta

        return best


class FrequentItemSetMinerTask(_AbstractTask):
    """Mine frequent item sets, searching for a support threshold if a count is configured.

    Parameters
    ----------
    configuration:
        Supplies ``min_support``, ``max_support``, ``support_delta`` and
        ``frequent_item_set_count``.
    frequent_item_set_miner:
        The engine to run; :class:`~basketminer.miner.AprioriMiner` by default.
    """

    def __init__(
        self,
        configuration: Configuration,
        frequent_item_set_miner: FrequentItemSetMiner | None = None,
        verbose: int = 0,
    ) -> None:
        super().__init__(configuration, verbose=verbose)
        self.frequent_item_set_miner = frequent_item_set_miner if frequent_item_set_miner is not None else AprioriMiner()

    def find_frequent_item_sets(self, source: Any) -> dict[ItemSet, ItemSet]:
        cfg = self.configuration
        return self._search(
            lambda min_support: self.frequent_item_set_miner.find_frequent_item_sets(source, min_support),
            {},
            cfg.frequent_item_set_count,
            cfg.min_support,
            cfg.max_support,
            cfg.support_delta,
            "Support",
        )


class AssociationRuleGeneratorTask(_AbstractTask):
    """Generate rules, searching for a confidence threshold if a rule count is configured."""

    def __init__(
        self,
        configuration: Configuration,
        association_rule_generator: AssociationRuleGenerator | None = None,
        verbose: int = 0,
    ) -> None:
        super().__init__(configuration, verbose=verbose)
        self.association_rule_generator = (
            association_rule_generator if association_rule_generator is not None else ConfidenceRuleGenerator()
        )

    def generate_association_rules(self, frequent_item_sets: dict[ItemSet, ItemSet]) -> RuleSet:
        cfg = self.configuration
        return self._search(
            lambda min_confidence: self.association_rule_generator.generate_association_rules(
                frequent_item_sets, min_confidence
            ),
            RuleSet(),
            cfg.rule_count,
            cfg.min_confidence,
            cfg.max_confidence,
            cfg.confidence_delta,
            "Confidence",
        )
