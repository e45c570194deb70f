"""Orchestration of a complete mining run."""

from __future__ import annotations

import logging
import time
from typing import Any

from ._validation import ensure_not_none
from .config import Configuration, ConfigurationBuilder
from .miner import AprioriMiner
from .output import Output
from .results import FrequentItemSets
from .tasks import AssociationRuleGeneratorTask, FrequentItemSetMinerTask
from .transactions import as_source

logger = logging.getLogger(__name__)


class Apriori:
    """Mine frequent item sets and, optionally, association rules.

    Parameters
    ----------
    configuration:
        Thresholds for the run.  Build one with :class:`Apriori.Builder` or
        construct a :class:`~basketminer.config.Configuration` directly.
    frequent_item_set_miner_task, association_rule_generator_task:
        Replacements for the default tasks, e.g. wrapping another engine.
    verbose:
        Print progress when > 0.

    Examples
    --------
    >>> transactions = [["milk", "sugar"], ["milk", "coffee"], ["milk", "sugar", "coffee"]]
    >>> output = Apriori.Builder(0.5).generate_rules(min_confidence=0.8).create().execute(transactions)
    >>> print(output.frequent_item_sets.first())
    [milk]
    """

    Builder = ConfigurationBuilder

    def __init__(
        self,
        configuration: Configuration | None = None,
        frequent_item_set_miner_task: FrequentItemSetMinerTask | None = None,
        association_rule_generator_task: AssociationRuleGeneratorTask | None = None,
        verbose: int = 0,
    ) -> None:
        self.configuration = configuration if configuration is not None else Configuration()
        self.verbose = verbose
        self.frequent_item_set_miner_task = (
            frequent_item_set_miner_task
            if frequent_item_set_miner_task is not None
            else FrequentItemSetMinerTask(self.configuration, verbose=verbose)
        )
        self.association_rule_generator_task = (
            association_rule_generator_task
            if association_rule_generator_task is not None
            else AssociationRuleGeneratorTask(self.configuration, verbose=verbose)
        )

    def execute(self, source: Any) -> Output:
        """Run the configured search over *source*.

        Parameters
        ----------
        source:
            A :class:`~basketminer.transactions.TransactionSource`, a list of
            transactions, a DataFrame or a path; see
            :func:`~basketminer.transactions.as_source`.

        Returns
        -------
        Output
        """
        ensure_not_none(source, "source")
        source = as_source(source)

        logger.info("Starting Apriori with %s", self.configuration)
        if self.verbose:
            print(f"[{time.strftime('%X')}] Mining frequent item sets...")

        start_time = time.time()
        item_sets = self.frequent_item_set_miner_task.find_frequent_item_sets(source)
        rule_set = None

        if self.configuration.generate_rules:
            if self.verbose:
                print(f"[{time.strftime('%X')}] Generating association rules from {len(item_sets):,} item sets...")
            rule_set = self.association_rule_generator_task.generate_association_rules(item_sets)

        frequent_item_sets = FrequentItemSets(item_sets.values())
        # the wall clock may have been stepped back during the run
        end_time = max(time.time(), start_time)

        output = Output(self.configuration, start_time, end_time, frequent_item_sets, rule_set)
        logger.info(
            "Apriori finished in %.3fs: %d frequent item sets, %s rules",
            output.runtime,
            len(frequent_item_sets),
            "no" if rule_set is None else len(rule_set),
        )
        if self.verbose:
            print(f"[{time.strftime('%X')}] Done in {output.runtime:.2f}s.")

        return output


def apriori(
    source: Any,
    min_support: float = 0.5,
    *,
    max_len: int | None = None,
    frequent_item_set_count: int = 0,
    max_support: float = 1.0,
    support_delta: float = 0.1,
    generate_rules: bool = False,
    min_confidence: float = 0.0,
    max_confidence: float = 1.0,
    confidence_delta: float = 0.1,
    rule_count: int = 0,
    verbose: int = 0,
) -> Output:
    """Mine frequent item sets (and optionally rules) with the Apriori algorithm.

    This module-level function relies on the object-oriented API.

    Parameters
    ----------
    source
        Transactions: a list of lists, a long-format or one-hot DataFrame,
        a path to a transaction file, or a
        :class:`~basketminer.transactions.TransactionSource`.
    min_support
        Minimum support within ``[0, 1]``.
    max_len
        Maximum size of the mined item sets.
    frequent_item_set_count
        If > 0, lower the support threshold from ``max_support`` by
        ``support_delta`` until this many item sets are found.
    generate_rules
        Also generate association rules with at least ``min_confidence``.
    rule_count
        If > 0, search for a confidence threshold producing this many rules.
    verbose
        Print progress when > 0.

    Returns
    -------
    Output

    Examples
    --------
    >>> output = apriori([["bread", "milk"], ["bread", "eggs"]], min_support=0.5)
    >>> output.frequent_item_sets.to_dataframe()
    """
    configuration = Configuration(
        min_support=min_support,
        max_support=max_support,
        support_delta=support_delta,
        frequent_item_set_count=frequent_item_set_count,
        generate_rules=generate_rules,
        min_confidence=min_confidence,
        max_confidence=max_confidence,
        confidence_delta=confidence_delta,
        rule_count=rule_count,
    )
    miner_task = FrequentItemSetMinerTask(configuration, AprioriMiner(max_len=max_len, verbose=verbose), verbose=verbose)
    return Apriori(configuration, frequent_item_set_miner_task=miner_task, verbose=verbose).execute(source)
