from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .itemset import ItemSet
from .metrics import TOLERANCE, get_metric
from .output import Output
from .results import FrequentItemSets
from .rule_generator import ConfidenceRuleGenerator

if TYPE_CHECKING:
    from .results import RuleSet


def _from_dataframe(df: Any) -> list[ItemSet]:
    columns = list(df.columns)

    if "support" not in columns:
        raise ValueError("The input DataFrame must contain a 'support' column")
    if "itemsets" not in columns:
        raise ValueError("The input DataFrame must contain an 'itemsets' column")

    if hasattr(df, "get_column"):
        supports = df.get_column("support").to_list()
        itemsets = df.get_column("itemsets").to_list()
    else:
        supports = df["support"].tolist()
        itemsets = df["itemsets"].tolist()

    return [ItemSet(items, float(support)) for items, support in zip(itemsets, supports)]


def association_rules(
    frequent_item_sets: Any,
    min_confidence: float = 0.0,
    metric: str | None = None,
    min_threshold: float | None = None,
) -> RuleSet:
    """Generate association rules from frequent item sets.

    This module-level function relies on
    :class:`~basketminer.rule_generator.ConfidenceRuleGenerator`.

    Parameters
    ----------
    frequent_item_sets
        One of:

        - the :class:`~basketminer.results.FrequentItemSets` of an
          :class:`~basketminer.output.Output`, or the ``Output`` itself,
        - the ``dict[ItemSet, ItemSet]`` returned by a miner,
        - a DataFrame with ``support`` and ``itemsets`` columns, as produced
          by :meth:`FrequentItemSets.to_dataframe`.

    min_confidence
        Minimum confidence within ``[0, 1]``.
    metric
        Name of an additional metric to filter by, e.g. ``"lift"``.
    min_threshold
        Minimum value of *metric*.  Required when *metric* is given.

    Returns
    -------
    RuleSet
        Rules ordered by descending support.

    Examples
    --------
    >>> output = apriori(transactions, min_support=0.5)
    >>> rules = association_rules(output, min_confidence=0.6, metric="lift", min_threshold=1.0)
    >>> rules.to_dataframe(["confidence", "lift"])
    """
    if isinstance(frequent_item_sets, Output):
        frequent_item_sets = frequent_item_sets.frequent_item_sets

    if frequent_item_sets is not None and hasattr(frequent_item_sets, "columns"):
        frequent_item_sets = _from_dataframe(frequent_item_sets)
    elif frequent_item_sets is not None and not isinstance(frequent_item_sets, (Mapping, FrequentItemSets, list)):
        raise TypeError(
            "Expected FrequentItemSets, a mapping of item sets or a DataFrame with 'support' and 'itemsets' "
            f"columns, got {type(frequent_item_sets)}"
        )

    scorer = None
    if metric is not None:
        scorer = get_metric(metric)
        if min_threshold is None:
            raise ValueError(f"`min_threshold` is required when filtering by `metric` ('{metric}').")

    rules = ConfidenceRuleGenerator().generate_association_rules(frequent_item_sets, min_confidence)

    if scorer is None:
        return rules

    return rules.filter(lambda rule: scorer.evaluate(rule) >= min_threshold - TOLERANCE)
