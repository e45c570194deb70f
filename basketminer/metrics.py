"""Interestingness measures for item sets and association rules.

All metrics are pure functions of supports that are already known, so they
never touch the transactions.  Divisions by zero are not errors: they yield
``0.0``.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .rule import AssociationRule

# absolute slack for comparing computed ratios against thresholds
TOLERANCE = 1e-9


def calculate_support(transactions: int, occurrences: int) -> float:
    """Fraction of *transactions* an item set occurs in; ``0.0`` for an empty data set."""
    return occurrences / transactions if transactions > 0 else 0.0


def calculate_confidence(body_support: float, overall_support: float) -> float:
    """``support(body ∪ head) / support(body)``; ``0.0`` if the body never occurs."""
    return overall_support / body_support if body_support > 0 else 0.0


class Operator(ABC):
    """Maps an association rule to a numeric score."""

    @abstractmethod
    def evaluate(self, rule: AssociationRule) -> float: ...

    def __call__(self, rule: AssociationRule) -> float:
        return self.evaluate(rule)


class Metric(Operator):
    """An :class:`Operator` with a known range of values."""

    @property
    @abstractmethod
    def min_value(self) -> float: ...

    @property
    @abstractmethod
    def max_value(self) -> float: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Support(Metric):
    min_value = 0.0
    max_value = 1.0

    def evaluate(self, rule: AssociationRule) -> float:
        return rule.support


class Confidence(Metric):
    min_value = 0.0
    max_value = 1.0

    def evaluate(self, rule: AssociationRule) -> float:
        return calculate_confidence(rule.body.support, rule.support)


class Lift(Metric):
    min_value = 0.0
    max_value = math.inf

    def evaluate(self, rule: AssociationRule) -> float:
        product = rule.body.support * rule.head.support
        return rule.support / product if product > 0 else 0.0


class Leverage(Metric):
    min_value = -math.inf
    max_value = 1.0

    def evaluate(self, rule: AssociationRule) -> float:
        return rule.support - rule.body.support * rule.head.support


class Conviction(Metric):
    """``(1 - support(head)) / (1 - confidence)``; ``0.0`` for exceptionless rules."""

    min_value = 0.0
    max_value = math.inf

    def evaluate(self, rule: AssociationRule) -> float:
        denominator = 1.0 - Confidence().evaluate(rule)
        if denominator == 0.0:
            return 0.0
        return (1.0 - rule.head.support) / denominator


class AntecedentSupport(Metric):
    min_value = 0.0
    max_value = 1.0

    def evaluate(self, rule: AssociationRule) -> float:
        return rule.body.support


class ConsequentSupport(Metric):
    min_value = 0.0
    max_value = 1.0

    def evaluate(self, rule: AssociationRule) -> float:
        return rule.head.support


_ALL_METRICS: dict[str, Metric] = {
    "antecedent support": AntecedentSupport(),
    "consequent support": ConsequentSupport(),
    "support": Support(),
    "confidence": Confidence(),
    "lift": Lift(),
    "leverage": Leverage(),
    "conviction": Conviction(),
}


def get_metric(name: str) -> Metric:
    """Look up one of the built-in metrics by its column name."""
    try:
        return _ALL_METRICS[name]
    except KeyError:
        raise ValueError(f"Metric must be one of {list(_ALL_METRICS)}, got '{name}'") from None
