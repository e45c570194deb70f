"""Operators that aggregate several weighted metrics into a single score."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._validation import ensure_greater
from .metrics import Metric, Operator

if TYPE_CHECKING:
    from typing_extensions import Self

    from .rule import AssociationRule


class _WeightedOperator(Operator):
    def __init__(self) -> None:
        self._metrics: list[tuple[Metric, float]] = []

    def add(self, metric: Metric, weight: float = 1.0) -> Self:
        """Add *metric* with the given *weight* (> 0) and return ``self`` for chaining."""
        ensure_greater(weight, 0.0, "weight")
        self._metrics.append((metric, float(weight)))
        return self

    @property
    def metrics(self) -> list[tuple[Metric, float]]:
        return list(self._metrics)

    def _ensure_metrics(self) -> None:
        if not self._metrics:
            raise RuntimeError(f"No metrics added to {type(self).__name__}")

    def __repr__(self) -> str:
        inner = ", ".join(f"{metric!r}: {weight}" for metric, weight in self._metrics)
        return f"{type(self).__name__}({inner})"


class ArithmeticMean(_WeightedOperator):
    """Weighted arithmetic mean of the added metrics."""

    def evaluate(self, rule: AssociationRule) -> float:
        self._ensure_metrics()
        sum_of_weights = sum(weight for _, weight in self._metrics)
        return sum(metric.evaluate(rule) * (weight / sum_of_weights) for metric, weight in self._metrics)


class HarmonicMean(_WeightedOperator):
    """Weighted harmonic mean of the added metrics; ``0.0`` if any metric is zero."""

    def evaluate(self, rule: AssociationRule) -> float:
        self._ensure_metrics()
        numerator = 0.0
        denominator = 0.0

        for metric, weight in self._metrics:
            value = metric.evaluate(rule)
            if value == 0.0:
                return 0.0
            numerator += weight
            denominator += weight / value

        return numerator / denominator if denominator > 0 else 0.0
