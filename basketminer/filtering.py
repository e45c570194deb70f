"""Composable predicates for filtering item sets and association rules."""

from __future__ import annotations

import math
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, Generic, TypeVar

from ._validation import ensure_at_least, ensure_unit_interval
from .itemset import ItemSet
from .metrics import Operator
from .rule import AssociationRule

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T")

Predicate = Callable[[T], bool]


def _ensure_size_range(min_size: int, max_size: int) -> None:
    ensure_at_least(min_size, 0, "min_size")
    ensure_at_least(max_size, min_size, "max_size")


class Filter(Generic[T]):
    """A conjunction of predicates.  Every ``by_*`` method returns a new, narrower filter."""

    def __init__(self, predicates: tuple[Predicate[T], ...] = ()) -> None:
        self._predicates = tuple(predicates)

    def where(self, predicate: Predicate[T]) -> Self:
        """Add an arbitrary *predicate*."""
        return type(self)(self._predicates + (predicate,))

    def __call__(self, value: T) -> bool:
        return all(predicate(value) for predicate in self._predicates)


class ItemSetFilter(Filter[ItemSet]):
    def by_support(self, min_support: float, max_support: float = 1.0) -> ItemSetFilter:
        ensure_unit_interval(min_support, "min_support")
        ensure_unit_interval(max_support, "max_support")
        ensure_at_least(max_support, min_support, "max_support")
        return self.where(lambda x: min_support <= x.support <= max_support)

    def by_size(self, min_size: int, max_size: int = sys.maxsize) -> ItemSetFilter:
        _ensure_size_range(min_size, max_size)
        return self.where(lambda x: min_size <= len(x) <= max_size)


class AssociationRuleFilter(Filter[AssociationRule]):
    def by_operator(
        self,
        operator: Operator,
        min_performance: float,
        max_performance: float = math.inf,
    ) -> AssociationRuleFilter:
        """Keep rules whose score under *operator* lies within the given bounds."""
        ensure_at_least(min_performance, 0.0, "min_performance")
        ensure_at_least(max_performance, min_performance, "max_performance")
        return self.where(lambda x: min_performance <= operator.evaluate(x) <= max_performance)

    def by_size(self, min_size: int, max_size: int = sys.maxsize) -> AssociationRuleFilter:
        _ensure_size_range(min_size, max_size)
        return self.where(lambda x: min_size <= x.size <= max_size)

    def by_body_size(self, min_size: int, max_size: int = sys.maxsize) -> AssociationRuleFilter:
        _ensure_size_range(min_size, max_size)
        return self.where(lambda x: min_size <= len(x.body) <= max_size)

    def by_head_size(self, min_size: int, max_size: int = sys.maxsize) -> AssociationRuleFilter:
        _ensure_size_range(min_size, max_size)
        return self.where(lambda x: min_size <= len(x.head) <= max_size)
