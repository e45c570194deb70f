"""Comparators for ordering item sets and association rules.

A comparator is any callable ``(a, b) -> int`` returning a negative number,
zero or a positive number, as accepted by :func:`functools.cmp_to_key`.
Sortings compare by support (or by an operator, for rules) and fall back to
a chain of tie-breakers, which are evaluated in order until one of them
returns a non-zero result.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .itemset import ItemSet
from .metrics import Operator
from .rule import AssociationRule

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T")

Comparator = Callable[[T, T], int]


def compare(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


class Order(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


# ---------------------------------------------------------------------------
# Tie-breakers
# ---------------------------------------------------------------------------


class TieBreaker(Generic[T]):
    """An ordered chain of comparators.

    Each factory method returns a new tie-breaker with one more comparator
    appended, so tie-breakers can be composed fluently::

        AssociationRuleTieBreaker().prefer_simple().by_operator(Lift())
    """

    def __init__(self, comparators: tuple[Comparator[T], ...] = ()) -> None:
        self._comparators = tuple(comparators)

    def custom(self, comparator: Comparator[T]) -> Self:
        return type(self)(self._comparators + (comparator,))

    def __call__(self, a: T, b: T) -> int:
        for comparator in self._comparators:
            result = comparator(a, b)
            if result != 0:
                return result
        return 0

    def __len__(self) -> int:
        return len(self._comparators)


class ItemSetTieBreaker(TieBreaker[ItemSet]):
    def prefer_small(self) -> ItemSetTieBreaker:
        return self.custom(lambda a, b: compare(len(b), len(a)))

    def prefer_large(self) -> ItemSetTieBreaker:
        return self.custom(lambda a, b: compare(len(a), len(b)))


class AssociationRuleTieBreaker(TieBreaker[AssociationRule]):
    def by_operator(self, operator: Operator) -> AssociationRuleTieBreaker:
        return self.custom(lambda a, b: compare(operator.evaluate(a), operator.evaluate(b)))

    def prefer_simple(self) -> AssociationRuleTieBreaker:
        return self.custom(lambda a, b: compare(b.size, a.size))

    def prefer_complex(self) -> AssociationRuleTieBreaker:
        return self.custom(lambda a, b: compare(a.size, b.size))

    def prefer_simple_body(self) -> AssociationRuleTieBreaker:
        return self.custom(lambda a, b: compare(len(b.body), len(a.body)))

    def prefer_complex_body(self) -> AssociationRuleTieBreaker:
        return self.custom(lambda a, b: compare(len(a.body), len(b.body)))

    def prefer_simple_head(self) -> AssociationRuleTieBreaker:
        return self.custom(lambda a, b: compare(len(b.head), len(a.head)))

    def prefer_complex_head(self) -> AssociationRuleTieBreaker:
        return self.custom(lambda a, b: compare(len(a.head), len(b.head)))


# ---------------------------------------------------------------------------
# Sortings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Sorting(Generic[T]):
    order: Order = Order.DESCENDING
    tie_breaker: Comparator[T] | None = None

    def with_order(self, order: Order) -> Self:
        if not isinstance(order, Order):
            raise TypeError(f"Expected an Order, got {type(order)}")
        return replace(self, order=order)

    def with_tie_breaking(self, tie_breaker: Comparator[T] | None) -> Self:
        return replace(self, tie_breaker=tie_breaker)

    def _primary(self, a: T, b: T) -> int:
        raise NotImplementedError

    def __call__(self, a: T, b: T) -> int:
        result = self._primary(a, b)

        if result == 0 and self.tie_breaker is not None:
            result = self.tie_breaker(a, b)

        return result if self.order is Order.ASCENDING else -result

    def key(self) -> Callable[[T], Any]:
        """Key function for :func:`sorted`."""
        return functools.cmp_to_key(self)


@dataclass(frozen=True)
class ItemSetSorting(_Sorting[ItemSet]):
    """Order item sets by support, descending unless configured otherwise."""

    def _primary(self, a: ItemSet, b: ItemSet) -> int:
        return compare(a.support, b.support)


@dataclass(frozen=True)
class AssociationRuleSorting(_Sorting[AssociationRule]):
    """Order rules by an operator's score, or by rule support when no operator is set."""

    operator: Operator | None = None

    def by_operator(self, operator: Operator | None) -> AssociationRuleSorting:
        return replace(self, operator=operator)

    def _primary(self, a: AssociationRule, b: AssociationRule) -> int:
        if self.operator is None:
            return compare(a.support, b.support)
        return compare(self.operator.evaluate(a), self.operator.evaluate(b))
