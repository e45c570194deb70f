"""Sorted, de-duplicating collections of mined item sets and rules."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import pandas as pd

from ._dependencies import import_optional_dependency
from .itemset import ItemSet
from .metrics import _ALL_METRICS, Confidence, Leverage, Lift, Support, get_metric
from .rule import AssociationRule
from .sorting import AssociationRuleSorting, Comparator, ItemSetSorting

if TYPE_CHECKING:
    import polars as pl
    from typing_extensions import Self

T = TypeVar("T", ItemSet, AssociationRule)


def format_decimal(value: float) -> str:
    """Format *value* with one or two fraction digits (``0.5``, ``0.75``, ``1.0``)."""
    text = f"{value:.2f}".rstrip("0")
    return text + "0" if text.endswith(".") else text


class _ResultSet(Generic[T]):
    """Members are keyed by structural equality, so adding an equal member twice keeps the first.

    A read-only collection, as handed out by :class:`~basketminer.output.Output`,
    rejects :meth:`add`; :meth:`sort` and :meth:`filter` still return writable copies.
    """

    def __init__(self, members: Iterable[T] = (), comparator: Comparator[T] | None = None) -> None:
        self._comparator: Comparator[T] = comparator if comparator is not None else self._default_comparator()
        self._members: dict[T, T] = {}
        self._ordered: list[T] | None = None
        self._read_only = False

        for member in members:
            self.add(member)

    @staticmethod
    def _default_comparator() -> Comparator[T]:
        raise NotImplementedError

    @property
    def comparator(self) -> Comparator[T]:
        return self._comparator

    def add(self, member: T) -> bool:
        """Add *member*; return ``False`` if an equal member is already present.

        Raises
        ------
        TypeError
            If the collection is read-only.
        """
        if self._read_only:
            raise TypeError(f"This {type(self).__name__} is read-only; add to a copy from sort() or filter() instead.")
        if member in self._members:
            return False
        self._members[member] = member
        self._ordered = None
        return True

    @property
    def read_only(self) -> bool:
        return self._read_only

    def as_read_only(self) -> Self:
        """Return a read-only copy of this collection."""
        if self._read_only:
            return self
        copy = type(self)(self._members.values(), self._comparator)
        copy._read_only = True
        return copy

    def _sorted(self) -> list[T]:
        if self._ordered is None:
            self._ordered = sorted(self._members.values(), key=functools.cmp_to_key(self._comparator))
        return self._ordered

    def first(self) -> T:
        if not self._members:
            raise IndexError(f"{type(self).__name__} is empty")
        return self._sorted()[0]

    def last(self) -> T:
        if not self._members:
            raise IndexError(f"{type(self).__name__} is empty")
        return self._sorted()[-1]

    def get(self, member: T) -> T | None:
        """Return the stored member equal to *member*, or ``None``."""
        return self._members.get(member)

    def sort(self, comparator: Comparator[T] | None = None) -> Self:
        """Return a copy ordered by *comparator* (the default ordering if ``None``)."""
        return type(self)(self._members.values(), comparator)

    def filter(self, predicate: Callable[[T], bool]) -> Self:
        """Return a copy containing only the members matching *predicate*."""
        return type(self)((m for m in self._members.values() if predicate(m)), self._comparator)

    def __getitem__(self, index: int) -> T:
        return self._sorted()[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._sorted())

    def __len__(self) -> int:
        return len(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)

    def __contains__(self, member: object) -> bool:
        return member in self._members

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._members.keys() == other._members.keys()

    __hash__ = None  # type: ignore[assignment]


class FrequentItemSets(_ResultSet[ItemSet]):
    """Frequent item sets ordered by descending support unless another comparator is given."""

    @staticmethod
    def _default_comparator() -> Comparator[ItemSet]:
        return ItemSetSorting()

    def to_dataframe(self) -> pd.DataFrame:
        """Return the item sets as a DataFrame with the columns ``support`` and ``itemsets``.

        Rows follow the collection's order; each itemset is a tuple in canonical item order.
        """
        return pd.DataFrame(
            {
                "support": [item_set.support for item_set in self],
                "itemsets": [item_set.items for item_set in self],
            },
            columns=["support", "itemsets"],
        )

    def to_polars(self) -> pl.DataFrame:
        """Polars counterpart of :meth:`to_dataframe`; itemsets become list columns.

        Requires the ``polars`` extra.
        """
        pl = import_optional_dependency("polars")

        return pl.DataFrame(
            {
                "support": [item_set.support for item_set in self],
                "itemsets": [list(item_set.items) for item_set in self],
            },
            schema_overrides={"support": pl.Float64},
        )

    def __str__(self) -> str:
        return "[" + ",\n".join(f"{x} (support = {format_decimal(x.support)})" for x in self) + "]"

    def __repr__(self) -> str:
        return f"FrequentItemSets({list(self)!r})"


class RuleSet(_ResultSet[AssociationRule]):
    """Association rules ordered by descending support unless another comparator is given."""

    @staticmethod
    def _default_comparator() -> Comparator[AssociationRule]:
        return AssociationRuleSorting()

    def to_dataframe(self, return_metrics: list[str] | None = None) -> pd.DataFrame:
        """Return the rules as a DataFrame.

        Parameters
        ----------
        return_metrics:
            Names of the metric columns to include, e.g. ``["confidence", "lift"]``.
            Defaults to all built-in metrics.

        Returns
        -------
        pandas.DataFrame
            Columns: ``antecedents``, ``consequents``, and the requested metrics.
        """
        columns = self._columns(return_metrics, tuple)
        return pd.DataFrame(columns, columns=list(columns))

    def to_polars(self, return_metrics: list[str] | None = None) -> pl.DataFrame:
        """Polars counterpart of :meth:`to_dataframe`; antecedents and consequents become list columns.

        Requires the ``polars`` extra.
        """
        pl = import_optional_dependency("polars")

        columns = self._columns(return_metrics, list)
        return pl.DataFrame(columns, schema_overrides={name: pl.Float64 for name in list(columns)[2:]})

    def _columns(self, return_metrics: list[str] | None, container: Callable[[Any], Any]) -> dict[str, list]:
        if return_metrics is None:
            return_metrics = list(_ALL_METRICS)
        metrics = [get_metric(name) for name in return_metrics]

        columns: dict[str, list] = {"antecedents": [], "consequents": []}
        columns.update({name: [] for name in return_metrics})

        for rule in self:
            columns["antecedents"].append(container(rule.body.items))
            columns["consequents"].append(container(rule.head.items))
            for name, metric in zip(return_metrics, metrics):
                columns[name].append(metric.evaluate(rule))

        return columns

    def __str__(self) -> str:
        support, confidence, lift, leverage = Support(), Confidence(), Lift(), Leverage()
        return (
            "["
            + ",\n".join(
                f"{rule} (support = {format_decimal(support.evaluate(rule))}, "
                f"confidence = {format_decimal(confidence.evaluate(rule))}, "
                f"lift = {format_decimal(lift.evaluate(rule))}, "
                f"leverage = {format_decimal(leverage.evaluate(rule))})"
                for rule in self
            )
            + "]"
        )

    def __repr__(self) -> str:
        return f"RuleSet({[str(rule) for rule in self]!r})"
