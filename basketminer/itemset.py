"""Immutable item sets and the builder used to assemble them."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from typing import Any

from ._validation import ensure_unit_interval

Item = Hashable


def canonical_order(items: Iterable[Item]) -> tuple[Item, ...]:
    """Return *items* in their canonical display order.

    Items are sorted by their natural order.  Collections mixing types that
    cannot be compared (e.g. ``int`` and ``str``) are sorted by type name first
    and by their string representation second.
    """
    items = list(items)
    try:
        return tuple(sorted(items))  # type: ignore[type-var]
    except TypeError:
        return tuple(sorted(items, key=lambda x: (type(x).__name__, str(x))))


class ItemSet:
    """A set of unique items together with its support.

    Equality and hashing only take the items into account, so two item sets
    mined at different levels or with different supports collapse to a single
    entry in dictionaries and result collections.  Instances are immutable;
    use :class:`ItemSetBuilder` or :meth:`with_support` to derive new ones.

    Parameters
    ----------
    items:
        The items of the set.  Duplicates are ignored.
    support:
        Fraction of transactions containing all *items*, within ``[0, 1]``.
    """

    __slots__ = ("_items", "_order", "_support")

    def __init__(self, items: Iterable[Item] = (), support: float = 0.0) -> None:
        ensure_unit_interval(support, "support")
        self._items: frozenset[Item] = frozenset(items)
        self._order: tuple[Item, ...] | None = None
        self._support = float(support)

    @property
    def items(self) -> tuple[Item, ...]:
        """The items in canonical order."""
        if self._order is None:
            object.__setattr__(self, "_order", canonical_order(self._items))
        return self._order  # type: ignore[return-value]

    @property
    def support(self) -> float:
        return self._support

    def as_frozenset(self) -> frozenset[Item]:
        return self._items

    def with_support(self, support: float) -> ItemSet:
        """Return a copy of this item set carrying a different support."""
        return ItemSet(self._items, support)

    def issubset(self, other: ItemSet | Iterable[Item]) -> bool:
        other_items = other._items if isinstance(other, ItemSet) else frozenset(other)
        return self._items <= other_items

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_support"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, name, value)

    def __reduce__(self) -> tuple[Any, ...]:
        return (ItemSet, (self._items, self._support))

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemSet):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __lt__(self, other: ItemSet) -> bool:
        if not isinstance(other, ItemSet):
            return NotImplemented
        return self._support < other._support

    def __str__(self) -> str:
        return "[" + ", ".join(str(item) for item in self.items) + "]"

    def __repr__(self) -> str:
        return f"ItemSet({list(self.items)!r}, support={self._support})"


class ItemSetBuilder:
    """Accumulate items and a measured support, then freeze them into an :class:`ItemSet`.

    Examples
    --------
    >>> builder = ItemSetBuilder(["milk"]).add("sugar").support(0.5)
    >>> builder.build()
    ItemSet(['milk', 'sugar'], support=0.5)
    """

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: set[Item] = set(items)
        self._support = 0.0

    def add(self, item: Item) -> ItemSetBuilder:
        self._items.add(item)
        return self

    def update(self, items: Iterable[Item]) -> ItemSetBuilder:
        self._items.update(items)
        return self

    def remove(self, item: Item) -> ItemSetBuilder:
        self._items.remove(item)
        return self

    def support(self, support: float) -> ItemSetBuilder:
        ensure_unit_interval(support, "support")
        self._support = float(support)
        return self

    def __len__(self) -> int:
        return len(self._items)

    def build(self) -> ItemSet:
        return ItemSet(self._items, self._support)
