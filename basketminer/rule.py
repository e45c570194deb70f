from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ._validation import ensure_unit_interval
from .itemset import Item, ItemSet


@dataclass(frozen=True, eq=False)
class AssociationRule:
    """An association rule ``body -> head``.

    The rule states that transactions containing every item of *body* tend to
    contain the items of *head* as well.  Two rules are equal when their bodies
    and heads are equal; *support* is ignored for equality and hashing.

    Parameters
    ----------
    body:
        The antecedent item set.
    head:
        The consequent item set.  Must not share items with *body*.
    support:
        Support of ``body ∪ head`` within ``[0, 1]``.
    """

    body: ItemSet
    head: ItemSet
    support: float = field(default=0.0)

    def __post_init__(self) -> None:
        ensure_unit_interval(self.support, "support")
        overlap = self.body.as_frozenset() & self.head.as_frozenset()
        if overlap:
            raise ValueError(f"The body and head of a rule must be disjoint. Shared items: {sorted(map(str, overlap))}")

    @property
    def size(self) -> int:
        """Total number of items in body and head."""
        return len(self.body) + len(self.head)

    @property
    def items(self) -> ItemSet:
        """The item set ``body ∪ head`` carrying the rule's support."""
        return ItemSet(self.body.as_frozenset() | self.head.as_frozenset(), self.support)

    def covers(self, *items: Item | Iterable[Item]) -> bool:
        """Return whether all items of the rule's body are contained in *items*.

        Accepts the items either as separate arguments or as a single iterable.
        """
        if len(items) == 1 and isinstance(items[0], (list, tuple, set, frozenset, ItemSet)):
            available = set(items[0])
        else:
            available = set(items)
        return self.body.as_frozenset() <= available

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AssociationRule):
            return NotImplemented
        return self.body == other.body and self.head == other.head

    def __hash__(self) -> int:
        return hash((self.body, self.head))

    def __lt__(self, other: AssociationRule) -> bool:
        if not isinstance(other, AssociationRule):
            return NotImplemented
        return self.support < other.support

    def __str__(self) -> str:
        return f"{self.body} -> {self.head}"
