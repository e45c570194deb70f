from __future__ import annotations

from dataclasses import dataclass

from .config import Configuration
from .results import FrequentItemSets, RuleSet


@dataclass(frozen=True)
class Output:
    """The result of :meth:`Apriori.execute <basketminer.apriori.Apriori.execute>`.

    ``start_time`` and ``end_time`` are seconds since the epoch, as returned
    by :func:`time.time`.  ``rule_set`` is ``None`` unless rule generation
    was enabled.  Both collections are stored as read-only copies.
    """

    configuration: Configuration
    start_time: float
    end_time: float
    frequent_item_sets: FrequentItemSets
    rule_set: RuleSet | None = None

    def __post_init__(self) -> None:
        if self.configuration is None:
            raise ValueError("`configuration` may not be None.")
        if self.frequent_item_sets is None:
            raise ValueError("`frequent_item_sets` may not be None.")
        if self.end_time < self.start_time:
            raise ValueError(f"`end_time` must be at least `start_time` ({self.start_time}). Got {self.end_time}.")

        object.__setattr__(self, "frequent_item_sets", self.frequent_item_sets.as_read_only())
        if self.rule_set is not None:
            object.__setattr__(self, "rule_set", self.rule_set.as_read_only())

    @property
    def runtime(self) -> float:
        """Wall-clock seconds spent in the run."""
        return self.end_time - self.start_time
