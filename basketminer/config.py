"""Run configuration and the fluent builders that produce it."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import TYPE_CHECKING, Any

from ._validation import ensure_at_least, ensure_at_most, ensure_greater, ensure_unit_interval

if TYPE_CHECKING:
    from typing_extensions import Self

    from .apriori import Apriori


@dataclass(frozen=True)
class Configuration:
    """Thresholds controlling a run of :class:`~basketminer.apriori.Apriori`.

    Parameters
    ----------
    min_support:
        Minimum support of frequent item sets.  When
        ``frequent_item_set_count`` is set, the lowest support tried.
    max_support:
        Support the threshold search starts at.
    support_delta:
        Step by which the support threshold is lowered between attempts.
    frequent_item_set_count:
        Number of frequent item sets to aim for; ``0`` disables the search
        and mines once at ``min_support``.
    generate_rules:
        Whether association rules are generated as well.
    min_confidence, max_confidence, confidence_delta, rule_count:
        The same settings for the rule generation.
    """

    min_support: float = 0.0
    max_support: float = 1.0
    support_delta: float = 0.1
    frequent_item_set_count: int = 0
    generate_rules: bool = False
    min_confidence: float = 0.0
    max_confidence: float = 1.0
    confidence_delta: float = 0.1
    rule_count: int = 0

    def __post_init__(self) -> None:
        ensure_unit_interval(self.min_support, "min_support")
        ensure_unit_interval(self.max_support, "max_support")
        ensure_at_least(self.max_support, self.min_support, "max_support")
        ensure_greater(self.support_delta, 0.0, "support_delta")
        ensure_at_least(self.frequent_item_set_count, 0, "frequent_item_set_count")
        ensure_unit_interval(self.min_confidence, "min_confidence")
        ensure_unit_interval(self.max_confidence, "max_confidence")
        ensure_at_least(self.max_confidence, self.min_confidence, "max_confidence")
        ensure_greater(self.confidence_delta, 0.0, "confidence_delta")
        ensure_at_least(self.rule_count, 0, "rule_count")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ConfigurationBuilder:
    """Fluent builder for :class:`Configuration`.

    Either a minimum support or a number of frequent item sets to search for
    is usually given up front::

        apriori = Apriori.Builder(0.5).generate_rules(min_confidence=0.8).create()
        apriori = Apriori.Builder(frequent_item_set_count=10).max_support(0.8).create()

    Every setter validates its argument immediately and raises ``ValueError``.
    """

    def __init__(
        self,
        min_support: float | None = None,
        *,
        frequent_item_set_count: int | None = None,
        _configuration: Configuration | None = None,
    ) -> None:
        self._configuration = _configuration if _configuration is not None else Configuration()

        if min_support is not None:
            self.min_support(min_support)
        if frequent_item_set_count is not None:
            self.frequent_item_set_count(frequent_item_set_count)

    def _set(self, **changes: Any) -> Self:
        self._configuration = replace(self._configuration, **changes)
        return self

    def min_support(self, min_support: float) -> Self:
        ensure_unit_interval(min_support, "min_support")
        ensure_at_most(min_support, self._configuration.max_support, "min_support")
        return self._set(min_support=min_support)

    def max_support(self, max_support: float) -> Self:
        ensure_unit_interval(max_support, "max_support")
        ensure_at_least(max_support, self._configuration.min_support, "max_support")
        return self._set(max_support=max_support)

    def support_delta(self, support_delta: float) -> Self:
        ensure_greater(support_delta, 0.0, "support_delta")
        return self._set(support_delta=support_delta)

    def frequent_item_set_count(self, frequent_item_set_count: int) -> Self:
        ensure_at_least(frequent_item_set_count, 0, "frequent_item_set_count")
        return self._set(frequent_item_set_count=frequent_item_set_count)

    def generate_rules(
        self,
        min_confidence: float | None = None,
        *,
        rule_count: int | None = None,
    ) -> RuleGeneratorBuilder:
        """Enable rule generation and continue with a :class:`RuleGeneratorBuilder`."""
        builder = RuleGeneratorBuilder(_configuration=replace(self._configuration, generate_rules=True))

        if min_confidence is not None:
            builder.min_confidence(min_confidence)
        if rule_count is not None:
            builder.rule_count(rule_count)

        return builder

    def build(self) -> Configuration:
        return self._configuration

    def create(self, verbose: int = 0) -> Apriori:
        from .apriori import Apriori

        return Apriori(self._configuration, verbose=verbose)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._configuration!r})"


class RuleGeneratorBuilder(ConfigurationBuilder):
    """A :class:`ConfigurationBuilder` with rule generation enabled."""

    def min_confidence(self, min_confidence: float) -> Self:
        ensure_unit_interval(min_confidence, "min_confidence")
        ensure_at_most(min_confidence, self._configuration.max_confidence, "min_confidence")
        return self._set(min_confidence=min_confidence)

    def max_confidence(self, max_confidence: float) -> Self:
        ensure_unit_interval(max_confidence, "max_confidence")
        ensure_at_least(max_confidence, self._configuration.min_confidence, "max_confidence")
        return self._set(max_confidence=max_confidence)

    def confidence_delta(self, confidence_delta: float) -> Self:
        ensure_greater(confidence_delta, 0.0, "confidence_delta")
        return self._set(confidence_delta=confidence_delta)

    def rule_count(self, rule_count: int) -> Self:
        ensure_at_least(rule_count, 0, "rule_count")
        return self._set(rule_count=rule_count)
