from .apriori import Apriori, apriori
from .association_rules import association_rules
from .config import Configuration, ConfigurationBuilder, RuleGeneratorBuilder
from .filtering import AssociationRuleFilter, Filter, ItemSetFilter
from .itemset import ItemSet, ItemSetBuilder
from .metrics import (
    AntecedentSupport,
    Confidence,
    ConsequentSupport,
    Conviction,
    Leverage,
    Lift,
    Metric,
    Operator,
    Support,
)
from .miner import AprioriMiner, FrequentItemSetMiner
from .operators import ArithmeticMean, HarmonicMean
from .output import Output
from .results import FrequentItemSets, RuleSet
from .rule import AssociationRule
from .rule_generator import AssociationRuleGenerator, ConfidenceRuleGenerator
from .sorting import (
    AssociationRuleSorting,
    AssociationRuleTieBreaker,
    ItemSetSorting,
    ItemSetTieBreaker,
    Order,
)
from .tasks import AssociationRuleGeneratorTask, FrequentItemSetMinerTask
from .transactions import (
    FileSource,
    ListSource,
    TransactionSource,
    as_source,
    from_one_hot,
    from_pandas,
    from_polars,
    from_transactions,
    read_transactions,
)

__all__ = [
    "apriori",
    "Apriori",
    "association_rules",
    "Configuration",
    "ConfigurationBuilder",
    "RuleGeneratorBuilder",
    "Output",
    "ItemSet",
    "ItemSetBuilder",
    "AssociationRule",
    "FrequentItemSets",
    "RuleSet",
    "FrequentItemSetMiner",
    "AprioriMiner",
    "AssociationRuleGenerator",
    "ConfidenceRuleGenerator",
    "FrequentItemSetMinerTask",
    "AssociationRuleGeneratorTask",
    "Operator",
    "Metric",
    "Support",
    "Confidence",
    "Lift",
    "Leverage",
    "Conviction",
    "AntecedentSupport",
    "ConsequentSupport",
    "ArithmeticMean",
    "HarmonicMean",
    "Order",
    "ItemSetSorting",
    "AssociationRuleSorting",
    "ItemSetTieBreaker",
    "AssociationRuleTieBreaker",
    "Filter",
    "ItemSetFilter",
    "AssociationRuleFilter",
    "TransactionSource",
    "ListSource",
    "FileSource",
    "as_source",
    "from_transactions",
    "from_pandas",
    "from_polars",
    "from_one_hot",
    "read_transactions",
]
