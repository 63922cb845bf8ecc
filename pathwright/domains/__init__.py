"""Domain selection — which engineering domain and element type a request needs."""

from pathwright.domains.selector import DomainSelector
from pathwright.domains.tables import DEFAULT_TABLES, ClassifierTables, KeywordRule

__all__ = [
    "ClassifierTables",
    "DEFAULT_TABLES",
    "DomainSelector",
    "KeywordRule",
]
