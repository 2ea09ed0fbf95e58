"""Matching engine and strategies."""

from .engine import ReconciliationEngine, reconcile
from .strategies import (
    MatchingStrategy,
    ExactMatchStrategy,
    FuzzyDateStrategy,
    DescriptionMatchStrategy,
    normalize_description,
)

__all__ = [
    "ReconciliationEngine",
    "reconcile",
    "MatchingStrategy",
    "ExactMatchStrategy",
    "FuzzyDateStrategy",
    "DescriptionMatchStrategy",
    "normalize_description",
]
