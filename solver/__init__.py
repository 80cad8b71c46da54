"""Solver-Modul (Backtracking-Suche + Top-K-Bestenliste)."""

from .conflicts import conflicts, conflicts_with_any
from .ranking import RankedPlan, RankedSet
from .search import CombinationSearch, SearchStats, find_best_combinations

__all__ = [
    "conflicts",
    "conflicts_with_any",
    "RankedPlan",
    "RankedSet",
    "CombinationSearch",
    "SearchStats",
    "find_best_combinations",
]
