"""Begrenzte Bestenliste der gefundenen Kombinationen.

Sortiert absteigend nach Credits. Gleiche Credits bleiben in
Fund-Reihenfolge. Bei Überlauf fliegt genau ein Eintrag mit den wenigsten
Credits raus, und zwar der zuletzt eingefügte davon (letzte Position).
"""

from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from models.section import Section


@dataclass(frozen=True)
class RankedPlan:
    """Eine behaltene Kombination (unabhängige Kopie des Suchpuffers)."""

    total_credits: int
    sections: tuple[Section, ...]

    @property
    def codes(self) -> tuple[str, ...]:
        """Zusammensetzung nach Kurs-Code."""
        return tuple(s.code for s in self.sections)


class RankedSet:
    """Top-K-Liste mit fester Kapazität.

    capacity ≤ 0 behält nichts.
    """

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._plans: list[RankedPlan] = []
        # Negierte Credits, parallel zu _plans (aufsteigend → bisect-fähig)
        self._keys: list[int] = []

    def insert(self, sections: Iterable[Section], total_credits: Optional[int] = None) -> None:
        """Fügt eine Kombination ein und kürzt danach auf die Kapazität."""
        plan_sections = tuple(sections)
        if total_credits is None:
            total_credits = sum(s.credits for s in plan_sections)

        key = -total_credits
        pos = bisect_right(self._keys, key)
        self._keys.insert(pos, key)
        self._plans.insert(pos, RankedPlan(total_credits, plan_sections))

        while len(self._plans) > max(self.capacity, 0):
            self._keys.pop()
            self._plans.pop()

    # ─── Abfragen ───

    @property
    def is_full(self) -> bool:
        return len(self._plans) >= self.capacity

    @property
    def min_total(self) -> Optional[int]:
        """Wenigste Credits in der Liste (None wenn leer)."""
        return self._plans[-1].total_credits if self._plans else None

    @property
    def best_total(self) -> Optional[int]:
        return self._plans[0].total_credits if self._plans else None

    def entries(self) -> list[RankedPlan]:
        """Alle Einträge, absteigend nach Credits."""
        return list(self._plans)

    def as_pairs(self) -> list[tuple[int, tuple[Section, ...]]]:
        """Einträge als schlichte (total_credits, sections)-Paare."""
        return [(p.total_credits, p.sections) for p in self._plans]

    def __len__(self) -> int:
        return len(self._plans)

    def __iter__(self) -> Iterator[RankedPlan]:
        return iter(list(self._plans))

    def __bool__(self) -> bool:
        return bool(self._plans)

    def __repr__(self) -> str:
        totals = [p.total_credits for p in self._plans]
        return f"RankedSet(capacity={self.capacity}, totals={totals})"
