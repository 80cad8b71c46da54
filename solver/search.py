"""Kombinations-Suche (Backtracking-DFS über die Kursgruppen).

Architektur:
  - Eine Ebene pro Kurs-Code, Reihenfolge wie vom Catalog geliefert
  - Pro Ebene: erst jede wählbare, konfliktfreie Section (push → recurse → pop),
    danach die Gruppe überspringen
  - Am Blatt wird eine Kopie des Puffers in die RankedSet eingefügt
  - Optionale Credit-Schranke: sobald die Bestenliste voll ist, werden
    Teilbäume abgeschnitten, die höchstens den aktuellen Mindestwert erreichen.
    Solche Kandidaten würden hinter allen Gleichstand-Einträgen landen und
    sofort wieder verdrängt – das Ergebnis bleibt identisch.
"""

import time
import logging
from dataclasses import dataclass
from typing import Sequence

from models.catalog import CourseGroup
from models.section import Section
from solver.conflicts import conflicts_with_any
from solver.ranking import RankedSet

logger = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """Zähler eines Suchlaufs (nur für Logging/Übersicht)."""

    nodes: int = 0          # besuchte Knoten im Suchbaum
    candidates: int = 0     # vollständige Kombinationen (Blätter)
    conflicts: int = 0      # wegen Überschneidung verworfene Sections
    pruned: int = 0         # per Credit-Schranke abgeschnittene Teilbäume
    elapsed_seconds: float = 0.0


class CombinationSearch:
    """Durchsucht alle Kombinationen aus höchstens einer Section pro Kurs.

    Verwendung:
        search = CombinationSearch(catalog.groups(), include_closed=False, max_options=10)
        ranked = search.run()
    """

    def __init__(
        self,
        groups: Sequence[CourseGroup],
        include_closed: bool,
        max_options: int,
        prune: bool = True,
    ) -> None:
        self.groups = list(groups)
        self.include_closed = include_closed
        self.max_options = max_options
        self.prune = prune
        self.stats = SearchStats()

        # Wählbare Sections pro Ebene (einmal gefiltert)
        self._candidates: list[list[Section]] = [
            list(g.candidates(include_closed)) for g in self.groups
        ]
        # _remaining_best[i] = max. erreichbare Credits ab Ebene i
        self._remaining_best: list[int] = [0] * (len(self.groups) + 1)
        for i in range(len(self.groups) - 1, -1, -1):
            best_here = max((s.credits for s in self._candidates[i]), default=0)
            self._remaining_best[i] = self._remaining_best[i + 1] + best_here

        self._current: list[Section] = []
        self._current_total = 0
        self._ranked = RankedSet(max_options)

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def run(self) -> RankedSet:
        """Führt die Suche aus und gibt die Bestenliste zurück."""
        t0 = time.time()
        label = "mit" if self.include_closed else "ohne"

        if not self.groups:
            logger.info("Leerer Katalog: keine Kombinationen")
        elif self.max_options <= 0:
            logger.warning(
                f"max_options={self.max_options}: Suche ({label} geschlossene Gruppen) "
                f"behält keine Kombination"
            )
        else:
            self._descend(0)

        self.stats.elapsed_seconds = time.time() - t0
        logger.info(
            f"Suche {label} geschlossene Gruppen beendet: "
            f"{len(self._ranked)} Kombinationen behalten | "
            f"Knoten: {self.stats.nodes} | "
            f"Kandidaten: {self.stats.candidates} | "
            f"Abgeschnitten: {self.stats.pruned} | "
            f"Zeit: {self.stats.elapsed_seconds:.2f}s"
        )
        return self._ranked

    # ─── Rekursion ────────────────────────────────────────────────────────────

    def _descend(self, index: int) -> None:
        self.stats.nodes += 1

        if index >= len(self.groups):
            self.stats.candidates += 1
            self._ranked.insert(self._current, self._current_total)
            return

        if self._cannot_improve(index):
            self.stats.pruned += 1
            return

        for section in self._candidates[index]:
            if conflicts_with_any(section, self._current):
                self.stats.conflicts += 1
                continue
            self._current.append(section)
            self._current_total += section.credits
            self._descend(index + 1)
            self._current_total -= section.credits
            self._current.pop()

        # Kurs ganz auslassen
        self._descend(index + 1)

    def _cannot_improve(self, index: int) -> bool:
        """Credit-Schranke: Teilbaum erreicht höchstens den aktuellen Mindestwert."""
        if not self.prune or not self._ranked.is_full:
            return False
        bound = self._current_total + self._remaining_best[index]
        return bound <= self._ranked.min_total


def find_best_combinations(
    groups: Sequence[CourseGroup],
    include_closed: bool,
    max_options: int,
    prune: bool = True,
) -> RankedSet:
    """Kurzform für CombinationSearch(...).run()."""
    return CombinationSearch(groups, include_closed, max_options, prune=prune).run()
