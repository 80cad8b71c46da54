"""Testdaten-Generator für den Kursplaner.

Erzeugt einen reproduzierbaren Zufallskatalog (gleicher Seed → gleicher
Katalog). Termine liegen auf einem Raster von 1,5-Stunden-Blöcken, damit
sowohl Überschneidungen als auch exakt aneinander grenzende Termine
vorkommen.
"""

import random
from typing import Optional

from models.catalog import Catalog
from models.section import Section
from models.timeslot import TimeInterval

# ─── Katalog-Bausteine ────────────────────────────────────────────────────────

_PREFIXES = ["CS", "MA", "PH", "EE", "BIO", "CH", "EC", "HI"]

_DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri"]

# Blockanfänge (Stunden); Blöcke dauern 1,5 h, 10.5 schließt direkt an 9.0 an
_BLOCK_STARTS = [8.0, 9.0, 10.5, 12.0, 13.5, 15.0, 16.5]
_BLOCK_LENGTH = 1.5

# (Credits, Gewicht)
_CREDIT_WEIGHTS: list[tuple[int, int]] = [(2, 2), (3, 5), (4, 4), (5, 2), (6, 1)]


class FakeCatalogGenerator:
    """Erzeugt Zufallskataloge für Tests und Demos."""

    def __init__(self, seed: int = 42) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def generate(
        self,
        num_courses: int = 8,
        sections_per_course: int = 3,
        closed_ratio: float = 0.2,
        meetings_per_week: Optional[int] = None,
    ) -> Catalog:
        """Erzeugt num_courses Kurse mit je 1..sections_per_course Gruppen."""
        codes = self._course_codes(num_courses)
        sections: list[Section] = []
        for code in codes:
            credits = self._pick_credits()
            meetings = meetings_per_week or self._rng.choice([1, 2, 2, 3])
            num_sections = self._rng.randint(1, max(1, sections_per_course))
            for idx in range(num_sections):
                sections.append(Section(
                    code=code,
                    group="" if num_sections == 1 else chr(ord("A") + idx),
                    closed=self._rng.random() < closed_ratio,
                    credits=credits,
                    schedule=self._schedule(meetings),
                ))
        return Catalog(sections=sections)

    # ─── Bausteine ───

    def _course_codes(self, n: int) -> list[str]:
        codes: list[str] = []
        while len(codes) < n:
            code = f"{self._rng.choice(_PREFIXES)}{self._rng.randint(100, 499)}"
            if code not in codes:
                codes.append(code)
        return codes

    def _pick_credits(self) -> int:
        values = [c for c, _ in _CREDIT_WEIGHTS]
        weights = [w for _, w in _CREDIT_WEIGHTS]
        return self._rng.choices(values, weights=weights, k=1)[0]

    def _schedule(self, meetings: int) -> tuple[TimeInterval, ...]:
        days = self._rng.sample(_DAYS, k=min(meetings, len(_DAYS)))
        start = self._rng.choice(_BLOCK_STARTS)
        return tuple(
            TimeInterval(day=day, start=start, end=start + _BLOCK_LENGTH)
            for day in sorted(days, key=_DAYS.index)
        )

    def print_summary(self, catalog: Catalog) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht des erzeugten Katalogs aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title=f"Erzeugter Katalog (Seed {self.seed})", box=box.ROUNDED)
        table.add_column("Kurs", style="bold cyan")
        table.add_column("Gruppen", justify="right")
        table.add_column("Credits", justify="right")
        table.add_column("Geschlossen", justify="right")

        for group in catalog.groups():
            table.add_row(
                group.code,
                str(len(group.sections)),
                str(group.max_credits(include_closed=True)),
                str(sum(1 for s in group.sections if s.closed)),
            )
        console.print(table)
