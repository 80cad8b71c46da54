"""Catalog: Kurskatalog + Gruppierung nach Kurs-Code (Pydantic v2)."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from pydantic import BaseModel

from models.section import Section


@dataclass(frozen=True)
class CourseGroup:
    """Alle Sections mit gleichem Kurs-Code.

    Höchstens eine davon landet in einer Kombination; die Gruppe darf auch
    ganz übersprungen werden.
    """

    code: str
    sections: tuple[Section, ...]

    def candidates(self, include_closed: bool) -> Iterator[Section]:
        """Wählbare Sections in Katalog-Reihenfolge."""
        for section in self.sections:
            if section.closed and not include_closed:
                continue
            yield section

    def max_credits(self, include_closed: bool) -> int:
        """Höchste erreichbare Credits dieser Gruppe (0 wenn nichts wählbar)."""
        return max(
            (s.credits for s in self.candidates(include_closed)), default=0
        )

    @property
    def all_closed(self) -> bool:
        return all(s.closed for s in self.sections)


def group_sections(sections: Iterable[Section]) -> list[CourseGroup]:
    """Gruppiert Sections nach Code.

    Gruppen sind nach Code sortiert, damit wiederholte Läufe denselben
    Suchbaum durchlaufen. Innerhalb einer Gruppe bleibt die Katalog-
    Reihenfolge erhalten.
    """
    by_code: dict[str, list[Section]] = {}
    for section in sections:
        by_code.setdefault(section.code, []).append(section)
    return [
        CourseGroup(code=code, sections=tuple(by_code[code]))
        for code in sorted(by_code)
    ]


class Catalog(BaseModel):
    """Vollständiger Kurskatalog (flache Liste aller Sections)."""

    sections: list[Section] = []

    # ─── Übersicht ───

    @property
    def is_empty(self) -> bool:
        return not self.sections

    @property
    def codes(self) -> list[str]:
        """Alle Kurs-Codes, sortiert."""
        return sorted({s.code for s in self.sections})

    def groups(self) -> list[CourseGroup]:
        """Gruppierte Alternativen (siehe group_sections)."""
        return group_sections(self.sections)

    def summary(self) -> str:
        """Kurze Übersicht über den Katalog."""
        groups = self.groups()
        num_closed = sum(1 for s in self.sections if s.closed)
        only_closed = [g.code for g in groups if g.all_closed]
        lines = [
            f"Kurse: {len(groups)}",
            f"Gruppen (Sections): {len(self.sections)} "
            f"({num_closed} geschlossen)",
            f"Credits (max. je Kurs, Summe): "
            f"{sum(g.max_credits(include_closed=True) for g in groups)}",
            f"Nur geschlossene Gruppen: {', '.join(only_closed)}" if only_closed else "",
        ]
        return "\n".join(l for l in lines if l)

    # ─── Persistenz ────────────────────────────────────────────────────────

    def to_records(self) -> list[dict]:
        """Katalog im Eingabeformat (Liste von Section-Records)."""
        return [s.to_record() for s in self.sections]

    def save_json(self, path: Path) -> None:
        """Speichert den Katalog im Eingabeformat als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_records(), f, indent=2, ensure_ascii=False)
