"""Validierung einer fertigen Bestenliste.

Prüft die Suchergebnisse unabhängig von der Suche selbst: Kapazität,
Sortierung, höchstens eine Gruppe pro Kurs, keine Überschneidungen, keine
geschlossenen Gruppen im Lauf ohne geschlossene, korrekte Credit-Summen.
"""

from itertools import combinations
from typing import Literal, Sequence

from pydantic import BaseModel

from models.catalog import CourseGroup
from solver.conflicts import conflicts
from solver.ranking import RankedSet


class ValidationViolation(BaseModel):
    """Eine einzelne Verletzung."""

    severity: Literal["error", "warning"]
    check: str           # z.B. "time_conflict"
    description: str
    option: int          # 1-basierte Optionsnummer, 0 = ganze Liste


class ValidationReport(BaseModel):
    """Ergebnis der Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Bestenliste-Validierung", border_style="cyan"))

        if not self.violations:
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Prüfung", width=22)
        table.add_column("Option", width=7)
        table.add_column("Beschreibung")
        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.check,
                str(v.option) if v.option else "—",
                v.description,
            )
        console.print(table)


class PlanValidator:
    """Prüft eine RankedSet gegen die Kursgruppen, aus denen sie entstand."""

    def validate(
        self,
        ranked: RankedSet,
        groups: Sequence[CourseGroup],
        include_closed: bool,
    ) -> ValidationReport:
        violations: list[ValidationViolation] = []
        known = {g.code: set(g.sections) for g in groups}
        plans = ranked.entries()

        if len(plans) > max(ranked.capacity, 0):
            violations.append(ValidationViolation(
                severity="error", check="capacity", option=0,
                description=f"{len(plans)} Einträge bei Kapazität {ranked.capacity}",
            ))

        totals = [p.total_credits for p in plans]
        if totals != sorted(totals, reverse=True):
            violations.append(ValidationViolation(
                severity="error", check="order", option=0,
                description=f"Nicht absteigend sortiert: {totals}",
            ))

        seen: set[tuple[str, ...]] = set()
        for num, plan in enumerate(plans, 1):
            codes = [s.code for s in plan.sections]
            if len(codes) != len(set(codes)):
                violations.append(ValidationViolation(
                    severity="error", check="one_per_course", option=num,
                    description=f"Kurs mehrfach gewählt: {codes}",
                ))

            for section in plan.sections:
                if section not in known.get(section.code, set()):
                    violations.append(ValidationViolation(
                        severity="error", check="unknown_section", option=num,
                        description=f"{section.label} gehört zu keiner Kursgruppe",
                    ))
                if section.closed and not include_closed:
                    violations.append(ValidationViolation(
                        severity="error", check="closed_section", option=num,
                        description=f"{section.label} ist geschlossen",
                    ))

            for a, b in combinations(plan.sections, 2):
                if conflicts(a.schedule, b.schedule):
                    violations.append(ValidationViolation(
                        severity="error", check="time_conflict", option=num,
                        description=f"{a.label} überschneidet sich mit {b.label}",
                    ))

            actual = sum(s.credits for s in plan.sections)
            if actual != plan.total_credits:
                violations.append(ValidationViolation(
                    severity="error", check="credit_sum", option=num,
                    description=f"Summe {actual} ≠ angegeben {plan.total_credits}",
                ))

            key = tuple(sorted((s.code, s.group) for s in plan.sections))
            if key in seen:
                violations.append(ValidationViolation(
                    severity="warning", check="duplicate", option=num,
                    description="Gleiche Zusammensetzung wie eine frühere Option",
                ))
            seen.add(key)

        return ValidationReport(
            violations=violations,
            is_valid=not any(v.severity == "error" for v in violations),
        )
