"""Text-Report der Bestenliste (ein Report pro Suchlauf).

Format:
    Best options (with closed groups), sorted by total credits:

    Option 1 (Total Credits = 7):
      Course: CS1 (Group B), Credits: 3
        - Mon: 10 to 11
"""

import logging
from pathlib import Path
from typing import Iterable

from rich.console import Console

from export.helpers import format_interval, variant_label
from solver.ranking import RankedPlan, RankedSet

logger = logging.getLogger(__name__)
console = Console()


class ReportWriteError(Exception):
    """Report-Datei konnte nicht geschrieben werden."""


def format_report(ranked: RankedSet | Iterable[RankedPlan], include_closed: bool) -> str:
    """Baut den kompletten Report-Text."""
    lines = [
        f"Best options ({variant_label(include_closed)} closed groups), "
        f"sorted by total credits:",
        "",
    ]
    for num, plan in enumerate(ranked, 1):
        lines.append(f"Option {num} (Total Credits = {plan.total_credits}):")
        for section in plan.sections:
            lines.append(f"  Course: {section.label}, Credits: {section.credits}")
            for t in section.schedule:
                lines.append(f"    - {format_interval(t)}")
        lines.append("")
    return "\n".join(lines) + "\n"


def write_report(
    ranked: RankedSet | Iterable[RankedPlan], path: Path, include_closed: bool
) -> Path:
    """Schreibt den Report; legt fehlende Verzeichnisse an."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(format_report(ranked, include_closed))
    except OSError as e:
        logger.error(f"Report konnte nicht geschrieben werden: {path} ({e})")
        raise ReportWriteError(f"Ausgabedatei nicht beschreibbar: {path}") from e

    console.print(f"[green]✓[/green] Report geschrieben: {path}")
    return path
