"""Gemeinsame Hilfsfunktionen für Text- und Excel-Export."""

from config.defaults import DAY_ORDER
from models.section import Section
from models.timeslot import TimeInterval

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "header":   "4472C4",
    "option":   "B3D4FF",
    "closed":   "FF9999",
    "alt":      "F5F5F5",
}


def format_hour(value: float) -> str:
    """Kürzeste Darstellung einer Stundenangabe: 9.0 → "9", 10.5 → "10.5"."""
    return f"{value:g}"


def format_interval(t: TimeInterval) -> str:
    """Termin als "Mon: 9 to 10"."""
    return f"{t.day}: {format_hour(t.start)} to {format_hour(t.end)}"


def format_schedule(section: Section, sep: str = "; ") -> str:
    """Alle Termine einer Section in einer Zeile."""
    return sep.join(format_interval(t) for t in section.schedule)


def day_sort_key(day: str) -> tuple[int, str]:
    """Sortierschlüssel für Wochentage; unbekannte Bezeichner ans Ende."""
    if day in DAY_ORDER:
        return DAY_ORDER.index(day), day
    return len(DAY_ORDER), day


def variant_label(include_closed: bool) -> str:
    """"with" / "without" für Report-Überschriften."""
    return "with" if include_closed else "without"
