"""Datenmodell für ein Zeitintervall im Wochenplan."""

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator


class TimeInterval(BaseModel):
    """Ein Termin einer Kursgruppe: Wochentag + Beginn/Ende in Stunden.

    Immutable (frozen) damit Sections hashbar bleiben.
    start < end wird NICHT geprüft – ein verdrehtes Intervall überschneidet
    sich schlicht mit nichts.
    """

    model_config = ConfigDict(frozen=True)

    # Wochentag als Bezeichner aus dem Katalog (z.B. "Mon")
    day: StrictStr
    # Beginn in Stunden, Bruchteile erlaubt (9.5 = 09:30)
    start: float
    # Ende in Stunden
    end: float

    @field_validator("start", "end", mode="before")
    @classmethod
    def _require_number(cls, value):
        """Nur echte Zahlen; Strings und Booleans werden nicht umgedeutet."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Zahl erwartet, nicht {value!r}")
        return value

    def overlaps(self, other: "TimeInterval") -> bool:
        """Halboffene Überschneidung am selben Tag; bloßes Berühren zählt nicht."""
        return (
            self.day == other.day
            and max(self.start, other.start) < min(self.end, other.end)
        )

    def __str__(self) -> str:
        return f"{self.day} {self.start:g}-{self.end:g}"
