"""Datenmodell für eine Kursgruppe (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from models.timeslot import TimeInterval


class Section(BaseModel):
    """Eine belegbare Kursgruppe (z.B. eine bestimmte Vorlesungsgruppe).

    Alle Sections mit gleichem code sind Alternativen zueinander.
    Im Katalog heißt der Stundenplan "times", im Code schedule.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Strikte Typen: "3" oder true als Credits sind Eingabefehler
    code: StrictStr
    group: StrictStr = ""
    closed: StrictBool = False
    credits: StrictInt = Field(ge=0)
    schedule: tuple[TimeInterval, ...] = Field(alias="times")

    @property
    def label(self) -> str:
        """Anzeigename, z.B. "CS1" oder "CS1 (Group B)"."""
        if self.group:
            return f"{self.code} (Group {self.group})"
        return self.code

    def to_record(self) -> dict:
        """Section im Katalog-Eingabeformat."""
        return self.model_dump(mode="json", by_alias=True)
