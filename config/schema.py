from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ─── PLANER-OPTIONEN ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration des Kursplaners.

    Die Schlüssel der Einstellungsdatei sind camelCase (maxOptions, ...),
    im Code werden die snake_case-Namen verwendet. Beide Schreibweisen
    werden beim Laden akzeptiert.
    """

    model_config = ConfigDict(populate_by_name=True)

    # Maximale Anzahl behaltener Kombinationen pro Suchlauf
    max_options: int = Field(10, alias="maxOptions",
        description="Anzahl der besten Kombinationen pro Report")
    # Report-Datei für den Lauf MIT geschlossenen Gruppen
    output_with_closed: Path = Field(Path("uniminmaxWclosed.txt"),
        alias="outputWithClosed",
        description="Report inkl. geschlossener Gruppen")
    # Report-Datei für den Lauf OHNE geschlossene Gruppen
    output_without_closed: Path = Field(Path("uniminmax.txt"),
        alias="outputWithoutClosed",
        description="Report ohne geschlossene Gruppen")
    # Kurskatalog (JSON oder YAML)
    catalog_path: Path = Field(Path("courses.json"), alias="catalogPath",
        description="Pfad zum Kurskatalog")
    # Optionaler Excel-Export beider Läufe
    excel_output: Optional[Path] = Field(None, alias="excelOutput",
        description="Excel-Datei mit beiden Läufen (leer = kein Export)")
    # Credit-Schranke in der Suche (ändert das Ergebnis nicht)
    prune: bool = Field(True,
        description="Teilbäume ohne Chance auf die Top-Liste abschneiden")

    @property
    def keeps_nothing(self) -> bool:
        """True wenn max_options ≤ 0 – die Suche behält dann keine Kombination."""
        return self.max_options <= 0

    def output_for(self, include_closed: bool) -> Path:
        """Report-Pfad für den jeweiligen Suchlauf."""
        return self.output_with_closed if include_closed else self.output_without_closed
