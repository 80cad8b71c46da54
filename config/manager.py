"""Konfigurationsmanager: Laden, Speichern und Validieren der Einstellungen.

settings.json (Standard) oder settings.yaml – YAML wird mit ruamel.yaml
inkl. Kommentaren geschrieben.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from config.schema import PlannerConfig

logger = logging.getLogger(__name__)
console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120

_YAML_SUFFIXES = {".yaml", ".yml"}


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Kursplaner - Einstellungen
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_FIELD_COMMENTS = {
    "maxOptions": "Anzahl der besten Kombinationen pro Report (≤ 0 = keine)",
    "outputWithClosed": "Report inkl. geschlossener Gruppen",
    "outputWithoutClosed": "Report ohne geschlossene Gruppen",
    "catalogPath": "Kurskatalog (JSON oder YAML)",
    "excelOutput": "Optionaler Excel-Export (leer = aus)",
    "prune": "Credit-Schranke in der Suche (Ergebnis bleibt gleich)",
}


class ConfigManager:
    DEFAULT_CONFIG = Path("settings.json")

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Einstellungsdatei existiert."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> PlannerConfig:
        """Lade Einstellungen aus JSON/YAML. Validiert automatisch via Pydantic."""
        target = Path(path or self.DEFAULT_CONFIG)
        if not target.exists():
            raise FileNotFoundError(
                f"Einstellungsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py setup' aus, um sie anzulegen."
            )
        with open(target, "r", encoding="utf-8") as f:
            if target.suffix.lower() in _YAML_SUFFIXES:
                try:
                    raw = yaml.load(f)
                except YAMLError as e:
                    raise ValueError(
                        f"Einstellungsdatei ungültig: {target}\nYAML-Fehler: {e}"
                    ) from e
            else:
                try:
                    raw = json.load(f)
                except json.JSONDecodeError as e:
                    raise ValueError(
                        f"Einstellungsdatei ungültig: {target}\nJSON-Fehler: {e}"
                    ) from e
        try:
            config = PlannerConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Einstellungsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

        if config.keeps_nothing:
            logger.warning(
                f"maxOptions={config.max_options} in {target}: "
                f"Reports bleiben leer"
            )
        return config

    # ─── Speichern ───

    def save(self, config: PlannerConfig, path: Optional[Path] = None) -> None:
        """Speichere Einstellungen als JSON oder kommentiertes YAML."""
        target = Path(path or self.DEFAULT_CONFIG)
        target.parent.mkdir(parents=True, exist_ok=True)

        raw = json.loads(config.model_dump_json(by_alias=True))
        with open(target, "w", encoding="utf-8") as f:
            if target.suffix.lower() in _YAML_SUFFIXES:
                f.write(_YAML_HEADER + "\n")
                yaml.dump(self._build_commented_yaml(raw), f)
            else:
                json.dump(raw, f, indent=2)
                f.write("\n")

        console.print(f"[green]✓[/green] Einstellungen gespeichert: {target}")

    def _build_commented_yaml(self, raw: dict) -> CommentedMap:
        """Baut die YAML-Struktur mit Zeilenkommentaren auf."""
        cm = CommentedMap(raw)
        for key, comment in _FIELD_COMMENTS.items():
            if key in cm:
                cm.yaml_add_eol_comment(comment, key)
        return cm
