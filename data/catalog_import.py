"""Import des Kurskatalogs aus JSON oder YAML.

Fehlende/unlesbare Datei: Fehler wird geloggt, der Lauf geht mit leerem
Katalog weiter. Kaputte Einträge dagegen brechen den Import ab
(CatalogImportError mit Index des Eintrags).
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from models.catalog import Catalog
from models.section import Section

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


class CatalogImportError(Exception):
    """Fehler beim Katalog-Import (ungültiger Inhalt)."""


def _read_raw(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in _YAML_SUFFIXES:
            return YAML(typ="safe").load(f)
        return json.load(f)


def parse_records(raw) -> Catalog:
    """Liste von Section-Records (oder {"courses": [...]}) → Catalog."""
    if isinstance(raw, dict) and "courses" in raw:
        raw = raw["courses"]
    if raw is None:
        return Catalog()
    if not isinstance(raw, list):
        raise CatalogImportError(
            f"Katalog muss eine Liste von Kursen sein, nicht {type(raw).__name__}"
        )

    sections: list[Section] = []
    for idx, item in enumerate(raw):
        try:
            sections.append(Section.model_validate(item))
        except ValidationError as e:
            code = item.get("code", "?") if isinstance(item, dict) else "?"
            raise CatalogImportError(
                f"Eintrag {idx} ({code}) ungültig:\n{e}"
            ) from e
    return Catalog(sections=sections)


def load_catalog(path: Path) -> Catalog:
    """Lädt den Katalog. Fehlende/unlesbare Datei → leerer Katalog."""
    path = Path(path)
    try:
        raw = _read_raw(path)
    except OSError as e:
        logger.error(f"Kursdatei konnte nicht geöffnet werden: {path} ({e})")
        return Catalog()
    except (json.JSONDecodeError, YAMLError) as e:
        raise CatalogImportError(f"Kursdatei {path} nicht lesbar: {e}") from e

    catalog = parse_records(raw)
    logger.info(
        f"Katalog geladen: {path} | {len(catalog.sections)} Gruppen, "
        f"{len(catalog.codes)} Kurse"
    )
    return catalog
