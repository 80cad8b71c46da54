"""Excel-Import und Template-Generator für Kurskataloge.

Template-Generator: Excel-Vorlage mit Blatt "Kurse" und Beispielzeilen.
Import-Funktion:    Excel → Catalog mit Zeilen-genauen Fehlermeldungen.

Termine stehen in einer Zelle: "Mon 9-10.5; Wed 9-10.5".
"""

import re
from pathlib import Path

from pydantic import ValidationError

from config.defaults import example_catalog_records
from models.catalog import Catalog
from models.section import Section


class ExcelImportError(Exception):
    """Fehler beim Excel-Import."""


SHEET_NAME = "Kurse"
HEADERS = ["Code", "Gruppe", "Geschlossen", "Credits", "Zeiten"]

_TRUE_VALUES = {"ja", "j", "x", "true", "1", "yes", "y"}
_FALSE_VALUES = {"", "nein", "n", "false", "0", "no"}

_TIME_RE = re.compile(
    r"^\s*(?P<day>[A-Za-zÄÖÜäöü]+)\s*:?\s*"
    r"(?P<start>\d+(?:[.,]\d+)?)\s*-\s*(?P<end>\d+(?:[.,]\d+)?)\s*$"
)


def _parse_times(raw: str) -> list[dict]:
    """Parst "Mon 9-10.5; Wed 9-10.5" → [{day, start, end}, ...]."""
    result = []
    for token in raw.replace("\n", ";").split(";"):
        if not token.strip():
            continue
        m = _TIME_RE.match(token)
        if m is None:
            raise ValueError(f"Termin '{token.strip()}' nicht lesbar (erwartet z.B. 'Mon 9-10.5')")
        result.append({
            "day": m.group("day"),
            "start": float(m.group("start").replace(",", ".")),
            "end": float(m.group("end").replace(",", ".")),
        })
    return result


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"'{raw}' ist kein Ja/Nein-Wert")


def _parse_credits(raw: str) -> int:
    value = float(raw.replace(",", "."))
    if not value.is_integer():
        raise ValueError(f"Credits '{raw}' sind keine ganze Zahl")
    return int(value)


def _format_times(times: list[dict]) -> str:
    return "; ".join(f"{t['day']} {t['start']:g}-{t['end']:g}" for t in times)


def generate_template(path: Path) -> Path:
    """Erzeugt die Excel-Vorlage mit Beispielzeilen."""
    try:
        import openpyxl
        from openpyxl.styles import Alignment, Font, PatternFill
        from openpyxl.utils import get_column_letter
    except ImportError:
        raise ImportError("openpyxl nicht installiert. Bitte: pip install openpyxl")

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_NAME

    hdr_font = Font(bold=True, color="FFFFFF", size=11)
    hdr_fill = PatternFill("solid", fgColor="2E6DA4")
    ex_font = Font(italic=True, color="888888")
    center = Alignment(horizontal="center", vertical="center")

    for col, h in enumerate(HEADERS, 1):
        cell = ws.cell(row=1, column=col, value=h)
        cell.font = hdr_font
        cell.fill = hdr_fill
        cell.alignment = center
    for col, width in enumerate([12, 10, 14, 10, 40], 1):
        ws.column_dimensions[get_column_letter(col)].width = width

    for r, rec in enumerate(example_catalog_records(), 2):
        values = [
            rec["code"],
            rec.get("group", ""),
            "ja" if rec.get("closed", False) else "nein",
            rec["credits"],
            _format_times(rec["times"]),
        ]
        for col, val in enumerate(values, 1):
            ws.cell(row=r, column=col, value=val).font = ex_font

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


class ExcelImporter:
    """Importiert einen Kurskatalog aus einer Excel-Vorlage."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _open(self):
        try:
            import openpyxl
            return openpyxl.load_workbook(
                str(self.path), read_only=True, data_only=True
            )
        except FileNotFoundError:
            raise ExcelImportError(f"Datei nicht gefunden: {self.path}")
        except Exception as e:
            raise ExcelImportError(f"Fehler beim Öffnen der Excel-Datei: {e}")

    def _sheet_rows(self, sheet) -> list[tuple[int, dict]]:
        """Tabellenblatt → [(Excel-Zeile, {header: wert})] (erste Zeile = Header)."""
        rows = list(sheet.iter_rows(values_only=True))
        if not rows:
            return []
        headers = [
            str(h).strip().lower() if h is not None else f"col_{i}"
            for i, h in enumerate(rows[0])
        ]
        result = []
        for excel_row, row in enumerate(rows[1:], 2):
            if all(v is None or v == "" for v in row):
                continue
            result.append((excel_row, {
                headers[i]: (str(v).strip() if v is not None else "")
                for i, v in enumerate(row)
                if i < len(headers)
            }))
        return result

    def run(self) -> Catalog:
        wb = self._open()
        try:
            sheet = None
            for sn in wb.sheetnames:
                if sn.strip().lower() == SHEET_NAME.lower():
                    sheet = wb[sn]
                    break
            if sheet is None:
                raise ExcelImportError(f"Blatt '{SHEET_NAME}' fehlt in {self.path}")

            sections: list[Section] = []
            for excel_row, row in self._sheet_rows(sheet):
                try:
                    record = {
                        "code": row.get("code", ""),
                        "group": row.get("gruppe", ""),
                        "closed": _parse_bool(row.get("geschlossen", "")),
                        "credits": _parse_credits(row.get("credits", "")),
                        "times": _parse_times(row.get("zeiten", "")),
                    }
                    if not record["code"]:
                        raise ValueError("Code fehlt")
                    sections.append(Section.model_validate(record))
                except (ValueError, ValidationError) as e:
                    raise ExcelImportError(f"Zeile {excel_row}: {e}") from e
        finally:
            wb.close()
        return Catalog(sections=sections)


def import_from_excel(path: Path) -> Catalog:
    """Kurzform für ExcelImporter(path).run()."""
    return ExcelImporter(path).run()
