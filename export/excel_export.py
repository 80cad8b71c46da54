"""Excel-Export der Bestenlisten (openpyxl)."""

import logging
from pathlib import Path

from export.helpers import COLORS, day_sort_key, format_hour, format_schedule
from export.text_report import ReportWriteError
from solver.ranking import RankedSet

logger = logging.getLogger(__name__)


class ExcelExporter:
    """Exportiert die Bestenlisten beider Suchläufe in eine Excel-Datei.

    Ein Blatt pro Lauf ("Mit geschlossenen", "Ohne geschlossene") plus ein
    Wochenblatt pro Lauf für die beste Kombination.
    """

    # Spaltenbreiten (Excel-Einheiten)
    COL_OPTION_W  = 9
    COL_TOTAL_W   = 10
    COL_COURSE_W  = 14
    COL_GROUP_W   = 9
    COL_CREDIT_W  = 9
    COL_TIMES_W   = 48

    SHEET_TITLES = {True: "Mit geschlossenen", False: "Ohne geschlossene"}

    def __init__(self, results: dict[bool, RankedSet]):
        # include_closed → RankedSet
        self.results = results

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        """Erstellt die Excel-Datei mit allen Sheets."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        for include_closed in (True, False):
            if include_closed not in self.results:
                continue
            ranked = self.results[include_closed]
            self._sheet_options(wb, self.SHEET_TITLES[include_closed], ranked)
            self._sheet_week(wb, f"Woche {self.SHEET_TITLES[include_closed]}", ranked)

        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            logger.error(f"Excel-Datei konnte nicht geschrieben werden: {output_path} ({e})")
            raise ReportWriteError(f"Ausgabedatei nicht beschreibbar: {output_path}") from e
        return output_path

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header_row(self, ws, headers: list[str]) -> None:
        from openpyxl.styles import Alignment, Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = border

    # ─── Blätter ──────────────────────────────────────────────────────────────

    def _sheet_options(self, wb, title: str, ranked: RankedSet) -> None:
        """Eine Zeile pro gewählter Section, gruppiert nach Option."""
        from openpyxl.utils import get_column_letter
        ws = wb.create_sheet(title)
        self._write_header_row(
            ws, ["Option", "Credits", "Kurs", "Gruppe", "Kurs-Cr.", "Termine"]
        )
        widths = [self.COL_OPTION_W, self.COL_TOTAL_W, self.COL_COURSE_W,
                  self.COL_GROUP_W, self.COL_CREDIT_W, self.COL_TIMES_W]
        for col, w in enumerate(widths, 1):
            ws.column_dimensions[get_column_letter(col)].width = w

        border = self._thin_border()
        row = 2
        for num, plan in enumerate(ranked, 1):
            fill = self._fill(COLORS["option"] if num % 2 else COLORS["alt"])
            # Leere Kombination (alles übersprungen) bekommt eine eigene Zeile
            sections = plan.sections or (None,)
            for section in sections:
                values = [num, plan.total_credits]
                if section is None:
                    values += ["—", "", 0, ""]
                else:
                    values += [section.code, section.group, section.credits,
                               format_schedule(section)]
                for col, val in enumerate(values, 1):
                    cell = ws.cell(row=row, column=col, value=val)
                    cell.fill = self._fill(COLORS["closed"]) if (
                        section is not None and section.closed and col == 3
                    ) else fill
                    cell.border = border
                row += 1
        ws.freeze_panes = "A2"

    def _sheet_week(self, wb, title: str, ranked: RankedSet) -> None:
        """Wochenübersicht der besten Kombination: eine Spalte pro Tag."""
        ws = wb.create_sheet(title[:31])
        best = next(iter(ranked), None)
        if best is None:
            ws.cell(row=1, column=1, value="Keine Kombination gefunden.")
            return

        by_day: dict[str, list[tuple[float, str]]] = {}
        for section in best.sections:
            for t in section.schedule:
                by_day.setdefault(t.day, []).append((
                    t.start,
                    f"{format_hour(t.start)}-{format_hour(t.end)} {section.label}",
                ))

        days = sorted(by_day, key=day_sort_key)
        self._write_header_row(ws, days)
        from openpyxl.utils import get_column_letter
        for col, day in enumerate(days, 1):
            ws.column_dimensions[get_column_letter(col)].width = 24
            for r, (_, text) in enumerate(sorted(by_day[day]), 2):
                ws.cell(row=r, column=col, value=text).border = self._thin_border()
