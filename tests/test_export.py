"""Tests für Text-Report und Excel-Export."""

from pathlib import Path

import pytest

from export.excel_export import ExcelExporter
from export.helpers import day_sort_key, format_hour, format_interval, format_schedule
from export.text_report import ReportWriteError, format_report, write_report
from models.catalog import Catalog
from models.section import Section
from models.timeslot import TimeInterval
from solver.ranking import RankedSet
from solver.search import find_best_combinations


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _make_catalog() -> Catalog:
    return Catalog(sections=[
        Section(code="CS1", credits=3,
                schedule=(TimeInterval(day="Mon", start=9, end=10),)),
        Section(code="CS1", group="B", credits=3,
                schedule=(TimeInterval(day="Mon", start=10, end=11),)),
        Section(code="CS2", credits=4,
                schedule=(TimeInterval(day="Mon", start=9, end=10),)),
    ])


@pytest.fixture(scope="module")
def ranked_with_closed() -> RankedSet:
    return find_best_combinations(_make_catalog().groups(), True, 5)


EXPECTED_REPORT = (
    "Best options (with closed groups), sorted by total credits:\n"
    "\n"
    "Option 1 (Total Credits = 7):\n"
    "  Course: CS1 (Group B), Credits: 3\n"
    "    - Mon: 10 to 11\n"
    "  Course: CS2, Credits: 4\n"
    "    - Mon: 9 to 10\n"
    "\n"
    "Option 2 (Total Credits = 4):\n"
    "  Course: CS2, Credits: 4\n"
    "    - Mon: 9 to 10\n"
    "\n"
    "Option 3 (Total Credits = 3):\n"
    "  Course: CS1, Credits: 3\n"
    "    - Mon: 9 to 10\n"
    "\n"
    "Option 4 (Total Credits = 3):\n"
    "  Course: CS1 (Group B), Credits: 3\n"
    "    - Mon: 10 to 11\n"
    "\n"
    "Option 5 (Total Credits = 0):\n"
    "\n"
)


# ─── Formatierung ─────────────────────────────────────────────────────────────

class TestHelpers:
    @pytest.mark.parametrize("value,expected", [
        (9.0, "9"), (10.5, "10.5"), (0, "0"), (13.25, "13.25"),
    ])
    def test_format_hour(self, value, expected):
        assert format_hour(value) == expected

    def test_format_interval(self):
        t = TimeInterval(day="Tue", start=8, end=9.5)
        assert format_interval(t) == "Tue: 8 to 9.5"

    def test_format_schedule(self):
        s = Section(code="X", credits=1, schedule=(
            TimeInterval(day="Mon", start=8, end=9),
            TimeInterval(day="Thu", start=14, end=15.5),
        ))
        assert format_schedule(s) == "Mon: 8 to 9; Thu: 14 to 15.5"

    def test_day_sort_key_orders_week(self):
        days = ["Fri", "Mon", "Samstag", "Wed"]
        assert sorted(days, key=day_sort_key) == ["Mon", "Wed", "Fri", "Samstag"]


# ─── Text-Report ──────────────────────────────────────────────────────────────

class TestTextReport:
    def test_full_report(self, ranked_with_closed):
        assert format_report(ranked_with_closed, include_closed=True) == EXPECTED_REPORT

    def test_empty_report_is_header_only(self):
        text = format_report(RankedSet(10), include_closed=False)
        assert text == "Best options (without closed groups), sorted by total credits:\n\n"

    def test_write_report_creates_directories(self, tmp_path: Path, ranked_with_closed):
        target = tmp_path / "out" / "nested" / "report.txt"
        result = write_report(ranked_with_closed, target, include_closed=True)
        assert result == target
        assert target.read_text(encoding="utf-8") == EXPECTED_REPORT

    def test_write_report_overwrites(self, tmp_path: Path, ranked_with_closed):
        target = tmp_path / "report.txt"
        target.write_text("alt\n" * 100, encoding="utf-8")
        write_report(RankedSet(3), target, include_closed=False)
        assert "alt" not in target.read_text(encoding="utf-8")

    def test_unwritable_path_raises(self, tmp_path: Path, ranked_with_closed):
        """Ein Verzeichnis als Ziel → ReportWriteError."""
        with pytest.raises(ReportWriteError):
            write_report(ranked_with_closed, tmp_path, include_closed=True)


# ─── Excel-Export ─────────────────────────────────────────────────────────────

class TestExcelExport:
    def test_sheets_and_rows(self, tmp_path: Path, ranked_with_closed):
        from openpyxl import load_workbook

        without = find_best_combinations(_make_catalog().groups(), False, 5)
        path = ExcelExporter({True: ranked_with_closed, False: without}).export(
            tmp_path / "xl" / "plaene.xlsx"
        )
        assert path.exists()

        wb = load_workbook(path)
        assert wb.sheetnames == [
            "Mit geschlossenen", "Woche Mit geschlossenen",
            "Ohne geschlossene", "Woche Ohne geschlossene",
        ]

        ws = wb["Mit geschlossenen"]
        assert ws.cell(row=1, column=1).value == "Option"
        first = [ws.cell(row=2, column=c).value for c in range(1, 7)]
        assert first == [1, 7, "CS1", "B", 3, "Mon: 10 to 11"]

        week = wb["Woche Mit geschlossenen"]
        assert week.cell(row=1, column=1).value == "Mon"
        assert week.cell(row=2, column=1).value == "9-10 CS2"
        assert week.cell(row=3, column=1).value == "10-11 CS1 (Group B)"

    def test_unwritable_path_raises(self, tmp_path: Path, ranked_with_closed):
        with pytest.raises(ReportWriteError):
            ExcelExporter({True: ranked_with_closed}).export(tmp_path)

    def test_empty_result_week_sheet(self, tmp_path: Path):
        from openpyxl import load_workbook

        path = ExcelExporter({False: RankedSet(5)}).export(tmp_path / "leer.xlsx")
        wb = load_workbook(path)
        assert wb.sheetnames == ["Ohne geschlossene", "Woche Ohne geschlossene"]
        assert wb["Woche Ohne geschlossene"].cell(row=1, column=1).value == \
            "Keine Kombination gefunden."
