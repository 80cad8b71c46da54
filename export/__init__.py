"""Export-Modul: Text-Report und Excel (openpyxl) für die Bestenlisten."""

from export.text_report import ReportWriteError, format_report, write_report
from export.excel_export import ExcelExporter

__all__ = ["ExcelExporter", "ReportWriteError", "format_report", "write_report"]
