"""Export-Modul: Terminal-Tabellen (Rich) und Excel (openpyxl) für den Kursplan."""

from export.excel_export import ExcelExporter

__all__ = ["ExcelExporter"]
