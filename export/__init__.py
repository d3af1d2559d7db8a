"""Export-Paket: Excel-Export der Klasseneinteilung."""

from export.excel_export import ExcelExporter

__all__ = ["ExcelExporter"]
