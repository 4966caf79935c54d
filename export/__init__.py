"""Export-Modul: iCalendar (icalendar), Excel (openpyxl) und PDF (fpdf2)."""

from export.excel_export import ExcelExporter
from export.ics_export import IcsExporter
from export.pdf_export import PdfExporter

__all__ = ["ExcelExporter", "IcsExporter", "PdfExporter"]
