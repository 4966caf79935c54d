"""Excel-/CSV-Import und Template-Generator für Kurslisten.

Template-Generator: Excel-Vorlage mit den erwarteten Spaltenköpfen.
Import-Funktion:    Tabelle → RowNormalizer → CourseCatalog + ImportReport.

Gelesen wird immer das erste Tabellenblatt; die erste Zeile ist der Kopf.
Kopfzellen werden ohne Groß-/Kleinschreibung und Leerraum mit den
konfigurierten Spaltennamen verglichen und in deren Schreibweise übernommen.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional

from pydantic import BaseModel

from config.schema import AppConfig
from data.row_normalizer import RowNormalizer
from models.course import Course
from models.course_catalog import CourseCatalog

logger = logging.getLogger(__name__)


class ExcelImportError(Exception):
    """Fehler beim Excel-/CSV-Import."""


# ─── Import-Report ────────────────────────────────────────────────────────────

class ImportReport(BaseModel):
    """Ergebnis eines Imports: Zähler und nicht-fatale Hinweise."""

    source: str
    imported_courses: int = 0
    total_slots: int = 0
    skipped_rows: int = 0                 # komplett leere Zeilen
    warnings: list[str] = []              # Zeilen-Hinweise (z.B. fehlender Kurscode)
    schedule_warnings: list[str] = []     # verworfene Terminbeschreibungen
    missing_columns: list[str] = []
    unknown_columns: list[str] = []

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings or self.schedule_warnings or self.missing_columns)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        status = (
            "[bold yellow]⚠ IMPORT MIT HINWEISEN[/bold yellow]"
            if self.has_warnings
            else "[bold green]✓ IMPORT OK[/bold green]"
        )
        lines = [
            status,
            f"Quelle: {self.source}",
            f"Kurse: {self.imported_courses} | Termine: {self.total_slots} "
            f"| Leere Zeilen: {self.skipped_rows}",
        ]
        console.print(Panel("\n".join(lines), title="Import", border_style="cyan"))

        if self.missing_columns:
            console.print(
                "[yellow]Fehlende Spalten (Standardwerte): "
                + ", ".join(self.missing_columns) + "[/yellow]"
            )
        if self.unknown_columns:
            console.print("[dim]Ignorierte Spalten: " + ", ".join(self.unknown_columns) + "[/dim]")
        for w in self.warnings:
            console.print(f"  [yellow]•[/yellow] {w}")
        for w in self.schedule_warnings:
            console.print(f"  [yellow]•[/yellow] {w}")


# ─── Template ─────────────────────────────────────────────────────────────────

_EXAMPLE_ROW = {
    "course_code": "GEIAL123-B",
    "course_name": "Programozás alapjai",
    "class_code": "GEIAL123-B-E1",
    "class_type": "Előadás",
    "weekly_hours": "2",
    "schedule_info": "K:08:00-09:30(A1 előadó); CS:14:00-15:30(B2)",
    "instructors": "Kiss Anna, Nagy Béla",
    "waiting_list": "0",
}


def generate_template(config: AppConfig, path: Path) -> None:
    """Erzeugt eine Excel-Vorlage mit Kopfzeile und einer Beispielzeile."""
    import openpyxl
    from openpyxl.comments import Comment
    from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
    from openpyxl.utils import get_column_letter

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Kurzusok"

    # ── Hilfs-Styles ─────────────────────────────────────────────────────────
    hdr_font = Font(bold=True, color="FFFFFF", size=11)
    hdr_fill = PatternFill("solid", fgColor="03284F")
    ex_font = Font(italic=True, color="888888")
    ex_fill = PatternFill("solid", fgColor="F5F5F5")
    thin = Side(style="thin", color="BBBBBB")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)

    cols = config.columns
    fields = [
        "course_code", "course_name", "class_code", "class_type",
        "weekly_hours", "schedule_info", "instructors", "waiting_list",
    ]
    widths = [16, 32, 20, 14, 10, 48, 30, 10]

    for col, (field, width) in enumerate(zip(fields, widths), 1):
        cell = ws.cell(row=1, column=col, value=getattr(cols, field))
        cell.font = hdr_font
        cell.fill = hdr_fill
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = border
        ws.column_dimensions[get_column_letter(col)].width = width

        example = ws.cell(row=2, column=col, value=_EXAMPLE_ROW[field])
        example.font = ex_font
        example.fill = ex_fill
        example.border = border

    # Formathinweis als Zellkommentar, nicht als Datenzeile
    ws.cell(row=1, column=fields.index("schedule_info") + 1).comment = Comment(
        "NAP:ÓÓ:PP-ÓÓ:PP(Terem), mehrere Termine mit ';' trennen.\n"
        "Tage: H, K, SZE, CS, P, SZ",
        "orarend",
    )
    ws.freeze_panes = "A2"

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(path))
    logger.info(f"Vorlage geschrieben: {path}")


# ─── Importer ─────────────────────────────────────────────────────────────────

def _cell_text(value) -> Optional[str]:
    """Zellwert → Text; ganzzahlige Floats ohne '.0'."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class CourseImporter:
    """Importiert eine Kursliste aus einer Excel-Datei (.xlsx)."""

    def __init__(
        self,
        path: Path,
        config: AppConfig,
        semester: Optional[str] = None,
        normalizer: Optional[RowNormalizer] = None,
    ) -> None:
        self.path = Path(path)
        self.config = config
        self.semester = semester
        self.normalizer = normalizer or RowNormalizer(config.columns)
        self._wb = None

    def _open(self) -> None:
        try:
            import openpyxl
            self._wb = openpyxl.load_workbook(
                str(self.path), read_only=True, data_only=True
            )
        except FileNotFoundError:
            raise ExcelImportError(f"Datei nicht gefunden: {self.path}")
        except Exception as e:
            raise ExcelImportError(f"Fehler beim Öffnen der Excel-Datei: {e}")

    def _iter_rows(self) -> Iterator[tuple]:
        """Alle Zeilen des ersten Tabellenblatts als Werte-Tupel."""
        if self._wb is None:
            self._open()
        try:
            rows = list(self._wb.worksheets[0].iter_rows(values_only=True))
        finally:
            self._wb.close()
        return iter(rows)

    def _map_header(self, header: tuple, report: ImportReport) -> dict[int, str]:
        """Spaltenindex → konfigurierter Spaltenname."""
        known = {name.strip().lower(): name for name in self.config.columns.all_columns}
        mapping: dict[int, str] = {}
        for i, raw in enumerate(header):
            text = (_cell_text(raw) or "").strip()
            if not text:
                continue
            name = known.get(text.lower())
            if name is None:
                report.unknown_columns.append(text)
                logger.info(f"Unbekannte Spalte ignoriert: '{text}'")
            else:
                mapping[i] = name
        found = set(mapping.values())
        report.missing_columns = [c for c in self.config.columns.required if c not in found]
        return mapping

    def import_all(self) -> tuple[CourseCatalog, ImportReport]:
        """Importiert alle Zeilen → CourseCatalog + ImportReport."""
        report = ImportReport(source=str(self.path))
        rows = iter(self._iter_rows())

        header = next(rows, None)
        if header is None:
            raise ExcelImportError(f"Leere Tabelle: {self.path}")
        mapping = self._map_header(header, report)
        if not mapping:
            raise ExcelImportError(
                f"Keine bekannte Spalte im Tabellenkopf gefunden: {self.path}"
            )
        for col in report.missing_columns:
            logger.warning(f"Spalte fehlt, Standardwerte werden verwendet: '{col}'")

        class_code_col = self.config.columns.class_code
        courses: list[Course] = []
        seen_codes: set[str] = set()

        for row_no, values in enumerate(rows, 2):
            if all(v is None or str(v).strip() == "" for v in values):
                report.skipped_rows += 1
                continue
            record = {
                name: _cell_text(values[i])
                for i, name in mapping.items()
                if i < len(values)
            }
            course, parse_warnings = self.normalizer.normalize_detailed(record)

            if not course.class_code:
                msg = f"Zeile {row_no}: kein {class_code_col}, ID '{course.id}' vergeben"
                report.warnings.append(msg)
                logger.warning(msg)
            elif course.class_code in seen_codes:
                msg = f"Zeile {row_no}: {class_code_col} '{course.class_code}' doppelt, ersetzt vorherige Zeile"
                report.warnings.append(msg)
                logger.warning(msg)
            seen_codes.add(course.class_code)

            for w in parse_warnings:
                report.schedule_warnings.append(f"Zeile {row_no} ({course.class_code or course.id}): {w}")
            courses.append(course)

        if not courses:
            raise ExcelImportError(f"Keine Datenzeilen gefunden: {self.path}")

        catalog = CourseCatalog(semester=self.semester).upsert(courses)
        report.imported_courses = len(catalog.courses)
        report.total_slots = len(catalog.all_slots)
        logger.info(
            f"{report.imported_courses} Kurse mit {report.total_slots} Terminen "
            f"aus {self.path.name} importiert"
        )
        return catalog, report


def import_from_excel(
    path: Path, config: AppConfig, semester: Optional[str] = None
) -> tuple[CourseCatalog, ImportReport]:
    """Importiert eine Kursliste aus einer Excel-Datei.

    Args:
        path:     Pfad zur Excel-Datei (.xlsx)
        config:   Konfiguration (Spaltennamen)
        semester: Semesterkennung "YYYY/YY/N" für den Katalog

    Returns:
        (CourseCatalog, ImportReport)

    Raises:
        ExcelImportError: Datei nicht lesbar, kein Kopf oder keine Daten.
    """
    return CourseImporter(path, config, semester).import_all()


# ─── CSV-IMPORTER ──────────────────────────────────────────────────────────────

class CsvImporter(CourseImporter):
    """Importiert eine Kursliste aus einer .csv-Datei (UTF-8, Komma-getrennt)."""

    def __init__(self, path: Path, config: AppConfig, semester: Optional[str] = None,
                 normalizer: Optional[RowNormalizer] = None) -> None:
        super().__init__(path, config, semester, normalizer)
        self._csv_rows: Optional[list[tuple]] = None

    def _open(self) -> None:
        import csv

        if self.path.suffix.lower() != ".csv":
            raise ExcelImportError(
                f"Unbekanntes Dateiformat: {self.path}. Erwartet: .xlsx oder .csv."
            )
        try:
            with open(self.path, encoding="utf-8-sig", newline="") as f:
                self._csv_rows = [tuple(row) for row in csv.reader(f)]
        except FileNotFoundError:
            raise ExcelImportError(f"Datei nicht gefunden: {self.path}")

    def _iter_rows(self) -> Iterator[tuple]:
        if self._csv_rows is None:
            self._open()
        return iter(self._csv_rows)


def import_from_csv(
    path: Path, config: AppConfig, semester: Optional[str] = None
) -> tuple[CourseCatalog, ImportReport]:
    """Wie import_from_excel(), für .csv-Dateien."""
    return CsvImporter(path, config, semester).import_all()


def import_course_list(
    path: Path, config: AppConfig, semester: Optional[str] = None
) -> tuple[CourseCatalog, ImportReport]:
    """Wählt den Importer nach Dateiendung."""
    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return import_from_csv(path, config, semester)
    if suffix in (".xlsx", ".xlsm"):
        return import_from_excel(path, config, semester)
    raise ExcelImportError(
        f"Unbekanntes Dateiformat: {path}. Erwartet: .xlsx oder .csv."
    )
