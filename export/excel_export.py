"""Excel-Export für den Stundenplan (openpyxl)."""

from datetime import date
from pathlib import Path
from typing import Optional

from config.schema import AppConfig
from models.course_catalog import CourseCatalog
from models.schedule_slot import ScheduleSlot

from export.helpers import (
    COLORS, WEEK_DAYS, build_week_grid, conflicting_slots, day_headers,
    format_slots, get_course_color, hour_rows, today_str,
)


class ExcelExporter:
    """Exportiert einen CourseCatalog: Wochenraster, Kursliste, Überschneidungen."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_ZEIT_W = 13
    COL_DAY_W  = 26

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_HOUR_H   = 48

    def __init__(self, catalog: CourseCatalog, config: Optional[AppConfig] = None):
        self.catalog = catalog
        self.config = config or AppConfig()
        self.window = self.config.timeline
        self.days = WEEK_DAYS

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path, stamp: Optional[date] = None) -> None:
        """Erstellt die Excel-Datei mit allen Sheets; stamp datiert die Titelzeile."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_orarend(wb, stamp)
        self._sheet_kurzusok(wb)
        self._sheet_utkozesek(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header(self, ws, row: int, headers: list[str]) -> None:
        from openpyxl.styles import Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    # ─── Sheet: Wochenraster ──────────────────────────────────────────────────

    def _cell_color(self, slots: list[ScheduleSlot], clashing: set[ScheduleSlot]) -> str:
        if not slots:
            return COLORS["free"]
        if any(s in clashing for s in slots):
            return COLORS["conflict"]
        return get_course_color(self.catalog.get(slots[0].course_id))

    def _sheet_orarend(self, wb, stamp: Optional[date] = None) -> None:
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        ws = wb.create_sheet(title="Órarend")
        ws.column_dimensions["A"].width = self.COL_ZEIT_W
        for col in range(2, 2 + len(self.days)):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_DAY_W

        title = self.config.export.institution
        if self.catalog.semester:
            title = f"{title} - {self.catalog.semester}"
        ws.cell(row=1, column=1, value=title).font = Font(bold=True, size=14)
        ws.cell(row=1, column=len(self.days) + 1, value=today_str(stamp))

        self._write_header(ws, 2, ["Idő"] + day_headers(self.days))

        grid = build_week_grid(self.catalog, self.window)
        clashing = conflicting_slots(self.catalog)
        border = self._thin_border()

        excel_row = 3
        for hour in hour_rows(self.window):
            c = ws.cell(row=excel_row, column=1, value=f"{hour:02d}:00")
            c.alignment = self._center_align(wrap=False)
            c.border = border
            c.font = Font(bold=True, size=9)

            for i, day in enumerate(self.days):
                here = grid.get((day, hour), [])
                c = ws.cell(row=excel_row, column=i + 2, value=format_slots(here, self.catalog))
                c.fill = self._fill(self._cell_color(here, clashing))
                c.alignment = self._center_align()
                c.border = border
                c.font = Font(size=8)
            ws.row_dimensions[excel_row].height = self.ROW_HOUR_H
            excel_row += 1

        ws.freeze_panes = "B3"

    # ─── Sheet: Kursliste ─────────────────────────────────────────────────────

    def _sheet_kurzusok(self, wb) -> None:
        from openpyxl.utils import get_column_letter

        ws = wb.create_sheet(title="Kurzusok")
        cols = self.config.columns
        headers = [
            cols.course_code, cols.course_name, cols.class_code, cols.class_type,
            cols.weekly_hours, "Időpontok", cols.instructors,
        ]
        self._write_header(ws, 1, headers)
        for col, width in enumerate([16, 32, 20, 14, 10, 44, 30], 1):
            ws.column_dimensions[get_column_letter(col)].width = width

        border = self._thin_border()
        courses = sorted(
            self.catalog.courses,
            key=lambda c: (c.course_name, c.type_info.sort_priority if c.type_info else 99),
        )
        for row, course in enumerate(courses, 2):
            values = [
                course.course_code,
                course.course_name,
                course.class_code,
                course.class_type,
                course.weekly_hours,
                "\n".join(str(s) for s in course.slots),
                ", ".join(course.instructors),
            ]
            for col, val in enumerate(values, 1):
                c = ws.cell(row=row, column=col, value=val)
                c.border = border
            ws.cell(row=row, column=4).fill = self._fill(get_course_color(course))

    # ─── Sheet: Überschneidungen ──────────────────────────────────────────────

    def _sheet_utkozesek(self, wb) -> None:
        from analysis.conflicts import ConflictDetector

        report = ConflictDetector().find_conflicts(self.catalog.courses)
        if not report.has_conflicts:
            return

        ws = wb.create_sheet(title="Ütközések")
        self._write_header(ws, 1, ["Nap", "Kurzus A", "Idő A", "Kurzus B", "Idő B", "Perc"])
        border = self._thin_border()
        for row, c in enumerate(report.conflicts, 2):
            values = [
                c.first.day_name, c.first_course, c.first.time_range,
                c.second_course, c.second.time_range, c.overlap_minutes,
            ]
            for col, val in enumerate(values, 1):
                cell = ws.cell(row=row, column=col, value=val)
                cell.border = border
                cell.fill = self._fill(COLORS["conflict"])
