"""Tests für Export-Hilfen, iCalendar-, Excel-, PDF-Export und Terminal-Renderer."""

from datetime import date, datetime, time, timezone
from pathlib import Path

import icalendar
import pytest

from config.defaults import default_app_config
from config.schema import ExportConfig, TimelineWindow
from engine.layout import CalendarLayoutEngine
from export.excel_export import ExcelExporter
from export.helpers import (
    COLORS,
    build_week_grid,
    conflicting_slots,
    format_slot,
    get_course_color,
    hex_to_rgb,
    hour_rows,
    slot_touches_hour,
    today_str,
)
from export.ics_export import IcsExporter
from export.pdf_export import PdfExporter, _TimetablePdf, _pdf_safe
from export.tui_renderer import render_day_rows, render_week_rows
from models.course import Course
from models.course_catalog import CourseCatalog
from models.schedule_slot import ScheduleSlot
from models.semester import Semester


def _slot(day: int, start: str, end: str, location: str = "") -> ScheduleSlot:
    sh, sm = map(int, start.split(":"))
    eh, em = map(int, end.split(":"))
    return ScheduleSlot(day_of_week=day, start_time=time(sh, sm), end_time=time(eh, em),
                        location=location)


@pytest.fixture(scope="module")
def catalog() -> CourseCatalog:
    return CourseCatalog(semester="2025/26/1", courses=[
        Course(id="m1", course_code="MAT1", course_name="Analízis I", class_code="MAT1-E",
               class_type="Előadás", weekly_hours=2, instructors=["Kiss Anna"],
               slots=[_slot(1, "08:00", "09:30", "A1"), _slot(1, "14:00", "15:00", "A1")]),
        Course(id="f1", course_code="FIZ1", course_name="Fizika", class_code="FIZ1-G",
               class_type="Gyakorlat", weekly_hours=2, instructors=[],
               slots=[_slot(3, "10:00", "11:30", "Labor 2")]),
        Course(id="k1", course_code="KEM1", course_name="Kémia", class_code="KEM1-G",
               class_type="Gyakorlat", weekly_hours=1,
               slots=[_slot(3, "11:00", "12:00", "C3")]),
    ])


# ─── HELPERS ──────────────────────────────────────────────────────────────────

class TestHelpers:
    def test_hex_to_rgb(self):
        assert hex_to_rgb("03284F") == (3, 40, 79)
        assert hex_to_rgb("#FFFFFF") == (255, 255, 255)

    def test_today_str(self):
        assert today_str(date(2025, 9, 1)) == "2025.09.01."
        assert today_str(datetime(2025, 10, 14, 8, 30)) == "2025.10.14."

    def test_hour_rows(self):
        assert hour_rows(TimelineWindow(start_hour=8, end_hour=11)) == [8, 9, 10]

    def test_slot_touches_hour(self):
        s = _slot(1, "08:30", "10:00")
        assert slot_touches_hour(s, 8)
        assert slot_touches_hour(s, 9)
        assert not slot_touches_hour(s, 10)

    def test_build_week_grid(self, catalog):
        grid = build_week_grid(catalog, TimelineWindow())
        assert [s.course_id for s in grid[(1, 8)]] == ["m1"]
        assert [s.course_id for s in grid[(1, 9)]] == ["m1"]
        assert [s.course_id for s in grid[(3, 11)]] == ["f1", "k1"]
        assert (1, 10) not in grid

    def test_course_color(self, catalog):
        assert get_course_color(catalog.courses[0]) == COLORS["Előadás"]
        assert get_course_color(Course(id="x", class_type="Szeminárium")) == COLORS["sonstig"]
        assert get_course_color(None) == COLORS["sonstig"]

    def test_format_slot(self, catalog):
        text = format_slot(catalog.courses[0].slots[0], catalog)
        assert text == "Analízis I (E)\n08:00 - 09:30 A1"

    def test_conflicting_slots(self, catalog):
        clashing = conflicting_slots(catalog)
        assert {s.course_id for s in clashing} == {"f1", "k1"}


# ─── ICALENDAR ────────────────────────────────────────────────────────────────

class TestIcsExport:
    @pytest.fixture(scope="class")
    def calendar(self, catalog) -> icalendar.Calendar:
        stamp = datetime(2025, 9, 1, tzinfo=timezone.utc)
        return IcsExporter(catalog, Semester(start_year=2025, number=1),
                           ExportConfig(uid_domain="test.local")).build_calendar(stamp)

    def test_one_event_per_occurrence(self, calendar):
        events = calendar.walk("VEVENT")
        # 4 Wochen-Slots × 22 Wochen
        assert len(events) == 4 * 22

    def test_event_fields(self, calendar):
        first = calendar.walk("VEVENT")[0]
        assert str(first["summary"]) == "Analízis I"
        assert str(first["location"]) == "A1"
        assert str(first["uid"]) == "m1-1-0800-1@test.local"
        start = first.decoded("dtstart")
        assert start.date() == date(2025, 9, 1)
        assert (start.hour, start.minute) == (8, 0)
        assert start.utcoffset().total_seconds() == 2 * 3600   # CEST

    def test_uids_unique(self, calendar):
        uids = [str(e["uid"]) for e in calendar.walk("VEVENT")]
        assert len(uids) == len(set(uids))

    def test_winter_time_offset(self, calendar):
        december = [
            e for e in calendar.walk("VEVENT")
            if e.decoded("dtstart").month == 12
        ]
        assert december
        assert all(e.decoded("dtstart").utcoffset().total_seconds() == 3600 for e in december)

    def test_calendar_name(self, calendar):
        assert "2025/26/1" in str(calendar["x-wr-calname"])

    def test_export_writes_file(self, catalog, tmp_path: Path):
        out = tmp_path / "out" / "orarend.ics"
        IcsExporter(catalog, Semester(start_year=2025, number=1)).export(out)
        parsed = icalendar.Calendar.from_ical(out.read_bytes())
        assert len(parsed.walk("VEVENT")) == 88


# ─── EXCEL ────────────────────────────────────────────────────────────────────

class TestExcelExport:
    def test_creates_file(self, tmp_path: Path, catalog):
        out = tmp_path / "orarend.xlsx"
        ExcelExporter(catalog, default_app_config()).export(out)
        assert out.exists()
        assert out.stat().st_size > 0

    def test_sheets(self, tmp_path: Path, catalog):
        from openpyxl import load_workbook
        out = tmp_path / "orarend.xlsx"
        ExcelExporter(catalog).export(out)
        titles = load_workbook(out).sheetnames
        assert titles == ["Órarend", "Kurzusok", "Ütközések"]

    def test_no_conflict_sheet_without_conflicts(self, tmp_path: Path):
        from openpyxl import load_workbook
        single = CourseCatalog(courses=[Course(id="a", course_name="A", slots=[_slot(1, "08:00", "09:00")])])
        out = tmp_path / "single.xlsx"
        ExcelExporter(single).export(out)
        assert "Ütközések" not in load_workbook(out).sheetnames

    def test_grid_content(self, tmp_path: Path, catalog):
        from openpyxl import load_workbook
        out = tmp_path / "orarend.xlsx"
        ExcelExporter(catalog).export(out)
        ws = load_workbook(out)["Órarend"]
        values = {str(c.value) for row in ws.iter_rows() for c in row if c.value}
        assert any("Analízis I" in v for v in values)
        assert "08:00" in values

    def test_course_list(self, tmp_path: Path, catalog):
        from openpyxl import load_workbook
        out = tmp_path / "orarend.xlsx"
        ExcelExporter(catalog).export(out)
        rows = list(load_workbook(out)["Kurzusok"].iter_rows(values_only=True))
        assert rows[0][0] == "Tárgy kódja"
        assert len(rows) == 4

    def test_title_row_carries_stamp(self, tmp_path: Path, catalog):
        from openpyxl import load_workbook
        out = tmp_path / "orarend.xlsx"
        ExcelExporter(catalog).export(out, stamp=date(2025, 9, 1))
        ws = load_workbook(out)["Órarend"]
        assert ws.cell(row=1, column=7).value == "2025.09.01."


# ─── PDF ──────────────────────────────────────────────────────────────────────

class TestPdfExport:
    def test_pdf_safe(self):
        assert _pdf_safe("Hétfő – Űr") == "Hétfö - Ür"

    def test_creates_file(self, tmp_path: Path, catalog):
        out = tmp_path / "orarend.pdf"
        PdfExporter(catalog, default_app_config()).export(out)
        assert out.exists()
        assert out.read_bytes()[:4] == b"%PDF"

    def test_creates_file_with_stamp(self, tmp_path: Path, catalog):
        out = tmp_path / "orarend.pdf"
        PdfExporter(catalog).export(out, stamp=date(2025, 9, 1))
        assert out.read_bytes()[:4] == b"%PDF"

    def test_footer_shows_stamp(self):
        pdf = _TimetablePdf("ELTE", "2025/26/1", stamp=date(2025, 9, 1))
        pdf.set_compression(False)
        pdf.add_page()
        data = bytes(pdf.output())
        assert b"2025.09.01." in data


# ─── TERMINAL ─────────────────────────────────────────────────────────────────

class TestTuiRenderer:
    def test_week_rows(self, catalog):
        rows = render_week_rows(catalog, TimelineWindow(start_hour=8, end_hour=12))
        assert [r[0] for r in rows] == ["08:00", "09:00", "10:00", "11:00"]
        assert rows[0][1].startswith("Analízis I")
        assert rows[1][1] == "┆"                # Fortsetzung 08:00-09:30
        assert rows[0][2] == "—"
        assert "Kémia" in rows[3][3]

    def test_day_rows_mark_current_and_now(self, catalog):
        now = datetime(2025, 10, 13, 8, 30)   # Montag
        layout = CalendarLayoutEngine(TimelineWindow()).layout_day(
            catalog.all_slots, now.date(), now)
        rows = render_day_rows(layout, catalog, now)
        assert rows[0][1] == "▶ Analízis I"
        assert rows[1][1] == "── most ──"
        assert rows[2][0] == "14:00 - 15:00"
