"""Tests für Excel-/CSV-Import und Vorlagen-Generator."""

import csv
from pathlib import Path

import openpyxl
import pytest

from config.defaults import default_app_config
from data.excel_import import (
    CsvImporter,
    ExcelImportError,
    generate_template,
    import_course_list,
    import_from_csv,
    import_from_excel,
)

HEADER = [
    "Tárgy kódja", "Tárgy neve", "Kurzus kódja", "Kurzus típusa",
    "Óraszám:", "Órarend infó", "Oktatók", "Várólista",
]

ROWS = [
    ["MAT1", "Analízis I", "MAT1-E", "Előadás", 2, "H:08:00-09:30(A1)", "Kiss Anna", 0],
    ["MAT1", "Analízis I", "MAT1-G", "Gyakorlat", "2 óra",
     "SZE:10:00-11:30(B2); XX:1:00-2:00(?)", "Nagy Béla; Tóth Csaba", 3],
    [None, None, None, None, None, None, None, None],
    ["FIZ1", "Fizika", None, "Labor", None, "", None, None],
]


def _write_xlsx(path: Path, header: list, rows: list) -> Path:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(header)
    for row in rows:
        ws.append(row)
    wb.save(path)
    return path


def _write_csv(path: Path, header: list, rows: list) -> Path:
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for row in rows:
            writer.writerow(["" if v is None else v for v in row])
    return path


@pytest.fixture
def config():
    return default_app_config()


# ─── EXCEL ────────────────────────────────────────────────────────────────────

class TestExcelImport:
    def test_imports_courses(self, tmp_path: Path, config):
        path = _write_xlsx(tmp_path / "kurzusok.xlsx", HEADER, ROWS)
        catalog, report = import_from_excel(path, config, "2025/26/1")

        assert catalog.semester == "2025/26/1"
        assert [c.class_code for c in catalog.courses] == ["MAT1-E", "MAT1-G", ""]
        assert report.imported_courses == 3
        assert report.total_slots == 2
        assert report.skipped_rows == 1

    def test_numeric_cells_become_text(self, tmp_path: Path, config):
        path = _write_xlsx(tmp_path / "kurzusok.xlsx", HEADER, ROWS)
        catalog, _ = import_from_excel(path, config)
        assert catalog.courses[0].weekly_hours == 2
        assert catalog.courses[1].instructors == ["Nagy Béla", "Tóth Csaba"]

    def test_warnings(self, tmp_path: Path, config):
        path = _write_xlsx(tmp_path / "kurzusok.xlsx", HEADER, ROWS)
        _, report = import_from_excel(path, config)
        assert report.has_warnings
        assert any("Zeile 5" in w for w in report.warnings)          # ohne Kurscode
        assert len(report.schedule_warnings) == 1
        assert "XX:1:00-2:00(?)" in report.schedule_warnings[0]

    def test_header_matched_case_insensitive(self, tmp_path: Path, config):
        header = [h.upper() + "  " for h in HEADER] + ["Megjegyzés"]
        path = _write_xlsx(tmp_path / "kurzusok.xlsx", header, [ROWS[0] + ["x"]])
        catalog, report = import_from_excel(path, config)
        assert catalog.courses[0].course_name == "Analízis I"
        assert report.unknown_columns == ["Megjegyzés"]
        assert report.missing_columns == []

    def test_missing_columns_reported(self, tmp_path: Path, config):
        path = _write_xlsx(tmp_path / "kurzusok.xlsx", ["Tárgy neve", "Kurzus kódja"],
                           [["Analízis I", "MAT1-E"]])
        catalog, report = import_from_excel(path, config)
        assert catalog.courses[0].slots == []
        assert "Órarend infó" in report.missing_columns

    def test_duplicate_class_code_last_row_wins(self, tmp_path: Path, config):
        rows = [ROWS[0], ROWS[0][:5] + ["P:12:00-13:00(C)"] + ROWS[0][6:]]
        path = _write_xlsx(tmp_path / "kurzusok.xlsx", HEADER, rows)
        catalog, report = import_from_excel(path, config)
        assert len(catalog.courses) == 1
        assert catalog.courses[0].slots[0].day_of_week == 5
        assert any("doppelt" in w for w in report.warnings)

    def test_no_known_header_raises(self, tmp_path: Path, config):
        path = _write_xlsx(tmp_path / "x.xlsx", ["foo", "bar"], [["1", "2"]])
        with pytest.raises(ExcelImportError):
            import_from_excel(path, config)

    def test_no_data_rows_raises(self, tmp_path: Path, config):
        path = _write_xlsx(tmp_path / "x.xlsx", HEADER, [])
        with pytest.raises(ExcelImportError):
            import_from_excel(path, config)

    def test_missing_file_raises(self, tmp_path: Path, config):
        with pytest.raises(ExcelImportError):
            import_from_excel(tmp_path / "nope.xlsx", config)


# ─── CSV ──────────────────────────────────────────────────────────────────────

class TestCsvImport:
    def test_imports_courses(self, tmp_path: Path, config):
        path = _write_csv(tmp_path / "kurzusok.csv", HEADER, ROWS)
        catalog, report = import_from_csv(path, config)
        assert [c.class_code for c in catalog.courses] == ["MAT1-E", "MAT1-G", ""]
        assert catalog.courses[1].slots[0].location == "B2"
        assert report.skipped_rows == 1

    def test_wrong_suffix_raises(self, tmp_path: Path, config):
        path = tmp_path / "kurzusok.txt"
        path.write_text("x", encoding="utf-8")
        with pytest.raises(ExcelImportError):
            CsvImporter(path, config).import_all()

    def test_dispatch_by_suffix(self, tmp_path: Path, config):
        csv_path = _write_csv(tmp_path / "k.csv", HEADER, ROWS[:1])
        xlsx_path = _write_xlsx(tmp_path / "k.xlsx", HEADER, ROWS[:1])
        assert import_course_list(csv_path, config)[0].courses[0].class_code == "MAT1-E"
        assert import_course_list(xlsx_path, config)[0].courses[0].class_code == "MAT1-E"
        with pytest.raises(ExcelImportError):
            import_course_list(tmp_path / "k.ods", config)


# ─── VORLAGE ──────────────────────────────────────────────────────────────────

class TestTemplate:
    def test_template_has_header_and_example(self, tmp_path: Path, config):
        path = tmp_path / "out" / "sablon.xlsx"
        generate_template(config, path)
        wb = openpyxl.load_workbook(path)
        rows = list(wb.active.iter_rows(values_only=True))
        assert list(rows[0][:8]) == HEADER
        assert rows[1][5].startswith("K:08:00-09:30")

    def test_template_can_be_imported(self, tmp_path: Path, config):
        path = tmp_path / "sablon.xlsx"
        generate_template(config, path)
        catalog, _ = import_from_excel(path, config)
        assert len(catalog.courses[0].slots) == 2
