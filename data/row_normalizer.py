"""Zeile der Kursliste → Course.

Jede Spalte ist optional. Fehlende oder unbrauchbare Werte werden durch
Standardwerte ersetzt, statt die ganze Zeile zu verwerfen:
  - Textfelder → ""
  - Óraszám   → nur Ziffern werden ausgewertet, sonst 0
  - Oktatók   → Trennung an ',' oder ';', leere Namen entfallen
  - Órarend infó → data.schedule_parser
Die Warteliste-Spalte wird angenommen, aber nie gelesen.
"""

import re
import uuid
from typing import Mapping, Optional

from config.schema import ColumnConfig
from data.schedule_parser import ScheduleParseWarning, parse_schedule_info_detailed
from models.course import Course

_NON_DIGIT = re.compile(r"\D")
_INSTRUCTOR_SEP = re.compile(r"[,;]")


def parse_weekly_hours(raw: Optional[str]) -> int:
    """'2 óra' → 2, '1+1' → 11, '' → 0 (alle Nicht-Ziffern werden entfernt)."""
    digits = _NON_DIGIT.sub("", raw or "")
    return int(digits) if digits else 0


def parse_instructors(raw: Optional[str]) -> list[str]:
    """'Kiss Anna, Nagy Béla; ' → ['Kiss Anna', 'Nagy Béla']."""
    if not raw:
        return []
    return [name.strip() for name in _INSTRUCTOR_SEP.split(raw) if name.strip()]


class RowNormalizer:
    """Baut Course-Objekte aus dekodierten Tabellenzeilen.

    Kurs-IDs werden beim Normalisieren vergeben und sind innerhalb einer
    Instanz (= eines Programmlaufs) pro Kurscode stabil: ein erneuter Import
    desselben Kurscodes erhält dieselbe ID.
    """

    def __init__(self, columns: Optional[ColumnConfig] = None, run_id: Optional[str] = None) -> None:
        self.columns = columns or ColumnConfig()
        self.run_id = run_id or uuid.uuid4().hex[:8]
        self._ids: dict[str, str] = {}

    def course_id_for(self, class_code: str) -> str:
        """Stabile ID für einen Kurscode; ohne Kurscode jedes Mal eine neue."""
        if not class_code:
            return f"course_{uuid.uuid4().hex[:12]}"
        if class_code not in self._ids:
            self._ids[class_code] = f"{class_code}_{self.run_id}"
        return self._ids[class_code]

    def _text(self, row: Mapping[str, object], column: str) -> str:
        value = row.get(column)
        if value is None:
            return ""
        return str(value).strip()

    def normalize_detailed(self, row: Mapping[str, object]) -> tuple[Course, list[ScheduleParseWarning]]:
        """Wie normalize(), liefert zusätzlich die Warnungen des Termin-Parsers."""
        cols = self.columns
        class_code = self._text(row, cols.class_code)
        raw_value = row.get(cols.schedule_info)
        raw_schedule = "" if raw_value is None else str(raw_value)

        parsed = parse_schedule_info_detailed(raw_schedule)
        course_id = self.course_id_for(class_code)

        course = Course(
            id=course_id,
            course_code=self._text(row, cols.course_code),
            course_name=self._text(row, cols.course_name),
            class_code=class_code,
            class_type=self._text(row, cols.class_type),
            weekly_hours=parse_weekly_hours(self._text(row, cols.weekly_hours)),
            instructors=parse_instructors(self._text(row, cols.instructors)),
            raw_schedule_info=raw_schedule,
            slots=[s.with_course(course_id) for s in parsed.slots],
        )
        return course, parsed.warnings

    def normalize(self, row: Mapping[str, object]) -> Course:
        """Eine Tabellenzeile (Spaltenname → Rohtext) → Course."""
        course, _ = self.normalize_detailed(row)
        return course
