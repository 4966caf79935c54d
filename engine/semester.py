"""Semesterrechnung nach dem ungarischen Studienjahr.

Regel (Monat M des Datums, Jahr Y):
  M >= 9      → 1. Semester, start_year = Y
  M == 1      → 1. Semester, start_year = Y - 1
  2 <= M <= 8 → 2. Semester, start_year = Y - 1

Jedes Datum gehört zu genau einem Semester; es gibt keine Fehlerfälle.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Union

from models.schedule_slot import ScheduleSlot
from models.semester import Semester

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


class SemesterCalculator:
    """Bestimmt Semester aus Daten und rechnet innerhalb eines Semesters.

    Zustandslos; now wird immer explizit übergeben.
    """

    # ─── Semester bestimmen ───

    @staticmethod
    def current(now: DateLike) -> Semester:
        """Semester, zu dem das Datum now gehört.

        Vor dem 1. September des Jahres 1 fällt das Startjahr auf 0:
        ValidationError.
        """
        year, month = now.year, now.month
        if month >= 9:
            return Semester(start_year=year, number=1)
        if month == 1:
            return Semester(start_year=year - 1, number=1)
        return Semester(start_year=year - 1, number=2)

    @staticmethod
    def next(semester: Semester) -> Semester:
        """1. → 2. Semester desselben Studienjahrs, 2. → 1. Semester des folgenden."""
        if semester.number == 1:
            return Semester(start_year=semester.start_year, number=2)
        return Semester(start_year=semester.start_year + 1, number=1)

    @staticmethod
    def previous(semester: Semester) -> Semester:
        """Exakte Umkehrung von next()."""
        if semester.number == 2:
            return Semester(start_year=semester.start_year, number=1)
        return Semester(start_year=semester.start_year - 1, number=2)

    @classmethod
    def available(cls, now: DateLike) -> list[Semester]:
        """Auswählbare Semester: aktuelles und nächstes."""
        current = cls.current(now)
        return [current, cls.next(current)]

    # ─── Rechnen innerhalb eines Semesters ───

    @staticmethod
    def teaching_weeks(semester: Semester) -> int:
        """Anzahl (angebrochener) Wochen ab Semesterbeginn."""
        rng = semester.date_range
        return (rng.end - rng.start).days // 7 + 1

    @staticmethod
    def academic_week(semester: Semester, day: DateLike) -> Optional[int]:
        """Lehrwoche (1-basiert) ab Semesterbeginn; None außerhalb des Semesters."""
        if isinstance(day, datetime):
            day = day.date()
        rng = semester.date_range
        if not rng.contains(day):
            return None
        return (day - rng.start).days // 7 + 1

    @staticmethod
    def progress(semester: Semester, now: DateLike) -> float:
        """Fortschritt 0.0 (vor Beginn) bis 1.0 (nach Ende)."""
        if isinstance(now, datetime):
            now = now.date()
        rng = semester.date_range
        if now <= rng.start:
            return 0.0
        if now >= rng.end:
            return 1.0
        return (now - rng.start).days / (rng.end - rng.start).days

    @staticmethod
    def week_start(day: DateLike) -> date:
        """Montag der Woche von day."""
        if isinstance(day, datetime):
            day = day.date()
        return day - timedelta(days=day.isoweekday() - 1)

    # ─── Termine konkretisieren ───

    @classmethod
    def occurrences(
        cls, slot: ScheduleSlot, semester: Semester
    ) -> list[tuple[date, datetime, datetime]]:
        """Alle konkreten Termine eines Wochen-Slots im Semester (Datum, Beginn, Ende).

        Pro Woche ab Semesterbeginn ein Termin am Wochentag des Slots; Termine
        nach dem Semesterende entfallen.
        """
        rng = semester.date_range
        result: list[tuple[date, datetime, datetime]] = []
        for week in range(cls.teaching_weeks(semester)):
            week_begin = rng.start + timedelta(days=7 * week)
            offset = (slot.day_of_week - week_begin.isoweekday()) % 7
            day = week_begin + timedelta(days=offset)
            if day > rng.end:
                continue
            result.append((
                day,
                datetime.combine(day, slot.start_time),
                datetime.combine(day, slot.end_time),
            ))
        logger.debug(f"{slot}: {len(result)} Termine in {semester.label}")
        return result
