"""Gemeinsame Hilfsfunktionen für Excel-, PDF- und Terminal-Export."""

from datetime import date
from typing import Iterable, Optional

from config.defaults import DAY_SHORT_HU
from config.schema import TimelineWindow
from models.course import ClassType, Course
from models.course_catalog import CourseCatalog
from models.schedule_slot import ScheduleSlot

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    ClassType.LECTURE.value:    "B3D4FF",
    ClassType.PRACTICE.value:   "FFF2B3",
    ClassType.LABORATORY.value: "B3FFB3",
    "sonstig":  "E0E0E0",
    "conflict": "FF9999",
    "free":     "F5F5F5",
    "header":   "03284F",
}

# Tage mit Kurzzeichen in der Terminbeschreibung (H … SZ)
WEEK_DAYS: list[int] = [1, 2, 3, 4, 5, 6]


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Wandelt RRGGBB-String in (r, g, b)-Tupel um."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def today_str(day: Optional[date] = None) -> str:
    """Datum als YYYY.MM.DD. (ungarische Schreibweise); ohne Angabe: heute."""
    return (day or date.today()).strftime("%Y.%m.%d.")


def day_headers(days: Iterable[int] = WEEK_DAYS) -> list[str]:
    return [DAY_SHORT_HU[d] for d in days]


# ─── Zeitraster ───────────────────────────────────────────────────────────────

def hour_rows(window: TimelineWindow) -> list[int]:
    """Volle Stunden des sichtbaren Bereichs: start_hour … end_hour-1."""
    return list(range(window.start_hour, window.end_hour))


def slot_touches_hour(slot: ScheduleSlot, hour: int) -> bool:
    """True wenn der Slot das Stundenintervall [hour:00, hour+1:00) berührt."""
    return slot.start_minutes < (hour + 1) * 60 and slot.end_minutes > hour * 60


def build_week_grid(
    catalog: CourseCatalog, window: TimelineWindow
) -> dict[tuple[int, int], list[ScheduleSlot]]:
    """{(Wochentag, Stunde): [Slots]} für alle Stunden, die ein Slot berührt."""
    grid: dict[tuple[int, int], list[ScheduleSlot]] = {}
    for day in WEEK_DAYS:
        for slot in catalog.slots_for_weekday(day):
            for hour in hour_rows(window):
                if slot_touches_hour(slot, hour):
                    grid.setdefault((day, hour), []).append(slot)
    return grid


# ─── Kurs-Farbe ───────────────────────────────────────────────────────────────

def get_course_color(course: Optional[Course]) -> str:
    """Hintergrundfarbe einer Zelle nach Kurstyp."""
    if course is None or course.type_info is None:
        return COLORS["sonstig"]
    return COLORS[course.type_info.value]


# ─── Zelleninhalt-Formatierung ────────────────────────────────────────────────

def format_slot(slot: ScheduleSlot, catalog: CourseCatalog, with_time: bool = True) -> str:
    """Zelleninhalt eines Slots: "Fachname (Typ)\\nZeit Ort"."""
    course = catalog.get(slot.course_id)
    name = course.course_name if course else slot.course_id
    if course and course.type_info:
        name = f"{name} ({course.type_info.abbreviation})"
    detail = " ".join(p for p in (slot.time_range if with_time else "", slot.location) if p)
    return f"{name}\n{detail}" if detail else name


def format_slots(slots: list[ScheduleSlot], catalog: CourseCatalog) -> str:
    """Formatiert mehrere Slots für eine Zelle (getrennt durch ──)."""
    if not slots:
        return ""
    return "\n──\n".join(format_slot(s, catalog) for s in slots)


def conflicting_slots(catalog: CourseCatalog) -> set[ScheduleSlot]:
    """Alle Slots, die an mindestens einer Überschneidung beteiligt sind."""
    from analysis.conflicts import ConflictDetector

    report = ConflictDetector().find_conflicts(catalog.courses)
    result: set[ScheduleSlot] = set()
    for c in report.conflicts:
        result.add(c.first)
        result.add(c.second)
    return result
