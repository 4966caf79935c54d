"""iCalendar-Export eines Semesters (icalendar + pytz).

Jeder Wochen-Slot wird über SemesterCalculator.occurrences() in einzelne
Termine aufgelöst; pro Termin entsteht ein VEVENT ohne RRULE.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import icalendar
import pytz

from config.schema import ExportConfig
from engine.semester import SemesterCalculator
from models.course import Course
from models.course_catalog import CourseCatalog
from models.schedule_slot import ScheduleSlot
from models.semester import Semester

logger = logging.getLogger(__name__)


class IcsExporter:
    """Exportiert einen CourseCatalog als .ics für ein Semester."""

    def __init__(self, catalog: CourseCatalog, semester: Semester,
                 config: Optional[ExportConfig] = None) -> None:
        self.catalog = catalog
        self.semester = semester
        self.config = config or ExportConfig()
        self.tz = pytz.timezone(self.config.timezone)

    def _uid(self, course: Course, slot: ScheduleSlot, week: int) -> str:
        return (
            f"{course.id}-{slot.day_of_week}-{slot.start_time:%H%M}-{week}"
            f"@{self.config.uid_domain}"
        )

    def _description(self, course: Course) -> str:
        lines = [
            f"Tárgy: {course.course_code} {course.course_name}".rstrip(),
            f"Kurzus: {course.class_code}",
            f"Oktatók: {', '.join(course.instructors) or '-'}",
        ]
        return "\n".join(lines)

    def build_calendar(self, stamp: Optional[datetime] = None) -> icalendar.Calendar:
        """Baut den Kalender; stamp ist der DTSTAMP aller Termine (Default: jetzt, UTC)."""
        stamp = stamp or datetime.now(timezone.utc)

        cal = icalendar.Calendar()
        cal.add("prodid", "-//Orarend//HU")
        cal.add("version", "2.0")
        cal.add("calscale", "GREGORIAN")
        cal.add("x-wr-calname", f"{self.config.calendar_name} {self.semester.label}")
        cal.add("x-wr-timezone", self.config.timezone)

        count = 0
        for course in self.catalog.courses:
            for slot in course.slots:
                for day, start, end in SemesterCalculator.occurrences(slot, self.semester):
                    week = SemesterCalculator.academic_week(self.semester, day)
                    event = icalendar.Event()
                    event.add("uid", self._uid(course, slot, week))
                    event.add("summary", course.course_name or course.class_code or course.id)
                    event.add("description", self._description(course))
                    if slot.location:
                        event.add("location", slot.location)
                    if course.class_type:
                        event.add("categories", [course.class_type])
                    event.add("dtstart", self.tz.localize(start))
                    event.add("dtend", self.tz.localize(end))
                    event.add("dtstamp", stamp)
                    cal.add_component(event)
                    count += 1

        logger.info(f"{count} Termine für {self.semester.label} erzeugt")
        return cal

    def export(self, output_path: Path, stamp: Optional[datetime] = None) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.build_calendar(stamp).to_ical())
