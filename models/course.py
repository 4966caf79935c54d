"""Datenmodell für einen Kurs (Pydantic v2)."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from config.defaults import CLASS_TYPE_METADATA, DEFAULT_CLASS_COLOR
from models.schedule_slot import ScheduleSlot


class ClassType(str, Enum):
    """Bekannte Kurstypen. Unbekannte Bezeichnungen bleiben Freitext am Kurs."""

    LECTURE = "Előadás"
    PRACTICE = "Gyakorlat"
    LABORATORY = "Labor"

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["ClassType"]:
        """Ordnet eine Bezeichnung aus der Tabelle zu (ohne Beachtung der Schreibweise)."""
        if not label:
            return None
        wanted = label.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None

    @property
    def abbreviation(self) -> str:
        return CLASS_TYPE_METADATA[self.value]["abbreviation"]

    @property
    def color(self) -> str:
        return CLASS_TYPE_METADATA[self.value]["color"]

    @property
    def sort_priority(self) -> int:
        """Vorlesungen zuerst, dann Übungen, dann Labore."""
        return CLASS_TYPE_METADATA[self.value]["priority"]


def _attach_owner(slot, course_id: str):
    """Setzt die Kurs-Referenz eines noch nicht zugeordneten Slots."""
    if isinstance(slot, ScheduleSlot):
        if not slot.course_id:
            return slot.with_course(course_id)
        if slot.course_id != course_id:
            raise ValueError(
                f"Slot gehört zu Kurs '{slot.course_id}', nicht zu '{course_id}'"
            )
        return slot
    if isinstance(slot, dict) and not slot.get("course_id"):
        return {**slot, "course_id": course_id}
    return slot


class Course(BaseModel):
    """Eine angebotene Lehrveranstaltung (eine Zeile der Kursliste).

    slots wird ausschließlich aus raw_schedule_info abgeleitet. Bei einem
    erneuten Import wird der Kurs vollständig ersetzt.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    course_code: str = ""                  # Tárgy kódja
    course_name: str = ""                  # Tárgy neve
    class_code: str = ""                   # Kurzus kódja
    class_type: str = ""                   # Kurzus típusa (offene Menge)
    weekly_hours: int = Field(0, ge=0)     # Óraszám
    instructors: list[str] = []            # Oktatók, Reihenfolge wie in der Tabelle
    raw_schedule_info: str = ""            # Órarend infó, unverändert
    slots: list[ScheduleSlot] = []

    @model_validator(mode='before')
    @classmethod
    def _assign_slot_owner(cls, data):
        if isinstance(data, dict) and data.get("id") and data.get("slots"):
            course_id = data["id"]
            data = {**data, "slots": [_attach_owner(s, course_id) for s in data["slots"]]}
        return data

    # ─── Anzeige ───

    @property
    def type_info(self) -> Optional[ClassType]:
        return ClassType.from_label(self.class_type)

    @property
    def display_color(self) -> str:
        """Hex-Farbe (RRGGBB) nach Kurstyp."""
        info = self.type_info
        return info.color if info else DEFAULT_CLASS_COLOR

    @property
    def formatted_instructors(self) -> str:
        if not self.instructors:
            return "Nincs oktató"
        if len(self.instructors) == 1:
            return self.instructors[0]
        return f"{self.instructors[0]} (+{len(self.instructors) - 1})"

    # ─── Abfragen ───

    def slots_on(self, day_of_week: int) -> list[ScheduleSlot]:
        """Alle Termine an einem Wochentag, in Quellreihenfolge."""
        return [s for s in self.slots if s.day_of_week == day_of_week]

    def has_conflict_with(self, other: "Course") -> bool:
        """True wenn sich irgendein Termin beider Kurse zeitlich überschneidet."""
        from analysis.conflicts import conflicts

        return any(conflicts(a, b) for a in self.slots for b in other.slots)

    def next_upcoming_slot(self, now: datetime) -> Optional[ScheduleSlot]:
        """Nächster Termin ab now.

        Reihenfolge: später am selben Tag → später in dieser Woche →
        erster Termin der nächsten Woche.
        """
        if not self.slots:
            return None
        today = now.isoweekday()
        current = now.time()

        later_today = [
            s for s in self.slots
            if s.day_of_week == today and s.start_time > current
        ]
        if later_today:
            return min(later_today, key=lambda s: s.start_time)

        later_this_week = [s for s in self.slots if s.day_of_week > today]
        if later_this_week:
            return min(later_this_week, key=lambda s: (s.day_of_week, s.start_time))

        return min(self.slots, key=lambda s: (s.day_of_week, s.start_time))

    def __str__(self) -> str:
        return f"{self.class_code or self.id} {self.course_name}".strip()
