"""Datenmodell für einen wöchentlichen Termin (Pydantic v2)."""

from datetime import time

from pydantic import BaseModel, ConfigDict, Field, model_validator

from config.defaults import DAY_NAMES_HU


class ScheduleSlot(BaseModel):
    """Ein wöchentlich wiederkehrender Termin eines Kurses.

    Immutable (frozen=True). Entsteht einmalig beim Parsen der Terminbeschreibung;
    die Rückreferenz auf den Kurs wird danach über with_course() gesetzt,
    was ein neues Objekt erzeugt.
    """

    model_config = ConfigDict(frozen=True)

    day_of_week: int = Field(ge=1, le=7)   # 1=Hétfő … 7=Vasárnap (ISO)
    start_time: time
    end_time: time
    location: str = ""
    course_id: str = ""                    # Nachschlage-Referenz, kein Besitz

    @model_validator(mode='after')
    def _check_time_order(self):
        if self.start_time >= self.end_time:
            raise ValueError(
                f"Beginn ({self.start_time:%H:%M}) muss vor Ende ({self.end_time:%H:%M}) liegen"
            )
        return self

    @property
    def start_minutes(self) -> int:
        """Beginn in Minuten seit Mitternacht."""
        return self.start_time.hour * 60 + self.start_time.minute

    @property
    def end_minutes(self) -> int:
        """Ende in Minuten seit Mitternacht."""
        return self.end_time.hour * 60 + self.end_time.minute

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    @property
    def time_range(self) -> str:
        """Zeitspanne als "HH:MM - HH:MM"."""
        return f"{self.start_time:%H:%M} - {self.end_time:%H:%M}"

    @property
    def day_name(self) -> str:
        """Ungarischer Name des Wochentags."""
        return DAY_NAMES_HU[self.day_of_week]

    def contains_time(self, t: time) -> bool:
        """True wenn t im halboffenen Intervall [Beginn, Ende) liegt."""
        return self.start_time <= t < self.end_time

    def with_course(self, course_id: str) -> "ScheduleSlot":
        """Kopie mit gesetzter Kurs-Referenz."""
        return self.model_copy(update={"course_id": course_id})

    def __str__(self) -> str:
        loc = f" ({self.location})" if self.location else ""
        return f"{self.day_name} {self.time_range}{loc}"
