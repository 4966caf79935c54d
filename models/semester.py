"""Datenmodell für ein akademisches Halbjahr (Pydantic v2)."""

import re
from datetime import date, datetime
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from config.defaults import (
    FIRST_SEMESTER_END,
    FIRST_SEMESTER_START,
    SECOND_SEMESTER_END,
    SECOND_SEMESTER_START,
)

_LABEL_RE = re.compile(r"^(\d{4})/(\d{2})/([12])$")


class SemesterDateRange(BaseModel):
    """Geschlossenes Datumsintervall [start, end] eines Semesters."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @property
    def days(self) -> int:
        """Anzahl Kalendertage (beide Grenzen eingeschlossen)."""
        return (self.end - self.start).days + 1

    def contains(self, d: Union[date, datetime]) -> bool:
        if isinstance(d, datetime):
            d = d.date()
        return self.start <= d <= self.end


class Semester(BaseModel):
    """Ein akademisches Halbjahr, Kennung "YYYY/YY/N" (z.B. "2025/26/1").

    number=1: Herbstsemester (September bis Januar),
    number=2: Frühjahrssemester (Februar bis Juni).

    start_year liegt in 1..9998, damit beide Kalenderjahre des Semesters
    als date darstellbar sind; außerhalb → ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    start_year: int = Field(ge=1, le=9998)
    number: Literal[1, 2]

    @computed_field
    @property
    def end_year(self) -> int:
        return self.start_year + 1

    # ─── Kennung ───

    @property
    def label(self) -> str:
        return f"{self.start_year}/{self.end_year % 100:02d}/{self.number}"

    @property
    def academic_year(self) -> str:
        """Studienjahr, z.B. "2025/2026"."""
        return f"{self.start_year}/{self.end_year}"

    @property
    def display_name(self) -> str:
        return f"{self.label} - {self.number}. félév"

    @staticmethod
    def is_valid_label(label: str) -> bool:
        m = _LABEL_RE.match(label.strip())
        if not m:
            return False
        start_year = int(m.group(1))
        if not 1 <= start_year <= 9998:
            return False
        return int(m.group(2)) == (start_year + 1) % 100

    @classmethod
    def from_label(cls, label: str) -> "Semester":
        """Parst "YYYY/YY/N". Ungültige Kennungen → ValueError."""
        m = _LABEL_RE.match(label.strip())
        if not m:
            raise ValueError(f"Ungültige Semesterkennung '{label}' (erwartet: YYYY/YY/N)")
        start_year = int(m.group(1))
        if int(m.group(2)) != (start_year + 1) % 100:
            raise ValueError(
                f"Ungültige Semesterkennung '{label}': Endjahr muss auf {start_year} folgen"
            )
        return cls(start_year=start_year, number=int(m.group(3)))

    # ─── Zeitraum ───

    @property
    def date_range(self) -> SemesterDateRange:
        if self.number == 1:
            return SemesterDateRange(
                start=date(self.start_year, *FIRST_SEMESTER_START),
                end=date(self.end_year, *FIRST_SEMESTER_END),
            )
        return SemesterDateRange(
            start=date(self.end_year, *SECOND_SEMESTER_START),
            end=date(self.end_year, *SECOND_SEMESTER_END),
        )

    def contains_date(self, d: Union[date, datetime]) -> bool:
        """True wenn d im Semesterzeitraum liegt (Grenzen eingeschlossen)."""
        return self.date_range.contains(d)

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.start_year, self.number)

    def __lt__(self, other: "Semester") -> bool:
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        return self.label
