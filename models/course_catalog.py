"""CourseCatalog: Kursbestand eines Imports + Statistik (Pydantic v2)."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from pydantic import BaseModel

from models.course import ClassType, Course
from models.schedule_slot import ScheduleSlot


class CatalogStatistics(BaseModel):
    """Kennzahlen des Kursbestands."""

    total_courses: int
    total_slots: int
    weekly_contact_hours: float          # Summe aller Slot-Dauern
    declared_weekly_hours: int           # Summe der Óraszám-Angaben
    courses_by_type: dict[str, int]


class CourseCatalog(BaseModel):
    """Vollständiger Kursbestand, wie er an die Persistenzschicht übergeben wird."""

    courses: list[Course] = []
    semester: Optional[str] = None       # Semesterkennung "YYYY/YY/N"
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Bestand pflegen ───

    def upsert(self, courses: Iterable[Course]) -> "CourseCatalog":
        """Ersetzt Kurse mit gleichem Kurscode vollständig, neue werden angehängt.

        Gibt einen neuen Katalog zurück; Reihenfolge bestehender Kurse bleibt erhalten.
        """
        incoming = list(courses)
        by_key = {self._key(c): c for c in incoming}
        merged: list[Course] = []
        seen: set[str] = set()
        for c in self.courses:
            key = self._key(c)
            if key in by_key:
                merged.append(by_key[key])
                seen.add(key)
            else:
                merged.append(c)
        for c in incoming:
            key = self._key(c)
            if key not in seen:
                merged.append(by_key[key])
                seen.add(key)
        return self.model_copy(update={"courses": merged})

    @staticmethod
    def _key(course: Course) -> str:
        return course.class_code or course.id

    def get(self, course_id: str) -> Optional[Course]:
        return next((c for c in self.courses if c.id == course_id), None)

    # ─── Abfragen ───

    def search(self, query: str) -> list[Course]:
        """Suche in Fachname, Fachcode und Lehrenden (ohne Groß-/Kleinschreibung)."""
        if not query:
            return list(self.courses)
        q = query.lower()
        return [
            c for c in self.courses
            if q in c.course_name.lower()
            or q in c.course_code.lower()
            or any(q in name.lower() for name in c.instructors)
        ]

    def filter_by_type(self, class_type: Optional[ClassType]) -> list[Course]:
        if class_type is None:
            return list(self.courses)
        return [c for c in self.courses if c.type_info == class_type]

    def slots_for_weekday(self, day_of_week: int) -> list[ScheduleSlot]:
        """Alle Termine eines Wochentags, nach Beginn sortiert."""
        slots = [s for c in self.courses for s in c.slots_on(day_of_week)]
        return sorted(slots, key=lambda s: (s.start_time, s.end_time))

    @property
    def all_slots(self) -> list[ScheduleSlot]:
        return [s for c in self.courses for s in c.slots]

    # ─── Übersicht ───

    def statistics(self) -> CatalogStatistics:
        by_type: dict[str, int] = {}
        for c in self.courses:
            label = c.type_info.value if c.type_info else (c.class_type or "-")
            by_type[label] = by_type.get(label, 0) + 1
        minutes = sum(s.duration_minutes for s in self.all_slots)
        return CatalogStatistics(
            total_courses=len(self.courses),
            total_slots=len(self.all_slots),
            weekly_contact_hours=minutes / 60,
            declared_weekly_hours=sum(c.weekly_hours for c in self.courses),
            courses_by_type=by_type,
        )

    def summary(self) -> str:
        """Kurze Übersicht über den Kursbestand."""
        stats = self.statistics()
        lines = [
            f"Semester: {self.semester}" if self.semester else "",
            f"Kurse: {stats.total_courses}",
            f"Termine pro Woche: {stats.total_slots} "
            f"({stats.weekly_contact_hours:.1f}h Präsenzzeit)",
            f"Óraszám gesamt: {stats.declared_weekly_hours}h",
            "Kurstypen: " + ", ".join(
                f"{k} {v}" for k, v in sorted(stats.courses_by_type.items())
            ) if stats.courses_by_type else "",
        ]
        return "\n".join(l for l in lines if l)

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path, stamp: Optional[datetime] = None) -> None:
        """Speichert den kompletten Katalog als JSON-Datei.

        stamp setzt modified_at (und created_at beim ersten Speichern);
        Default: jetzt, UTC.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = stamp or datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "CourseCatalog":
        """Lädt einen Katalog aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
