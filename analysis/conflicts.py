"""Terminüberschneidungen zwischen Slots und Kursen.

Zwei Slots kollidieren, wenn sie am selben Wochentag liegen und sich die
halboffenen Intervalle [Beginn, Ende) überschneiden. Direkt
aufeinanderfolgende Termine (a.Ende == b.Beginn) kollidieren nicht.
"""

from itertools import combinations
from typing import Iterable

from pydantic import BaseModel

from models.course import Course
from models.schedule_slot import ScheduleSlot


def conflicts(a: ScheduleSlot, b: ScheduleSlot) -> bool:
    """True wenn sich a und b zeitlich überschneiden (symmetrisch)."""
    if a.day_of_week != b.day_of_week:
        return False
    return a.start_time < b.end_time and b.start_time < a.end_time


def overlap_minutes(a: ScheduleSlot, b: ScheduleSlot) -> int:
    """Dauer der Überschneidung in Minuten, 0 ohne Konflikt."""
    if not conflicts(a, b):
        return 0
    return min(a.end_minutes, b.end_minutes) - max(a.start_minutes, b.start_minutes)


def courses_conflict(a: Course, b: Course) -> bool:
    return any(conflicts(x, y) for x in a.slots for y in b.slots)


class SlotConflict(BaseModel):
    """Ein überschneidendes Slot-Paar."""

    first: ScheduleSlot
    second: ScheduleSlot
    first_course: str        # Anzeigename des Kurses
    second_course: str
    overlap_minutes: int

    @property
    def same_course(self) -> bool:
        return self.first.course_id == self.second.course_id

    @property
    def description(self) -> str:
        return (
            f"{self.first.day_name}: {self.first_course} ({self.first.time_range}) "
            f"↔ {self.second_course} ({self.second.time_range}), "
            f"{self.overlap_minutes} min"
        )


class ConflictReport(BaseModel):
    """Ergebnis der Konfliktsuche über einen Kursbestand."""

    conflicts: list[SlotConflict]
    checked_slots: int

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold red]✗ ÜBERSCHNEIDUNGEN GEFUNDEN[/bold red]"
            if self.has_conflicts
            else "[bold green]✓ KEINE ÜBERSCHNEIDUNGEN[/bold green]"
        )
        lines = [status, f"Geprüfte Termine: {self.checked_slots} | Konflikte: {len(self.conflicts)}"]
        console.print(Panel("\n".join(lines), title="Konfliktprüfung", border_style="cyan"))

        if not self.conflicts:
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Tag", width=10)
        table.add_column("Kurs A")
        table.add_column("Zeit A", width=13)
        table.add_column("Kurs B")
        table.add_column("Zeit B", width=13)
        table.add_column("Min", justify="right", width=5)

        for c in self.conflicts:
            table.add_row(
                c.first.day_name,
                c.first_course,
                c.first.time_range,
                c.second_course,
                c.second.time_range,
                f"[red]{c.overlap_minutes}[/red]",
            )
        console.print(table)


class ConflictDetector:
    """Sucht alle überschneidenden Slot-Paare in einer Kursmenge."""

    def find_conflicts(self, courses: Iterable[Course]) -> ConflictReport:
        """Jedes überschneidende Paar genau einmal, auch innerhalb eines Kurses.

        Sortiert nach Wochentag und Beginn des ersten Slots.
        """
        courses = list(courses)
        names = {c.id: str(c) for c in courses}
        slots = sorted(
            (s for c in courses for s in c.slots),
            key=lambda s: (s.day_of_week, s.start_time, s.end_time),
        )

        found: list[SlotConflict] = []
        for a, b in combinations(slots, 2):
            if not conflicts(a, b):
                continue
            found.append(SlotConflict(
                first=a,
                second=b,
                first_course=names.get(a.course_id, a.course_id),
                second_course=names.get(b.course_id, b.course_id),
                overlap_minutes=overlap_minutes(a, b),
            ))
        return ConflictReport(conflicts=found, checked_slots=len(slots))
