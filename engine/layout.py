"""Zeitleisten-Layout für Tages- und Wochenansicht.

Positionen in Pixeln relativ zum oberen Rand des Fensters:
    top    = (Beginn_min - start_hour*60) / 60 * pixels_per_hour
    height = Dauer_min / 60 * pixels_per_hour - slot_margin   (min. 0)

Überlappende Slots werden unabhängig voneinander positioniert; Konflikte
meldet analysis.conflicts.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from config.schema import TimelineWindow
from models.course import Course
from models.layout import DayLayout, HourMark, PositionedSlot
from models.schedule_slot import ScheduleSlot

logger = logging.getLogger(__name__)


def _sort_key(slot: ScheduleSlot):
    return (slot.start_time, slot.end_time)


def slots_for_date(courses: Iterable[Course], day: date) -> list[ScheduleSlot]:
    """Alle Slots der Kurse am Wochentag von day, nach Beginn sortiert."""
    weekday = day.isoweekday()
    slots = [s for c in courses for s in c.slots_on(weekday)]
    return sorted(slots, key=_sort_key)


def next_slot(slots: Iterable[ScheduleSlot], now: datetime) -> Optional[ScheduleSlot]:
    """Nächster Slot, der heute nach now beginnt."""
    weekday = now.isoweekday()
    later = [
        s for s in slots
        if s.day_of_week == weekday and s.start_time > now.time()
    ]
    return min(later, key=_sort_key) if later else None


class CalendarLayoutEngine:
    """Bildet die Slots eines Tages auf die vertikale Zeitleiste ab."""

    def __init__(self, window: Optional[TimelineWindow] = None) -> None:
        self.window = window or TimelineWindow()

    # ─── Einzelwerte ───

    def is_visible(self, slot: ScheduleSlot) -> bool:
        """False, wenn der Slot vollständig außerhalb des Fensters liegt."""
        w = self.window
        return slot.end_minutes > w.start_minutes and slot.start_minutes < w.end_minutes

    def position(self, slot: ScheduleSlot) -> tuple[float, float]:
        """(top, height) eines Slots, ohne Sichtbarkeitsprüfung."""
        w = self.window
        top = w.offset_for_minutes(slot.start_minutes)
        height = slot.duration_minutes / 60 * w.pixels_per_hour - w.slot_margin
        return top, max(height, 0.0)

    def now_offset(self, day: date, now: datetime) -> Optional[float]:
        """Position der Jetzt-Linie; nur am selben Kalendertag und im Fenster."""
        if day != now.date():
            return None
        w = self.window
        minutes = now.hour * 60 + now.minute
        if not (w.start_minutes <= minutes <= w.end_minutes):
            return None
        return w.offset_for_minutes(minutes)

    @staticmethod
    def is_current(slot: ScheduleSlot, day: date, now: datetime) -> bool:
        """Gleicher Wochentag wie now und now.time() in [Beginn, Ende)."""
        if day.isoweekday() != now.isoweekday():
            return False
        return slot.contains_time(now.time())

    def hour_marks(self) -> list[HourMark]:
        w = self.window
        return [
            HourMark(hour=h, offset=w.offset_for_minutes(h * 60))
            for h in range(w.start_hour, w.end_hour + 1)
        ]

    # ─── Layouts ───

    def layout_day(self, slots: Iterable[ScheduleSlot], day: date, now: datetime) -> DayLayout:
        """Layout eines Kalendertages.

        Berücksichtigt nur Slots mit dem Wochentag von day. Teilweise
        sichtbare Slots behalten ihre ungekürzten Koordinaten.
        """
        weekday = day.isoweekday()
        positioned: list[PositionedSlot] = []
        hidden = 0
        for slot in sorted((s for s in slots if s.day_of_week == weekday), key=_sort_key):
            if not self.is_visible(slot):
                hidden += 1
                continue
            top, height = self.position(slot)
            positioned.append(PositionedSlot(
                slot=slot,
                top=top,
                height=height,
                is_current=self.is_current(slot, day, now),
            ))
        if hidden:
            logger.debug(f"{day}: {hidden} Slot(s) außerhalb des sichtbaren Bereichs")

        return DayLayout(
            day=day,
            slots=positioned,
            now_offset=self.now_offset(day, now),
            total_height=self.window.total_height,
            hour_marks=self.hour_marks(),
        )

    def layout_week(self, slots: Iterable[ScheduleSlot], any_day: date, now: datetime) -> list[DayLayout]:
        """Sieben Tageslayouts ab dem Montag der Woche von any_day."""
        slots = list(slots)
        monday = any_day - timedelta(days=any_day.isoweekday() - 1)
        return [
            self.layout_day(slots, monday + timedelta(days=offset), now)
            for offset in range(7)
        ]
