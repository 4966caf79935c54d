"""Ergebnis-Modelle der Zeitleisten-Berechnung (Pydantic v2)."""

from datetime import date
from typing import Optional

from pydantic import BaseModel

from models.schedule_slot import ScheduleSlot


class PositionedSlot(BaseModel):
    """Ein Termin mit Koordinaten auf der Zeitleiste."""

    slot: ScheduleSlot
    top: float          # Abstand vom oberen Rand (Pixel), kann bei Teil-Sichtbarkeit < 0 sein
    height: float       # Höhe abzüglich slot_margin, nie negativ
    is_current: bool = False


class HourMark(BaseModel):
    """Linie des Stundenrasters."""

    hour: int
    offset: float


class DayLayout(BaseModel):
    """Layout eines einzelnen Kalendertages."""

    day: date
    slots: list[PositionedSlot]
    now_offset: Optional[float] = None   # nur am selben Kalendertag und im sichtbaren Bereich
    total_height: float
    hour_marks: list[HourMark] = []

    @property
    def current_slot(self) -> Optional[PositionedSlot]:
        return next((p for p in self.slots if p.is_current), None)

    @property
    def is_empty(self) -> bool:
        return not self.slots
