from engine.clock import Clock, FixedClock, SystemClock, clock_from_option
from engine.layout import CalendarLayoutEngine, next_slot, slots_for_date
from engine.semester import SemesterCalculator

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "clock_from_option",
    "CalendarLayoutEngine",
    "next_slot",
    "slots_for_date",
    "SemesterCalculator",
]
