from models.schedule_slot import ScheduleSlot
from models.course import ClassType, Course
from models.semester import Semester, SemesterDateRange
from models.layout import DayLayout, HourMark, PositionedSlot
from models.course_catalog import CatalogStatistics, CourseCatalog

__all__ = [
    "ScheduleSlot",
    "ClassType",
    "Course",
    "Semester",
    "SemesterDateRange",
    "DayLayout",
    "HourMark",
    "PositionedSlot",
    "CatalogStatistics",
    "CourseCatalog",
]
