"""Renderer für die Terminal-Anzeige (Rich-Tabellen in main.py).

Liefert reine Tabellenzeilen; das Zeichnen übernimmt der Aufrufer.
"""

from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config.schema import TimelineWindow
    from models.course_catalog import CourseCatalog
    from models.layout import DayLayout


def render_week_rows(
    catalog: "CourseCatalog",
    window: "TimelineWindow",
) -> list[list[str]]:
    """Gibt Tabellenzeilen für das Wochenraster zurück.

    Jede Zeile: [Stunde, H, K, Sze, Cs, P, Szo]. Ein Slot erscheint in jeder
    Stunde, die er berührt; ab der zweiten Stunde nur als Fortsetzung '┆'.
    """
    from export.helpers import WEEK_DAYS, build_week_grid, hour_rows

    grid = build_week_grid(catalog, window)
    rows: list[list[str]] = []

    for hour in hour_rows(window):
        cells = [f"{hour:02d}:00"]
        for day in WEEK_DAYS:
            here = grid.get((day, hour), [])
            if not here:
                cells.append("—")
                continue
            parts = []
            for slot in here:
                if slot.start_minutes >= hour * 60:
                    course = catalog.get(slot.course_id)
                    name = course.course_name if course else slot.course_id
                    parts.append(f"{name}\n{slot.time_range}")
                else:
                    parts.append("┆")
            cells.append("\n".join(parts))
        rows.append(cells)

    return rows


def render_day_rows(
    layout: "DayLayout",
    catalog: "CourseCatalog",
    now: datetime,
) -> list[list[str]]:
    """Gibt Tabellenzeilen für die Tagesansicht zurück.

    Jede Zeile: [Zeit, Kurs, Typ, Ort, Position]. Der laufende Termin wird
    mit '▶' markiert, die Jetzt-Linie als eigene Zeile eingefügt.
    """
    rows: list[list[str]] = []
    now_inserted = layout.now_offset is None

    for positioned in layout.slots:
        slot = positioned.slot
        if not now_inserted and positioned.top > layout.now_offset:
            rows.append([f"{now:%H:%M}", "── most ──", "", "", f"{layout.now_offset:.0f}px"])
            now_inserted = True
        course = catalog.get(slot.course_id)
        marker = "▶ " if positioned.is_current else ""
        rows.append([
            slot.time_range,
            marker + (course.course_name if course else slot.course_id),
            course.class_type if course else "",
            slot.location,
            f"{positioned.top:.0f}px / {positioned.height:.0f}px",
        ])

    if not now_inserted:
        rows.append([f"{now:%H:%M}", "── most ──", "", "", f"{layout.now_offset:.0f}px"])

    return rows
