"""PDF-Export des Wochenrasters (fpdf2, A4 quer).

Built-in-Fonts von fpdf2 kennen nur latin-1; ungarische Doppelakzente
werden deshalb über _pdf_safe() auf die einfachen Umlaute abgebildet.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from fpdf import FPDF

from config.defaults import CLASS_TYPE_METADATA
from config.schema import AppConfig
from models.course_catalog import CourseCatalog
from models.schedule_slot import ScheduleSlot

from export.helpers import (
    COLORS, WEEK_DAYS, build_week_grid, conflicting_slots, day_headers,
    format_slots, get_course_color, hex_to_rgb, hour_rows, today_str,
)

logger = logging.getLogger(__name__)

_LATIN1_REPLACEMENTS = {
    "ő": "ö", "Ő": "Ö",
    "ű": "ü", "Ű": "Ü",
    "–": "-", "—": "-",
    "─": "-", "┆": "|",
}


def _pdf_safe(text: str) -> str:
    """Ersetzt Zeichen außerhalb von latin-1 für die Built-in-Fonts."""
    for char, repl in _LATIN1_REPLACEMENTS.items():
        text = text.replace(char, repl)
    return text


# ─── Seitenmaße (mm) ──────────────────────────────────────────────────────────
# A4 quer 297 × 210, Rand 10: nutzbar 277 = Zeit 19 + 6 × Tag 43

_MARGIN        = 10.0
_TABLE_TOP     = 22.0
_PAGE_BOTTOM   = 210.0 - 18.0
_TIME_W        = 19.0
_DAY_W         = 43.0
_HEADER_H      = 7.0
_HOUR_H        = 11.0
_LEGEND_H      = 5.0
_LINE_H        = 2.8   # bei 6 pt
_MAX_CHARS     = 32


class _TimetablePdf(FPDF):
    """FPDF mit Kopfzeile (Einrichtung | Semester) und Seitenzähler."""

    def __init__(self, left_title: str, right_title: str = "", stamp: Optional[date] = None) -> None:
        super().__init__(orientation="L", unit="mm", format="A4")
        self.left_title = left_title
        self.right_title = right_title
        self.stamp = stamp
        self.alias_nb_pages()
        self.set_auto_page_break(auto=False)
        self.set_margins(left=_MARGIN, top=_TABLE_TOP, right=_MARGIN)

    def header(self) -> None:
        self.set_font("Helvetica", "B", 11)
        self.set_xy(_MARGIN, 8)
        self.cell(130, 7, _pdf_safe(self.left_title), border=0, align="L")
        self.cell(0, 7, _pdf_safe(self.right_title), border=0, align="R")
        self.set_draw_color(150, 150, 150)
        self.line(_MARGIN, 18, self.w - _MARGIN, 18)

    def footer(self) -> None:
        self.set_y(-14)
        self.set_font("Helvetica", "I", 7)
        self.cell(0, 8, f"{today_str(self.stamp)}  |  {self.page_no()}/{{nb}}", border=0, align="C")

    def draw_box(
        self,
        x: float, y: float, w: float, h: float,
        text: str = "",
        fill: Optional[str] = None,
        bold: bool = False,
        size: int = 6,
        white: bool = False,
    ) -> None:
        """Rechteck mit optionaler Füllung und zeilenweise zentriertem Text."""
        if fill:
            self.set_fill_color(*hex_to_rgb(fill))
            self.rect(x, y, w, h, style="F")
        self.set_draw_color(180, 180, 180)
        self.rect(x, y, w, h, style="D")
        if not text:
            return

        self.set_font("Helvetica", "B" if bold else "", size)
        self.set_text_color(*((255, 255, 255) if white else (0, 0, 0)))
        lines = [ln for ln in _pdf_safe(text).split("\n") if ln]
        lines = lines[:max(1, int(h // _LINE_H))]
        y_text = y + max(0.5, (h - len(lines) * _LINE_H) / 2)
        for line in lines:
            self.set_xy(x, y_text)
            self.cell(w, _LINE_H, line[:_MAX_CHARS], border=0, align="C")
            y_text += _LINE_H
        self.set_text_color(0, 0, 0)


class PdfExporter:
    """Exportiert das Wochenraster eines CourseCatalog als PDF."""

    def __init__(self, catalog: CourseCatalog, config: Optional[AppConfig] = None):
        self.catalog = catalog
        self.config = config or AppConfig()
        self.window = self.config.timeline

    def _subtitle(self) -> str:
        stats = self.catalog.statistics()
        parts = [
            f"{stats.total_courses} kurzus",
            f"{stats.weekly_contact_hours:.1f} óra/hét",
        ]
        if self.catalog.semester:
            parts.insert(0, self.catalog.semester)
        return " | ".join(parts)

    def export(self, output_path: Path, stamp: Optional[date] = None) -> None:
        """Erzeugt die PDF; reicht eine Seite nicht, wird der Kopf wiederholt.

        stamp ist das Datum in der Fußzeile (Default: heute).
        """
        pdf = _TimetablePdf(self.config.export.institution, self._subtitle(), stamp)
        pdf.add_page()
        y = self._draw_week(pdf)
        self._draw_legend(pdf, y + 3)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf.output(str(output_path))
        logger.info(f"PDF geschrieben: {output_path} ({pdf.page_no()} Seite(n))")

    # ─── Zeichnen ───

    def _header_row(self, pdf: _TimetablePdf, y: float) -> float:
        header = dict(fill=COLORS["header"], bold=True, size=8, white=True)
        pdf.draw_box(_MARGIN, y, _TIME_W, _HEADER_H, "Idő", **header)
        for i, name in enumerate(day_headers(WEEK_DAYS)):
            pdf.draw_box(_MARGIN + _TIME_W + i * _DAY_W, y, _DAY_W, _HEADER_H, name, **header)
        return y + _HEADER_H

    def _cell_fill(self, slots: list[ScheduleSlot], clashing: set[ScheduleSlot]) -> str:
        if not slots:
            return COLORS["free"]
        if any(s in clashing for s in slots):
            return COLORS["conflict"]
        return get_course_color(self.catalog.get(slots[0].course_id))

    def _draw_week(self, pdf: _TimetablePdf) -> float:
        grid = build_week_grid(self.catalog, self.window)
        clashing = conflicting_slots(self.catalog)

        y = self._header_row(pdf, _TABLE_TOP)
        for hour in hour_rows(self.window):
            if y + _HOUR_H > _PAGE_BOTTOM:
                pdf.add_page()
                y = self._header_row(pdf, _TABLE_TOP)
            pdf.draw_box(_MARGIN, y, _TIME_W, _HOUR_H, f"{hour:02d}:00", bold=True, size=8)
            for i, day in enumerate(WEEK_DAYS):
                here = grid.get((day, hour), [])
                pdf.draw_box(
                    _MARGIN + _TIME_W + i * _DAY_W, y, _DAY_W, _HOUR_H,
                    format_slots(here, self.catalog),
                    fill=self._cell_fill(here, clashing),
                )
            y += _HOUR_H
        return y

    def _draw_legend(self, pdf: _TimetablePdf, y: float) -> None:
        """Farblegende der Kurstypen und der Überschneidungen."""
        entries = [(label, COLORS[label]) for label in CLASS_TYPE_METADATA]
        entries.append(("Ütközés", COLORS["conflict"]))
        if y + _LEGEND_H > _PAGE_BOTTOM:
            pdf.add_page()
            y = _TABLE_TOP
        for i, (label, color) in enumerate(entries):
            pdf.draw_box(_MARGIN + i * 34, y, 32, _LEGEND_H, label, fill=color, size=7)
