"""Parser für die Terminbeschreibung ("Órarend infó").

Grammatik:
    schedule := session (';' session)*
    session  := DAY ':' TIME '-' TIME '(' LOCATION ')'
    DAY      := 'H' | 'K' | 'SZE' | 'CS' | 'P' | 'SZ'
    TIME     := HH ':' MM        (HH 0-23, MM 0-59, je 1-2 Ziffern)
    LOCATION := beliebiger Text ohne ')'

Beispiel: "K:08:00-09:30(A); CS:14:00-15:30(B)" → zwei Slots.
Ein ';' innerhalb der Klammern gehört zum Ort: "H:10:00-11:00(A;B)" ist
eine Sitzung mit Ort "A;B".

Nicht passende Sitzungen werden verworfen, ohne den Rest abzubrechen.
parse_schedule_info() liefert nur die Slots, parse_schedule_info_detailed()
zusätzlich je verworfener Sitzung eine ScheduleParseWarning.
"""

import logging
import re
from datetime import time
from typing import Literal, Optional

from pydantic import BaseModel

from config.defaults import DAY_TOKENS
from models.schedule_slot import ScheduleSlot

logger = logging.getLogger(__name__)

_SESSION_RE = re.compile(
    r"^(?P<day>[A-Z]+):"
    r"(?P<sh>\d{1,2}):(?P<sm>\d{1,2})-(?P<eh>\d{1,2}):(?P<em>\d{1,2})"
    r"\((?P<loc>[^)]*)\)$"
)


class ScheduleParseWarning(BaseModel):
    """Eine verworfene Sitzungsbeschreibung."""

    descriptor: str          # der betroffene Teilstring (getrimmt)
    index: int               # Position innerhalb der ';'-Liste, 0-basiert
    reason: Literal["syntax", "unknown_day", "invalid_time", "empty_interval"]

    def __str__(self) -> str:
        return f"Sitzung {self.index + 1} '{self.descriptor}' verworfen ({self.reason})"


class ScheduleParseResult(BaseModel):
    slots: list[ScheduleSlot]
    warnings: list[ScheduleParseWarning]

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


def _to_time(hour: str, minute: str) -> Optional[time]:
    h, m = int(hour), int(minute)
    if not (0 <= h <= 23 and 0 <= m <= 59):
        return None
    return time(h, m)


def _split_sessions(raw: str) -> list[str]:
    """Trennt an ';', aber nur außerhalb einer Ortsangabe in Klammern.

    Der Ort endet erst am nächsten ')'; ein weiteres '(' darin öffnet
    keine neue Ebene.
    """
    parts: list[str] = []
    current: list[str] = []
    in_location = False
    for char in raw:
        if char == ";" and not in_location:
            parts.append("".join(current))
            current = []
            continue
        if char == "(":
            in_location = True
        elif char == ")":
            in_location = False
        current.append(char)
    parts.append("".join(current))
    return parts


def _parse_session(descriptor: str, index: int) -> tuple[Optional[ScheduleSlot], Optional[ScheduleParseWarning]]:
    """Parst genau eine Sitzung. Liefert (Slot, None) oder (None, Warnung)."""

    def reject(reason: str):
        logger.debug(f"Sitzung verworfen ({reason}): {descriptor!r}")
        return None, ScheduleParseWarning(descriptor=descriptor, index=index, reason=reason)

    m = _SESSION_RE.match(descriptor)
    if m is None:
        return reject("syntax")

    day = DAY_TOKENS.get(m.group("day"))
    if day is None:
        return reject("unknown_day")

    start = _to_time(m.group("sh"), m.group("sm"))
    end = _to_time(m.group("eh"), m.group("em"))
    if start is None or end is None:
        return reject("invalid_time")
    if start >= end:
        return reject("empty_interval")

    slot = ScheduleSlot(
        day_of_week=day,
        start_time=start,
        end_time=end,
        location=m.group("loc").strip(),
    )
    return slot, None


def parse_schedule_info_detailed(raw: Optional[str]) -> ScheduleParseResult:
    """Parst die komplette Terminbeschreibung samt Warnungen.

    Leere Teile (z.B. durch ein abschließendes ';') sind keine Sitzungen und
    erzeugen keine Warnung. Slots erscheinen in Quellreihenfolge. Ein ';' in
    der Ortsangabe trennt keine Sitzungen.
    """
    slots: list[ScheduleSlot] = []
    warnings: list[ScheduleParseWarning] = []
    if raw is None or not raw.strip():
        return ScheduleParseResult(slots=slots, warnings=warnings)

    for index, part in enumerate(_split_sessions(raw)):
        descriptor = part.strip()
        if not descriptor:
            continue
        slot, warning = _parse_session(descriptor, index)
        if slot is not None:
            slots.append(slot)
        if warning is not None:
            warnings.append(warning)

    return ScheduleParseResult(slots=slots, warnings=warnings)


def parse_schedule_info(raw: Optional[str]) -> list[ScheduleSlot]:
    """Terminbeschreibung → Slots. Nicht passende Sitzungen entfallen stillschweigend."""
    return parse_schedule_info_detailed(raw).slots
