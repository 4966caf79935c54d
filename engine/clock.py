"""Zeitquelle für "jetzt".

Alle zeitabhängigen Funktionen bekommen now als Parameter; nur die CLI
liest die Systemuhr über SystemClock.
"""

from datetime import datetime
from typing import Optional, Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Lokale Systemzeit (naiv, ohne Zeitzone)."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Feste Zeit, z.B. für Tests oder --now in der CLI."""

    def __init__(self, moment: datetime) -> None:
        self._moment = moment

    def now(self) -> datetime:
        return self._moment


def clock_from_option(value: Optional[str]) -> Clock:
    """ISO-Zeitstempel (CLI-Option) → FixedClock, sonst SystemClock."""
    if value:
        return FixedClock(datetime.fromisoformat(value))
    return SystemClock()
