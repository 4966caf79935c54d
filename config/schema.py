from pydantic import BaseModel, Field, model_validator


# ─── SPALTEN DER KURSLISTE ───

class ColumnConfig(BaseModel):
    """Externe Spaltennamen der Kurslisten-Tabelle.

    Die Namen sind exakt (groß-/kleinschreibungssensitiv) so einzutragen,
    wie sie im Tabellenkopf des Exports stehen.
    """
    # Tárgy kódja → Course.course_code
    course_code: str = Field("Tárgy kódja",
        description="Spalte: Fachcode")
    # Tárgy neve → Course.course_name
    course_name: str = Field("Tárgy neve",
        description="Spalte: Fachname")
    # Kurzus kódja → Course.class_code (Grundlage der Kurs-ID)
    class_code: str = Field("Kurzus kódja",
        description="Spalte: Kurscode")
    # Kurzus típusa → Course.class_type (Előadás / Gyakorlat / Labor / ...)
    class_type: str = Field("Kurzus típusa",
        description="Spalte: Kurstyp")
    # Óraszám: → Course.weekly_hours (nur Ziffern werden ausgewertet)
    weekly_hours: str = Field("Óraszám:",
        description="Spalte: Wochenstunden")
    # Órarend infó → Rohtext der Termine
    schedule_info: str = Field("Órarend infó",
        description="Spalte: Terminbeschreibung")
    # Oktatók → Lehrende, getrennt durch ',' oder ';'
    instructors: str = Field("Oktatók",
        description="Spalte: Lehrende")
    # Várólista → wird akzeptiert, aber nie gelesen
    waiting_list: str = Field("Várólista",
        description="Spalte: Warteliste (ignoriert)")

    @property
    def required(self) -> list[str]:
        """Alle ausgewerteten Spalten in Tabellenreihenfolge (ohne Warteliste)."""
        return [
            self.course_code, self.course_name, self.class_code, self.class_type,
            self.weekly_hours, self.schedule_info, self.instructors,
        ]

    @property
    def all_columns(self) -> list[str]:
        """Ausgewertete Spalten plus ignorierte Warteliste."""
        return self.required + [self.waiting_list]


# ─── ZEITLEISTE (Tages-/Wochenansicht) ───

class TimelineWindow(BaseModel):
    """Sichtbarer Ausschnitt der vertikalen Zeitleiste.

    Slots, die vollständig außerhalb von [start_hour, end_hour] liegen,
    werden nicht dargestellt (abgeschnitten, nicht gestaucht).
    """
    # Erste sichtbare Stunde (z.B. 8 = 08:00)
    start_hour: int = Field(8, ge=0, le=23,
        description="Erste sichtbare Stunde")
    # Letzte sichtbare Stunde (z.B. 22 = 22:00)
    end_hour: int = Field(22, ge=1, le=24,
        description="Letzte sichtbare Stunde")
    # Höhe einer Stunde in Pixeln
    pixels_per_hour: float = Field(80.0, gt=0,
        description="Pixel pro Stunde")
    # Abstand zwischen direkt aufeinanderfolgenden Slots
    slot_margin: float = Field(4.0, ge=0,
        description="Abzug von der Slot-Höhe (Pixel)")

    @model_validator(mode='after')
    def validate_bounds(self):
        if self.start_hour >= self.end_hour:
            raise ValueError(
                f"start_hour ({self.start_hour}) muss vor end_hour ({self.end_hour}) liegen")
        return self

    @property
    def start_minutes(self) -> int:
        return self.start_hour * 60

    @property
    def end_minutes(self) -> int:
        return self.end_hour * 60

    @property
    def total_height(self) -> float:
        """Gesamthöhe der Zeitleiste in Pixeln."""
        return (self.end_hour - self.start_hour) * self.pixels_per_hour

    def offset_for_minutes(self, minutes: int) -> float:
        """Vertikaler Abstand (Pixel) einer Uhrzeit vom oberen Rand."""
        return (minutes - self.start_minutes) / 60 * self.pixels_per_hour


# ─── EXPORT ───

class ExportConfig(BaseModel):
    """Einstellungen für iCalendar-, Excel- und PDF-Export."""
    # Zeitzone der Termine (IANA-Name)
    timezone: str = Field("Europe/Budapest",
        description="Zeitzone der exportierten Termine")
    # Name des Kalenders (X-WR-CALNAME)
    calendar_name: str = Field("Órarend",
        description="Kalendername im iCalendar-Export")
    # Domain-Teil der Termin-UIDs
    uid_domain: str = Field("orarend.local",
        description="Domain für iCalendar-UIDs")
    # Kopfzeile in Excel/PDF
    institution: str = Field("Egyetem",
        description="Name der Hochschule (Kopfzeile)")


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration."""
    # Spaltennamen der importierten Kursliste
    columns: ColumnConfig = Field(default_factory=ColumnConfig)
    # Sichtbarer Bereich der Tages- und Wochenansicht
    timeline: TimelineWindow = Field(default_factory=TimelineWindow)
    # Export-Einstellungen
    export: ExportConfig = Field(default_factory=ExportConfig)
    # Standardpfad des gespeicherten Kurskatalogs
    catalog_path: str = Field("output/courses.json",
        description="Pfad des gespeicherten Kurskatalogs (JSON)")
