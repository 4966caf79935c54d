from config.schema import (
    AppConfig,
    ColumnConfig,
    ExportConfig,
    TimelineWindow,
)


# ─── Wochentage ───────────────────────────────────────────────────────────────

# Tages-Kürzel der Terminbeschreibung → ISO-Wochentag (Mo=1 … So=7).
# Ein Kürzel für Sonntag kommt in den Quelldaten nicht vor.
DAY_TOKENS: dict[str, int] = {
    "H": 1,     # Hétfő
    "K": 2,     # Kedd
    "SZE": 3,   # Szerda
    "CS": 4,    # Csütörtök
    "P": 5,     # Péntek
    "SZ": 6,    # Szombat
}

DAY_NAMES_HU: dict[int, str] = {
    1: "Hétfő",
    2: "Kedd",
    3: "Szerda",
    4: "Csütörtök",
    5: "Péntek",
    6: "Szombat",
    7: "Vasárnap",
}

# Kurzform für Tabellenköpfe
DAY_SHORT_HU: dict[int, str] = {
    1: "H",
    2: "K",
    3: "Sze",
    4: "Cs",
    5: "P",
    6: "Szo",
    7: "V",
}


# ─── Kurstypen ────────────────────────────────────────────────────────────────

# Bekannte Kurstypen der Quelldaten. Weitere Bezeichnungen bleiben als
# Freitext erhalten und bekommen die Standardfarbe.
CLASS_TYPE_METADATA: dict[str, dict] = {
    "Előadás":   {"abbreviation": "E", "color": "03284F", "priority": 1},
    "Gyakorlat": {"abbreviation": "G", "color": "C6A882", "priority": 2},
    "Labor":     {"abbreviation": "L", "color": "4A5C73", "priority": 3},
}

DEFAULT_CLASS_COLOR = "03284F"


# ─── Semestergrenzen ──────────────────────────────────────────────────────────

# 1. Semester: 1. September (start_year) bis 31. Januar (end_year)
# 2. Semester: 1. Februar bis 30. Juni (beide end_year)
FIRST_SEMESTER_START = (9, 1)
FIRST_SEMESTER_END = (1, 31)
SECOND_SEMESTER_START = (2, 1)
SECOND_SEMESTER_END = (6, 30)


def default_columns() -> ColumnConfig:
    """Ungarische Spaltenköpfe des Kurslisten-Exports."""
    return ColumnConfig()


def default_timeline() -> TimelineWindow:
    """Standard-Zeitleiste: 08:00 bis 22:00, 80 Pixel pro Stunde, 4 Pixel Abstand."""
    return TimelineWindow(
        start_hour=8,
        end_hour=22,
        pixels_per_hour=80.0,
        slot_margin=4.0,
    )


def default_app_config() -> AppConfig:
    """Vollständige Default-Konfiguration."""
    return AppConfig(
        columns=default_columns(),
        timeline=default_timeline(),
        export=ExportConfig(),
    )
