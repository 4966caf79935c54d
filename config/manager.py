"""Konfigurationsmanager: Laden, Speichern und Anzeigen der App-Konfiguration.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import default_app_config
from config.schema import AppConfig

logger = logging.getLogger(__name__)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

def _yaml_header(day: Optional[date] = None) -> str:
    return f"""\
# ============================================
# Órarend: Konfiguration
# Erstellt: {(day or date.today()).isoformat()}
# ============================================
"""


_SECTION_COMMENTS = {
    "columns": (
        "Spalten der Kursliste",
        "Exakte Spaltennamen im Tabellenkopf (Groß-/Kleinschreibung beachten).",
    ),
    "timeline": (
        "Zeitleiste",
        "Sichtbarer Bereich der Tages-/Wochenansicht. Termine außerhalb entfallen.",
    ),
    "export": (
        "Export",
        None,
    ),
    "catalog_path": (
        "Kurskatalog",
        "Speicherort des importierten Katalogs (JSON).",
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "app_config.yaml"

    def __init__(self, path: Optional[Path] = None) -> None:
        if path is not None:
            self.DEFAULT_CONFIG = Path(path)

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> AppConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py config init' aus, um sie anzulegen."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return AppConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_or_default(self, path: Optional[Path] = None) -> AppConfig:
        """Wie load(), aber ohne Datei mit Standardwerten."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        if not target.exists():
            logger.debug(f"Keine Konfiguration unter {target}, verwende Standardwerte")
            return default_app_config()
        return self.load(target)

    # ─── Speichern ───

    def save(self, config: AppConfig, path: Optional[Path] = None,
             created: Optional[date] = None) -> Path:
        """Speichere Config als YAML mit Abschnittskommentaren.

        created ist das Datum im Dateikopf (Default: heute).
        """
        target = Path(path) if path else self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_yaml_header(created) + "\n")
            yaml.dump(data, f)

        logger.info(f"Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: AppConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        # Inline-Kommentar für die ignorierte Spalte
        columns_map = CommentedMap(cm["columns"])
        columns_map.yaml_add_eol_comment("wird nicht ausgewertet", "waiting_list")
        cm["columns"] = columns_map

        return cm

    # ─── Anzeige ───

    def show(self, config: AppConfig) -> None:
        """Gibt die Konfiguration als Tabelle aus."""
        table = Table(title="Konfiguration", box=box.SIMPLE)
        table.add_column("Bereich", style="bold cyan")
        table.add_column("Parameter", style="bold")
        table.add_column("Wert")
        for section in ("columns", "timeline", "export"):
            for key, value in getattr(config, section).model_dump().items():
                table.add_row(section, key, str(value))
        table.add_row("catalog", "catalog_path", config.catalog_path)
        console.print(table)
