"""Tests für das Konfigurationssystem."""

from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import (
    CLASS_TYPE_METADATA,
    DAY_NAMES_HU,
    DAY_TOKENS,
    default_app_config,
    default_timeline,
)
from config.manager import ConfigManager
from config.schema import AppConfig, ColumnConfig, TimelineWindow


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_columns(self):
        cols = ColumnConfig()
        assert cols.required == [
            "Tárgy kódja", "Tárgy neve", "Kurzus kódja", "Kurzus típusa",
            "Óraszám:", "Órarend infó", "Oktatók",
        ]
        assert cols.all_columns[-1] == "Várólista"

    def test_day_tokens(self):
        assert DAY_TOKENS == {"H": 1, "K": 2, "SZE": 3, "CS": 4, "P": 5, "SZ": 6}
        assert 7 not in DAY_TOKENS.values()
        assert DAY_NAMES_HU[1] == "Hétfő"

    def test_class_types(self):
        assert set(CLASS_TYPE_METADATA) == {"Előadás", "Gyakorlat", "Labor"}

    def test_default_timeline(self):
        tl = default_timeline()
        assert tl.start_minutes == 480
        assert tl.end_minutes == 1320
        assert tl.offset_for_minutes(540) == pytest.approx(80.0)

    def test_default_app_config(self):
        config = default_app_config()
        assert config.export.timezone == "Europe/Budapest"
        assert config.catalog_path == "output/courses.json"


class TestPydanticValidation:
    @pytest.mark.parametrize("kwargs", [
        {"start_hour": 10, "end_hour": 10},
        {"start_hour": -1},
        {"end_hour": 25},
        {"pixels_per_hour": -5},
        {"slot_margin": -1},
    ])
    def test_invalid_timeline(self, kwargs):
        with pytest.raises(ValidationError):
            TimelineWindow(**kwargs)

    def test_partial_config_uses_defaults(self):
        config = AppConfig.model_validate({"timeline": {"start_hour": 7}})
        assert config.timeline.start_hour == 7
        assert config.timeline.end_hour == 22
        assert config.columns.course_name == "Tárgy neve"


# ─── CONFIG MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern, laden und validieren (Roundtrip)."""
        config = default_app_config().model_copy(
            update={"timeline": TimelineWindow(start_hour=7, end_hour=20)}
        )
        mgr = ConfigManager(tmp_path / "app_config.yaml")

        mgr.save(config)
        assert mgr.DEFAULT_CONFIG.exists()

        loaded = mgr.load()
        assert loaded == config

    def test_saved_yaml_has_comments(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "app_config.yaml")
        mgr.save(default_app_config())
        text = mgr.DEFAULT_CONFIG.read_text(encoding="utf-8")
        assert "─── Zeitleiste ───" in text
        assert "Tárgy kódja" in text

    def test_header_date_is_injectable(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "app_config.yaml")
        mgr.save(default_app_config(), created=date(2025, 9, 1))
        text = mgr.DEFAULT_CONFIG.read_text(encoding="utf-8")
        assert "# Erstellt: 2025-09-01" in text
        assert mgr.load() == default_app_config()

    def test_first_run_check(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "app_config.yaml")
        assert mgr.first_run_check() is True
        mgr.save(default_app_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        mgr = ConfigManager()
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_load_invalid_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("timeline:\n  start_hour: 20\n  end_hour: 8\n", encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager().load(path)

    def test_load_or_default(self, tmp_path: Path):
        mgr = ConfigManager(tmp_path / "missing.yaml")
        assert mgr.load_or_default() == default_app_config()
