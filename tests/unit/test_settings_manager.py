"""
Unit tests for the settings manager.
"""

import json
import pytest

from services.settings_manager import (
    EditorSettings, SettingsManager, get_settings, reset_settings_manager,
)


@pytest.fixture
def settings_path(temp_dir):
    return temp_dir / "config" / "settings.json"


class TestEditorSettings:
    """Tests for EditorSettings serialization."""

    def test_defaults(self):
        settings = EditorSettings()
        assert settings.edit.vertex_radius == 10.0
        assert settings.edit.snapping is True
        assert settings.edit.snapping_radius == 15.0
        assert (settings.canvas.width, settings.canvas.height) == (640, 480)
        assert settings.export.scale == 1.0
        assert settings.paths.history_file == ""

    def test_round_trip(self):
        settings = EditorSettings()
        settings.edit.snapping = False
        settings.export.scale = 0.05
        restored = EditorSettings.from_dict(settings.to_dict())
        assert restored == settings

    def test_unknown_keys_ignored(self):
        settings = EditorSettings.from_dict({
            "edit": {"vertex_radius": 6, "bogus": 1},
            "unknown_group": {},
        })
        assert settings.edit.vertex_radius == 6
        assert settings.edit.snapping is True

    def test_bad_group_uses_defaults(self):
        settings = EditorSettings.from_dict({"canvas": "wide"})
        assert settings.canvas.width == 640


class TestSettingsManager:
    """Tests for SettingsManager file handling."""

    def test_creates_directory(self, settings_path):
        SettingsManager(str(settings_path))
        assert settings_path.parent.is_dir()

    def test_setter_saves(self, settings_path):
        manager = SettingsManager(str(settings_path))
        manager.snapping = False
        data = json.loads(settings_path.read_text(encoding="utf-8"))
        assert data["edit"]["snapping"] is False

    def test_reload(self, settings_path):
        manager = SettingsManager(str(settings_path))
        manager.export_scale = 0.25
        assert SettingsManager(str(settings_path)).export_scale == 0.25

    def test_corrupt_file_keeps_defaults(self, settings_path, caplog):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("{broken", encoding="utf-8")
        manager = SettingsManager(str(settings_path))
        assert manager.vertex_radius == 10.0
        assert "Error loading settings" in caplog.text

    def test_history_path_default(self, settings_path):
        manager = SettingsManager(str(settings_path))
        assert manager.get_history_path() == settings_path.parent / "history.json"

    def test_history_path_override(self, settings_path, temp_dir):
        manager = SettingsManager(str(settings_path))
        manager.settings.paths.history_file = str(temp_dir / "elsewhere.json")
        assert manager.get_history_path() == temp_dir / "elsewhere.json"

    def test_reset(self, settings_path):
        manager = SettingsManager(str(settings_path))
        manager.vertex_radius = 3
        manager.reset()
        assert manager.vertex_radius == 10.0


class TestGlobalSettings:
    """Tests for the module-level settings instance."""

    def test_singleton(self, settings_path):
        reset_settings_manager()
        try:
            first = get_settings(str(settings_path))
            assert get_settings() is first
        finally:
            reset_settings_manager()
