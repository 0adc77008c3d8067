"""
Settings Manager.

Editor settings grouped in dataclasses and kept in a per-user JSON file.
"""

import json
import logging
import os
import platform
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class EditSettings:
    """Pointer editing settings."""
    vertex_radius: float = 10.0
    snapping: bool = True
    snapping_radius: float = 15.0


@dataclass
class CanvasSettings:
    """Canvas and drawing settings."""
    width: int = 640
    height: int = 480
    grid_spacing: int = 16
    player_radius: float = 3.0


@dataclass
class ExportSettings:
    """Physics export settings."""
    scale: float = 1.0


@dataclass
class PathSettings:
    """
    File locations.

    An empty history_file means "history.json next to the settings file".
    """
    history_file: str = ""


def _from_dict(cls, data: dict):
    """Build a settings dataclass from a dict, ignoring unknown keys."""
    if not isinstance(data, dict):
        return cls()
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class EditorSettings:
    """All editor settings, one attribute per group."""
    edit: EditSettings = field(default_factory=EditSettings)
    canvas: CanvasSettings = field(default_factory=CanvasSettings)
    export: ExportSettings = field(default_factory=ExportSettings)
    paths: PathSettings = field(default_factory=PathSettings)

    def to_dict(self) -> dict:
        return {f.name: asdict(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "EditorSettings":
        """Build settings from a dict; missing groups keep their defaults."""
        settings = cls()
        if not isinstance(data, dict):
            return settings
        for group in fields(cls):
            if group.name in data:
                group_cls = type(getattr(settings, group.name))
                setattr(settings, group.name, _from_dict(group_cls, data[group.name]))
        return settings


def config_dir(app_name: str) -> Path:
    """
    Per-user configuration directory for ``app_name``.

    - Windows: %APPDATA%/<app_name>
    - macOS: ~/Library/Application Support/<app_name>
    - Linux and others: $XDG_CONFIG_HOME/<app_name> (default ~/.config)
    """
    system = platform.system()
    if system == "Windows":
        root = Path(os.environ.get("APPDATA") or Path.home())
    elif system == "Darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        root = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    return root / app_name


class SettingsManager:
    """
    Loads and stores EditorSettings as JSON.

    The file lives in config_dir(APP_NAME) unless a path is given. File
    errors are logged and leave the in-memory settings usable.

    Args:
        config_override: Settings file to use instead of the per-user one
    """

    APP_NAME = "LevelShapeEditor"
    SETTINGS_FILE = "settings.json"
    HISTORY_FILE = "history.json"

    def __init__(self, config_override: Optional[str] = None):
        self._settings = EditorSettings()
        if config_override:
            self._path = Path(config_override)
        else:
            self._path = config_dir(self.APP_NAME) / self.SETTINGS_FILE
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self.load()

    @property
    def settings(self) -> EditorSettings:
        return self._settings

    @property
    def settings_path(self) -> str:
        return str(self._path)

    # Shortcuts that persist on assignment
    @property
    def vertex_radius(self) -> float:
        return self._settings.edit.vertex_radius

    @vertex_radius.setter
    def vertex_radius(self, value: float):
        self._settings.edit.vertex_radius = value
        self.save()

    @property
    def snapping(self) -> bool:
        return self._settings.edit.snapping

    @snapping.setter
    def snapping(self, value: bool):
        self._settings.edit.snapping = value
        self.save()

    @property
    def export_scale(self) -> float:
        return self._settings.export.scale

    @export_scale.setter
    def export_scale(self, value: float):
        self._settings.export.scale = value
        self.save()

    def get_history_path(self) -> Path:
        """History file: the configured path, or history.json beside the settings."""
        if self._settings.paths.history_file:
            return Path(self._settings.paths.history_file).expanduser()
        return self._path.parent / self.HISTORY_FILE

    def load(self) -> bool:
        """Replace the current settings with the file's. Returns False if nothing was read."""
        if not self._path.is_file():
            return False
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            self._settings = EditorSettings.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError, RecursionError) as e:
            logger.warning(f"Error loading settings from {self._path}: {e}")
            return False
        return True

    def save(self) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(self._settings.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Error saving settings to {self._path}: {e}")
            return False
        return True

    def reset(self):
        """Restore and persist the defaults."""
        self._settings = EditorSettings()
        self.save()


_settings_manager: Optional[SettingsManager] = None


def get_settings(config_override: Optional[str] = None) -> SettingsManager:
    """
    Shared SettingsManager, created on first use.

    ``config_override`` only takes effect on the call that creates it.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager(config_override)
    return _settings_manager


def reset_settings_manager():
    """Forget the shared SettingsManager so the next get_settings() builds a new one."""
    global _settings_manager
    _settings_manager = None
