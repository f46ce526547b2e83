"""Configuration for appdb. Reads optional settings from ~/.config/appdb/settings.json."""

import json
import logging
from pathlib import Path
from typing import Any

CONFIG_DIR = Path.home() / ".config" / "appdb"
SETTINGS_FILE = CONFIG_DIR / "settings.json"
LOG_DIR = Path.home() / ".log" / "appdb"

# XDG Base Directory defaults
DEFAULT_DATA_HOME_SUFFIX = "/.local/share"
DEFAULT_DATA_DIRS = "/usr/local/share/:/usr/share/"
APPLICATIONS_SUBDIR = "applications"
DESKTOP_SUFFIX = ".desktop"

MAX_KEYS = 1000
# a file may hold at most max_keys - 1 keys, so this is the smallest usable cap
MIN_KEYS = 2

DBUS_SERVICE_NAME = "org.ladish.appdb"

DEFAULTS: dict[str, Any] = {
    "log_level": "INFO",
    "max_keys": MAX_KEYS,
    "dispatch_interval_ms": 200,
}


class Config:
    """Read-only settings with JSON overrides on top of DEFAULTS."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or SETTINGS_FILE
        self._data: dict[str, Any] = dict(DEFAULTS)
        self._load()

    def _load(self) -> None:
        if self.path.exists():
            try:
                with open(self.path, "r") as f:
                    saved = json.load(f)
                if isinstance(saved, dict):
                    self._data.update(saved)
            except (json.JSONDecodeError, OSError):
                pass
        self._validate()

    def _validate(self) -> None:
        """Replace values of the wrong type or range with their defaults."""
        level = self._data.get("log_level")
        if isinstance(level, str) and level.upper() in logging.getLevelNamesMapping():
            self._data["log_level"] = level.upper()
        else:
            self._data["log_level"] = DEFAULTS["log_level"]

        for key, minimum in (("max_keys", MIN_KEYS), ("dispatch_interval_ms", 1)):
            value = self._data.get(key)
            if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
                self._data[key] = DEFAULTS[key]

    def get(self, key: str, fallback: Any = None) -> Any:
        return self._data.get(key, fallback if fallback is not None else DEFAULTS.get(key))
