"""Application settings resolved from the environment and platform conventions."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "DB_FILENAME",
    "AppConfig",
    "load_config",
    "reload",
    "user_data_dir",
]

APP_NAME = "PresentationBuilder"
APP_VERSION = "1.0.0"
DB_FILENAME = "presentation-builder.db"

HOME_ENV = "PRESENTATION_BUILDER_HOME"
DB_ENV = "PRESENTATION_BUILDER_DB"


@dataclass(frozen=True)
class AppConfig:
    app_name: str
    data_dir: Path
    db_path: Path

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"


def user_data_dir(app_name: str = APP_NAME) -> Path:
    """
    Return the per-user application data directory.

    - Windows: %APPDATA%\\AppName
    - macOS: ~/Library/Application Support/AppName
    - Linux: $XDG_DATA_HOME/AppName (default ~/.local/share/AppName)
    """
    home = Path.home()

    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", home / "AppData" / "Roaming"))
        return base / app_name
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / app_name

    xdg_data_home = os.environ.get("XDG_DATA_HOME") or home / ".local" / "share"
    return Path(xdg_data_home) / app_name


def _env_path(name: str) -> Path | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    return Path(raw).expanduser()


@lru_cache(maxsize=1)
def _cached_config(app_name: str) -> AppConfig:
    data_dir = _env_path(HOME_ENV) or user_data_dir(app_name)
    db_path = _env_path(DB_ENV) or data_dir / DB_FILENAME
    return AppConfig(app_name=app_name, data_dir=data_dir, db_path=db_path)


def load_config(app_name: str = APP_NAME) -> AppConfig:
    """Return the active configuration (cached after the first call)."""

    return _cached_config(app_name)


def reload() -> None:
    """Clear the cached configuration (useful for tests)."""

    _cached_config.cache_clear()
