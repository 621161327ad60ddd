"""Persistent JSON config helpers.

Stores hidden-file and size-label preferences, the UI theme name, and the
last browsed directory. All access is defensive: malformed or missing config
falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "zipnav"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_bool(key: str, default: bool) -> bool:
    """Only explicit JSON booleans are accepted; anything else is ``default``."""
    value = load_config().get(key)
    return value if isinstance(value, bool) else default


def _save_value(key: str, value: object) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def load_show_hidden() -> bool:
    """Return persisted hidden-file visibility preference (default on)."""
    return _load_bool("show_hidden", True)


def save_show_hidden(show_hidden: bool) -> None:
    _save_value("show_hidden", bool(show_hidden))


def load_show_size_labels() -> bool:
    """Return whether listings show size labels (default on)."""
    return _load_bool("show_size_labels", True)


def save_show_size_labels(show_size_labels: bool) -> None:
    _save_value("show_size_labels", bool(show_size_labels))


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    _save_value("theme", stripped)


def load_last_directory() -> Path | None:
    """Return the last browsed directory if it is still a directory."""
    value = load_config().get("last_directory")
    if not isinstance(value, str) or not value:
        return None
    path = Path(value)
    return path if path.is_dir() else None


def save_last_directory(directory: Path) -> None:
    """Remember ``directory`` as the default start location."""
    _save_value("last_directory", str(directory))


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_show_hidden",
    "save_show_hidden",
    "load_show_size_labels",
    "save_show_size_labels",
    "load_theme_name",
    "save_theme_name",
    "load_last_directory",
    "save_last_directory",
]
