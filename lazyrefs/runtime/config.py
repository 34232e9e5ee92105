"""Persistent JSON config helpers.

Stores the UI theme name and the ref-pane width preset.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from ..ui_theme import available_theme_names

APP_NAME = "lazyrefs"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_REF_PANE_PERCENT = 30.0


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

    Filesystem and serialization errors are ignored; a config that cannot be
    written never stops the browser.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_theme_name() -> str | None:
    """Return the saved theme name, or ``None`` when unset or unknown."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    name = value.strip().lower()
    return name if name in available_theme_names() else None


def save_theme_name(name: str) -> None:
    config = load_config()
    config["theme"] = name
    save_config(config)


def load_ref_pane_percent() -> float:
    """Read the ref-pane width percentage, constrained to the open interval (0, 100)."""
    value = load_config().get("ref_pane_percent")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_REF_PANE_PERCENT
    if value <= 0 or value >= 100:
        return DEFAULT_REF_PANE_PERCENT
    return float(value)


def save_ref_pane_percent(total_width: int, ref_width: int) -> None:
    """Store the ref-pane width as a percentage clamped to ``[1.0, 99.0]``."""
    if total_width <= 0:
        return
    percent = max(1.0, min(99.0, (ref_width / total_width) * 100.0))
    config = load_config()
    config["ref_pane_percent"] = round(percent, 2)
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_REF_PANE_PERCENT",
    "load_config",
    "save_config",
    "load_theme_name",
    "save_theme_name",
    "load_ref_pane_percent",
    "save_ref_pane_percent",
]
