"""Persistent JSON config helpers.

Stores the tab stop, quit confirmation count, and status-message lifetime.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..buffer import DEFAULT_TAB_STOP

APP_NAME = "termedit"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_QUIT_TIMES = 3
DEFAULT_MESSAGE_SECONDS = 5.0
MAX_TAB_STOP = 32


@dataclass(frozen=True)
class EditorConfig:
    tab_stop: int = DEFAULT_TAB_STOP
    quit_times: int = DEFAULT_QUIT_TIMES
    message_seconds: float = DEFAULT_MESSAGE_SECONDS


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _int_in_range(value: object, low: int, high: int | None) -> int | None:
    """Accept plain ints within bounds; booleans and other types are invalid."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < low or (high is not None and value > high):
        return None
    return value


def load_tab_stop() -> int:
    value = _int_in_range(load_config().get("tab_stop"), 1, MAX_TAB_STOP)
    return DEFAULT_TAB_STOP if value is None else value


def load_quit_times() -> int:
    value = _int_in_range(load_config().get("quit_times"), 1, None)
    return DEFAULT_QUIT_TIMES if value is None else value


def load_message_seconds() -> float:
    value = load_config().get("message_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_MESSAGE_SECONDS
    return float(value)


def load_editor_config(tab_stop: int | None = None) -> EditorConfig:
    """Assemble the effective config; ``tab_stop`` overrides the stored value."""
    return EditorConfig(
        tab_stop=tab_stop if tab_stop is not None else load_tab_stop(),
        quit_times=load_quit_times(),
        message_seconds=load_message_seconds(),
    )
