"""Input-layer public API: raw byte reads and key-token decoding."""

from .keys import (
    BACKSPACE,
    CTRL_H,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DELETE,
    DOWN,
    END,
    ENTER,
    ESC,
    ESCAPE_SEQUENCES,
    HOME,
    LEFT,
    PAGE_DOWN,
    PAGE_UP,
    RIGHT,
    TAB,
    UP,
    byte_to_key,
    is_insertable,
)
from .reader import READ_TIMEOUT_MS, KeyReader, read_byte

__all__ = [
    "KeyReader",
    "READ_TIMEOUT_MS",
    "read_byte",
    "byte_to_key",
    "is_insertable",
    "ESCAPE_SEQUENCES",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "HOME",
    "END",
    "PAGE_UP",
    "PAGE_DOWN",
    "DELETE",
    "BACKSPACE",
    "ESC",
    "ENTER",
    "TAB",
    "CTRL_H",
    "CTRL_L",
    "CTRL_Q",
    "CTRL_S",
]
