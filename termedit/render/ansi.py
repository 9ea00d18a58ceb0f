"""VT100 control sequences used to compose a frame."""

from __future__ import annotations

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
ERASE_LINE = b"\x1b[K"
INVERT = b"\x1b[7m"
RESET_STYLE = b"\x1b[m"
CLEAR_SCREEN = b"\x1b[2J"
CRLF = b"\r\n"


def move_cursor(row: int, col: int) -> bytes:
    """Position the cursor at zero-based ``row``/``col``."""
    return b"\x1b[%d;%dH" % (row + 1, col + 1)
