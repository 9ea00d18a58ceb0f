"""Compose one complete screen update for the editor.

``render_frame`` returns a single ``bytes`` payload so the caller can flush
it with one write: hide cursor, home, text rows, status bar, message bar,
cursor placement, show cursor.
"""

from __future__ import annotations

from ..buffer import TextBuffer
from . import ansi
from .viewport import Viewport

EMPTY_ROW_GLYPH = b"~"
NO_NAME = "[No Name]"


def welcome_banner(title: str, cols: int) -> bytes:
    """Centered banner row, starting with the empty-row glyph when there is room."""
    text = title.encode("latin-1", errors="replace")[:cols]
    padding = (cols - len(text)) // 2
    row = bytearray()
    if padding:
        row += EMPTY_ROW_GLYPH
        padding -= 1
    row += b" " * padding
    row += text
    return bytes(row)


def draw_rows(buffer: TextBuffer, viewport: Viewport, welcome: str) -> bytes:
    out = bytearray()
    for screen_row in range(viewport.rows):
        file_row = screen_row + viewport.row_offset
        if file_row >= buffer.line_count:
            if buffer.line_count == 0 and screen_row == viewport.rows // 3:
                out += welcome_banner(welcome, viewport.cols)
            else:
                out += EMPTY_ROW_GLYPH
        else:
            render = buffer.lines[file_row].render
            out += render[viewport.col_offset : viewport.col_offset + viewport.cols]
        out += ansi.ERASE_LINE
        out += ansi.CRLF
    return bytes(out)


def status_bar_text(buffer: TextBuffer, cols: int) -> bytes:
    """Left: filename, line count, modified flag. Right: current/total line."""
    name = buffer.filename.name if buffer.filename is not None else NO_NAME
    modified = " (modified)" if buffer.is_dirty else ""
    left = f"{name[:20]} - {buffer.line_count} lines{modified}".encode("utf-8", errors="replace")
    right = f"{buffer.cy + 1}/{buffer.line_count}".encode("ascii")
    left = left[:cols]
    gap = cols - len(left)
    if gap >= len(right):
        return left + b" " * (gap - len(right)) + right
    return left + b" " * gap


def draw_status_bar(buffer: TextBuffer, viewport: Viewport) -> bytes:
    return ansi.INVERT + status_bar_text(buffer, viewport.cols) + ansi.RESET_STYLE + ansi.CRLF


def draw_message_bar(message: str, viewport: Viewport) -> bytes:
    text = message.encode("utf-8", errors="replace")[: viewport.cols]
    return ansi.ERASE_LINE + text


def render_frame(buffer: TextBuffer, viewport: Viewport, message: str = "", welcome: str = "") -> bytes:
    """Scroll to the cursor and build the full frame for one flush.

    ``message`` must already be expired by the caller when it is stale.
    """
    viewport.scroll_to_cursor(buffer)
    out = bytearray()
    out += ansi.HIDE_CURSOR
    out += ansi.CURSOR_HOME
    out += draw_rows(buffer, viewport, welcome)
    out += draw_status_bar(buffer, viewport)
    out += draw_message_bar(message, viewport)
    out += ansi.move_cursor(buffer.cy - viewport.row_offset, buffer.rx - viewport.col_offset)
    out += ansi.SHOW_CURSOR
    return bytes(out)
