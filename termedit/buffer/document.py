"""In-memory text buffer: ordered lines, cursor, and edit operations.

The cursor lives in file space (``cx``, ``cy``). ``cy == len(lines)`` is the
virtual empty line past the end of the file; the first edit there
materializes it. Every operation that touches a line leaves that line's
render cache current before returning.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .line import DEFAULT_TAB_STOP, Line


class TextBuffer:
    def __init__(self, filename: Path | None = None, tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.lines: list[Line] = []
        self.filename = filename
        self.tab_stop = tab_stop
        self.dirty = 0
        self.cx = 0
        self.cy = 0
        # Row that insert_char created from the virtual trailing line.
        self._materialized_row: int | None = None

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_dirty(self) -> bool:
        return self.dirty != 0

    @property
    def current_line(self) -> Line | None:
        if self.cy < len(self.lines):
            return self.lines[self.cy]
        return None

    @property
    def rx(self) -> int:
        """Render-space column of the cursor on the current line."""
        line = self.current_line
        if line is None:
            return 0
        return line.render_column(self.cx)

    def load(self, lines_of_text: Iterable[bytes]) -> None:
        """Replace all content. Loading is not an edit, so ``dirty`` is reset."""
        self.lines = [Line(text, self.tab_stop) for text in lines_of_text]
        self.cx = 0
        self.cy = 0
        self.dirty = 0
        self._materialized_row = None

    def mark_clean(self) -> None:
        self.dirty = 0

    def insert_line(self, at: int, text: bytes = b"") -> None:
        if at < 0 or at > len(self.lines):
            return
        self.lines.insert(at, Line(text, self.tab_stop))
        self.dirty += 1
        self._materialized_row = None

    def delete_line(self, at: int) -> None:
        if at < 0 or at >= len(self.lines):
            return
        del self.lines[at]
        self.dirty += 1
        self._materialized_row = None

    def insert_char(self, c: int) -> None:
        """Insert byte ``c`` at the cursor and advance past it."""
        if self.cy == len(self.lines):
            self.insert_line(len(self.lines))
            self._materialized_row = self.cy
        self.lines[self.cy].insert(self.cx, c)
        self.cx += 1
        self.dirty += 1

    def insert_newline(self) -> None:
        """Split the current line at the cursor, leaving the cursor at the new line's start."""
        if self.cx == 0:
            self.insert_line(self.cy)
        else:
            tail = self.lines[self.cy].split(self.cx)
            self.lines.insert(self.cy + 1, tail)
            self.dirty += 1
            self._materialized_row = None
        self.cy += 1
        self.cx = 0

    def delete_char_before_cursor(self) -> None:
        """Backspace: remove the byte left of the cursor or join onto the previous line."""
        if self.cy == len(self.lines):
            if self.cy > 0:
                self.cy -= 1
                self.cx = self.lines[self.cy].length
            return
        if self.cx == 0 and self.cy == 0:
            return

        line = self.lines[self.cy]
        if self.cx > 0:
            line.delete(self.cx - 1)
            self.cx -= 1
            self.dirty += 1
            if line.length == 0 and self._materialized_row == self.cy == len(self.lines) - 1:
                # Typed-then-erased text on the virtual line leaves it virtual.
                self.delete_line(self.cy)
            return

        previous = self.lines[self.cy - 1]
        self.cx = previous.length
        previous.append(line.chars)
        self.delete_line(self.cy)
        self.cy -= 1

    def delete_char_at_cursor(self) -> None:
        """Delete: remove the byte under the cursor or join the next line onto this one."""
        line = self.current_line
        if line is None:
            return
        if self.cx < line.length:
            line.delete(self.cx)
            self.dirty += 1
            return
        if self.cy + 1 < len(self.lines):
            line.append(self.lines[self.cy + 1].chars)
            self.delete_line(self.cy + 1)

    def serialize(self) -> bytes:
        """Return every line followed by a single ``\\n``."""
        return b"".join(bytes(line.chars) + b"\n" for line in self.lines)

    def clamp_cursor(self) -> None:
        """Pull ``cx``/``cy`` back inside the buffer after a vertical move."""
        self.cy = max(0, min(self.cy, len(self.lines)))
        line = self.current_line
        limit = line.length if line is not None else 0
        self.cx = max(0, min(self.cx, limit))

    def move_left(self) -> None:
        if self.cx > 0:
            self.cx -= 1
        elif self.cy > 0:
            self.cy -= 1
            self.cx = self.lines[self.cy].length

    def move_right(self) -> None:
        line = self.current_line
        if line is None:
            return
        if self.cx < line.length:
            self.cx += 1
        elif self.cx == line.length:
            self.cy += 1
            self.cx = 0

    def move_up(self) -> None:
        if self.cy > 0:
            self.cy -= 1
        self.clamp_cursor()

    def move_down(self) -> None:
        if self.cy < len(self.lines):
            self.cy += 1
        self.clamp_cursor()

    def move_home(self) -> None:
        self.cx = 0

    def move_end(self) -> None:
        line = self.current_line
        self.cx = line.length if line is not None else 0
