"""Visible window over the buffer and cursor-driven scrolling."""

from __future__ import annotations

from dataclasses import dataclass

from ..buffer import TextBuffer

# Status bar plus message bar.
RESERVED_ROWS = 2


@dataclass
class Viewport:
    rows: int
    cols: int
    row_offset: int = 0
    col_offset: int = 0

    @classmethod
    def for_window(cls, window_rows: int, window_cols: int) -> Viewport:
        """Build a viewport for a terminal, leaving room for the two bars."""
        return cls(rows=max(1, window_rows - RESERVED_ROWS), cols=max(1, window_cols))

    def scroll_to_cursor(self, buffer: TextBuffer) -> None:
        """Shift offsets the minimum amount needed to show the cursor."""
        rx = buffer.rx
        if self.contains(buffer.cy, rx):
            return
        if buffer.cy < self.row_offset:
            self.row_offset = buffer.cy
        if buffer.cy >= self.row_offset + self.rows:
            self.row_offset = buffer.cy - self.rows + 1
        if rx < self.col_offset:
            self.col_offset = rx
        if rx >= self.col_offset + self.cols:
            self.col_offset = rx - self.cols + 1

    def contains(self, row: int, col: int) -> bool:
        return (
            self.row_offset <= row < self.row_offset + self.rows
            and self.col_offset <= col < self.col_offset + self.cols
        )
