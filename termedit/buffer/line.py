"""One row of the text buffer and its tab-expanded render form."""

from __future__ import annotations

DEFAULT_TAB_STOP = 8
TAB = 0x09
SPACE = 0x20


def expand_tabs(chars: bytes | bytearray, tab_stop: int = DEFAULT_TAB_STOP) -> bytes:
    """Return ``chars`` with each tab padded with spaces to the next tab stop."""
    if TAB not in chars:
        return bytes(chars)
    out = bytearray()
    for value in chars:
        if value == TAB:
            out.append(SPACE)
            while len(out) % tab_stop:
                out.append(SPACE)
        else:
            out.append(value)
    return bytes(out)


def row_to_render_column(chars: bytes | bytearray, cx: int, tab_stop: int = DEFAULT_TAB_STOP) -> int:
    """Map file-space column ``cx`` to its render-space column.

    Each tab advances to the next multiple of ``tab_stop``. Columns past the
    end of ``chars`` count as single cells.
    """
    rx = 0
    for value in chars[:cx]:
        if value == TAB:
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx + max(0, cx - len(chars))


class Line:
    """Stored bytes of one line plus a render cache kept in sync on every edit."""

    __slots__ = ("chars", "render", "tab_stop")

    def __init__(self, chars: bytes | bytearray = b"", tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.chars = bytearray(chars)
        self.tab_stop = tab_stop
        self.render = b""
        self.update_render()

    def __repr__(self) -> str:
        return f"Line({bytes(self.chars)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self.chars == other.chars

    @property
    def length(self) -> int:
        return len(self.chars)

    @property
    def render_length(self) -> int:
        return len(self.render)

    def update_render(self) -> None:
        self.render = expand_tabs(self.chars, self.tab_stop)

    def render_column(self, cx: int) -> int:
        return row_to_render_column(self.chars, cx, self.tab_stop)

    def insert(self, at: int, value: int) -> None:
        at = max(0, min(at, len(self.chars)))
        self.chars.insert(at, value)
        self.update_render()

    def delete(self, at: int) -> None:
        if at < 0 or at >= len(self.chars):
            return
        del self.chars[at]
        self.update_render()

    def append(self, data: bytes | bytearray) -> None:
        self.chars += data
        self.update_render()

    def split(self, at: int) -> Line:
        """Cut the bytes from ``at`` onward into a new line and return it."""
        tail = Line(self.chars[at:], self.tab_stop)
        del self.chars[at:]
        self.update_render()
        return tail
