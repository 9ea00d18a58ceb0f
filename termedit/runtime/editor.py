"""Editor aggregate: owns the buffer, viewport, and status line, and dispatches keys.

``process_key`` is the single dispatch point for one decoded key. It returns
``False`` only when the user has confirmed quitting.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from .. import __version__
from ..buffer import TextBuffer, save_buffer
from ..errors import PersistenceError
from ..input import keys
from ..render import Viewport, render_frame
from .config import EditorConfig

logger = logging.getLogger(__name__)

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
WELCOME_TITLE = f"termedit -- version {__version__}"


@dataclass
class StatusMessage:
    text: str = ""
    set_at: float = 0.0

    def current(self, now: float, lifetime: float) -> str:
        """Return the message text while it is younger than ``lifetime`` seconds."""
        if self.text and now - self.set_at < lifetime:
            return self.text
        return ""


class Editor:
    def __init__(
        self,
        buffer: TextBuffer,
        viewport: Viewport,
        config: EditorConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.buffer = buffer
        self.viewport = viewport
        self.config = config or EditorConfig()
        self.clock = clock
        self.status = StatusMessage()
        self.quit_times = self.config.quit_times

    def set_status_message(self, text: str) -> None:
        self.status = StatusMessage(text, self.clock())

    def visible_message(self) -> str:
        return self.status.current(self.clock(), self.config.message_seconds)

    def render(self) -> bytes:
        return render_frame(self.buffer, self.viewport, self.visible_message(), WELCOME_TITLE)

    def save(self) -> bool:
        """Write the buffer to its file; failures stay in the message bar."""
        if self.buffer.filename is None:
            self.set_status_message("Can't save: no file name")
            return False
        try:
            written = save_buffer(self.buffer)
        except PersistenceError as exc:
            logger.warning("save failed: %s", exc)
            self.set_status_message(f"Can't save! {exc}")
            return False
        self.set_status_message(f"{written} bytes written to disk")
        return True

    def request_quit(self) -> bool:
        """Return ``True`` when quitting is confirmed.

        A dirty buffer needs ``quit_times`` consecutive quit keys.
        """
        if not self.buffer.is_dirty:
            return True
        self.quit_times -= 1
        if self.quit_times <= 0:
            return True
        plural = "time" if self.quit_times == 1 else "times"
        self.set_status_message(
            f"WARNING!!! File has unsaved changes. Press Ctrl-Q {self.quit_times} more {plural} to quit."
        )
        return False

    def page_up(self) -> None:
        self.buffer.cy = self.viewport.row_offset
        for _ in range(self.viewport.rows):
            self.buffer.move_up()

    def page_down(self) -> None:
        self.buffer.cy = min(self.viewport.row_offset + self.viewport.rows - 1, self.buffer.line_count)
        for _ in range(self.viewport.rows):
            self.buffer.move_down()

    def process_key(self, key: str) -> bool:
        """Dispatch one key. Returns ``False`` when the editor should exit."""
        if not key:
            return True
        if key == keys.CTRL_Q:
            return not self.request_quit()

        buffer = self.buffer
        if key == keys.ENTER:
            buffer.insert_newline()
        elif key == keys.CTRL_S:
            self.save()
        elif key in {keys.BACKSPACE, keys.CTRL_H}:
            buffer.delete_char_before_cursor()
        elif key == keys.DELETE:
            buffer.delete_char_at_cursor()
        elif key == keys.UP:
            buffer.move_up()
        elif key == keys.DOWN:
            buffer.move_down()
        elif key == keys.LEFT:
            buffer.move_left()
        elif key == keys.RIGHT:
            buffer.move_right()
        elif key == keys.HOME:
            buffer.move_home()
        elif key == keys.END:
            buffer.move_end()
        elif key == keys.PAGE_UP:
            self.page_up()
        elif key == keys.PAGE_DOWN:
            self.page_down()
        elif key == keys.TAB:
            buffer.insert_char(ord("\t"))
        elif keys.is_insertable(key):
            buffer.insert_char(ord(key))

        self.quit_times = self.config.quit_times
        return True
