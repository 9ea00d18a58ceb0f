"""Main interactive loop: render a frame, read one key, dispatch it."""

from __future__ import annotations

import logging

from ..buffer import TextBuffer
from ..input import KeyReader
from ..render import Viewport, ansi
from .config import EditorConfig
from .editor import HELP_MESSAGE, Editor
from .terminal import TerminalSession

logger = logging.getLogger(__name__)


def run_main_loop(editor: Editor, terminal: TerminalSession, reader: KeyReader) -> None:
    """Alternate frame flushes and key dispatch until quit is confirmed.

    A frame is written after every key, and after idle timeouts only when the
    visible status message changed (so it can expire on screen).
    """
    shown_message: str | None = None
    frame_stale = True
    while True:
        message = editor.visible_message()
        if frame_stale or message != shown_message:
            terminal.write(editor.render())
            shown_message = message
        key = reader.read_key()
        frame_stale = bool(key)
        if not editor.process_key(key):
            return


def run_editor(
    buffer: TextBuffer,
    terminal: TerminalSession,
    config: EditorConfig | None = None,
    reader: KeyReader | None = None,
) -> Editor:
    """Run a full session in raw mode and clear the screen on the way out."""
    reader = reader or KeyReader(terminal.stdin_fd)
    with terminal.raw_mode():
        try:
            rows, cols = terminal.query_window_size()
            logger.info("window size %dx%d", rows, cols)
            editor = Editor(buffer, Viewport.for_window(rows, cols), config)
            editor.set_status_message(HELP_MESSAGE)
            run_main_loop(editor, terminal, reader)
        finally:
            terminal.write(ansi.CLEAR_SCREEN + ansi.CURSOR_HOME)
    logger.info("editor session ended")
    return editor
