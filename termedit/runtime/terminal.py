"""Terminal control helpers for the editor session.

Owns the raw-mode lifecycle and window-size queries. Raw mode is released on
every exit path: the ``raw_mode`` context manager, an ``atexit`` hook, and
SIGTERM/SIGHUP handlers all funnel into the idempotent ``restore_mode``.
"""

from __future__ import annotations

import atexit
import contextlib
import logging
import os
import re
import signal
import termios

from ..errors import IoError, TerminalError
from ..input.reader import read_byte

logger = logging.getLogger(__name__)

# termios attribute list indices.
IFLAG, OFLAG, CFLAG, LFLAG, ISPEED, OSPEED, CC = range(7)

# VTIME is measured in tenths of a second.
READ_TIMEOUT_DECISECONDS = 1
PROBE_REPLY_MAX_BYTES = 32
PROBE_TIMEOUT_MS = 1000
CURSOR_POSITION_REPLY_RE = re.compile(rb"^\x1b\[(\d+);(\d+)$")
RESTORE_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def make_raw_attributes(attrs: list) -> list:
    """Return a copy of ``attrs`` configured for byte-at-a-time raw input.

    Disables canonical mode, echo, signal keys, extended input processing,
    output post-processing, and CR/NL, parity, strip, and flow-control input
    filters. Reads return after at most ``READ_TIMEOUT_DECISECONDS`` even
    with no input.
    """
    raw = list(attrs)
    raw[IFLAG] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    raw[OFLAG] &= ~termios.OPOST
    raw[CFLAG] |= termios.CS8
    raw[LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    cc = list(raw[CC])
    cc[termios.VMIN] = 0
    cc[termios.VTIME] = READ_TIMEOUT_DECISECONDS
    raw[CC] = cc
    return raw


def parse_cursor_position_reply(reply: bytes) -> tuple[int, int]:
    """Parse ``ESC [ rows ; cols`` (the ``R`` already stripped) into a size."""
    match = CURSOR_POSITION_REPLY_RE.match(reply)
    if match is None:
        raise TerminalError(f"malformed cursor position reply: {reply!r}")
    rows, cols = int(match.group(1)), int(match.group(2))
    if rows <= 0 or cols <= 0:
        raise TerminalError(f"invalid cursor position reply: {reply!r}")
    return rows, cols


class TerminalSession:
    """Manage the raw-mode transition and geometry of one controlling terminal."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._original_mode: list | None = None
        self._previous_handlers: dict[int, object] = {}

    @property
    def in_raw_mode(self) -> bool:
        return self._original_mode is not None

    def enter_raw_mode(self) -> None:
        """Capture current attributes, switch to raw mode, and install exit hooks."""
        if self._original_mode is not None:
            return
        try:
            original = termios.tcgetattr(self.stdin_fd)
        except termios.error as exc:
            raise TerminalError(f"tcgetattr failed: {exc}") from exc
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, make_raw_attributes(original))
        except termios.error as exc:
            raise TerminalError(f"tcsetattr failed: {exc}") from exc
        self._original_mode = original
        atexit.register(self._restore_at_exit)
        for signum in RESTORE_SIGNALS:
            self._previous_handlers[signum] = signal.signal(signum, self._handle_signal)
        logger.info("entered raw mode on fd %d", self.stdin_fd)

    def restore_mode(self) -> None:
        """Restore the captured attributes. Subsequent calls do nothing."""
        original = self._original_mode
        if original is None:
            return
        self._original_mode = None
        atexit.unregister(self._restore_at_exit)
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, original)
        except termios.error as exc:
            raise TerminalError(f"failed to restore terminal mode: {exc}") from exc
        logger.info("restored terminal mode on fd %d", self.stdin_fd)

    def _restore_at_exit(self) -> None:
        try:
            self.restore_mode()
        except TerminalError:
            logger.exception("terminal restore at exit failed")

    def _handle_signal(self, signum: int, _frame) -> None:
        logger.warning("received signal %d, restoring terminal", signum)
        raise SystemExit(128 + signum)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw-mode enter/restore."""
        self.enter_raw_mode()
        try:
            yield self
        finally:
            self.restore_mode()

    def write(self, data: bytes) -> None:
        """Write all of ``data`` to the terminal."""
        view = memoryview(data)
        while view:
            try:
                written = os.write(self.stdout_fd, view)
            except InterruptedError:
                continue
            except OSError as exc:
                raise IoError(f"write failed: {exc}") from exc
            view = view[written:]

    def clear_screen(self) -> None:
        self.write(b"\x1b[2J\x1b[H")

    def query_window_size(self) -> tuple[int, int]:
        """Return ``(rows, cols)`` of the terminal.

        Falls back to the cursor-position probe when the OS query fails or
        reports zero columns.
        """
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError as exc:
            logger.info("window size query failed (%s), probing cursor position", exc)
        else:
            if size.columns > 0:
                return size.lines, size.columns
            logger.info("window size query reported zero columns, probing cursor position")
        return self.probe_window_size()

    def probe_window_size(self) -> tuple[int, int]:
        """Measure the terminal by parking the cursor bottom-right and asking where it is."""
        self.write(b"\x1b[999C\x1b[999B")
        return self.query_cursor_position()

    def query_cursor_position(self) -> tuple[int, int]:
        """Send a device status report and parse the ``ESC [ rows ; cols R`` reply."""
        self.write(b"\x1b[6n")
        reply = bytearray()
        while len(reply) < PROBE_REPLY_MAX_BYTES:
            ch = read_byte(self.stdin_fd, PROBE_TIMEOUT_MS)
            if ch is None or ch == b"R":
                break
            reply += ch
        rows, cols = parse_cursor_position_reply(bytes(reply))
        logger.info("cursor position probe reported %dx%d", rows, cols)
        return rows, cols
