"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into key tokens. Escape
sequences are resolved against ``ESCAPE_SEQUENCES``; any incomplete or
unknown sequence degrades to a bare ``ESC`` and never raises.
"""

from __future__ import annotations

import errno
import logging
import os
import select

from ..errors import IoError
from .keys import ESC, ESC_BYTE, ESCAPE_SEQUENCES, SEQUENCE_INTRODUCERS, byte_to_key

logger = logging.getLogger(__name__)

READ_TIMEOUT_MS = 100
_RETRYABLE_ERRNOS = frozenset({errno.EAGAIN, errno.EWOULDBLOCK, errno.EINTR})


def read_byte(fd: int, timeout_ms: int) -> bytes | None:
    """Read one byte from ``fd``, or return ``None`` when none arrives in time.

    "No data yet" conditions (timeout, EAGAIN, EINTR, empty read) return
    ``None``. Any other OS error raises :class:`IoError`.
    """
    try:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(fd, 1)
    except InterruptedError:
        return None
    except OSError as exc:
        if exc.errno in _RETRYABLE_ERRNOS:
            return None
        raise IoError(f"read failed: {exc}") from exc
    if not ch:
        return None
    return ch


class KeyReader:
    """Decode key tokens from a raw-mode file descriptor.

    Holds at most one pushed-back byte so that ``ESC`` followed by a byte that
    cannot start a sequence yields ``ESC`` and then that byte's own key.
    """

    def __init__(self, fd: int, timeout_ms: int = READ_TIMEOUT_MS) -> None:
        self.fd = fd
        self.timeout_ms = timeout_ms
        self._pending: list[bytes] = []

    def _next_byte(self) -> bytes | None:
        if self._pending:
            return self._pending.pop(0)
        return read_byte(self.fd, self.timeout_ms)

    def read_key(self) -> str:
        """Return the next key token, or ``""`` if the read timeout elapsed."""
        ch = self._next_byte()
        if ch is None:
            return ""
        if ch != ESC_BYTE:
            return byte_to_key(ch)
        return self._decode_escape()

    def _decode_escape(self) -> str:
        first = self._next_byte()
        if first is None:
            return ESC
        if first not in SEQUENCE_INTRODUCERS:
            self._pending.append(first)
            return ESC

        second = self._next_byte()
        if second is None:
            logger.debug("incomplete escape sequence %r", ESC_BYTE + first)
            return ESC
        accumulated = first + second
        if first == b"[" and second.isdigit():
            third = self._next_byte()
            if third is None:
                logger.debug("incomplete escape sequence %r", ESC_BYTE + accumulated)
                return ESC
            accumulated += third

        key = ESCAPE_SEQUENCES.get(accumulated)
        if key is None:
            logger.debug("unrecognized escape sequence %r", ESC_BYTE + accumulated)
            return ESC
        return key
