"""Load and save buffers as plain ``\\n``-terminated text files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import PersistenceError
from .document import TextBuffer

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


def read_lines(path: Path) -> list[bytes]:
    """Read ``path`` as raw bytes, split into lines with ``\\n``/``\\r\\n`` stripped."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise PersistenceError(f"cannot open {path}: {exc.strerror or exc}") from exc
    lines = data.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    return [line.rstrip(b"\r") for line in lines]


def open_file(buffer: TextBuffer, path: Path) -> None:
    """Bind ``buffer`` to ``path`` and load its content.

    A missing file leaves the buffer empty; the file is created on first save.
    """
    buffer.filename = path
    if not path.exists():
        logger.info("opening new file %s", path)
        buffer.load([])
        return
    lines = read_lines(path)
    buffer.load(lines)
    logger.info("loaded %d lines from %s", len(lines), path)


def save_buffer(buffer: TextBuffer, path: Path | None = None) -> int:
    """Write the serialized buffer to ``path`` and return the byte count.

    The file is truncated to the new length before writing, never to zero.
    ``dirty`` is cleared only after every byte is written.
    """
    target = path if path is not None else buffer.filename
    if target is None:
        raise PersistenceError("no file name")
    data = buffer.serialize()
    try:
        fd = os.open(target, os.O_RDWR | os.O_CREAT, FILE_MODE)
    except OSError as exc:
        raise PersistenceError(f"cannot open {target}: {exc.strerror or exc}") from exc
    try:
        os.ftruncate(fd, len(data))
        view = memoryview(data)
        while view:
            written = os.write(fd, view)
            view = view[written:]
    except OSError as exc:
        raise PersistenceError(f"I/O error: {exc.strerror or exc}") from exc
    finally:
        os.close(fd)
    buffer.filename = target
    buffer.mark_clean()
    logger.info("wrote %d bytes to %s", len(data), target)
    return len(data)
