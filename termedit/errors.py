"""Error taxonomy shared by the terminal, decoder, and persistence layers.

``TerminalError`` and ``IoError`` are fatal and funnel through the CLI abort
path. ``PersistenceError`` is recoverable and surfaces in the message bar.
"""

from __future__ import annotations


class EditorError(Exception):
    """Base class for all editor failures."""


class TerminalError(EditorError):
    """Terminal attribute or window-size query/set failure."""


class IoError(EditorError):
    """Unexpected read/write failure on the terminal streams."""


class PersistenceError(EditorError):
    """File open, truncate, or write failure while loading or saving."""
