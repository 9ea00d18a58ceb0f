"""Text buffer model: lines, cursor, edits, and file persistence."""

from .document import TextBuffer
from .line import DEFAULT_TAB_STOP, Line, expand_tabs, row_to_render_column
from .persistence import open_file, read_lines, save_buffer

__all__ = [
    "TextBuffer",
    "Line",
    "DEFAULT_TAB_STOP",
    "expand_tabs",
    "row_to_render_column",
    "open_file",
    "read_lines",
    "save_buffer",
]
