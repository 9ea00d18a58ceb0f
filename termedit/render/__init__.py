"""Viewport scrolling and frame composition."""

from .frame import render_frame, status_bar_text, welcome_banner
from .viewport import RESERVED_ROWS, Viewport

__all__ = [
    "Viewport",
    "RESERVED_ROWS",
    "render_frame",
    "status_bar_text",
    "welcome_banner",
]
