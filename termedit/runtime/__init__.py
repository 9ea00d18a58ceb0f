"""Runtime orchestration: terminal session, config, controller, and loop."""

from .config import EditorConfig, load_editor_config
from .editor import Editor, StatusMessage
from .loop import run_editor, run_main_loop
from .terminal import TerminalSession

__all__ = [
    "Editor",
    "EditorConfig",
    "StatusMessage",
    "TerminalSession",
    "load_editor_config",
    "run_editor",
    "run_main_loop",
]
