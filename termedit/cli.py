"""Command-line front door for termedit.

Parses CLI options, sets up logging and config, and loads the target file.
Fatal terminal and I/O errors all end in ``main``'s single abort path.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .buffer import TextBuffer, open_file
from .errors import IoError, PersistenceError, TerminalError
from .input import KeyReader
from .runtime import TerminalSession, load_editor_config, run_editor
from .runtime.config import MAX_TAB_STOP
from .runtime.logs import DEFAULT_LOG_PATH, configure_logging

logger = logging.getLogger(__name__)


def _tab_stop(value: str) -> int:
    """argparse type for tab stops in ``1..MAX_TAB_STOP``."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if not 1 <= parsed <= MAX_TAB_STOP:
        raise argparse.ArgumentTypeError(f"value must be between 1 and {MAX_TAB_STOP}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="termedit", description="Edit a text file in the terminal.")
    parser.add_argument("path", nargs="?", default=None, help="File to edit. Created on first save if missing.")
    parser.add_argument("--tab-stop", type=_tab_stop, default=None, help="Tab stop width (default: from config, 8).")
    parser.add_argument("--log-file", type=Path, default=None, help="Append debug logs to this file.")
    parser.add_argument("--verbose", action="store_true", help=f"Log at debug level (default file: {DEFAULT_LOG_PATH}).")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the editor and return the process exit status."""
    args = build_parser().parse_args(argv)

    log_path = args.log_file
    if log_path is None and args.verbose:
        log_path = DEFAULT_LOG_PATH
    configure_logging(log_path, logging.DEBUG if args.verbose or args.log_file else logging.WARNING)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not (os.isatty(stdin_fd) and os.isatty(stdout_fd)):
        print("termedit: stdin and stdout must be a terminal", file=sys.stderr)
        return 1

    config = load_editor_config(args.tab_stop)
    buffer = TextBuffer(tab_stop=config.tab_stop)
    if args.path is not None:
        try:
            open_file(buffer, Path(args.path))
        except PersistenceError as exc:
            print(f"termedit: {exc}", file=sys.stderr)
            return 1

    terminal = TerminalSession(stdin_fd, stdout_fd)
    try:
        run_editor(buffer, terminal, config, KeyReader(stdin_fd))
    except (TerminalError, IoError) as exc:
        logger.exception("fatal error")
        return _abort(terminal, exc)
    return 0


def _abort(terminal: TerminalSession, exc: Exception) -> int:
    """Restore the terminal, clear the screen, and report a fatal error."""
    try:
        terminal.restore_mode()
    except TerminalError:
        logger.exception("terminal restore during abort failed")
    try:
        terminal.clear_screen()
    except IoError:
        logger.exception("screen clear during abort failed")
    print(f"termedit: {exc}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
