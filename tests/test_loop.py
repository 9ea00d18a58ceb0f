"""Main-loop wiring tests with fake terminal and key reader."""

from __future__ import annotations

import unittest
from unittest import mock

from termedit.buffer import TextBuffer
from termedit.errors import IoError
from termedit.input import keys
from termedit.render import Viewport, ansi
from termedit.runtime.config import EditorConfig
from termedit.runtime.editor import Editor
from termedit.runtime.loop import run_editor, run_main_loop
from termedit.runtime.terminal import TerminalSession


class _FakeReader:
    def __init__(self, script: list[str]) -> None:
        self.script = list(script)

    def read_key(self) -> str:
        if not self.script:
            return keys.CTRL_Q
        return self.script.pop(0)


def _fake_terminal() -> mock.MagicMock:
    terminal = mock.MagicMock(spec=TerminalSession)
    terminal.stdin_fd = 0
    terminal.query_window_size.return_value = (10, 40)
    terminal.raw_mode.return_value.__enter__.return_value = terminal
    terminal.raw_mode.return_value.__exit__.return_value = False
    return terminal


class MainLoopTests(unittest.TestCase):
    def test_each_frame_is_one_write(self) -> None:
        buffer = TextBuffer()
        buffer.load([b"a"])
        editor = Editor(buffer, Viewport(rows=3, cols=20), EditorConfig())
        terminal = _fake_terminal()

        run_main_loop(editor, terminal, _FakeReader([keys.RIGHT, keys.RIGHT]))

        self.assertEqual(terminal.write.call_count, 3)
        for call in terminal.write.call_args_list:
            frame = call.args[0]
            self.assertTrue(frame.startswith(ansi.HIDE_CURSOR))
            self.assertTrue(frame.endswith(ansi.SHOW_CURSOR))
        self.assertIn(b"\x1b[2;1H", terminal.write.call_args_list[-1].args[0])

    def test_idle_timeouts_do_not_redraw(self) -> None:
        buffer = TextBuffer()
        editor = Editor(buffer, Viewport(rows=3, cols=20), EditorConfig())
        terminal = _fake_terminal()

        run_main_loop(editor, terminal, _FakeReader(["", "", ""]))

        self.assertEqual(terminal.write.call_count, 1)

    def test_expired_message_triggers_redraw(self) -> None:
        now = [0.0]
        editor = Editor(TextBuffer(), Viewport(rows=3, cols=20), EditorConfig(), clock=lambda: now[0])
        editor.set_status_message("hello")
        terminal = _fake_terminal()

        class _AgingReader(_FakeReader):
            def read_key(self) -> str:
                now[0] += 3.0
                return super().read_key()

        run_main_loop(editor, terminal, _AgingReader(["", "", ""]))

        frames = [call.args[0] for call in terminal.write.call_args_list]
        self.assertEqual(len(frames), 2)
        self.assertIn(b"hello", frames[0])
        self.assertNotIn(b"hello", frames[1])


class RunEditorTests(unittest.TestCase):
    def test_session_uses_window_size_and_clears_screen_on_quit(self) -> None:
        terminal = _fake_terminal()
        buffer = TextBuffer()

        editor = run_editor(buffer, terminal, EditorConfig(), _FakeReader([]))

        terminal.raw_mode.assert_called_once()
        self.assertEqual((editor.viewport.rows, editor.viewport.cols), (8, 40))
        terminal.write.assert_called_with(ansi.CLEAR_SCREEN + ansi.CURSOR_HOME)

    def test_screen_is_cleared_when_read_fails(self) -> None:
        terminal = _fake_terminal()

        class _BrokenReader:
            def read_key(self) -> str:
                raise IoError("read failed")

        with self.assertRaises(IoError):
            run_editor(TextBuffer(), terminal, EditorConfig(), _BrokenReader())

        terminal.write.assert_called_with(ansi.CLEAR_SCREEN + ansi.CURSOR_HOME)
        terminal.raw_mode.return_value.__exit__.assert_called_once()


if __name__ == "__main__":
    unittest.main()
