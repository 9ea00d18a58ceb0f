"""Regression tests for raw-key decoding.

Covers ESC timing, the escape-sequence table, and control-byte tokens.
Bytes are fed through a real pipe so the select/read path is exercised.
"""

from __future__ import annotations

import errno
import os
import time
import unittest
from unittest import mock

from termedit.errors import IoError
from termedit.input import keys
from termedit.input.reader import KeyReader, read_byte


class ReadKeyTests(unittest.TestCase):
    def _decode(self, payload: bytes, count: int = 1) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            reader = KeyReader(read_fd, timeout_ms=20)
            return [reader.read_key() for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_arrow_up_sequence(self) -> None:
        self.assertEqual(self._decode(b"\x1b[A"), [keys.UP])

    def test_all_letter_sequences(self) -> None:
        decoded = self._decode(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[H\x1b[F", count=6)
        self.assertEqual(decoded, [keys.UP, keys.DOWN, keys.RIGHT, keys.LEFT, keys.HOME, keys.END])

    def test_delete_tilde_sequence(self) -> None:
        self.assertEqual(self._decode(b"\x1b[3~"), [keys.DELETE])

    def test_digit_tilde_sequences(self) -> None:
        decoded = self._decode(b"\x1b[1~\x1b[7~\x1b[4~\x1b[8~\x1b[5~\x1b[6~", count=6)
        self.assertEqual(
            decoded,
            [keys.HOME, keys.HOME, keys.END, keys.END, keys.PAGE_UP, keys.PAGE_DOWN],
        )

    def test_ss3_home_and_end(self) -> None:
        self.assertEqual(self._decode(b"\x1bOH\x1bOF", count=2), [keys.HOME, keys.END])

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        key = self._decode(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(key, [keys.ESC])
        self.assertLess(elapsed, 0.5)

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._decode(b"\x1ba", count=2), [keys.ESC, "a"])

    def test_digit_sequence_with_wrong_terminator_is_escape(self) -> None:
        self.assertEqual(self._decode(b"\x1b[5x"), [keys.ESC])

    def test_unknown_letter_sequence_is_escape(self) -> None:
        self.assertEqual(self._decode(b"\x1b[Z\x1bOA", count=2), [keys.ESC, keys.ESC])

    def test_truncated_sequences_are_escape(self) -> None:
        self.assertEqual(self._decode(b"\x1b["), [keys.ESC])
        self.assertEqual(self._decode(b"\x1b[3"), [keys.ESC])

    def test_control_bytes_map_to_named_tokens(self) -> None:
        decoded = self._decode(b"\x11\x13\x08\x0c\r\t\x7f", count=7)
        self.assertEqual(
            decoded,
            [keys.CTRL_Q, keys.CTRL_S, keys.CTRL_H, keys.CTRL_L, keys.ENTER, keys.TAB, keys.BACKSPACE],
        )

    def test_printable_and_high_bytes_decode_to_single_characters(self) -> None:
        self.assertEqual(self._decode(b"x~\xe9", count=3), ["x", "~", "\xe9"])

    def test_timeout_without_input_returns_empty_token(self) -> None:
        self.assertEqual(self._decode(b""), [""])


class ReadByteTests(unittest.TestCase):
    def test_eagain_is_treated_as_no_data(self) -> None:
        with mock.patch("termedit.input.reader.select.select", return_value=([0], [], [])), mock.patch(
            "termedit.input.reader.os.read", side_effect=OSError(errno.EAGAIN, "again")
        ):
            self.assertIsNone(read_byte(0, 10))

    def test_other_read_errors_raise_io_error(self) -> None:
        with mock.patch("termedit.input.reader.select.select", return_value=([0], [], [])), mock.patch(
            "termedit.input.reader.os.read", side_effect=OSError(errno.EIO, "broken")
        ):
            with self.assertRaises(IoError):
                read_byte(0, 10)

    def test_eof_is_treated_as_no_data(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        try:
            self.assertIsNone(read_byte(read_fd, 10))
        finally:
            os.close(read_fd)


if __name__ == "__main__":
    unittest.main()
