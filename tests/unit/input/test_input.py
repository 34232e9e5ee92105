"""Regression tests for raw-key decoding.

Covers ESC timing, arrow sequences, and control-key token mapping.
"""

import os
import time
import unittest

from lazyrefs import input as input_mod


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences(self) -> None:
        keys = self._read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1bOA", 5)

        self.assertEqual(keys, ["UP", "DOWN", "RIGHT", "LEFT", "UP"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1bq", 2), ["ESC", "q"])

    def test_control_keys(self) -> None:
        keys = self._read_all(b"\t\r\n\x7f\x03", 5)

        self.assertEqual(keys, ["TAB", "ENTER_CR", "ENTER_LF", "BACKSPACE", "\x03"])

    def test_utf8_character_is_one_token(self) -> None:
        self.assertEqual(self._read_all("é".encode("utf-8") + b"G", 2), ["é", "G"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(self._read_all(b"", 1), [""])


if __name__ == "__main__":
    unittest.main()
