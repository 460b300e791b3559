"""Tests for raw terminal input decoding, wake-ups, and cancellation."""

from __future__ import annotations

import os
import unittest

from lazyless.cancel import CancellationToken, PagerCancelled
from lazyless.input import RESIZE, TerminalInput


class TerminalInputTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()
        self.token = CancellationToken()
        self.keys = TerminalInput(self.read_fd, self.token)

    def tearDown(self) -> None:
        self.keys.close()
        for fd in (self.read_fd, self.write_fd):
            try:
                os.close(fd)
            except OSError:
                pass

    def test_reads_decoded_characters(self) -> None:
        os.write(self.write_fd, "aé".encode("utf-8"))

        self.assertEqual(self.keys.read_char(0.5), "a")
        self.assertEqual(self.keys.read_char(0.5), "é")

    def test_split_multibyte_character_waits_for_remaining_bytes(self) -> None:
        os.write(self.write_fd, b"\xc3")
        self.assertIsNone(self.keys.read_char(0.01))

        os.write(self.write_fd, b"\xa9")
        self.assertEqual(self.keys.read_char(0.5), "é")

    def test_timeout_without_input_returns_none(self) -> None:
        self.assertIsNone(self.keys.read_char(0.01))

    def test_resize_notification_is_delivered_as_event(self) -> None:
        self.keys.notify_resize()

        self.assertIs(self.keys.read_char(0.5), RESIZE)
        self.assertIsNone(self.keys.read_char(0.01))

    def test_peek_does_not_consume(self) -> None:
        self.assertFalse(self.keys.peek(0.0))
        os.write(self.write_fd, b"q")

        self.assertTrue(self.keys.peek(0.5))
        self.assertEqual(self.keys.read_char(0.5), "q")

    def test_cancel_interrupts_read(self) -> None:
        self.token.cancel()

        with self.assertRaises(PagerCancelled):
            self.keys.read_char()

    def test_end_of_input_cancels_session(self) -> None:
        os.close(self.write_fd)

        with self.assertRaises(PagerCancelled):
            self.keys.read_char(0.5)


class CancellationTokenTests(unittest.TestCase):
    def test_listeners_run_once(self) -> None:
        token = CancellationToken()
        calls: list[bool] = []
        token.add_listener(lambda: calls.append(True))

        token.cancel()
        token.cancel()

        self.assertTrue(token.cancelled)
        self.assertEqual(calls, [True])
        with self.assertRaises(PagerCancelled):
            token.raise_if_cancelled()


if __name__ == "__main__":
    unittest.main()
