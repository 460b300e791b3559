"""Tests for terminal mode transitions and resize subscription.

Verifies raw-mode lifecycle safety and the escape sequences written when
entering and leaving the pager view.
"""

from __future__ import annotations

import signal
import termios
import unittest
from unittest import mock

from lazyless.runtime.state import Geometry
from lazyless.terminal import TerminalController


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_pager_mode_use_alternate_screen_and_keypad(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("lazyless.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "lazyless.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("lazyless.terminal.os.write") as write_mock, mock.patch(
            "lazyless.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(0, 1)
            controller.enable_pager_mode()
            controller.disable_pager_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?1h\x1b="))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?1049l\x1b[?1l\x1b>"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_no_init_and_no_keypad_skip_escape_sequences(self) -> None:
        with mock.patch("lazyless.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "lazyless.terminal.tty.setraw"
        ), mock.patch("lazyless.terminal.os.write") as write_mock, mock.patch("lazyless.terminal.termios.tcsetattr"):
            controller = TerminalController(0, 1, no_init=True, no_keypad=True)
            controller.enable_pager_mode()
            controller.disable_pager_mode()

        write_mock.assert_not_called()

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        controller = TerminalController(0, 1)

        with mock.patch.object(controller, "enable_pager_mode") as enable_mock, mock.patch.object(
            controller, "disable_pager_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_write_failure_is_not_fatal(self) -> None:
        controller = TerminalController(0, 1)

        with mock.patch("lazyless.terminal.os.write", side_effect=OSError("closed")) as write_mock:
            controller.bell()

        write_mock.assert_called_once_with(1, b"\x07")

    def test_size_has_at_least_two_rows(self) -> None:
        controller = TerminalController(0, 1)

        with mock.patch("lazyless.terminal.os.get_terminal_size", return_value=(100, 1)):
            self.assertEqual(controller.size(), Geometry(rows=2, columns=100))

    def test_size_falls_back_when_output_is_not_a_terminal(self) -> None:
        controller = TerminalController(0, 1)

        with mock.patch("lazyless.terminal.os.get_terminal_size", side_effect=OSError), mock.patch(
            "lazyless.terminal.shutil.get_terminal_size", return_value=(80, 24)
        ):
            self.assertEqual(controller.size(), Geometry(rows=24, columns=80))

    def test_watch_resize_installs_and_restores_handler(self) -> None:
        controller = TerminalController(0, 1)
        calls: list[bool] = []
        previous = object()

        with mock.patch("lazyless.terminal.signal.signal", return_value=previous) as signal_mock:
            with controller.watch_resize(lambda: calls.append(True)):
                handler = signal_mock.call_args_list[0].args[1]
                handler(signal.SIGWINCH, None)

        self.assertEqual(calls, [True])
        self.assertEqual(signal_mock.call_args_list[0].args[0], signal.SIGWINCH)
        self.assertEqual(signal_mock.call_args_list[1].args, (signal.SIGWINCH, previous))


if __name__ == "__main__":
    unittest.main()
