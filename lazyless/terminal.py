"""Terminal control for the pager session.

Owns the raw-mode lifecycle, alternate-screen and keypad switching, the
bell, and SIGWINCH subscription. Write failures never end the session.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import signal
import termios
import tty
from collections.abc import Callable

from .runtime.state import Geometry

logger = logging.getLogger(__name__)

ENTER_ALT_SCREEN = "\x1b[?1049h"
EXIT_ALT_SCREEN = "\x1b[?1049l"
KEYPAD_XMIT = "\x1b[?1h\x1b="
KEYPAD_LOCAL = "\x1b[?1l\x1b>"
BELL = "\x07"


class TerminalController:
    """Manage terminal mode transitions for one pager session."""

    def __init__(self, input_fd: int, output_fd: int, *, no_init: bool = False, no_keypad: bool = False) -> None:
        self.input_fd = input_fd
        self.output_fd = output_fd
        self.no_init = no_init
        self.no_keypad = no_keypad
        self._saved_tty_state = None

    def write(self, data: str) -> None:
        try:
            os.write(self.output_fd, data.encode("utf-8"))
        except OSError as exc:
            logger.debug("terminal write failed: %s", exc)

    def bell(self) -> None:
        self.write(BELL)

    def size(self) -> Geometry:
        try:
            columns, rows = os.get_terminal_size(self.output_fd)
        except OSError:
            columns, rows = shutil.get_terminal_size((80, 24))
        return Geometry(rows=max(2, rows), columns=max(1, columns))

    def enable_pager_mode(self) -> None:
        """Enter raw mode, then the alternate screen and keypad mode unless disabled."""
        self._saved_tty_state = termios.tcgetattr(self.input_fd)
        tty.setraw(self.input_fd, termios.TCSAFLUSH)
        sequence = ""
        if not self.no_init:
            sequence += ENTER_ALT_SCREEN
        if not self.no_keypad:
            sequence += KEYPAD_XMIT
        if sequence:
            self.write(sequence)

    def disable_pager_mode(self) -> None:
        sequence = ""
        if not self.no_init:
            sequence += EXIT_ALT_SCREEN
        if not self.no_keypad:
            sequence += KEYPAD_LOCAL
        if sequence:
            self.write(sequence)
        if self._saved_tty_state is not None:
            termios.tcsetattr(self.input_fd, termios.TCSAFLUSH, self._saved_tty_state)
            self._saved_tty_state = None

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with pager-mode enter/exit calls."""
        try:
            self.enable_pager_mode()
            yield
        finally:
            self.disable_pager_mode()

    @contextlib.contextmanager
    def watch_resize(self, callback: Callable[[], None]):
        """Install a SIGWINCH handler for the duration of the block."""
        previous = signal.signal(signal.SIGWINCH, lambda _signum, _frame: callback())
        try:
            yield
        finally:
            signal.signal(signal.SIGWINCH, previous)
