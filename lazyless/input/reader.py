"""Low-level terminal input.

Reads raw bytes from the key descriptor and decodes them into characters.
Resize notifications and cancellation wake a blocked read through a
self-pipe, so both reach the driving thread as ordinary events.
"""

from __future__ import annotations

import codecs
import logging
import os
import select

from ..cancel import CancellationToken, PagerCancelled

logger = logging.getLogger(__name__)


class ResizeEvent:
    def __repr__(self) -> str:
        return "RESIZE"


RESIZE = ResizeEvent()


class TerminalInput:
    """Blocking character source over a terminal file descriptor."""

    def __init__(self, fd: int, token: CancellationToken | None = None) -> None:
        self.fd = fd
        self.token = token
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending: list[str] = []
        self._resize_pending = False
        self._wake_r, self._wake_w = os.pipe()
        os.set_blocking(self._wake_w, False)
        if token is not None:
            token.add_listener(self.wake)

    def wake(self) -> None:
        try:
            os.write(self._wake_w, b"\0")
        except OSError:
            pass

    def notify_resize(self) -> None:
        """Queue a resize event; safe to call from a signal handler."""
        self._resize_pending = True
        self.wake()

    def _check_cancelled(self) -> None:
        if self.token is not None:
            self.token.raise_if_cancelled()

    def _drain_wake_pipe(self) -> None:
        ready, _, _ = select.select([self._wake_r], [], [], 0)
        if ready:
            os.read(self._wake_r, 512)

    def _fill(self, timeout: float | None) -> bool:
        """Read at least one decoded character into the pending queue.

        Returns ``False`` when the timeout expires or a wake-up arrives
        before any key byte.
        """
        while not self._pending:
            ready, _, _ = select.select([self.fd, self._wake_r], [], [], timeout)
            if not ready:
                return False
            if self._wake_r in ready:
                self._drain_wake_pipe()
                return False
            data = os.read(self.fd, 1)
            if not data:
                logger.debug("key input reached end of file")
                raise PagerCancelled()
            text = self._decoder.decode(data)
            self._pending.extend(text)
        return True

    def read_char(self, timeout: float | None = None) -> str | ResizeEvent | None:
        """Return the next character, ``RESIZE``, or ``None`` on timeout."""
        while True:
            self._check_cancelled()
            if self._resize_pending:
                self._resize_pending = False
                return RESIZE
            if self._pending:
                return self._pending.pop(0)
            if self._fill(timeout):
                continue
            self._check_cancelled()
            if self._resize_pending:
                continue
            if timeout is not None:
                return None

    def peek(self, timeout: float = 0.0) -> bool:
        """Return whether a key is available without consuming it."""
        if self._pending:
            return True
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout))
        return bool(ready)

    def close(self) -> None:
        for fd in (self._wake_r, self._wake_w):
            try:
                os.close(fd)
            except OSError:
                pass
