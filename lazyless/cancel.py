"""Cooperative cancellation for the pager session.

A ``CancellationToken`` is checked at defined suspension points: the top of
the main loop, key reads, and before/after every source read. Cancellation
unwinds the session by raising ``PagerCancelled``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class PagerCancelled(Exception):
    """Raised at a suspension point once the session token is cancelled."""


class CancellationToken:
    def __init__(self) -> None:
        self._event = threading.Event()
        self._listeners: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Mark the token cancelled and wake anything blocked on input."""
        if self._event.is_set():
            return
        logger.debug("pager session cancelled")
        self._event.set()
        for listener in list(self._listeners):
            listener()

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise PagerCancelled()


class InterruptibleStream:
    """Line-stream wrapper that fails fast once the token is cancelled."""

    def __init__(self, stream, token: CancellationToken) -> None:
        self._stream = stream
        self._token = token

    def readline(self) -> bytes:
        self._token.raise_if_cancelled()
        line = self._stream.readline()
        self._token.raise_if_cancelled()
        return line

    def close(self) -> None:
        self._stream.close()
