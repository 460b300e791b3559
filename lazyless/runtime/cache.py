"""Append-only cache of decoded lines for the active source."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..ansi import TAB_STOP, StyledText
from ..sources import LineStream

logger = logging.getLogger(__name__)


def _strip_newline(raw: bytes) -> bytes:
    if raw.endswith(b"\r\n"):
        return raw[:-2]
    if raw.endswith(b"\n"):
        return raw[:-1]
    return raw


class LineCache:
    """Lazily decodes lines from ``stream`` and never evicts them.

    ``get_line(n)`` reads just far enough to make index ``n`` available, so
    the cache always holds a contiguous prefix of the stream.
    """

    def __init__(self, stream: LineStream | None, tabs: Sequence[int] = (TAB_STOP,)) -> None:
        self._stream = stream
        self._tabs = tuple(tabs)
        self.lines: list[StyledText] = []
        self.exhausted = stream is None

    def __len__(self) -> int:
        return len(self.lines)

    def get_line(self, n: int) -> StyledText | None:
        if n < 0:
            return None
        while n >= len(self.lines) and not self.exhausted:
            assert self._stream is not None
            raw = self._stream.readline()
            if not raw:
                self.exhausted = True
                logger.debug("stream exhausted after %d lines", len(self.lines))
                break
            text = _strip_newline(raw).decode("utf-8", errors="replace")
            self.lines.append(StyledText.from_ansi(text, self._tabs))
        if n < len(self.lines):
            return self.lines[n]
        return None

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        self.exhausted = True
