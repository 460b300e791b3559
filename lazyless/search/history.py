"""Committed-pattern history with an up/down browse cursor."""

from __future__ import annotations

MAX_PATTERN_HISTORY = 256


class PatternHistory:
    """Patterns in commit order plus a browse cursor.

    The cursor counts back from the newest entry: ``0`` is the most recent
    pattern and ``-1`` means not browsing.
    """

    def __init__(self, max_entries: int = MAX_PATTERN_HISTORY) -> None:
        self.max_entries = max(1, max_entries)
        self.entries: list[str] = []
        self.cursor = -1
        self._saved_buffer = ""

    @property
    def browsing(self) -> bool:
        return self.cursor >= 0

    def record(self, pattern: str) -> None:
        if not pattern:
            return
        if self.entries and self.entries[-1] == pattern:
            return
        self.entries.append(pattern)
        overflow = len(self.entries) - self.max_entries
        if overflow > 0:
            del self.entries[:overflow]

    def reset_browse(self) -> None:
        self.cursor = -1
        self._saved_buffer = ""

    def older(self, buffer: str, prefix: str) -> str | None:
        """Return the buffer for the next older entry, or ``None`` at the oldest."""
        if self.cursor + 1 >= len(self.entries):
            return None
        if self.cursor < 0:
            self._saved_buffer = buffer
        self.cursor += 1
        return prefix + self.entries[-1 - self.cursor]

    def newer(self, prefix: str) -> str | None:
        """Return the buffer for the next newer entry.

        Stepping past the newest entry restores the buffer captured when
        browsing started; ``None`` means nothing changes.
        """
        if self.cursor < 0:
            return None
        self.cursor -= 1
        if self.cursor < 0:
            restored = self._saved_buffer
            self._saved_buffer = ""
            return restored
        return prefix + self.entries[-1 - self.cursor]
