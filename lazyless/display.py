"""Row-diffing painter.

Keeps the last painted frame and rewrites only rows that changed. A cleared
display repaints every row on the next update.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .ansi import StyledText

CLEAR_SCREEN = "\x1b[H\x1b[2J"
CLEAR_TO_EOL = "\x1b[K"


def _move(row: int, column: int) -> str:
    return f"\x1b[{row + 1};{column + 1}H"


class Display:
    def __init__(self, write: Callable[[str], None]) -> None:
        self._write = write
        self._painted: list[StyledText] = []
        self._needs_clear = True
        self.rows = 0
        self.columns = 0

    def clear(self) -> None:
        """Forget the painted frame so the next update repaints everything."""
        self._painted = []
        self._needs_clear = True

    def resize(self, rows: int, columns: int) -> None:
        if (rows, columns) != (self.rows, self.columns):
            self.rows = rows
            self.columns = columns
            self.clear()

    def update(self, rows: Sequence[StyledText], cursor: tuple[int, int] | None = None) -> None:
        out: list[str] = []
        if self._needs_clear:
            out.append(CLEAR_SCREEN)
            self._needs_clear = False
        for index, row in enumerate(rows):
            if index < len(self._painted) and self._painted[index] == row:
                continue
            out.append(_move(index, 0) + row.to_ansi() + CLEAR_TO_EOL)
        for index in range(len(rows), len(self._painted)):
            out.append(_move(index, 0) + CLEAR_TO_EOL)
        self._painted = list(rows)

        if cursor is None and rows:
            cursor = (len(rows) - 1, rows[-1].column_length())
        if cursor is not None:
            out.append(_move(*cursor))
        if out:
            self._write("".join(out))
