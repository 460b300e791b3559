"""Minimal single-line editing shared by pattern entry and the add-file prompt."""

from __future__ import annotations

from .operations import Operation


class LineEditor:
    """Edit a buffer whose editable part starts at ``begin``.

    Everything before ``begin`` is the prompt (``/``, ``Examine: `` ...).
    Backspacing at ``begin`` deletes the last prompt character and moves the
    cursor below ``begin``, which callers treat as leaving the mode.
    """

    def __init__(self, begin: int) -> None:
        self.begin = begin

    def edit(self, op: Operation, buffer: str, cursor: int, text: str = "") -> tuple[str, int]:
        begin = self.begin
        if op is Operation.INSERT:
            return buffer[:cursor] + text + buffer[cursor:], cursor + len(text)
        if op is Operation.BACKSPACE:
            if cursor > begin - 1 and cursor > 0:
                return buffer[: cursor - 1] + buffer[cursor:], cursor - 1
            return buffer, cursor
        if op is Operation.NEXT_WORD:
            space = buffer.find(" ", cursor)
            return buffer, len(buffer) if space < 0 else space + 1
        if op is Operation.PREV_WORD:
            for i in range(cursor - 2, begin, -1):
                if buffer[i] == " ":
                    return buffer, i + 1
            return buffer, begin
        if op is Operation.HOME:
            return buffer, begin
        if op is Operation.END:
            return buffer, len(buffer)
        if op is Operation.DELETE:
            if begin <= cursor < len(buffer):
                return buffer[:cursor] + buffer[cursor + 1 :], cursor
            return buffer, cursor
        if op is Operation.DELETE_WORD:
            end = cursor
            while end < len(buffer) and buffer[end] != " ":
                end += 1
            start = cursor
            while start - 1 >= begin:
                start -= 1
                if buffer[start] == " ":
                    break
            return buffer[:start] + buffer[end:], start
        if op is Operation.DELETE_LINE:
            return buffer[:begin], begin
        if op is Operation.LEFT:
            return buffer, cursor - 1 if cursor > begin else cursor
        if op is Operation.RIGHT:
            return buffer, cursor + 1 if cursor < len(buffer) else cursor
        return buffer, cursor
