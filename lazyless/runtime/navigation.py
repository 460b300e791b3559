"""Vertical and horizontal movement over the active source.

All movement is expressed in displayable lines: with a filter pattern active
only matching lines count. In wrap mode (no horizontal pan, chop off) a long
line is paged through in screen-width segments tracked by ``offset_in_line``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from ..ansi import StyledText
from .state import PagerState

logger = logging.getLogger(__name__)

MAX_MOVE = sys.maxsize
LINE_NUMBER_WIDTH = 8


class Navigator:
    def __init__(self, state: PagerState, bell: Callable[[], None] | None = None) -> None:
        self.state = state
        self._bell = bell

    def content_width(self) -> int:
        state = self.state
        prefix = LINE_NUMBER_WIDTH if state.options.print_line_numbers else 0
        return max(1, state.geometry.columns - prefix)

    def wraps(self) -> bool:
        """Return whether long lines fold onto following rows."""
        return self.state.view.first_column_to_display == 0 and not self.state.options.chop_long_lines

    def is_displayable(self, line: StyledText) -> bool:
        state = self.state
        if state.registry.index == 0:
            return True
        pattern = state.patterns.filter_pattern(state.options.case_policy)
        return pattern is None or line.search(pattern)

    def next_displayable(self, start: int) -> tuple[int, StyledText | None]:
        """Return the first displayable ``(index, line)`` at or after ``start``.

        At end of stream the line is ``None`` and the index is where the
        stream ran out.
        """
        cache = self.state.view.cache
        index = max(0, start)
        while True:
            line = cache.get_line(index)
            if line is None or self.is_displayable(line):
                return index, line
            index += 1

    def prev_displayable(self, start: int) -> tuple[int, StyledText | None]:
        """Return the closest displayable ``(index, line)`` strictly before ``start``.

        The scan stops at ``first_line_in_memory``; ``(first_line_in_memory,
        None)`` means nothing displayable precedes ``start``.
        """
        view = self.state.view
        index = start - 1
        while index >= view.first_line_in_memory:
            line = view.cache.get_line(index)
            if line is not None and self.is_displayable(line):
                return index, line
            index -= 1
        return view.first_line_in_memory, None

    def move_forward(self, count: int) -> None:
        state = self.state
        view = state.view
        width = self.content_width()
        height = state.geometry.rows
        do_offsets = self.wraps()
        if count == MAX_MOVE:
            total = state.registry.total_lines()
            if total is not None:
                first = total
                for _ in range(height - 1):
                    index, line = self.prev_displayable(first)
                    if line is None:
                        break
                    first = index
                view.first_line_to_display = first
                view.offset_in_line = 0

        while count > 0:
            count -= 1
            last = view.first_line_to_display
            if not do_offsets:
                for _ in range(height - 1):
                    index, _line = self.next_displayable(last)
                    last = index + 1
            else:
                off = view.offset_in_line
                for _ in range(height - 1):
                    index, line = self.next_displayable(last)
                    if line is None:
                        last = index + 1
                        break
                    if line.column_length() > off + width:
                        off += width
                    else:
                        off = 0
                        last = index + 1
            if view.cache.get_line(last) is None:
                self.eof()
                return
            index, line = self.next_displayable(view.first_line_to_display)
            if line is None:
                self.eof()
                return
            if do_offsets and line.column_length() > width + view.offset_in_line:
                view.offset_in_line += width
            else:
                view.offset_in_line = 0
                view.first_line_to_display = index + 1

    def move_backward(self, count: int) -> None:
        view = self.state.view
        width = self.content_width()
        while count > 0:
            count -= 1
            if view.offset_in_line > 0:
                view.offset_in_line = max(0, view.offset_in_line - width)
                continue
            if view.first_line_in_memory >= view.first_line_to_display:
                self.bof()
                return
            index, line = self.prev_displayable(view.first_line_to_display)
            if line is None:
                self.bof()
                return
            view.first_line_to_display = index
            view.offset_in_line = 0
            if self.wraps():
                length = line.column_length()
                # Land on the start of the line's last screen-width segment.
                view.offset_in_line = ((length - 1) // width) * width if length > 0 else 0

    def move_to(self, line_number: int) -> bool:
        state = self.state
        line = state.view.cache.get_line(line_number)
        if line is None:
            state.message = f"Cannot seek to line number {line_number + 1}"
            return False
        if state.view.first_line_in_memory > line_number:
            state.registry.open_active()
        view = state.view
        view.first_line_to_display = line_number
        view.offset_in_line = 0
        return True

    def pan_left(self) -> None:
        view = self.state.view
        view.first_column_to_display = max(0, view.first_column_to_display - self.state.geometry.columns // 2)

    def pan_right(self) -> None:
        self.state.view.first_column_to_display += self.state.geometry.columns // 2

    def eof(self) -> None:
        state = self.state
        registry = state.registry
        state.view.eof_count += 1
        if 0 < registry.index < len(registry.sources) - 1:
            state.message = f"(END) - Next: {registry.sources[registry.index + 1].name}"
        else:
            state.message = "(END)"
        options = state.options
        if not (options.quiet or options.very_quiet or options.quit_at_first_eof or options.quit_at_second_eof):
            self.ring_bell()

    def bof(self) -> None:
        options = self.state.options
        if not (options.quiet or options.very_quiet):
            self.ring_bell()

    def ring_bell(self) -> None:
        if self._bell is not None:
            self._bell()
