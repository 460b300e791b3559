"""Frame composition for the pager view.

Builds the content rows and the status row for the next frame from the
current state without mutating it. Painting is left to ``lazyless.display``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..ansi import INVERSE_SGR, StyledText
from ..input.keymap import printable

if TYPE_CHECKING:
    from ..runtime.navigation import Navigator
    from ..runtime.state import PagerState

FILLER = "~"
IDLE_PROMPT = ":"
FILTER_INDICATOR = "&"


@dataclass(frozen=True)
class Frame:
    """Composed rows plus the cursor placement ``(row, column)``, if any.

    ``fits`` is only meaningful for a single-screen probe and reports whether
    the whole stream fit above the status row.
    """

    rows: tuple[StyledText, ...]
    cursor: tuple[int, int] | None = None
    fits: bool = False


def file_info(state: PagerState, last_line: int, eof: bool) -> str:
    registry = state.registry
    total = registry.total_lines()
    if total is None:
        total = len(state.view.cache)
    where = ""
    if registry.real_count > 1 and registry.index > 0:
        where = f" (file {registry.index} of {registry.real_count})"
    text = f"{registry.active.name}{where} lines {state.view.first_line_to_display + 1}-{last_line}/{total}"
    return text + " (END)" if eof else text


def status_text(
    state: PagerState,
    pending_keys: str = "",
    input_ready: bool = False,
    message: str | None = None,
) -> StyledText:
    """Return the status row, highest-precedence source first."""
    if state.buffer:
        return StyledText.plain(" " + state.buffer)
    if pending_keys and not input_ready:
        return StyledText.plain(" " + printable(pending_keys))
    if message is None:
        message = state.message
    if message is not None:
        return StyledText.styled(message, INVERSE_SGR)
    if state.patterns.filter is not None:
        return StyledText.plain(FILTER_INDICATOR)
    return StyledText.plain(IDLE_PROMPT)


def compose_frame(
    state: PagerState,
    navigator: Navigator,
    pending_keys: str = "",
    input_ready: bool = False,
    one_screen: bool = False,
) -> Frame:
    """Compose ``rows - 1`` content rows and the status row.

    In probe mode (``one_screen``) no filler or status row is produced and
    the frame reports whether the stream ended within the content rows.
    """
    from ..runtime.state import LineEditMode, PatternEntryMode

    options = state.options
    view = state.view
    height = state.geometry.rows
    width = navigator.content_width()
    chop = view.first_column_to_display > 0 or options.chop_long_lines
    search = state.patterns.search_pattern(options.case_policy)

    rows: list[StyledText] = []
    next_index = view.first_line_to_display
    current: StyledText | None = None
    number = 0
    last_line = view.first_line_to_display
    eof = False
    fits = False
    for row in range(height - 1):
        if current is None:
            index, line = navigator.next_displayable(next_index)
            next_index = index + 1
            number = next_index
            if line is None:
                if one_screen:
                    fits = True
                    break
                eof = True
                line = StyledText.plain(FILLER)
            else:
                last_line = number
                if search is not None:
                    line = line.highlight(search)
            current = line

        if chop:
            start = view.first_column_to_display
            if row == 0 and view.offset_in_line > 0:
                start = max(view.offset_in_line, start)
            shown = current.column_slice(start, start + width)
            current = None
        else:
            if row == 0 and view.offset_in_line > 0:
                current = current.column_slice(view.offset_in_line)
            shown = current.column_slice(0, width)
            current = current.column_slice(width)
            if not len(current):
                current = None

        if options.print_line_numbers and not eof:
            shown = StyledText.plain(f"{number:7d} ") + shown
        rows.append(shown)

    if one_screen:
        if not fits and current is None:
            # Content that exactly fills the screen still fits.
            fits = navigator.next_displayable(next_index)[1] is None
        return Frame(tuple(rows), None, fits)

    message = file_info(state, last_line, eof) if state.show_file_info else None
    status = status_text(state, pending_keys, input_ready, message)
    rows.append(status.column_slice(0, state.geometry.columns))

    cursor = None
    if isinstance(state.mode, (PatternEntryMode, LineEditMode)):
        cursor = (height - 1, state.cursor + 1)
    return Frame(tuple(rows), cursor)
