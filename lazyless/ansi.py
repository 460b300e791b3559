"""ANSI-aware styled text values.

Parses raw lines carrying SGR escape sequences into a ``StyledText`` value that
knows its display width, can be sliced by terminal columns, highlighted by a
regex, and rendered back to an escape-sequence string.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass
from functools import cached_property

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 4
RESET = "\x1b[0m"
INVERSE_SGR = "7"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one already-expanded character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def next_tab_stop(col: int, tabs: Sequence[int]) -> int:
    """Return the column of the first tab stop strictly after ``col``.

    A single value means a stop every ``tabs[0]`` columns. Several values are
    explicit stop columns; past the last one the final interval repeats.
    """
    if not tabs:
        tabs = (TAB_STOP,)
    if len(tabs) == 1:
        step = max(1, tabs[0])
        return (col // step + 1) * step
    for stop in tabs:
        if stop > col:
            return stop
    last = tabs[-1]
    step = max(1, tabs[-1] - tabs[-2])
    return last + ((col - last) // step + 1) * step


def _merge_sgr(current: str, params: str) -> str:
    if params in {"", "0"}:
        return ""
    if params.startswith("0;"):
        return params[2:]
    return f"{current};{params}" if current else params


@dataclass(frozen=True)
class StyledText:
    """Plain text plus the SGR parameter string active for each character."""

    text: str
    styles: tuple[str, ...]

    @classmethod
    def plain(cls, text: str) -> StyledText:
        return cls(text, ("",) * len(text))

    @classmethod
    def from_ansi(cls, raw: str, tabs: Sequence[int] = (TAB_STOP,)) -> StyledText:
        """Parse ``raw`` into styled text.

        SGR sequences update the running style, other CSI sequences are
        dropped, tabs expand to ``tabs`` stops, and remaining control bytes
        are shown in caret notation so they cannot drive the terminal.
        """
        chars: list[str] = []
        styles: list[str] = []
        current = ""
        col = 0
        i = 0
        n = len(raw)
        while i < n:
            ch = raw[i]
            if ch == "\x1b":
                match = ANSI_ESCAPE_RE.match(raw, i)
                if match:
                    seq = match.group(0)
                    if seq.endswith("m"):
                        current = _merge_sgr(current, seq[2:-1])
                    i = match.end()
                    continue
            if ch == "\t":
                stop = next_tab_stop(col, tabs)
                chars.extend(" " * (stop - col))
                styles.extend([current] * (stop - col))
                col = stop
                i += 1
                continue
            code = ord(ch)
            if code < 32 or code == 127:
                shown = "^" + chr(code ^ 0x40)
                chars.extend(shown)
                styles.extend([current] * len(shown))
                col += len(shown)
                i += 1
                continue
            chars.append(ch)
            styles.append(current)
            col += char_display_width(ch)
            i += 1
        return cls("".join(chars), tuple(styles))

    @classmethod
    def styled(cls, text: str, sgr: str) -> StyledText:
        return cls(text, (sgr,) * len(text))

    def __len__(self) -> int:
        return len(self.text)

    def __add__(self, other: StyledText) -> StyledText:
        return StyledText(self.text + other.text, self.styles + other.styles)

    @cached_property
    def _widths(self) -> tuple[int, ...]:
        return tuple(char_display_width(ch) for ch in self.text)

    def column_length(self) -> int:
        """Return the number of terminal columns the text occupies."""
        return sum(self._widths)

    def column_slice(self, start: int, end: int | None = None) -> StyledText:
        """Return the characters whose columns fall inside ``[start, end)``.

        A wide character straddling ``start`` belongs to this slice and shifts
        the window left by one column; one straddling ``end`` is left for the
        next slice. Consecutive slices therefore never lose a character.
        """
        start = max(0, start)
        if end is not None and end <= start:
            return StyledText("", ())
        text: list[str] = []
        styles: list[str] = []
        col = 0
        for ch, style, width in zip(self.text, self.styles, self._widths):
            if not text and col + width > start and col < start and end is not None:
                end -= start - col
            if end is not None and col + width > end:
                break
            if col + width > start:
                text.append(ch)
                styles.append(style)
            col += width
        return StyledText("".join(text), tuple(styles))

    def search(self, pattern: re.Pattern[str]) -> bool:
        return pattern.search(self.text) is not None

    def highlight(self, pattern: re.Pattern[str], sgr: str = INVERSE_SGR) -> StyledText:
        """Return a copy with every non-empty match of ``pattern`` styled ``sgr``."""
        marked: set[int] = set()
        for match in pattern.finditer(self.text):
            marked.update(range(match.start(), match.end()))
        if not marked:
            return self
        styles = tuple(
            (f"{style};{sgr}" if style else sgr) if idx in marked else style
            for idx, style in enumerate(self.styles)
        )
        return StyledText(self.text, styles)

    def to_ansi(self) -> str:
        """Render back to a string with minimal SGR transitions."""
        out: list[str] = []
        current = ""
        for ch, style in zip(self.text, self.styles):
            if style != current:
                if current:
                    out.append(RESET)
                if style:
                    out.append(f"\x1b[{style}m")
                current = style
            out.append(ch)
        if current:
            out.append(RESET)
        return "".join(out)
