"""Session state shared by the pager components.

``PagerState`` is the one explicit value the navigator, interpreter, and
composer operate on. Interpreter modes form a tagged union of frozen
dataclasses.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from ..ansi import TAB_STOP
from ..search import CasePolicy, PatternHistory, PatternState

if TYPE_CHECKING:
    from .registry import SavedPosition, SourceRegistry, ViewPosition


@dataclass
class PagerOptions:
    """Session toggles, set from the CLI before the session starts."""

    quit_at_second_eof: bool = False
    quit_at_first_eof: bool = False
    quit_if_one_screen: bool = False
    print_line_numbers: bool = False
    quiet: bool = False
    very_quiet: bool = False
    chop_long_lines: bool = False
    ignore_case_cond: bool = False
    ignore_case_always: bool = False
    no_keypad: bool = False
    no_init: bool = False
    tabs: tuple[int, ...] = (TAB_STOP,)
    syntax_style: str | None = None

    @property
    def case_policy(self) -> CasePolicy:
        if self.ignore_case_always:
            return CasePolicy.ALWAYS
        if self.ignore_case_cond:
            return CasePolicy.UNLESS_MIXED_CASE
        return CasePolicy.NEVER


@dataclass(frozen=True)
class Geometry:
    rows: int
    columns: int


class PatternKind(enum.Enum):
    SEARCH_FORWARD = "/"
    SEARCH_BACKWARD = "?"
    FILTER = "&"


@dataclass(frozen=True)
class CommandMode:
    pass


@dataclass(frozen=True)
class OptionEntryMode:
    pass


@dataclass(frozen=True)
class PatternEntryMode:
    kind: PatternKind


@dataclass(frozen=True)
class LineEditMode:
    """Add-file prompt; ``begin`` is the buffer offset where the file name starts."""

    begin: int


@dataclass(frozen=True)
class HelpMode:
    saved: SavedPosition


Mode = Union[CommandMode, OptionEntryMode, PatternEntryMode, LineEditMode, HelpMode]


@dataclass
class PagerState:
    options: PagerOptions
    registry: SourceRegistry
    geometry: Geometry
    patterns: PatternState = field(default_factory=PatternState)
    history: PatternHistory = field(default_factory=PatternHistory)
    mode: Mode = field(default_factory=CommandMode)
    buffer: str = ""
    cursor: int = 0
    message: str | None = None
    show_file_info: bool = False
    window: int = 0
    half_window: int = 0
    forward_search: bool = True
    needs_full_repaint: bool = True

    def __post_init__(self) -> None:
        if self.window <= 0:
            self.window = max(1, self.geometry.rows - 1)
        if self.half_window <= 0:
            self.half_window = max(1, self.window // 2)

    @property
    def view(self) -> ViewPosition:
        return self.registry.view

    def resize(self, geometry: Geometry) -> None:
        """Swap in new geometry and force the next render to repaint fully."""
        self.geometry = geometry
        self.needs_full_repaint = True

    def clear_buffer(self) -> None:
        self.buffer = ""
        self.cursor = 0
