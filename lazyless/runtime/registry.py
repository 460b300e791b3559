"""Ordered source list, active stream ownership, and position rollback.

Index 0 always holds the synthetic help source; ordinary file navigation
works on indices ``1..len-1`` and the help source is only entered through the
help operation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from ..ansi import TAB_STOP, StyledText
from ..cancel import CancellationToken, InterruptibleStream
from ..render.help import HELP_TEXT, HELP_TITLE
from ..sources import HelpSource, Source, SourceNotFound, expand_source_spec
from .cache import LineCache

if TYPE_CHECKING:
    from .state import PagerOptions

logger = logging.getLogger(__name__)

_UNKNOWN = object()


@dataclass
class ViewPosition:
    """Scroll state for the active source; replaced whenever a source opens."""

    cache: LineCache = field(default_factory=lambda: LineCache(None))
    first_line_in_memory: int = 0
    first_line_to_display: int = 0
    first_column_to_display: int = 0
    offset_in_line: int = 0
    eof_count: int = 0

    @property
    def lines(self) -> list[StyledText]:
        return self.cache.lines


@dataclass(frozen=True)
class SavedPosition:
    source_index: int
    first_line_to_display: int
    first_column_to_display: int
    offset_in_line: int
    print_line_numbers: bool


class SourceRegistry:
    def __init__(
        self,
        sources: Sequence[Source],
        options: PagerOptions,
        *,
        token: CancellationToken | None = None,
        current_dir: Path | None = None,
        help_source: Source | None = None,
        on_open: Callable[[], None] | None = None,
    ) -> None:
        if not sources:
            raise ValueError("No sources")
        self.sources: list[Source] = [help_source or HelpSource(HELP_TEXT, HELP_TITLE), *sources]
        self.index = 1
        self.options = options
        self.token = token
        self.current_dir = current_dir if current_dir is not None else Path.cwd()
        self.view = ViewPosition()
        self._on_open = on_open
        self._stream_open = False
        self._total_lines: object = _UNKNOWN

    @property
    def active(self) -> Source:
        return self.sources[self.index]

    @property
    def real_count(self) -> int:
        """Number of sources excluding the help source."""
        return len(self.sources) - 1

    def label(self) -> str:
        name = self.active.name
        if self.real_count == 1 or self.index == 0:
            return name
        return f"{name} (file {self.index} of {self.real_count})"

    def total_lines(self) -> int | None:
        if self._total_lines is _UNKNOWN:
            self._total_lines = self.active.total_lines()
        return self._total_lines  # type: ignore[return-value]

    def close(self) -> None:
        self.view.cache.close()
        self._stream_open = False

    def open_active(self) -> str:
        """Open the source at ``index`` and reset the view.

        Returns the status label for the opened source. When a stream was
        already open, a failure drops the failing source and raises
        ``SourceNotFound`` so the caller can roll back. At startup failing
        sources are dropped and the next candidate is tried; the returned
        label then reports what was not found. Running out of candidates
        raises ``SourceNotFound``.
        """
        was_open = self._stream_open
        self.close()
        failed: list[str] = []
        while True:
            source = self.sources[self.index]
            try:
                stream = source.open()
            except SourceNotFound:
                logger.debug("cannot open source %r at index %d", source.name, self.index)
                del self.sources[self.index]
                self.index = min(self.index, len(self.sources) - 1)
                if was_open:
                    raise
                failed.append(source.name)
                if self.index <= 0:
                    raise
                continue
            break

        if self.token is not None:
            stream = InterruptibleStream(stream, self.token)
        self.view = ViewPosition(cache=LineCache(stream, self.options.tabs))
        self._stream_open = True
        self._total_lines = _UNKNOWN
        logger.debug("opened source %r (index %d of %d)", source.name, self.index, self.real_count)
        if self._on_open is not None:
            self._on_open()
        if failed:
            return " ".join(f"{name} not found!" for name in failed)
        return self.label()

    def open_any(self) -> str:
        """Open the active source, falling through to neighbours on failure."""
        failed: list[str] = []
        while True:
            try:
                label = self.open_active()
            except SourceNotFound as exc:
                if self.real_count < 1:
                    raise
                failed.append(exc.name)
                continue
            if failed:
                return " ".join(f"{name} not found!" for name in failed)
            return label

    def snapshot(self, shift: int = 0) -> SavedPosition:
        """Capture the view; ``shift`` adjusts the index for a source about to be dropped."""
        view = self.view
        return SavedPosition(
            source_index=self.index + shift,
            first_line_to_display=view.first_line_to_display,
            first_column_to_display=view.first_column_to_display,
            offset_in_line=view.offset_in_line,
            print_line_numbers=self.options.print_line_numbers,
        )

    def restore(self, saved: SavedPosition, failing_name: str | None = None) -> str:
        self.index = max(0, min(saved.source_index, len(self.sources) - 1))
        label = self.open_any()
        view = self.view
        view.cache.get_line(saved.first_line_to_display - 1)
        view.first_line_to_display = min(saved.first_line_to_display, len(view.cache))
        view.first_column_to_display = saved.first_column_to_display
        view.offset_in_line = saved.offset_in_line
        self.options.print_line_numbers = saved.print_line_numbers
        if failing_name is not None:
            logger.debug("rolled back to index %d after %r failed", self.index, failing_name)
            return f"{failing_name} not found!"
        return label

    def _switch_to(self, target: int, shift: int) -> str:
        saved = self.snapshot(shift)
        self.index = target
        name = self.sources[target].name
        try:
            return self.open_active()
        except SourceNotFound:
            return self.restore(saved, name)

    def navigate_by(self, delta: int) -> str:
        if delta >= 0:
            if self.index < len(self.sources) - delta:
                return self._switch_to(self.index + delta, 0)
            return "No next file"
        steps = -delta
        if self.index > steps:
            return self._switch_to(self.index - steps, -1)
        return "No previous file"

    def navigate_to(self, target: int) -> str:
        target = max(1, target)
        if target < len(self.sources):
            return self._switch_to(target, -1 if target < self.index else 0)
        return "No such file"

    def add_source(self, spec: str, syntax_style: str | None = None) -> list[Source]:
        added = expand_source_spec(spec, self.current_dir, syntax_style)
        self.sources.extend(added)
        self.index = len(self.sources) - 1
        return added

    def add_and_open(self, spec: str, syntax_style: str | None = None) -> str:
        saved = self.snapshot()
        self.add_source(spec, syntax_style)
        try:
            return self.open_active()
        except SourceNotFound:
            return self.restore(saved, spec)

    def delete_active(self) -> str | None:
        """Drop the active source; ignored while only one real source is left."""
        if len(self.sources) <= 2 or self.index == 0:
            return None
        del self.sources[self.index]
        self.index = min(self.index, len(self.sources) - 1)
        return self.open_any()

    def enter_help(self) -> SavedPosition:
        saved = self.snapshot()
        self.options.print_line_numbers = False
        self.index = 0
        self.open_active()
        return saved
