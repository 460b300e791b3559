"""Shared fakes for pager tests: in-memory sources, scripted keys, session builder."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path

from lazyless.cancel import PagerCancelled
from lazyless.input import BindingReader
from lazyless.runtime.interpreter import CommandInterpreter
from lazyless.runtime.navigation import Navigator
from lazyless.runtime.registry import SourceRegistry
from lazyless.runtime.state import Geometry, PagerOptions, PagerState
from lazyless.search import PatternState
from lazyless.sources import Source, SourceNotFound


class MemorySource(Source):
    def __init__(self, name: str, lines: list[str], *, missing: bool = False, known_length: bool = True) -> None:
        self.name = name
        self.lines = lines
        self.missing = missing
        self.known_length = known_length
        self.opens = 0

    def open(self):
        if self.missing:
            raise SourceNotFound(self.name)
        self.opens += 1
        return io.BytesIO("".join(line + "\n" for line in self.lines).encode("utf-8"))

    def total_lines(self) -> int | None:
        return len(self.lines) if self.known_length else None


class ScriptedKeys:
    """Key source replaying a fixed script; running dry cancels the session."""

    def __init__(self, keys=()) -> None:
        self.queue = list(keys)

    def feed(self, keys) -> None:
        self.queue.extend(keys)

    def read_char(self, timeout: float | None = None):
        if self.queue:
            return self.queue.pop(0)
        if timeout is not None:
            return None
        raise PagerCancelled()

    def peek(self, timeout: float = 0.0) -> bool:
        return bool(self.queue)


@dataclass
class Pager:
    state: PagerState
    navigator: Navigator
    bells: list[bool] = field(default_factory=list)
    renders: list[str | None] = field(default_factory=list)

    def interpreter(self, keys: ScriptedKeys) -> CommandInterpreter:
        return CommandInterpreter(
            self.state,
            self.navigator,
            BindingReader(keys),
            render=lambda: self.renders.append(self.state.message),
        )

    def run(self, script: str | list) -> CommandInterpreter:
        """Feed ``script`` and step until it is consumed or the session ends."""
        keys = ScriptedKeys(script)
        interpreter = self.interpreter(keys)
        while keys.queue:
            if not interpreter.step():
                break
        return interpreter

    @property
    def top(self) -> int:
        return self.state.view.first_line_to_display


def make_pager(
    content: list[str] | list[Source],
    *,
    rows: int = 10,
    columns: int = 80,
    current_dir: Path | None = None,
    **option_values,
) -> Pager:
    if content and isinstance(content[0], Source):
        sources = list(content)
    else:
        sources = [MemorySource("test.txt", list(content))]
    options = PagerOptions(**option_values)
    patterns = PatternState()
    registry = SourceRegistry(sources, options, current_dir=current_dir, on_open=patterns.invalidate)
    state = PagerState(options, registry, Geometry(rows, columns), patterns=patterns)
    pager = Pager(state, Navigator(state))
    pager.navigator = Navigator(state, bell=lambda: pager.bells.append(True))
    state.message = registry.open_active()
    return pager
