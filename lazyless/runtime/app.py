"""Runtime composition layer for lazyless.

Builds the session state, wires the terminal, input, interpreter and display
together, and runs the loop. The single-screen probe runs first so short
content can be printed without entering the paged view.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..cancel import CancellationToken
from ..display import Display
from ..input import BindingReader, TerminalInput
from ..render import compose_frame
from ..search import PatternState
from ..sources import Source
from ..terminal import TerminalController
from .interpreter import CommandInterpreter
from .loop import PagerScreen, run_main_loop
from .navigation import Navigator
from .registry import SourceRegistry
from .state import PagerOptions, PagerState

logger = logging.getLogger(__name__)


def print_if_one_screen(state: PagerState, navigator: Navigator, terminal: TerminalController) -> bool:
    """Print the whole stream and return ``True`` when it fits above the status row."""
    frame = compose_frame(state, navigator, one_screen=True)
    if not frame.fits:
        return False
    terminal.write("".join(row.to_ansi() + "\n" for row in frame.rows))
    return True


def run_pager(
    sources: Sequence[Source],
    options: PagerOptions,
    *,
    input_fd: int,
    output_fd: int,
    current_dir: Path | None = None,
    token: CancellationToken | None = None,
) -> None:
    """Page ``sources`` until the user exits.

    Raises ``SourceNotFound`` when none of the sources can be opened.
    """
    token = token if token is not None else CancellationToken()
    terminal = TerminalController(input_fd, output_fd, no_init=options.no_init, no_keypad=options.no_keypad)
    patterns = PatternState()
    registry = SourceRegistry(sources, options, token=token, current_dir=current_dir, on_open=patterns.invalidate)
    state = PagerState(options, registry, terminal.size(), patterns=patterns)
    navigator = Navigator(state, bell=terminal.bell)
    try:
        state.message = registry.open_active()
        if options.quit_if_one_screen and registry.real_count == 1:
            if print_if_one_screen(state, navigator, terminal):
                logger.debug("content fits on one screen; not paging")
                return

        keys = TerminalInput(input_fd, token)
        try:
            bindings = BindingReader(keys)
            screen = PagerScreen(state, navigator, Display(terminal.write), bindings)
            bindings.on_resize = lambda: screen.handle_resize(terminal.size())
            bindings.on_pending = screen.render
            interpreter = CommandInterpreter(
                state,
                navigator,
                bindings,
                render=screen.render,
                size_provider=terminal.size,
            )
            with terminal.raw_mode(), terminal.watch_resize(keys.notify_resize):
                run_main_loop(interpreter, screen, token)
        finally:
            keys.close()
    finally:
        registry.close()
