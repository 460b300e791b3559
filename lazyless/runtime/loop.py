"""Main interactive loop: read a key, interpret it, render the next frame.

Resize events arrive through the binding reader as ordinary input and are
handled here on the driving thread. Cancellation unwinds the loop quietly;
the caller restores the terminal.
"""

from __future__ import annotations

import logging

from ..cancel import CancellationToken, PagerCancelled
from ..display import Display
from ..input import BindingReader
from ..render import compose_frame
from .interpreter import CommandInterpreter
from .navigation import Navigator
from .state import Geometry, PagerState

logger = logging.getLogger(__name__)

PENDING_KEY_PEEK_SECONDS = 0.001


class PagerScreen:
    """Composes frames from the session state and hands them to the display."""

    def __init__(
        self,
        state: PagerState,
        navigator: Navigator,
        display: Display,
        bindings: BindingReader,
    ) -> None:
        self.state = state
        self.navigator = navigator
        self.display = display
        self.bindings = bindings

    def render(self) -> None:
        state = self.state
        if state.needs_full_repaint:
            self.display.clear()
            state.needs_full_repaint = False
        self.display.resize(state.geometry.rows, state.geometry.columns)
        pending = self.bindings.current_buffer
        input_ready = bool(pending) and self.bindings.keys.peek(PENDING_KEY_PEEK_SECONDS)
        frame = compose_frame(state, self.navigator, pending, input_ready)
        self.display.update(frame.rows, frame.cursor)

    def handle_resize(self, geometry: Geometry) -> None:
        """Swap in the new geometry and repaint fully; the input buffer is kept."""
        logger.debug("resized to %dx%d", geometry.columns, geometry.rows)
        self.state.resize(geometry)
        self.render()


def run_main_loop(
    interpreter: CommandInterpreter,
    screen: PagerScreen,
    token: CancellationToken,
) -> None:
    """Run until the exit operation, a quit-at-end policy, or cancellation."""
    try:
        screen.render()
        while True:
            token.raise_if_cancelled()
            if not interpreter.step():
                break
            screen.render()
    except PagerCancelled:
        logger.debug("main loop cancelled")
