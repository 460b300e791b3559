"""Command interpreter: one input step per call, dispatched by mode.

Command mode resolves keys through the command key table and looks the
resulting operation up in a dispatch table. Option entry, pattern entry,
the add-file prompt, and the help view each have their own step function.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..input import (
    OPTION_NAMES,
    BindingReader,
    KeyMap,
    LineEditor,
    Operation,
    command_keymap,
    file_keymap,
    pattern_keymap,
    printable,
)
from ..search import PatternError, find_next, find_previous
from .navigation import MAX_MOVE, Navigator
from .state import (
    CommandMode,
    Geometry,
    HelpMode,
    LineEditMode,
    OptionEntryMode,
    PagerState,
    PatternEntryMode,
    PatternKind,
)

logger = logging.getLogger(__name__)

ADD_FILE_PROMPT = "Examine: "
BACKSPACE_CHARS = ("\x7f", "\x08")
# Operations that leave the pending status message in place.
MESSAGE_KEEPING_OPS = frozenset({Operation.REPAINT})


class CommandInterpreter:
    def __init__(
        self,
        state: PagerState,
        navigator: Navigator,
        bindings: BindingReader,
        *,
        render: Callable[[], None] | None = None,
        size_provider: Callable[[], Geometry] | None = None,
    ) -> None:
        self.state = state
        self.navigator = navigator
        self.bindings = bindings
        self.render = render
        self.size_provider = size_provider
        self.command_keys: KeyMap = command_keymap()
        self.pattern_keys: KeyMap = pattern_keymap()
        self.file_keys: KeyMap = file_keymap()
        self.exit_requested = False
        self._handlers: dict[Operation, Callable[[], None]] = {
            Operation.EXIT: self._exit,
            Operation.HELP: self._help,
            Operation.FORWARD_ONE_LINE: lambda: navigator.move_forward(self.strict_positive_number(1)),
            Operation.BACKWARD_ONE_LINE: lambda: navigator.move_backward(self.strict_positive_number(1)),
            Operation.FORWARD_ONE_WINDOW_OR_LINES: lambda: navigator.move_forward(
                self.strict_positive_number(state.window)
            ),
            Operation.BACKWARD_ONE_WINDOW_OR_LINES: lambda: navigator.move_backward(
                self.strict_positive_number(state.window)
            ),
            Operation.FORWARD_ONE_WINDOW_AND_SET: self._forward_window_and_set,
            Operation.BACKWARD_ONE_WINDOW_AND_SET: self._backward_window_and_set,
            Operation.FORWARD_ONE_WINDOW_NO_STOP: lambda: navigator.move_forward(state.window),
            Operation.FORWARD_HALF_WINDOW_AND_SET: self._forward_half_window_and_set,
            Operation.BACKWARD_HALF_WINDOW_AND_SET: self._backward_half_window_and_set,
            Operation.GO_TO_FIRST_LINE_OR_N: lambda: navigator.move_to(self.strict_positive_number(1) - 1),
            Operation.GO_TO_LAST_LINE_OR_N: self._go_to_last_line_or_n,
            Operation.HOME: lambda: navigator.move_to(0),
            Operation.END: lambda: navigator.move_forward(MAX_MOVE),
            Operation.LEFT_ONE_HALF_SCREEN: navigator.pan_left,
            Operation.RIGHT_ONE_HALF_SCREEN: navigator.pan_right,
            Operation.REPEAT_SEARCH_FORWARD: self._repeat_search_forward,
            Operation.REPEAT_SEARCH_FORWARD_SPAN_FILES: self._repeat_search_forward,
            Operation.REPEAT_SEARCH_BACKWARD: self._repeat_search_backward,
            Operation.REPEAT_SEARCH_BACKWARD_SPAN_FILES: self._repeat_search_backward,
            Operation.UNDO_SEARCH: self._undo_search,
            Operation.OPT_PRINT_LINES: self._toggle_line_numbers,
            Operation.OPT_QUIET: self._toggle_quiet,
            Operation.OPT_VERY_QUIET: self._toggle_very_quiet,
            Operation.OPT_CHOP_LONG_LINES: self._toggle_chop,
            Operation.OPT_IGNORE_CASE_COND: self._toggle_ignore_case_cond,
            Operation.OPT_IGNORE_CASE_ALWAYS: self._toggle_ignore_case_always,
            Operation.OPT_QUIT_AT_FIRST_EOF: self._toggle_quit_at_first_eof,
            Operation.OPT_QUIT_AT_SECOND_EOF: self._toggle_quit_at_second_eof,
            Operation.ADD_FILE: self._add_file,
            Operation.NEXT_FILE: lambda: self._set_message(
                state.registry.navigate_by(self.strict_positive_number(1))
            ),
            Operation.PREV_FILE: lambda: self._set_message(
                state.registry.navigate_by(-self.strict_positive_number(1))
            ),
            Operation.GOTO_FILE: lambda: self._set_message(
                state.registry.navigate_to(self.strict_positive_number(1))
            ),
            Operation.INFO_FILE: self._info_file,
            Operation.DELETE_FILE: self._delete_file,
            Operation.REPAINT: self._repaint,
            Operation.REPAINT_AND_DISCARD: self._repaint_and_discard,
        }

    # Helpers

    def strict_positive_number(self, default: int) -> int:
        """Consume the numeric prefix; non-positive or missing yields ``default``."""
        state = self.state
        raw = state.buffer
        state.clear_buffer()
        try:
            value = int(raw)
        except ValueError:
            return default
        return value if value > 0 else default

    def _set_message(self, message: str | None) -> None:
        self.state.message = message
        self.state.show_file_info = False

    def _clear_message(self) -> None:
        self._set_message(None)

    def _enter_command_mode(self) -> None:
        self.state.mode = CommandMode()
        self.state.clear_buffer()

    # Step

    def step(self) -> bool:
        """Read and interpret one unit of input; return ``False`` once the session should end."""
        mode = self.state.mode
        if isinstance(mode, OptionEntryMode):
            self._step_option_entry()
        elif isinstance(mode, PatternEntryMode):
            self._step_pattern_entry(mode)
        elif isinstance(mode, LineEditMode):
            self._step_add_file(mode)
        elif isinstance(mode, HelpMode):
            self._step_help(mode)
            return not self.exit_requested
        else:
            self._step_command()
        if not self.exit_requested:
            self._apply_quit_policy()
        return not self.exit_requested

    def _step_command(self) -> None:
        state = self.state
        op = self.bindings.read_binding(self.command_keys)
        if op is Operation.CHAR:
            ch = self.bindings.last_binding[0]
            if ch == "-":
                state.buffer = ch
                state.mode = OptionEntryMode()
            elif ch in "/?&":
                state.buffer = ch
                state.cursor = 1
                state.mode = PatternEntryMode(PatternKind(ch))
                self._clear_message()
            else:
                state.buffer += ch
            return
        if op is Operation.BACKSPACE:
            state.buffer = state.buffer[:-1]
            return
        if op is None:
            return
        self.dispatch(op)

    def dispatch(self, op: Operation) -> None:
        handler = self._handlers.get(op)
        if handler is None:
            logger.debug("operation %s has no command handler", op.name)
            return
        if op not in MESSAGE_KEEPING_OPS:
            self._clear_message()
        handler()
        if not isinstance(self.state.mode, LineEditMode):
            self.state.clear_buffer()

    def _apply_quit_policy(self) -> None:
        state = self.state
        options = state.options
        eofs = state.view.eof_count
        if not ((options.quit_at_first_eof and eofs > 0) or (options.quit_at_second_eof and eofs > 1)):
            return
        registry = state.registry
        if 0 < registry.index < len(registry.sources) - 1:
            self._set_message(registry.navigate_by(1))
        else:
            self.exit_requested = True

    # Option entry

    def _step_option_entry(self) -> None:
        state = self.state
        ch = self.bindings.read_char()
        self._clear_message()
        if ch is None:
            return
        if ch in BACKSPACE_CHARS:
            state.buffer = state.buffer[:-1]
            if not state.buffer:
                self._enter_command_mode()
            return
        if len(state.buffer) == 1:
            state.buffer += ch
            if ch != "-":
                self._commit_option()
            return
        if ch == "\r":
            self._commit_option()
            return
        state.buffer += ch
        matching = [name for name in OPTION_NAMES if name.startswith(state.buffer)]
        if not matching:
            self._unknown_option()
        elif len(matching) == 1:
            state.buffer = matching[0]

    def _unknown_option(self) -> None:
        message = f"There is no {printable(self.state.buffer)} option"
        self._enter_command_mode()
        self._set_message(message)

    def _commit_option(self) -> None:
        op = OPTION_NAMES.get(self.state.buffer)
        if op is None:
            self._unknown_option()
            return
        self._enter_command_mode()
        self.dispatch(op)

    # Pattern entry

    def _step_pattern_entry(self, mode: PatternEntryMode) -> None:
        state = self.state
        history = state.history
        op = self.bindings.read_binding(self.pattern_keys)
        if op is None:
            return
        if op is Operation.UP:
            browsed = history.older(state.buffer, mode.kind.value)
            if browsed is not None:
                state.buffer = browsed
                state.cursor = len(browsed)
            return
        if op is Operation.DOWN:
            browsed = history.newer(mode.kind.value)
            if browsed is not None:
                state.buffer = browsed
                state.cursor = len(browsed)
            return
        if op is Operation.ACCEPT:
            self._commit_pattern(mode.kind)
            return
        editor = LineEditor(1)
        state.buffer, state.cursor = editor.edit(op, state.buffer, state.cursor, self.bindings.last_binding)
        if state.cursor < editor.begin or not state.buffer:
            history.reset_browse()
            self._enter_command_mode()

    def _commit_pattern(self, kind: PatternKind) -> None:
        state = self.state
        raw = state.buffer[1:]
        policy = state.options.case_policy
        try:
            if kind is PatternKind.FILTER:
                state.patterns.set_filter(raw or None, policy)
            else:
                state.patterns.set_search(raw, policy)
                if kind is PatternKind.SEARCH_FORWARD:
                    find_next(self.navigator)
                    state.forward_search = True
                else:
                    self._seek_bottom_for_backward_search()
                    find_previous(self.navigator)
                    state.forward_search = False
        except PatternError as exc:
            state.history.reset_browse()
            self._enter_command_mode()
            self._set_message(f"Invalid pattern: {exc.diagnostic} (Press a key)")
            if self.render is not None:
                self.render()
            self.bindings.read_char()
            self._clear_message()
            return
        state.history.record(raw)
        state.history.reset_browse()
        self._enter_command_mode()

    def _seek_bottom_for_backward_search(self) -> None:
        state = self.state
        view = state.view
        rows = state.geometry.rows
        if len(view.cache) - view.first_line_to_display <= rows:
            view.first_line_to_display = len(view.cache)
            view.offset_in_line = 0
        else:
            self.navigator.move_forward(rows - 1)

    # Add-file prompt

    def _add_file(self) -> None:
        state = self.state
        state.buffer = ADD_FILE_PROMPT
        state.cursor = len(ADD_FILE_PROMPT)
        state.mode = LineEditMode(begin=len(ADD_FILE_PROMPT))

    def _step_add_file(self, mode: LineEditMode) -> None:
        state = self.state
        op = self.bindings.read_binding(self.file_keys)
        if op is None:
            return
        if op is Operation.ACCEPT:
            name = state.buffer[mode.begin :]
            self._enter_command_mode()
            if name:
                self._set_message(state.registry.add_and_open(name, state.options.syntax_style))
            return
        editor = LineEditor(mode.begin)
        state.buffer, state.cursor = editor.edit(op, state.buffer, state.cursor, self.bindings.last_binding)
        if state.cursor < mode.begin:
            self._enter_command_mode()

    # Help

    def _help(self) -> None:
        state = self.state
        saved = state.registry.enter_help()
        state.mode = HelpMode(saved)
        self._set_message(state.registry.label())

    def _step_help(self, mode: HelpMode) -> None:
        state = self.state
        op = self.bindings.read_binding(self.command_keys)
        if op is Operation.FORWARD_ONE_WINDOW_OR_LINES:
            self.navigator.move_forward(state.window)
        elif op is Operation.BACKWARD_ONE_WINDOW_OR_LINES:
            self.navigator.move_backward(state.window)
        elif op is Operation.EXIT:
            state.mode = CommandMode()
            self._set_message(state.registry.restore(mode.saved))

    # Operations

    def _exit(self) -> None:
        self.exit_requested = True

    def _forward_window_and_set(self) -> None:
        self.state.window = self.strict_positive_number(self.state.window)
        self.navigator.move_forward(self.state.window)

    def _backward_window_and_set(self) -> None:
        self.state.window = self.strict_positive_number(self.state.window)
        self.navigator.move_backward(self.state.window)

    def _forward_half_window_and_set(self) -> None:
        self.state.half_window = self.strict_positive_number(self.state.half_window)
        self.navigator.move_forward(self.state.half_window)

    def _backward_half_window_and_set(self) -> None:
        self.state.half_window = self.strict_positive_number(self.state.half_window)
        self.navigator.move_backward(self.state.half_window)

    def _go_to_last_line_or_n(self) -> None:
        line_number = self.strict_positive_number(0) - 1
        if line_number < 0:
            self.navigator.move_forward(MAX_MOVE)
        else:
            self.navigator.move_to(line_number)

    def _repeat_search_forward(self) -> None:
        if self.state.forward_search:
            find_next(self.navigator)
        else:
            find_previous(self.navigator)

    def _repeat_search_backward(self) -> None:
        if self.state.forward_search:
            find_previous(self.navigator)
        else:
            find_next(self.navigator)

    def _undo_search(self) -> None:
        self.state.patterns.search = None

    def _toggle_line_numbers(self) -> None:
        options = self.state.options
        options.print_line_numbers = not options.print_line_numbers
        self._set_message("Constantly display line numbers" if options.print_line_numbers else "Don't use line numbers")

    def _toggle_quiet(self) -> None:
        options = self.state.options
        options.quiet = not options.quiet
        options.very_quiet = False
        self._set_message(
            "Ring the bell for errors but not at eof/bof" if options.quiet else "Ring the bell for errors AND at eof/bof"
        )

    def _toggle_very_quiet(self) -> None:
        options = self.state.options
        options.very_quiet = not options.very_quiet
        options.quiet = False
        self._set_message("Never ring the bell" if options.very_quiet else "Ring the bell for errors AND at eof/bof")

    def _toggle_chop(self) -> None:
        options = self.state.options
        self.state.view.offset_in_line = 0
        options.chop_long_lines = not options.chop_long_lines
        self._set_message("Chop long lines" if options.chop_long_lines else "Fold long lines")

    def _toggle_ignore_case_cond(self) -> None:
        options = self.state.options
        options.ignore_case_cond = not options.ignore_case_cond
        options.ignore_case_always = False
        self._set_message("Ignore case in searches" if options.ignore_case_cond else "Case is significant in searches")

    def _toggle_ignore_case_always(self) -> None:
        options = self.state.options
        options.ignore_case_always = not options.ignore_case_always
        options.ignore_case_cond = False
        self._set_message(
            "Ignore case in searches and in patterns"
            if options.ignore_case_always
            else "Case is significant in searches"
        )

    def _toggle_quit_at_first_eof(self) -> None:
        options = self.state.options
        options.quit_at_first_eof = not options.quit_at_first_eof
        options.quit_at_second_eof = False
        self._set_message("Quit at end of file" if options.quit_at_first_eof else "Don't quit at end of file")

    def _toggle_quit_at_second_eof(self) -> None:
        options = self.state.options
        options.quit_at_second_eof = not options.quit_at_second_eof
        options.quit_at_first_eof = False
        self._set_message("Quit at end of file" if options.quit_at_second_eof else "Don't quit at end of file")

    def _info_file(self) -> None:
        self.state.show_file_info = True

    def _delete_file(self) -> None:
        label = self.state.registry.delete_active()
        if label is not None:
            self._set_message(label)

    def _repaint(self) -> None:
        state = self.state
        if self.size_provider is not None:
            state.resize(self.size_provider())
        else:
            state.needs_full_repaint = True

    def _repaint_and_discard(self) -> None:
        self._clear_message()
        self._repaint()
