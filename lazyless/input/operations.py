"""Operation symbols and the default key tables that produce them."""

from __future__ import annotations

import enum

from .keymap import KeyBinding, KeyMap


class Operation(enum.Enum):
    # General
    HELP = enum.auto()
    EXIT = enum.auto()

    # Moving
    FORWARD_ONE_LINE = enum.auto()
    BACKWARD_ONE_LINE = enum.auto()
    FORWARD_ONE_WINDOW_OR_LINES = enum.auto()
    BACKWARD_ONE_WINDOW_OR_LINES = enum.auto()
    FORWARD_ONE_WINDOW_AND_SET = enum.auto()
    BACKWARD_ONE_WINDOW_AND_SET = enum.auto()
    FORWARD_ONE_WINDOW_NO_STOP = enum.auto()
    FORWARD_HALF_WINDOW_AND_SET = enum.auto()
    BACKWARD_HALF_WINDOW_AND_SET = enum.auto()
    LEFT_ONE_HALF_SCREEN = enum.auto()
    RIGHT_ONE_HALF_SCREEN = enum.auto()
    REPAINT = enum.auto()
    REPAINT_AND_DISCARD = enum.auto()

    # Searching
    REPEAT_SEARCH_FORWARD = enum.auto()
    REPEAT_SEARCH_BACKWARD = enum.auto()
    REPEAT_SEARCH_FORWARD_SPAN_FILES = enum.auto()
    REPEAT_SEARCH_BACKWARD_SPAN_FILES = enum.auto()
    UNDO_SEARCH = enum.auto()

    # Jumping
    GO_TO_FIRST_LINE_OR_N = enum.auto()
    GO_TO_LAST_LINE_OR_N = enum.auto()

    # Options
    OPT_PRINT_LINES = enum.auto()
    OPT_CHOP_LONG_LINES = enum.auto()
    OPT_QUIT_AT_FIRST_EOF = enum.auto()
    OPT_QUIT_AT_SECOND_EOF = enum.auto()
    OPT_QUIET = enum.auto()
    OPT_VERY_QUIET = enum.auto()
    OPT_IGNORE_CASE_COND = enum.auto()
    OPT_IGNORE_CASE_ALWAYS = enum.auto()

    # Files
    ADD_FILE = enum.auto()
    NEXT_FILE = enum.auto()
    PREV_FILE = enum.auto()
    GOTO_FILE = enum.auto()
    INFO_FILE = enum.auto()
    DELETE_FILE = enum.auto()

    # Buffered command character: - / ? & and digits
    CHAR = enum.auto()

    # Line editing
    INSERT = enum.auto()
    RIGHT = enum.auto()
    LEFT = enum.auto()
    NEXT_WORD = enum.auto()
    PREV_WORD = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    BACKSPACE = enum.auto()
    DELETE = enum.auto()
    DELETE_WORD = enum.auto()
    DELETE_LINE = enum.auto()
    ACCEPT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()


def ctrl(ch: str) -> str:
    return chr(ord(ch.upper()) & 0x1F)


def alt(ch: str) -> str:
    return "\x1b" + ch


DEL = "\x7f"
KEY_UP = ("\x1b[A", "\x1bOA")
KEY_DOWN = ("\x1b[B", "\x1bOB")
KEY_RIGHT = ("\x1b[C", "\x1bOC")
KEY_LEFT = ("\x1b[D", "\x1bOD")
KEY_HOME = ("\x1b[H", "\x1bOH", "\x1b[1~", "\x1b[7~")
KEY_END = ("\x1b[F", "\x1bOF", "\x1b[4~", "\x1b[8~")

BUFFERED_CHARS = "-/0123456789?&"

OPTION_NAMES: dict[str, Operation] = {
    "-e": Operation.OPT_QUIT_AT_SECOND_EOF,
    "--quit-at-eof": Operation.OPT_QUIT_AT_SECOND_EOF,
    "-E": Operation.OPT_QUIT_AT_FIRST_EOF,
    "--QUIT-AT-EOF": Operation.OPT_QUIT_AT_FIRST_EOF,
    "-N": Operation.OPT_PRINT_LINES,
    "--LINE-NUMBERS": Operation.OPT_PRINT_LINES,
    "-q": Operation.OPT_QUIET,
    "--quiet": Operation.OPT_QUIET,
    "--silent": Operation.OPT_QUIET,
    "-Q": Operation.OPT_VERY_QUIET,
    "--QUIET": Operation.OPT_VERY_QUIET,
    "--SILENT": Operation.OPT_VERY_QUIET,
    "-S": Operation.OPT_CHOP_LONG_LINES,
    "--chop-long-lines": Operation.OPT_CHOP_LONG_LINES,
    "-i": Operation.OPT_IGNORE_CASE_COND,
    "--ignore-case": Operation.OPT_IGNORE_CASE_COND,
    "-I": Operation.OPT_IGNORE_CASE_ALWAYS,
    "--IGNORE-CASE": Operation.OPT_IGNORE_CASE_ALWAYS,
}


def command_keymap() -> KeyMap:
    return KeyMap().register_bindings(
        KeyBinding(("h", "H"), Operation.HELP),
        KeyBinding(("q", ":q", "Q", ":Q", "ZZ"), Operation.EXIT),
        KeyBinding(("e", ctrl("E"), "j", ctrl("N"), "\r", *KEY_DOWN), Operation.FORWARD_ONE_LINE),
        KeyBinding(("y", ctrl("Y"), "k", ctrl("K"), ctrl("P"), *KEY_UP), Operation.BACKWARD_ONE_LINE),
        KeyBinding(("f", ctrl("F"), ctrl("V"), " "), Operation.FORWARD_ONE_WINDOW_OR_LINES),
        KeyBinding(("b", ctrl("B"), alt("v")), Operation.BACKWARD_ONE_WINDOW_OR_LINES),
        KeyBinding(("z",), Operation.FORWARD_ONE_WINDOW_AND_SET),
        KeyBinding(("w",), Operation.BACKWARD_ONE_WINDOW_AND_SET),
        KeyBinding((alt(" "),), Operation.FORWARD_ONE_WINDOW_NO_STOP),
        KeyBinding(("d", ctrl("D")), Operation.FORWARD_HALF_WINDOW_AND_SET),
        KeyBinding(("u", ctrl("U")), Operation.BACKWARD_HALF_WINDOW_AND_SET),
        KeyBinding((alt(")"), *KEY_RIGHT), Operation.RIGHT_ONE_HALF_SCREEN),
        KeyBinding((alt("("), *KEY_LEFT), Operation.LEFT_ONE_HALF_SCREEN),
        KeyBinding(("r", ctrl("R"), ctrl("L")), Operation.REPAINT),
        KeyBinding(("R",), Operation.REPAINT_AND_DISCARD),
        KeyBinding(("n",), Operation.REPEAT_SEARCH_FORWARD),
        KeyBinding(("N",), Operation.REPEAT_SEARCH_BACKWARD),
        KeyBinding((alt("n"),), Operation.REPEAT_SEARCH_FORWARD_SPAN_FILES),
        KeyBinding((alt("N"),), Operation.REPEAT_SEARCH_BACKWARD_SPAN_FILES),
        KeyBinding((alt("u"),), Operation.UNDO_SEARCH),
        KeyBinding(("g", "<", alt("<")), Operation.GO_TO_FIRST_LINE_OR_N),
        KeyBinding(("G", ">", alt(">")), Operation.GO_TO_LAST_LINE_OR_N),
        KeyBinding(KEY_HOME, Operation.HOME),
        KeyBinding(KEY_END, Operation.END),
        KeyBinding((":e", ctrl("X") + ctrl("V")), Operation.ADD_FILE),
        KeyBinding((":n",), Operation.NEXT_FILE),
        KeyBinding((":p",), Operation.PREV_FILE),
        KeyBinding((":x",), Operation.GOTO_FILE),
        KeyBinding(("=", ":f", ctrl("G")), Operation.INFO_FILE),
        KeyBinding((":d",), Operation.DELETE_FILE),
        KeyBinding((DEL, "\x08"), Operation.BACKSPACE),
        KeyBinding(tuple(BUFFERED_CHARS), Operation.CHAR),
    )


def _edit_bindings() -> tuple[KeyBinding, ...]:
    return (
        KeyBinding((*KEY_RIGHT, alt("l")), Operation.RIGHT),
        KeyBinding((*KEY_LEFT, alt("h")), Operation.LEFT),
        KeyBinding((*KEY_HOME, alt("0")), Operation.HOME),
        KeyBinding((*KEY_END, alt("$")), Operation.END),
        KeyBinding((DEL, "\x08"), Operation.BACKSPACE),
        KeyBinding((alt("x"),), Operation.DELETE),
        KeyBinding((alt("X"),), Operation.DELETE_WORD),
        KeyBinding((ctrl("U"),), Operation.DELETE_LINE),
        KeyBinding(("\r",), Operation.ACCEPT),
    )


def pattern_keymap() -> KeyMap:
    """Keys while typing a search or filter pattern."""
    return KeyMap(unicode=Operation.INSERT).register_bindings(
        *_edit_bindings(),
        KeyBinding((alt("w"),), Operation.NEXT_WORD),
        KeyBinding((alt("b"),), Operation.PREV_WORD),
        KeyBinding((*KEY_UP, alt("k")), Operation.UP),
        KeyBinding((*KEY_DOWN, alt("j")), Operation.DOWN),
    )


def file_keymap() -> KeyMap:
    """Keys while typing a file name for the add-file prompt."""
    return KeyMap(unicode=Operation.INSERT).register_bindings(*_edit_bindings())
