"""Key input: operation symbols, key tables, binding resolution, line editing."""

from __future__ import annotations

from .keymap import BindingReader, KeyBinding, KeyMap, printable
from .line_editor import LineEditor
from .operations import (
    BUFFERED_CHARS,
    OPTION_NAMES,
    Operation,
    command_keymap,
    file_keymap,
    pattern_keymap,
)
from .reader import RESIZE, TerminalInput

__all__ = [
    "BUFFERED_CHARS",
    "BindingReader",
    "KeyBinding",
    "KeyMap",
    "LineEditor",
    "OPTION_NAMES",
    "Operation",
    "RESIZE",
    "TerminalInput",
    "command_keymap",
    "file_keymap",
    "pattern_keymap",
    "printable",
]
