"""Search package exports: pattern compilation, match scanning, history."""

from __future__ import annotations

from .history import MAX_PATTERN_HISTORY, PatternHistory
from .patterns import (
    CasePolicy,
    PatternError,
    PatternState,
    compile_pattern,
    find_next,
    find_previous,
    is_case_insensitive,
)

__all__ = [
    "CasePolicy",
    "MAX_PATTERN_HISTORY",
    "PatternError",
    "PatternHistory",
    "PatternState",
    "compile_pattern",
    "find_next",
    "find_previous",
    "is_case_insensitive",
]
