"""Search and filter pattern compilation and match scanning."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..runtime.navigation import Navigator

logger = logging.getLogger(__name__)


class CasePolicy(enum.Enum):
    """When to ignore case while matching."""

    NEVER = "never"
    UNLESS_MIXED_CASE = "unless-mixed-case"
    ALWAYS = "always"


class PatternError(Exception):
    """A search or filter pattern failed to compile."""

    def __init__(self, raw: str, diagnostic: str) -> None:
        super().__init__(diagnostic)
        self.raw = raw
        self.diagnostic = diagnostic


def is_case_insensitive(raw: str, policy: CasePolicy) -> bool:
    if policy is CasePolicy.ALWAYS:
        return True
    return policy is CasePolicy.UNLESS_MIXED_CASE and raw.lower() == raw


def compile_pattern(raw: str, policy: CasePolicy) -> re.Pattern[str]:
    """Compile ``raw`` wrapped in one capturing group.

    Raises ``PatternError`` with the first line of the regex diagnostic.
    """
    flags = re.IGNORECASE if is_case_insensitive(raw, policy) else 0
    try:
        return re.compile(f"({raw})", flags)
    except re.error as exc:
        lines = str(exc).splitlines()
        diagnostic = lines[0] if lines else "invalid pattern"
        logger.debug("pattern %r rejected: %s", raw, diagnostic)
        raise PatternError(raw, diagnostic) from exc


@dataclass
class PatternState:
    """Active search and filter patterns with a per-policy compile cache."""

    search: str | None = None
    filter: str | None = None
    _compiled: dict[tuple[str, CasePolicy], re.Pattern[str]] = field(default_factory=dict, repr=False)

    def _compile(self, raw: str | None, policy: CasePolicy) -> re.Pattern[str] | None:
        if raw is None:
            return None
        key = (raw, policy)
        compiled = self._compiled.get(key)
        if compiled is None:
            compiled = compile_pattern(raw, policy)
            self._compiled[key] = compiled
        return compiled

    def search_pattern(self, policy: CasePolicy) -> re.Pattern[str] | None:
        return self._compile(self.search, policy)

    def filter_pattern(self, policy: CasePolicy) -> re.Pattern[str] | None:
        return self._compile(self.filter, policy)

    def set_search(self, raw: str | None, policy: CasePolicy) -> None:
        """Compile first so a malformed pattern leaves only ``search`` cleared."""
        if raw is not None:
            try:
                self._compile(raw, policy)
            except PatternError:
                self.search = None
                raise
        self.search = raw

    def set_filter(self, raw: str | None, policy: CasePolicy) -> None:
        if raw is not None:
            try:
                self._compile(raw, policy)
            except PatternError:
                self.filter = None
                raise
        self.filter = raw

    def invalidate(self) -> None:
        self._compiled.clear()


def find_next(navigator: Navigator) -> bool:
    """Move the top line to the next displayable match after it."""
    state = navigator.state
    compiled = state.patterns.search_pattern(state.options.case_policy)
    view = state.view
    if compiled is not None:
        line_number = view.first_line_to_display + 1
        while True:
            line = view.cache.get_line(line_number)
            if line is None:
                break
            if navigator.is_displayable(line) and line.search(compiled):
                view.first_line_to_display = line_number
                view.offset_in_line = 0
                return True
            line_number += 1
    state.message = "Pattern not found"
    return False


def find_previous(navigator: Navigator) -> bool:
    """Move the top line to the closest displayable match before it."""
    state = navigator.state
    compiled = state.patterns.search_pattern(state.options.case_policy)
    view = state.view
    if compiled is not None:
        line_number = view.first_line_to_display - 1
        while line_number >= view.first_line_in_memory:
            line = view.cache.get_line(line_number)
            if line is None:
                break
            if navigator.is_displayable(line) and line.search(compiled):
                view.first_line_to_display = line_number
                view.offset_in_line = 0
                return True
            line_number -= 1
    state.message = "Pattern not found"
    return False
