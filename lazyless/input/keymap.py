"""Key-sequence tables and the reader that resolves input against them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from .reader import RESIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")

AMBIGUOUS_TIMEOUT_SECONDS = 1.0
ESCAPE = "\x1b"


@dataclass(frozen=True)
class KeyBinding(Generic[T]):
    """Mapping from one or more input sequences to a single operation."""

    combos: tuple[str, ...]
    operation: T


class KeyMap(Generic[T]):
    """Sequence-to-operation table with prefix lookups.

    ``unicode`` is the catch-all operation for any printable character that
    no explicit sequence claims.
    """

    def __init__(self, unicode: T | None = None) -> None:
        self.unicode = unicode
        self._bindings: dict[str, T] = {}
        self._prefixes: set[str] = set()

    def register_binding(self, binding: KeyBinding[T]) -> KeyMap[T]:
        for combo in binding.combos:
            self._bindings[combo] = binding.operation
            for end in range(1, len(combo)):
                self._prefixes.add(combo[:end])
        return self

    def register_bindings(self, *bindings: KeyBinding[T]) -> KeyMap[T]:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def get(self, sequence: str) -> T | None:
        return self._bindings.get(sequence)

    def is_prefix(self, sequence: str) -> bool:
        """Return whether some longer bound sequence starts with ``sequence``."""
        return sequence in self._prefixes


class KeySource(Protocol):
    def read_char(self, timeout: float | None = None) -> object: ...

    def peek(self, timeout: float = 0.0) -> bool: ...


class BindingReader:
    """Resolve raw characters from a key source into keymap operations.

    ``current_buffer`` holds a partially typed sequence while the reader
    waits for the rest of it; ``last_binding`` is the sequence behind the
    most recent result. Resize events are handed to ``on_resize`` without
    disturbing a partial sequence.
    """

    def __init__(
        self,
        keys: KeySource,
        *,
        on_resize: Callable[[], None] | None = None,
        on_pending: Callable[[], None] | None = None,
    ) -> None:
        self.keys = keys
        self.on_resize = on_resize
        self.on_pending = on_pending
        self.current_buffer = ""
        self.last_binding = ""

    def read_char(self, timeout: float | None = None) -> str | None:
        while True:
            event = self.keys.read_char(timeout)
            if event is RESIZE:
                if self.on_resize is not None:
                    self.on_resize()
                continue
            return event  # type: ignore[return-value]

    def _resolved(self, sequence: str, operation: T | None) -> T | None:
        self.current_buffer = ""
        self.last_binding = sequence
        return operation

    def read_binding(self, keymap: KeyMap[T]) -> T | None:
        """Read characters until they resolve to an operation.

        Returns ``None`` for a sequence nothing is bound to. When a bound
        sequence is also the prefix of a longer one, the reader waits up to
        ``AMBIGUOUS_TIMEOUT_SECONDS`` for more input before settling.
        """
        sequence = ""
        while True:
            exact = keymap.get(sequence) if sequence else None
            longer = keymap.is_prefix(sequence) if sequence else True
            if sequence and not longer:
                if exact is not None:
                    return self._resolved(sequence, exact)
                if keymap.unicode is not None and len(sequence) == 1 and sequence.isprintable():
                    return self._resolved(sequence, keymap.unicode)
                logger.debug("unbound key sequence %r", sequence)
                return self._resolved(sequence, None)

            self.current_buffer = sequence
            if sequence and exact is None and self.on_pending is not None and not self.keys.peek(0.0):
                self.on_pending()
            timeout = AMBIGUOUS_TIMEOUT_SECONDS if exact is not None else None
            ch = self.read_char(timeout)
            if ch is None:
                return self._resolved(sequence, exact)
            sequence += ch


def printable(sequence: str) -> str:
    """Render control characters in a key sequence readably (``ESC``, ``^X``)."""
    out: list[str] = []
    for ch in sequence:
        code = ord(ch)
        if ch == ESCAPE:
            out.append("ESC")
        elif code < 32:
            out.append("^" + chr(code + ord("@")))
        elif code < 128:
            out.append(ch)
        else:
            out.append(f"\\{code:03o}")
    return "".join(out)
