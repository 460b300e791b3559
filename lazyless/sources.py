"""Input origins for the pager.

Every source is an opaque provider of a line-readable byte stream plus an
optional known line count. Opening may fail with ``SourceNotFound``.
"""

from __future__ import annotations

import fnmatch
import io
import logging
import os
import sys
import urllib.error
import urllib.request
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Protocol

from .highlight import colorize_source, read_text

logger = logging.getLogger(__name__)

GLOB_CHARS = ("*", "?")


class SourceNotFound(Exception):
    def __init__(self, name: str, reason: str = "") -> None:
        super().__init__(f"{name}: {reason}" if reason else name)
        self.name = name
        self.reason = reason


class LineStream(Protocol):
    def readline(self) -> bytes: ...

    def close(self) -> None: ...


class Source:
    """Base class for named byte-stream origins."""

    name: str = ""

    def open(self) -> LineStream:
        raise NotImplementedError

    def total_lines(self) -> int | None:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def _count_lines(stream: BinaryIO) -> int:
    return sum(1 for _ in stream)


class FileSource(Source):
    def __init__(self, path: Path, name: str | None = None, syntax_style: str | None = None) -> None:
        self.path = path
        self.name = name if name is not None else str(path)
        self.syntax_style = syntax_style

    def open(self) -> LineStream:
        if self.path.is_dir():
            raise SourceNotFound(self.name, "is a directory")
        try:
            if self.syntax_style is not None:
                colored = colorize_source(read_text(self.path), self.path, self.syntax_style)
                return io.BytesIO(colored.encode("utf-8"))
            return self.path.open("rb")
        except OSError as exc:
            raise SourceNotFound(self.name, exc.strerror or str(exc)) from exc

    def total_lines(self) -> int | None:
        try:
            with self.path.open("rb") as handle:
                return _count_lines(handle)
        except OSError:
            return None


class UrlSource(Source):
    """Remote origin read as an opaque stream; its length is never known."""

    def __init__(self, url: str, name: str | None = None) -> None:
        self.url = url
        self.name = name if name is not None else url

    def open(self) -> LineStream:
        try:
            return urllib.request.urlopen(self.url)
        except (urllib.error.URLError, ValueError, OSError) as exc:
            raise SourceNotFound(self.name, str(exc)) from exc


class _SpoolingReader:
    def __init__(self, stream: BinaryIO, spool: list[bytes]) -> None:
        self._stream = stream
        self._spool = spool
        self._pos = 0

    def readline(self) -> bytes:
        if self._pos < len(self._spool):
            line = self._spool[self._pos]
        else:
            line = self._stream.readline()
            if not line:
                return b""
            self._spool.append(line)
        self._pos += 1
        return line

    def close(self) -> None:
        # The underlying pipe stays open so the source can be re-read.
        pass


class StdinSource(Source):
    """Piped standard input; lines already read are replayed on reopen."""

    def __init__(self, stream: BinaryIO | None = None, name: str = "(standard input)") -> None:
        self.stream = stream if stream is not None else sys.stdin.buffer
        self.name = name
        self._spool: list[bytes] = []

    def open(self) -> LineStream:
        return _SpoolingReader(self.stream, self._spool)


class HelpSource(Source):
    def __init__(self, text: str, name: str) -> None:
        self.text = text
        self.name = name

    def open(self) -> LineStream:
        return io.BytesIO(self.text.encode("utf-8"))

    def total_lines(self) -> int | None:
        return _count_lines(io.BytesIO(self.text.encode("utf-8")))


def is_url(spec: str) -> bool:
    return "://" in spec


def has_glob(spec: str) -> bool:
    return any(ch in spec for ch in GLOB_CHARS)


def _match_parts(parts: tuple[str, ...], pattern: tuple[str, ...]) -> bool:
    if not pattern:
        return not parts
    if pattern[0] == "**":
        return any(_match_parts(parts[skip:], pattern[1:]) for skip in range(len(parts) + 1))
    if not parts:
        return False
    return fnmatch.fnmatchcase(parts[0], pattern[0]) and _match_parts(parts[1:], pattern[1:])


def glob_matches(relative: str, spec: str) -> bool:
    """Match a relative POSIX path against a glob; ``*`` stays within one segment."""
    return _match_parts(PurePosixPath(relative).parts, PurePosixPath(spec).parts)


def expand_source_spec(spec: str, current_dir: Path, syntax_style: str | None = None) -> list[Source]:
    """Turn a user-entered file spec into zero or more sources.

    Specs containing ``*`` or ``?`` are matched against every file below
    ``current_dir`` in sorted directory-walk order; anything else yields one
    source resolved relative to ``current_dir`` (or a URL source).
    """
    if is_url(spec):
        return [UrlSource(spec)]
    if not has_glob(spec):
        return [FileSource(current_dir / spec, name=spec, syntax_style=syntax_style)]

    absolute = Path(spec).is_absolute()
    matches: list[Source] = []
    for dirpath, dirnames, filenames in os.walk(current_dir):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            relative = path.relative_to(current_dir).as_posix()
            candidate = path.as_posix() if absolute else relative
            if glob_matches(candidate, spec):
                matches.append(FileSource(path, name=relative, syntax_style=syntax_style))
    logger.debug("glob %r expanded to %d sources", spec, len(matches))
    return matches
