"""Command-line front door for lazyless.

Parses pager flags onto ``PagerOptions`` (overlaying the read-only config
defaults), builds the source list, and dispatches into the pager runtime.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .config import configure_logging, load_config, load_default_options, load_log_file, parse_tabs
from .highlight import DEFAULT_STYLE, normalize_style
from .runtime import run_pager
from .runtime.state import PagerOptions
from .sources import Source, SourceNotFound, StdinSource, expand_source_spec

TTY_PATH = "/dev/tty"


def _tab_stops(value: str) -> tuple[int, ...]:
    """argparse type for ``N`` or ``N,M,...`` tab stops."""
    stops = parse_tabs(value)
    if stops is None:
        raise argparse.ArgumentTypeError(f"invalid tab stops: {value!r}")
    return stops


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyless",
        description="Page through files, URLs, or standard input in the terminal.",
        allow_abbrev=False,
    )
    parser.add_argument("paths", nargs="*", help="Files, glob patterns, or URLs. Reads standard input when omitted.")
    parser.add_argument("-e", "--quit-at-eof", action="store_true", help="Quit the second time end of file is reached.")
    parser.add_argument("-E", "--QUIT-AT-EOF", dest="quit_at_first_eof", action="store_true", help="Quit the first time end of file is reached.")
    parser.add_argument("-N", "--LINE-NUMBERS", dest="line_numbers", action="store_true", help="Display line numbers.")
    quiet = parser.add_mutually_exclusive_group()
    quiet.add_argument("-q", "--quiet", "--silent", action="store_true", help="Ring the bell for errors but not at eof/bof.")
    quiet.add_argument("-Q", "--QUIET", "--SILENT", dest="very_quiet", action="store_true", help="Never ring the bell.")
    parser.add_argument("-S", "--chop-long-lines", action="store_true", help="Chop long lines instead of folding them.")
    case = parser.add_mutually_exclusive_group()
    case.add_argument("-i", "--ignore-case", action="store_true", help="Ignore case in searches without uppercase letters.")
    case.add_argument("-I", "--IGNORE-CASE", dest="ignore_case_always", action="store_true", help="Ignore case in all searches.")
    parser.add_argument("-F", "--quit-if-one-screen", action="store_true", help="Print and exit if the content fits on one screen.")
    parser.add_argument("-X", "--no-init", action="store_true", help="Do not switch to the alternate screen.")
    parser.add_argument("--no-keypad", action="store_true", help="Do not send keypad init/deinit sequences.")
    parser.add_argument("--tabs", type=_tab_stops, default=None, metavar="N[,M...]", help="Tab stops (default: 4).")
    parser.add_argument("--syntax", action="store_true", help="Colour file sources with Pygments.")
    parser.add_argument("--style", default=None, help=f"Pygments style name for --syntax (default: {DEFAULT_STYLE}).")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    return parser


def options_from_args(args: argparse.Namespace, defaults: PagerOptions) -> PagerOptions:
    """Overlay explicitly given flags onto ``defaults``; flags never switch anything off."""
    options = defaults
    if args.quit_at_eof:
        options.quit_at_second_eof = True
    if args.quit_at_first_eof:
        options.quit_at_first_eof = True
    if args.line_numbers:
        options.print_line_numbers = True
    if args.quiet:
        options.quiet, options.very_quiet = True, False
    if args.very_quiet:
        options.quiet, options.very_quiet = False, True
    if args.chop_long_lines:
        options.chop_long_lines = True
    if args.ignore_case:
        options.ignore_case_cond, options.ignore_case_always = True, False
    if args.ignore_case_always:
        options.ignore_case_cond, options.ignore_case_always = False, True
    options.quit_if_one_screen = args.quit_if_one_screen
    options.no_init = args.no_init
    options.no_keypad = args.no_keypad
    if args.tabs is not None:
        options.tabs = args.tabs
    if args.syntax or args.style is not None:
        options.syntax_style = normalize_style(args.style or options.syntax_style or DEFAULT_STYLE)
    return options


def build_sources(paths: list[str], current_dir: Path, syntax_style: str | None) -> list[Source]:
    sources: list[Source] = []
    for spec in paths:
        sources.extend(expand_source_spec(spec, current_dir, syntax_style))
    return sources


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and page the requested sources.

    With no paths and a piped standard input, the pipe is paged and keys are
    read from the controlling terminal instead.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config()
    configure_logging(args.log_file or load_log_file(config))
    options = options_from_args(args, load_default_options(config))
    current_dir = Path.cwd()

    tty_fd: int | None = None
    if args.paths:
        sources = build_sources(args.paths, current_dir, options.syntax_style)
        if not sources:
            raise SystemExit(f"{' '.join(args.paths)}: no matching files")
        input_fd = sys.stdin.fileno()
    elif sys.stdin.isatty():
        parser.error("missing filename")
    else:
        sources = [StdinSource(sys.stdin.buffer)]
        try:
            tty_fd = os.open(TTY_PATH, os.O_RDWR)
        except OSError as exc:
            raise SystemExit(f"{TTY_PATH}: {exc.strerror}") from exc
        input_fd = tty_fd

    try:
        run_pager(
            sources,
            options,
            input_fd=input_fd,
            output_fd=sys.stdout.fileno(),
            current_dir=current_dir,
        )
    except SourceNotFound as exc:
        raise SystemExit(f"{exc.name}: not found") from exc
    except KeyboardInterrupt:
        pass
    finally:
        if tty_fd is not None:
            os.close(tty_fd)
