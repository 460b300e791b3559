"""Read-only JSON defaults and logging setup.

Defaults are read from ``config.json`` in the platform config directory.
All access is defensive: a missing or malformed file, or a value of the
wrong type, falls back to the built-in default. The file is never written.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .highlight import DEFAULT_STYLE
from .runtime.state import PagerOptions

APP_NAME = "lazyless"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_BOOL_KEYS = {
    "line_numbers": "print_line_numbers",
    "chop_long_lines": "chop_long_lines",
    "ignore_case": "ignore_case_cond",
    "ignore_case_always": "ignore_case_always",
    "quiet": "quiet",
    "very_quiet": "very_quiet",
}


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def parse_tabs(value: object) -> tuple[int, ...] | None:
    """Normalize a tab-stop setting: an int, a list of ints, or ``"4,8"``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        items: list[object] = [value]
    elif isinstance(value, str):
        try:
            items = [int(part) for part in value.split(",") if part.strip()]
        except ValueError:
            return None
    elif isinstance(value, list):
        items = value
    else:
        return None
    stops: list[int] = []
    for item in items:
        if isinstance(item, bool) or not isinstance(item, int) or item <= 0:
            return None
        stops.append(item)
    return tuple(stops) if stops else None


def load_default_options(config: dict[str, object] | None = None) -> PagerOptions:
    """Build ``PagerOptions`` from built-in defaults overlaid with the config file."""
    data = load_config() if config is None else config
    options = PagerOptions()
    for key, attr in _BOOL_KEYS.items():
        value = data.get(key)
        if isinstance(value, bool):
            setattr(options, attr, value)
    if options.very_quiet:
        options.quiet = False
    if options.ignore_case_always:
        options.ignore_case_cond = False

    tabs = parse_tabs(data.get("tabs"))
    if tabs is not None:
        options.tabs = tabs
    if data.get("syntax") is True:
        style = data.get("style")
        options.syntax_style = style.strip() if isinstance(style, str) and style.strip() else DEFAULT_STYLE
    return options


def load_log_file(config: dict[str, object] | None = None) -> Path | None:
    data = load_config() if config is None else config
    value = data.get("log_file")
    if not isinstance(value, str) or not value.strip():
        return None
    return Path(value.strip()).expanduser()


def configure_logging(log_file: Path | None, level: int = logging.DEBUG) -> None:
    """Send package log records to ``log_file``; without one they are dropped.

    The terminal belongs to the pager, so no stream handler is ever attached.
    """
    package_logger = logging.getLogger(APP_NAME)
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    if log_file is None:
        package_logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
