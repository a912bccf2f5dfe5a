"""Logger lookup with a console fallback for processes that never configured logging."""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import Any, Callable, Optional

from rich.logging import RichHandler

LOGGER_NAME = "datalab_settings"

LoggerProvider = Callable[[], Optional[logging.Logger]]

_logger: Optional[logging.Logger] = None


def setup_logging(verbose: bool = False) -> logging.Logger:
    global _logger
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, markup=False)],
    )
    _logger = logging.getLogger(LOGGER_NAME)
    _logger.setLevel(level)
    return _logger


def get_logger() -> Optional[logging.Logger]:
    """Return the configured logger, or None when ``setup_logging`` has not run."""

    return _logger


def reset_logger() -> None:
    global _logger
    _logger = None


_PLACEHOLDER = re.compile(r"%[sdifjoO%]")


def format_message(*args: Any) -> str:
    """Printf-style formatting.

    Placeholders are filled left to right; a ``%`` that starts no placeholder, or a
    placeholder with no argument left, stays as written. Leftover arguments are
    appended separated by spaces.
    """

    if not args:
        return ""
    head, rest = args[0], list(args[1:])
    if not isinstance(head, str):
        return " ".join(str(arg) for arg in args)
    if not rest:
        return head

    def _substitute(match: re.Match[str]) -> str:
        token = match.group(0)
        if token == "%%":
            return "%"
        if not rest:
            return token
        value = rest.pop(0)
        if token in ("%d", "%i"):
            try:
                return str(int(value))
            except (TypeError, ValueError):
                return "NaN"
        if token == "%f":
            try:
                return str(float(value))
            except (TypeError, ValueError):
                return "NaN"
        if token == "%j":
            try:
                return json.dumps(value)
            except (TypeError, ValueError):
                return "[Circular]"
        return str(value)

    message = _PLACEHOLDER.sub(_substitute, head)
    return " ".join([message, *(str(arg) for arg in rest)])


class SettingsLog:
    def __init__(self, provider: LoggerProvider = get_logger) -> None:
        self._provider = provider

    def debug(self, *args: Any) -> None:
        logger = self._provider()
        msg = format_message(*args)
        if logger is not None:
            logger.debug(msg)
        else:
            print(msg, file=sys.stdout)

    def error(self, *args: Any) -> None:
        logger = self._provider()
        msg = format_message(*args)
        if logger is not None:
            logger.error(msg)
        else:
            print(msg, file=sys.stderr)
