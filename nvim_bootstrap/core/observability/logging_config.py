"""
Logging configuration — one call at CLI startup.

main.py calls ``setup_logging()`` before any stage runs; every module
logs through ``logging.getLogger(__name__)`` and inherits it.

Console level, highest precedence first:
    --verbose (DEBUG)  >  NVB_LOG_LEVEL  >  INFO

A second, independent file sink is enabled by NVB_LOG_FILE, with its
own level from NVB_LOG_FILE_LEVEL.

Console lines look like the shell installer this tool replaces::

    [INFO] Installing ripgrep...
    [WARN] Failed to install bat, skipping...
"""

from __future__ import annotations

import logging
import sys

import click

# ── Formats ─────────────────────────────────────────────────────

_CONSOLE_FMT = "%(message)s"
_CONSOLE_DEBUG_FMT = "%(asctime)s %(name)s:%(lineno)d  %(message)s"
_CONSOLE_DEBUG_DATEFMT = "%H:%M:%S"

_FILE_FMT = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d  %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Chatty at DEBUG, never useful to a user of this tool
_QUIET_LOGGERS = ("urllib3", "charset_normalizer")

_LEVEL_TAGS: dict[int, tuple[str, str]] = {
    logging.DEBUG: ("[DEBUG]", "bright_black"),
    logging.INFO: ("[INFO]", "green"),
    logging.WARNING: ("[WARN]", "yellow"),
    logging.ERROR: ("[ERROR]", "red"),
    logging.CRITICAL: ("[ERROR]", "red"),
}


class TaggedFormatter(logging.Formatter):
    """Prefix each record with its ``[LEVEL]`` tag, coloured when asked."""

    def __init__(self, fmt: str, datefmt: str | None = None, *, color: bool = True) -> None:
        super().__init__(fmt, datefmt=datefmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        tag, fg = _LEVEL_TAGS.get(record.levelno, ("[LOG]", "white"))
        if self.color:
            tag = click.style(tag, fg=fg)
        return f"{tag} {super().format(record)}"


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if level <= logging.DEBUG:
        formatter = TaggedFormatter(
            _CONSOLE_DEBUG_FMT, _CONSOLE_DEBUG_DATEFMT, color=sys.stderr.isatty(),
        )
    else:
        formatter = TaggedFormatter(_CONSOLE_FMT, color=sys.stderr.isatty())
    handler.setFormatter(formatter)
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FMT, datefmt=_FILE_DATEFMT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Install the console (and optional file) handlers on the root logger.

    Args:
        level: Console level name.  Unknown names fall back to INFO.
        log_file: Also write records to this file.
        log_file_level: Level for the file sink (default: ``level``).
        quiet_third_party: Hold library loggers at WARNING unless the
            console is at DEBUG.
    """
    console_level = _parse_level(level)
    handlers = [_console_handler(console_level)]
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))
        root_level = min(root_level, file_level)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    # a broken stderr must not crash the run
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Map a level name to its numeric value, defaulting to INFO."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO
