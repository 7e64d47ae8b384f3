"""
Logging for releasegen — configured once by the ``cli`` group callback.

The generators log counts at DEBUG, the loader and assembler log what
they read and wrote at INFO, and an image with no tags is a WARNING.
All of it goes to stderr, never stdout, because ``generate --stdout``
pipes the rendered YAML.

Console level, highest precedence first:
    --debug / --verbose / --quiet  >  $RELEASEGEN_LOG_LEVEL  >  WARNING

A full-detail log file can be added with $RELEASEGEN_LOG_FILE; its
level defaults to the console level or $RELEASEGEN_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

ENV_LOG_LEVEL = "RELEASEGEN_LOG_LEVEL"
ENV_LOG_FILE = "RELEASEGEN_LOG_FILE"
ENV_LOG_FILE_LEVEL = "RELEASEGEN_LOG_FILE_LEVEL"

_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

# (max level, format, datefmt): first row whose level is >= the console level wins
_CONSOLE_FORMATS = (
    (logging.DEBUG, _DETAILED, "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _console_formatter(level: int) -> logging.Formatter:
    for max_level, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= max_level:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter("%(message)s")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with releasegen's.

    Args:
        level: Console level name; unknown names fall back to WARNING.
        log_file: Optional log file path, always in the detailed format.
        log_file_level: Level for the log file (default: ``level``).
    """
    console_level = parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_DETAILED, datefmt=_FILE_DATEFMT))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    # A closed stream (e.g. after a CliRunner invoke) must not raise
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Level name → numeric level; WARNING for empty or unknown names."""
    numeric = getattr(logging, level.upper(), None) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
