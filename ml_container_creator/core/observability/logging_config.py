"""
Logging configuration — set up once by the ``mlcc`` entrypoint.

Modules log through ``logging.getLogger(__name__)``; nothing here is
imported by the engine itself.  Level precedence:

    --debug / --verbose / --quiet  >  MLCC_LOG_LEVEL  >  WARNING

MLCC_LOG_FILE adds a file handler (level MLCC_LOG_FILE_LEVEL, or the
console level).  Console output goes to stderr so prompts on stdout stay
clean.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "MLCC_LOG_LEVEL"
ENV_FILE = "MLCC_LOG_FILE"
ENV_FILE_LEVEL = "MLCC_LOG_FILE_LEVEL"

# ── Console formats, most detailed first ────────────────────────

_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Loggers kept at WARNING unless debugging
_THIRD_PARTY = ("jinja2", "yaml")


def resolve_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the stderr handler (and optional file handler) on the root logger.

    Args:
        level: Console level name.
        log_file: Optional log file path (falls back to MLCC_LOG_FILE).
        log_file_level: File level name (falls back to MLCC_LOG_FILE_LEVEL,
            then ``level``).
    """
    console_level = parse_level(level)
    log_file = log_file or os.environ.get(ENV_FILE)
    log_file_level = log_file_level or os.environ.get(ENV_FILE_LEVEL)

    fmt, datefmt = next(
        (f, d) for threshold, f, d in _CONSOLE_FORMATS if console_level <= threshold
    )
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    if console_level > logging.DEBUG:
        for name in _THIRD_PARTY:
            logging.getLogger(name).setLevel(logging.WARNING)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown or empty names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
