"""
Logging configuration — diagnostic logging for the installer CLI.

Called once by ``main.py`` before any stage runs. Modules log through
``logging.getLogger(__name__)``. Operator-facing progress goes through
the console adapter, which mirrors every tagged message to the
``provisioner.console`` logger: those records are kept out of stderr
(the operator already saw them) but do reach the log file, so an
install log reads as one story.

Levels are resolved in precedence order:
    --debug  >  --verbose  >  --quiet  >  QID_LOG_LEVEL env var  >  WARNING

Optional file output via QID_LOG_FILE / QID_LOG_FILE_LEVEL env vars.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "QID_LOG_LEVEL"
LOG_FILE_ENV = "QID_LOG_FILE"
LOG_FILE_LEVEL_ENV = "QID_LOG_FILE_LEVEL"

CONSOLE_MIRROR = "provisioner.console"

# ── Format strings (threshold → format, datefmt) ────────────────

_STDERR_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_STDERR_DEFAULT = "%(levelname)s: %(message)s"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


class _SkipConsoleMirror(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return not record.name.startswith(CONSOLE_MIRROR)


def resolve_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the stderr level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LOG_LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the stderr handler and, optionally, a file handler.

    Args:
        level: Level name for stderr.
        log_file: Optional path to an install log.
        log_file_level: Level for the file; defaults to ``level``.
    """
    numeric_level = _parse_level(level)

    root = logging.getLogger()
    root.handlers.clear()

    root.addHandler(_stderr_handler(numeric_level))
    effective_level = numeric_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        root.addHandler(_file_handler(log_file, file_level))
        effective_level = min(effective_level, file_level)

    root.setLevel(effective_level)
    logging.raiseExceptions = False


def _stderr_handler(level: int) -> logging.Handler:
    fmt, datefmt = _STDERR_DEFAULT, None
    for threshold, candidate, candidate_datefmt in _STDERR_FORMATS:
        if level <= threshold:
            fmt, datefmt = candidate, candidate_datefmt
            break

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    handler.addFilter(_SkipConsoleMirror())
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name → numeric constant; anything unknown is WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
