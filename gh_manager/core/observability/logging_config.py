"""
Logging configuration for the gh-manager CLI.

``setup_logging`` runs once from ``main.cli``; modules log through
``logging.getLogger(__name__)``.  Console level: ``--debug`` / ``-v`` /
``-q`` first, then ``GHM_LOG_LEVEL``, then WARNING.  ``GHM_LOG_FILE``
adds a file handler at ``GHM_LOG_FILE_LEVEL`` (default: console level).
"""

from __future__ import annotations

import logging
import sys

# Console: short lines, next to the [gh-manager] output
_FMT_CONSOLE = "%(levelname)s: %(message)s"

# --debug and the log file: timestamp and origin
_FMT_DETAIL = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Console level name from the CLI flags, else ``env_level``."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers.

    Args:
        level: Console level name.  Unknown names mean WARNING.
        log_file: Optional path of an extra log file.
        log_file_level: Level of the file handler (default: ``level``).
    """
    console_level = _parse_level(level)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(
        logging.Formatter(_FMT_DETAIL if console_level <= logging.DEBUG else _FMT_CONSOLE)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL))
        root.addHandler(fh)

    root.setLevel(root_level)


def _parse_level(level: str | None) -> int:
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
