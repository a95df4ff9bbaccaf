"""Logging for the ``personal_scripts`` console tools.

Everything logs below the ``"personal_scripts"`` logger. Library modules only
ask for a child logger through :func:`get_logger`; the console entry points
call :func:`configure_logging` once, which is the single place a handler that
actually writes anything gets attached. Until then the package logger carries
a ``NullHandler`` so importing the library stays silent.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "personal_scripts"
LEVEL_ENV_VAR = "PERSONAL_SCRIPTS_LOG_LEVEL"
DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv(LEVEL_ENV_VAR) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    # Unknown names fall back to INFO rather than failing the command.
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach the package's stream handler; later calls are no-ops.

    ``level`` defaults to ``$PERSONAL_SCRIPTS_LOG_LEVEL``, then ``INFO``.
    ``stream`` defaults to the ``sys.stderr`` current at call time, which is
    what test runners that swap the stream expect.
    """

    global _handler
    pkg = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        return pkg

    resolved = _resolve_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    handler.setLevel(resolved)

    for existing in [h for h in pkg.handlers if isinstance(h, logging.NullHandler)]:
        pkg.removeHandler(existing)
    pkg.addHandler(handler)
    pkg.setLevel(resolved)
    pkg.propagate = False

    _handler = handler
    return pkg


def reset_logging() -> None:
    """Undo :func:`configure_logging` so the next entry point configures afresh."""

    global _handler
    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
    pkg.setLevel(logging.NOTSET)
    pkg.propagate = True
    _handler = None


def get_logger(name: str) -> logging.Logger:
    pkg = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "reset_logging"]
