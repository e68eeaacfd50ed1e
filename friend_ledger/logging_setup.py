"""Logging setup shared by every ``friend_ledger`` module.

Engine modules obtain loggers through :func:`get_logger` and never attach
handlers. Output is switched on once, by an entrypoint, through
:func:`configure_logging`; until then records go to a ``NullHandler`` on the
``"friend_ledger"`` logger and library use stays silent.

The level comes from the ``level`` argument, else ``FRIEND_LEDGER_LOG_LEVEL``,
else ``INFO``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "friend_ledger"
LEVEL_ENV_VAR = "FRIEND_LEDGER_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv(LEVEL_ENV_VAR) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    # Unknown names fall back to INFO rather than failing startup.
    resolved = logging.getLevelNamesMapping().get(name)
    return resolved if resolved is not None else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach a single ``StreamHandler`` to the package logger.

    Repeated calls are no-ops. ``stream`` defaults to the ``sys.stderr`` in
    effect at call time. The package logger stops propagating to the root
    logger so records are not emitted twice.
    """

    global _configured
    if _configured:
        return

    resolved = _resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    for h in [h for h in logger.handlers if isinstance(h, logging.NullHandler)]:
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolved)
    logger.propagate = False

    _configured = True


def reset_logging() -> None:
    """Undo :func:`configure_logging` (used by tests and embedding hosts)."""

    global _configured
    logger = logging.getLogger(PACKAGE_LOGGER)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.addHandler(logging.NullHandler())
    logger.propagate = True
    _configured = False


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``, making sure the package logger is quiet by default."""

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "reset_logging", "get_logger"]
