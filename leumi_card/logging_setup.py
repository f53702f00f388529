"""Logging for the ``leumi_card`` package.

Modules log through ``get_logger("leumi_card.<module>")``. Until the CLI (or a
host application) calls :func:`configure_logging`, the package root logger
only carries a ``NullHandler`` and stays silent.

Logs always go to stderr: stdout is reserved for the JSON scrape result.
"""

from __future__ import annotations

import logging
import os
import sys

ROOT_LOGGER_NAME = "leumi_card"
LEVEL_ENV_VAR = "LEUMI_CARD_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_root = logging.getLogger(ROOT_LOGGER_NAME)
_root.addHandler(logging.NullHandler())


class _StderrHandler(logging.StreamHandler):
    """Marks the one handler :func:`configure_logging` owns."""


def resolve_level(level: str | None) -> int:
    """Level from ``level``, then ``LEUMI_CARD_LOG_LEVEL``, then ``INFO``.

    Accepts names (``"debug"``) or numbers (``"10"``). Unknown names raise
    ``ValueError`` so a typo in ``--log-level`` is not silently ignored.
    """

    raw = level if level is not None else os.getenv(LEVEL_ENV_VAR)
    if raw is None or not raw.strip():
        return logging.INFO
    name = raw.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelNamesMapping().get(name)
    if numeric is None:
        raise ValueError(f"unknown log level: {raw!r}")
    return numeric


def configure_logging(level: str | None = None) -> int:
    """Send package logs to the current ``sys.stderr`` at the resolved level.

    Safe to call repeatedly: the handler installed by a previous call is
    replaced, so each CLI invocation gets its own level and stream.
    Returns the level in effect.
    """

    resolved = resolve_level(level)
    for handler in list(_root.handlers):
        if isinstance(handler, _StderrHandler):
            _root.removeHandler(handler)

    handler = _StderrHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _root.addHandler(handler)
    _root.setLevel(resolved)
    # The root logger may have its own handlers (pytest, host apps).
    _root.propagate = False
    return resolved


def get_logger(name: str) -> logging.Logger:
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        raise ValueError(f"logger {name!r} is outside the {ROOT_LOGGER_NAME!r} package")
    return logging.getLogger(name)


__all__ = [
    "ROOT_LOGGER_NAME",
    "LEVEL_ENV_VAR",
    "resolve_level",
    "configure_logging",
    "get_logger",
]
