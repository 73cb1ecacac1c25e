"""Centralized logging configuration for the ``account_ledger`` package.

- ``configure_logging(...)``: attach a single handler to the package root
  logger. Called once by the entry point at startup.
- ``get_logger(name)``: acquire a logger, making sure the package root logger
  has at least a ``NullHandler`` when logging was never configured.

A full-screen terminal app must not write log lines to stderr, so the default
handler is Textual's ``TextualHandler`` (visible in ``textual console``). A log
file can be requested instead.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from textual.logging import TextualHandler

_PKG_LOGGER_NAME = "account_ledger"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_CONFIGURED = False


def _level_from_name(name: str) -> int | None:
    name = name.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = getattr(logging, name, None)
    return numeric if isinstance(numeric, int) else None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        parsed = _level_from_name(level)
        if parsed is not None:
            return parsed
    # Env override when the explicit level is missing or unknown
    env_val = os.getenv("ACCOUNT_LEDGER_LOG_LEVEL")
    if env_val:
        parsed = _level_from_name(env_val)
        if parsed is not None:
            return parsed
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    log_file: Path | None = None,
    fmt: str | None = None,
) -> None:
    """Configure the package root logger exactly once.

    Args:
        level: Level as ``int`` or name (e.g. ``"DEBUG"``). When ``None`` the
            ``ACCOUNT_LEDGER_LOG_LEVEL`` environment variable is used, then
            ``INFO``.
        log_file: Write to this file instead of the Textual console.
        fmt: Optional format string for the handler.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    root = logging.getLogger(_PKG_LOGGER_NAME)
    root.setLevel(_parse_level(level))

    for handler in list(root.handlers):
        if isinstance(handler, logging.NullHandler):
            root.removeHandler(handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = TextualHandler()
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    root.addHandler(handler)
    root.propagate = False
    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger, ensuring the package root has a handler."""
    root = logging.getLogger(_PKG_LOGGER_NAME)
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)
