"""Application logging helpers."""

from __future__ import annotations

import logging as py_logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
DEFAULT_LEVEL = "WARN"
DEFAULT_LOG_PATH = Path("~/.config/branchpick/logs/branchpick.log")
_FALLBACK_LOG_PATH = Path(".branchpick/logs/branchpick.log")
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def normalize_level(level: str) -> str:
    normalized = level.strip().upper()
    if normalized == "WARNING":
        normalized = "WARN"
    return normalized


def default_log_path() -> Path:
    try:
        resolved = DEFAULT_LOG_PATH.expanduser()
    except RuntimeError:
        resolved = (Path.cwd() / _FALLBACK_LOG_PATH).resolve()
    else:
        if not resolved.is_absolute():
            resolved = resolved.resolve()
    return resolved


def configure_logging(
    level: str = DEFAULT_LEVEL,
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    """Configure the ``branchpick`` logger.

    The console handler follows ``level``; the optional file handler always
    records DEBUG so the picker stays quiet on screen while the log file keeps
    the git invocations.
    """
    resolved = LOG_LEVELS.get(normalize_level(level), py_logging.INFO)

    logger = py_logging.getLogger("branchpick")
    logger.setLevel(py_logging.DEBUG if log_file else resolved)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    formatter = py_logging.Formatter(_FORMAT)

    handler = py_logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if log_file:
        try:
            log_path = Path(log_file).expanduser()
        except RuntimeError:
            log_path = Path(log_file)
        if not log_path.is_absolute():
            log_path = log_path.resolve()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = py_logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            logger.setLevel(resolved)
        else:
            file_handler.setLevel(py_logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.propagate = False
    return logger


@contextmanager
def console_quiet(name: str = "branchpick") -> Iterator[None]:
    """Hold console handlers at WARN or above while a full-screen UI owns the terminal."""
    logger = py_logging.getLogger(name)
    saved: list[tuple[py_logging.Handler, int]] = []
    for handler in logger.handlers:
        if isinstance(handler, py_logging.FileHandler):
            continue
        if isinstance(handler, py_logging.StreamHandler) and handler.level < py_logging.WARNING:
            saved.append((handler, handler.level))
            handler.setLevel(py_logging.WARNING)
    try:
        yield
    finally:
        for handler, level in saved:
            handler.setLevel(level)
