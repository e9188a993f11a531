"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import logging as py_logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import AppConfig, load_config
from .errors import BranchPickError, ExitCode, ToolExecutionError, user_facing_error
from .logging import configure_logging, default_log_path, normalize_level
from .picker import run_picker

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _log_level_type(value: str) -> str:
    normalized = normalize_level(value)
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="branchpick",
        description="Pick a recent git branch with the arrow keys and check it out.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config.toml")
    parser.add_argument("--log-level", type=_log_level_type, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def resolve_config(namespace: argparse.Namespace) -> AppConfig:
    if namespace.config is not None:
        path = namespace.config.expanduser()
        if not path.is_file():
            raise BranchPickError(
                f"Config file not found: {path}",
                code=ExitCode.CONFIG_ERROR,
                hint="Pass an existing config.toml or drop --config.",
            )
        return load_config(path)
    return load_config()


def main(
    argv: Sequence[str] | None = None,
    *,
    picker: Callable[[AppConfig], object] | None = None,
) -> int:
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    try:
        namespace = parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()

    try:
        config = resolve_config(namespace)
        level = namespace.log_level or config.log_level
        logger = configure_logging(level=level, log_file=log_path)
        logger.debug("Starting picker flow")
        (picker or run_picker)(config)
        return int(ExitCode.SUCCESS)
    except BranchPickError as exc:
        logger.error(
            "Handled BranchPickError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        if isinstance(exc, ToolExecutionError) and exc.stderr:
            print(exc.stderr, file=sys.stderr)
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        hint = f"Inspect logs: {log_path}"
        print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
