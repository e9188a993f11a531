"""XDG config loading."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from branchpick.logging import LOG_LEVELS, normalize_level

DEFAULT_CONFIG_PATH = Path("~/.config/branchpick/config.toml").expanduser()
DEFAULT_BRANCH_LIMIT = 20
MAX_BRANCH_LIMIT = 200
DEFAULT_GIT_EXECUTABLE = "git"
DEFAULT_HIGHLIGHT_SYMBOL = "* "
DEFAULT_LOG_LEVEL = "WARN"
GIT_EXECUTABLE_ENV = "BRANCHPICK_GIT"


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    branch_limit: int = Field(default=DEFAULT_BRANCH_LIMIT, ge=1, le=MAX_BRANCH_LIMIT)
    git_executable: str = DEFAULT_GIT_EXECUTABLE
    highlight_symbol: str = DEFAULT_HIGHLIGHT_SYMBOL
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("git_executable")
    @classmethod
    def _validate_git_executable(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("git executable cannot be empty")
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = normalize_level(value)
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        return normalized


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _sanitize(raw: dict[str, object]) -> AppConfig:
    cfg = AppConfig()

    branch_limit = raw.get("branch_limit", cfg.branch_limit)
    if (
        isinstance(branch_limit, int)
        and not isinstance(branch_limit, bool)
        and 1 <= branch_limit <= MAX_BRANCH_LIMIT
    ):
        cfg.branch_limit = branch_limit

    git_executable = raw.get("git_executable", cfg.git_executable)
    if isinstance(git_executable, str) and git_executable.strip():
        cfg.git_executable = git_executable

    highlight_symbol = raw.get("highlight_symbol", cfg.highlight_symbol)
    if isinstance(highlight_symbol, str):
        cfg.highlight_symbol = highlight_symbol

    log_level = raw.get("log_level", cfg.log_level)
    if isinstance(log_level, str) and normalize_level(log_level) in LOG_LEVELS:
        cfg.log_level = log_level

    return cfg


def _apply_env(cfg: AppConfig) -> AppConfig:
    env_git = os.getenv(GIT_EXECUTABLE_ENV, "").strip()
    if env_git:
        cfg.git_executable = env_git
    return cfg


def load_config(path: str | Path | None = None) -> AppConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        return _apply_env(AppConfig())
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return _apply_env(AppConfig())
    if not isinstance(raw, dict):
        return _apply_env(AppConfig())
    return _apply_env(_sanitize(raw))
