"""Deterministic error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    GIT_ERROR = 5


@dataclass
class BranchPickError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class ToolInvocationError(BranchPickError):
    """The git executable could not be started."""

    code: ExitCode = ExitCode.GIT_ERROR


@dataclass
class ToolExecutionError(BranchPickError):
    """A read-only git query exited with a non-zero status."""

    code: ExitCode = ExitCode.GIT_ERROR
    stderr: str = ""


@dataclass
class BranchNotFoundError(BranchPickError):
    code: ExitCode = ExitCode.GIT_ERROR
    branch: str = ""


@dataclass
class EmptyBranchListError(BranchPickError):
    code: ExitCode = ExitCode.GIT_ERROR


@dataclass
class DecodingError(BranchPickError):
    """Git produced output that is not valid UTF-8."""

    code: ExitCode = ExitCode.GIT_ERROR
    stream: str = "stdout"


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
