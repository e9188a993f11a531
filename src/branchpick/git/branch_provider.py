"""Local branch provider backed by the git executable."""

from __future__ import annotations

import logging as py_logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from branchpick.config import DEFAULT_BRANCH_LIMIT
from branchpick.errors import DecodingError, ToolExecutionError, ToolInvocationError

logger = py_logging.getLogger(__name__)


SubprocessRunner = Callable[..., subprocess.CompletedProcess]


def _decode(payload: bytes | None, *, stream: str, command: list[str]) -> str:
    try:
        return (payload or b"").decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.error("Undecodable git output stream=%s command=%s", stream, command)
        raise DecodingError(
            f"git produced {stream} that is not valid UTF-8",
            hint=f"Run `{' '.join(command)}` manually to inspect the output.",
            stream=stream,
        ) from exc


def parse_branch_lines(raw: str) -> list[str]:
    return [line.strip() for line in raw.split("\n") if line.strip()]


class GitGateway:
    """Runs the three git invocations the picker needs."""

    def __init__(
        self,
        *,
        runner: SubprocessRunner = subprocess.run,
        executable: str = "git",
        repo_path: str | Path | None = None,
    ) -> None:
        self._runner = runner
        self._executable = executable
        self._repo = Path(repo_path) if repo_path is not None else None

    def _command(self, args: list[str]) -> list[str]:
        if self._repo is None:
            return [self._executable, *args]
        return [self._executable, "-C", str(self._repo), *args]

    def _run(self, args: list[str]) -> tuple[list[str], subprocess.CompletedProcess]:
        cmd = self._command(args)
        logger.debug("Running git command=%s", cmd)
        try:
            result = self._runner(cmd, capture_output=True, check=False)
        except OSError as exc:
            logger.error("Failed to start git executable=%s error=%s", self._executable, exc)
            raise ToolInvocationError(
                f"Failed to call git executable: {self._executable}",
                hint="Install git or put it on PATH (or set BRANCHPICK_GIT).",
            ) from exc
        logger.debug("git exited returncode=%s command=%s", result.returncode, cmd)
        return cmd, result

    def list_recent_branches(self, limit: int = DEFAULT_BRANCH_LIMIT) -> list[str]:
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        cmd, result = self._run(
            [
                "for-each-ref",
                f"--count={limit}",
                "--sort=-committerdate",
                "--format=%(refname:short)",
                "refs/heads/",
            ]
        )
        stdout = _decode(result.stdout, stream="stdout", command=cmd)
        if result.returncode != 0:
            # Listing stays permissive: whatever stdout git produced is used.
            logger.warning(
                "Branch listing exited with returncode=%s; using partial output",
                result.returncode,
            )
        branches = parse_branch_lines(stdout)
        logger.debug("Discovered %s recent branches", len(branches))
        return branches

    def current_branch(self) -> str:
        cmd, result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        if result.returncode != 0:
            stderr = _decode(result.stderr, stream="stderr", command=cmd).strip()
            logger.error("Failed to read current branch stderr=%s", stderr)
            raise ToolExecutionError(
                "Couldn't read current branch",
                hint="Run the picker inside a git repository with at least one commit.",
                stderr=stderr,
            )
        return _decode(result.stdout, stream="stdout", command=cmd).strip()

    def checkout(self, branch: str) -> str:
        """Check out ``branch`` and return stdout followed by stderr.

        Exit status is not inspected: git reports both failures and benign
        notices such as ``Already on 'main'`` on stderr, and the user has to
        see either one.
        """
        cmd, result = self._run(["checkout", branch])
        combined = (result.stdout or b"") + (result.stderr or b"")
        logger.info("Checked out branch=%s returncode=%s", branch, result.returncode)
        return _decode(combined, stream="output", command=cmd)
