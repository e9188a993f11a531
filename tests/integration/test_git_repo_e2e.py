from __future__ import annotations

import curses
import io
import os
import shutil
import subprocess
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import pytest

from branchpick.config import AppConfig
from branchpick.errors import EmptyBranchListError
from branchpick.git.branch_provider import GitGateway
from branchpick.picker import run_picker

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")


def _git(repo: Path, *args: str, date: str | None = None) -> None:
    env = dict(os.environ)
    env.update(
        {
            "GIT_AUTHOR_NAME": "Test",
            "GIT_AUTHOR_EMAIL": "test@example.com",
            "GIT_COMMITTER_NAME": "Test",
            "GIT_COMMITTER_EMAIL": "test@example.com",
        }
    )
    if date is not None:
        env["GIT_AUTHOR_DATE"] = date
        env["GIT_COMMITTER_DATE"] = date
    subprocess.run(["git", "-C", str(repo), *args], check=True, capture_output=True, env=env)


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    path = tmp_path / "repo"
    path.mkdir()
    _git(path, "init", "-q", "-b", "main")
    return path


def _commit_on_branches(repo: Path, count: int) -> list[str]:
    names: list[str] = []
    for position in range(count):
        name = "main" if position == 0 else f"branch-{position:02d}"
        if position:
            _git(repo, "checkout", "-q", "-b", name)
        _git(
            repo,
            "commit",
            "-q",
            "--allow-empty",
            "-m",
            f"commit {position}",
            date=f"2024-01-01T00:{position:02d}:00+00:00",
        )
        names.append(name)
    return names


class _Keys:
    def __init__(self, keys: list[int]) -> None:
        self.keys = list(keys)

    def render(self, branches: Sequence[str], index: int | None) -> None:
        pass

    def read_key(self) -> int:
        return self.keys.pop(0)

    @contextmanager
    def open(self) -> Iterator[_Keys]:
        yield self


def test_listing_is_truncated_and_most_recent_first(repo: Path) -> None:
    names = _commit_on_branches(repo, 25)

    branches = GitGateway(repo_path=repo).list_recent_branches()

    assert len(branches) == 20
    assert branches == list(reversed(names))[:20]


def test_picker_checks_out_selected_branch(repo: Path) -> None:
    _commit_on_branches(repo, 3)
    gateway = GitGateway(repo_path=repo)
    assert gateway.current_branch() == "branch-02"
    out = io.StringIO()

    run_picker(
        AppConfig(),
        gateway=gateway,
        session_factory=_Keys([curses.KEY_DOWN, curses.KEY_DOWN, ord("\n")]).open,
        out=out,
    )

    assert gateway.current_branch() == "main"
    assert "Switched to branch 'main'" in out.getvalue()


def test_checkout_of_active_branch_reports_already_on(repo: Path) -> None:
    _commit_on_branches(repo, 1)

    output = GitGateway(repo_path=repo).checkout("main")

    assert output.rstrip() == "Already on 'main'"


def test_repository_without_commits_aborts(repo: Path) -> None:
    with pytest.raises(EmptyBranchListError):
        run_picker(
            AppConfig(),
            gateway=GitGateway(repo_path=repo),
            session_factory=_Keys([]).open,
            out=io.StringIO(),
        )


def test_cli_module_rejects_bad_log_level(tmp_path: Path) -> None:
    env = dict(os.environ)
    existing = env.get("PYTHONPATH", "")
    src_path = str(Path("src").resolve())
    env["PYTHONPATH"] = f"{src_path}{os.pathsep}{existing}" if existing else src_path

    completed = subprocess.run(
        [sys.executable, "-m", "branchpick", "--log-level", "loud", "--log-file", str(tmp_path / "bp.log")],
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )

    assert completed.returncode == 2
    assert "--log-level must be one of" in completed.stderr
