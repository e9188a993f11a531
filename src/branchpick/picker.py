"""End-to-end flow from git state to checkout output."""

from __future__ import annotations

import logging as py_logging
import sys
from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import TextIO

from branchpick.config import AppConfig
from branchpick.git.branch_provider import GitGateway
from branchpick.logging import console_quiet
from branchpick.terminal.presenter import curses_session
from branchpick.ui.screens.branch_select import BranchSelectLoop, Checkout, Presenter, RunOutcome
from branchpick.ui.state import SelectionModel, ensure_branches

logger = py_logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractContextManager[Presenter]]


def run_picker(
    config: AppConfig,
    *,
    gateway: GitGateway | None = None,
    session_factory: SessionFactory | None = None,
    out: TextIO | None = None,
) -> RunOutcome:
    git = gateway or GitGateway(executable=config.git_executable)
    open_session = session_factory or (
        lambda: curses_session(highlight_symbol=config.highlight_symbol)
    )
    stream = out or sys.stdout

    branches = ensure_branches(git.list_recent_branches(config.branch_limit))
    current = git.current_branch()
    logger.debug("Starting picker branches=%s current=%s", len(branches), current)
    selection = SelectionModel.initialize(branches, current)

    with console_quiet(), open_session() as presenter:
        outcome = BranchSelectLoop(selection, presenter).run()

    if isinstance(outcome, Checkout):
        branch = selection.branches[outcome.index]
        logger.debug("Checking out branch=%s", branch)
        output = git.checkout(branch)
        print(output.rstrip(), file=stream)
    else:
        logger.debug("Picker cancelled")
    return outcome
