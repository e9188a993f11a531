"""Interactive branch selection loop."""

from __future__ import annotations

import curses
import logging as py_logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from branchpick.ui.state import SelectionModel

logger = py_logging.getLogger(__name__)

KEY_ESCAPE = 27
KEY_CTRL_C = 3
_CANCEL_KEYS = {KEY_ESCAPE, KEY_CTRL_C, ord("q")}
_CONFIRM_KEYS = {ord("\n"), ord("\r"), curses.KEY_ENTER}


class Action(str, Enum):
    MOVE_DOWN = "move-down"
    MOVE_UP = "move-up"
    CANCEL = "cancel"
    CONFIRM = "confirm"
    IGNORE = "ignore"


@dataclass(frozen=True)
class Checkout:
    index: int


@dataclass(frozen=True)
class Cancel:
    pass


RunOutcome = Checkout | Cancel


class Presenter(Protocol):
    def render(self, branches: Sequence[str], index: int | None) -> None: ...

    def read_key(self) -> int: ...


def map_key(key: int) -> Action:
    if key == curses.KEY_DOWN:
        return Action.MOVE_DOWN
    if key == curses.KEY_UP:
        return Action.MOVE_UP
    if key in _CANCEL_KEYS:
        return Action.CANCEL
    if key in _CONFIRM_KEYS:
        return Action.CONFIRM
    return Action.IGNORE


class BranchSelectLoop:
    """Render, read one key, apply it; repeat until confirm or cancel."""

    def __init__(self, selection: SelectionModel, presenter: Presenter) -> None:
        self._selection = selection
        self._presenter = presenter

    @property
    def selection(self) -> SelectionModel:
        return self._selection

    def _read_key(self) -> int:
        try:
            return self._presenter.read_key()
        except KeyboardInterrupt:
            return KEY_CTRL_C

    def step(self, key: int) -> RunOutcome | None:
        action = map_key(key)
        logger.debug("key=%s action=%s index=%s", key, action.value, self._selection.index)
        if action is Action.MOVE_DOWN:
            self._selection.select_next()
        elif action is Action.MOVE_UP:
            self._selection.select_previous()
        elif action is Action.CANCEL:
            return Cancel()
        elif action is Action.CONFIRM:
            index = self._selection.index
            if index is None:
                raise RuntimeError("checkout confirmed without a selected branch")
            return Checkout(index)
        return None

    def run(self) -> RunOutcome:
        while True:
            self._presenter.render(self._selection.branches, self._selection.index)
            outcome = self.step(self._read_key())
            if outcome is not None:
                logger.debug("Selection loop finished outcome=%s", outcome)
                return outcome
