from __future__ import annotations

import curses
from collections.abc import Sequence

import pytest

from branchpick.ui.screens.branch_select import (
    KEY_CTRL_C,
    KEY_ESCAPE,
    Action,
    BranchSelectLoop,
    Cancel,
    Checkout,
    map_key,
)
from branchpick.ui.state import SelectionModel


class _ScriptedPresenter:
    def __init__(self, keys: list[int]) -> None:
        self._keys = list(keys)
        self.frames: list[tuple[tuple[str, ...], int | None]] = []

    def render(self, branches: Sequence[str], index: int | None) -> None:
        self.frames.append((tuple(branches), index))

    def read_key(self) -> int:
        return self._keys.pop(0)


class _InterruptingPresenter(_ScriptedPresenter):
    def read_key(self) -> int:
        raise KeyboardInterrupt


def _model(index: int = 1) -> SelectionModel:
    return SelectionModel(branches=("main", "dev", "feat/x"), index=index)


@pytest.mark.parametrize(
    ("key", "action"),
    [
        (curses.KEY_DOWN, Action.MOVE_DOWN),
        (curses.KEY_UP, Action.MOVE_UP),
        (KEY_ESCAPE, Action.CANCEL),
        (KEY_CTRL_C, Action.CANCEL),
        (ord("q"), Action.CANCEL),
        (ord("\n"), Action.CONFIRM),
        (ord("\r"), Action.CONFIRM),
        (curses.KEY_ENTER, Action.CONFIRM),
        (ord("j"), Action.IGNORE),
        (curses.KEY_LEFT, Action.IGNORE),
    ],
)
def test_key_mapping(key: int, action: Action) -> None:
    assert map_key(key) is action


def test_down_down_enter_wraps_to_first_branch() -> None:
    presenter = _ScriptedPresenter([curses.KEY_DOWN, curses.KEY_DOWN, ord("\n")])
    loop = BranchSelectLoop(_model(1), presenter)

    outcome = loop.run()

    assert outcome == Checkout(0)
    assert [index for _, index in presenter.frames] == [1, 2, 0]


def test_up_from_top_wraps_to_last_branch() -> None:
    presenter = _ScriptedPresenter([curses.KEY_UP, ord("\r")])

    assert BranchSelectLoop(_model(0), presenter).run() == Checkout(2)


def test_quit_first_cancels_after_single_render() -> None:
    presenter = _ScriptedPresenter([ord("q")])

    outcome = BranchSelectLoop(_model(), presenter).run()

    assert outcome == Cancel()
    assert presenter.frames == [(("main", "dev", "feat/x"), 1)]


def test_unknown_keys_do_not_move_selection() -> None:
    presenter = _ScriptedPresenter([ord("x"), curses.KEY_RIGHT, KEY_ESCAPE])
    loop = BranchSelectLoop(_model(), presenter)

    assert loop.run() == Cancel()
    assert loop.selection.index == 1
    assert len(presenter.frames) == 3


def test_keyboard_interrupt_while_waiting_cancels() -> None:
    assert BranchSelectLoop(_model(), _InterruptingPresenter([])).run() == Cancel()


def test_confirm_without_selection_is_a_logic_fault() -> None:
    loop = BranchSelectLoop(SelectionModel(branches=("main",)), _ScriptedPresenter([]))

    with pytest.raises(RuntimeError):
        loop.step(ord("\n"))
