"""Curses-backed rendering of the branch list."""

from __future__ import annotations

import curses
import logging as py_logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager, suppress

from branchpick.errors import BranchPickError, ExitCode

logger = py_logging.getLogger(__name__)

HIGHLIGHT_PAIR = 1
ESCAPE_DELAY_MS = 25


def visible_window(total: int, index: int | None, height: int) -> tuple[int, int]:
    """Return the ``[start, stop)`` slice of rows that fits ``height`` and shows ``index``."""
    if height <= 0 or total <= 0:
        return 0, 0
    if total <= height:
        return 0, total
    selected = index or 0
    start = min(max(selected - height + 1, 0), total - height)
    return start, start + height


class CursesPresenter:
    def __init__(self, screen: curses.window, *, highlight_symbol: str = "* ") -> None:
        self._screen = screen
        self._symbol = highlight_symbol
        self._highlight = curses.A_BOLD
        if curses.has_colors():
            with suppress(curses.error):
                curses.init_pair(HIGHLIGHT_PAIR, curses.COLOR_GREEN, -1)
                self._highlight = curses.color_pair(HIGHLIGHT_PAIR)

    def render(self, branches: Sequence[str], index: int | None) -> None:
        height, width = self._screen.getmaxyx()
        self._screen.erase()
        start, stop = visible_window(len(branches), index, height)
        padding = " " * len(self._symbol)
        for row, position in enumerate(range(start, stop)):
            selected = position == index
            line = f"{self._symbol if selected else padding}{branches[position]}"
            attr = self._highlight if selected else curses.A_NORMAL
            # Writing into the bottom-right cell raises even though the text lands.
            with suppress(curses.error):
                self._screen.addnstr(row, 0, line, max(width - 1, 0), attr)
        self._screen.refresh()

    def read_key(self) -> int:
        return self._screen.getch()


@contextmanager
def curses_session(*, highlight_symbol: str = "* ") -> Iterator[CursesPresenter]:
    """Own the terminal in raw mode on the alternate screen.

    The terminal is restored on every exit path before control returns to the
    caller, so anything printed afterwards lands on the normal screen.
    """
    try:
        screen = curses.initscr()
    except curses.error as exc:
        logger.error("Failed to initialize terminal error=%s", exc)
        raise BranchPickError(
            "Couldn't initialize the terminal",
            code=ExitCode.RUNTIME_ERROR,
            hint="Run branchpick from an interactive terminal.",
        ) from exc
    try:
        curses.noecho()
        curses.raw()
        screen.keypad(True)
        curses.set_escdelay(ESCAPE_DELAY_MS)
        with suppress(curses.error):
            curses.curs_set(0)
        if curses.has_colors():
            curses.start_color()
            with suppress(curses.error):
                curses.use_default_colors()
        logger.debug("Terminal session acquired")
        yield CursesPresenter(screen, highlight_symbol=highlight_symbol)
    finally:
        screen.keypad(False)
        curses.noraw()
        curses.echo()
        curses.endwin()
        logger.debug("Terminal session released")
