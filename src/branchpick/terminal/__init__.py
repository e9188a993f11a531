"""Terminal presentation for the branch picker."""

from .presenter import CursesPresenter, curses_session, visible_window

__all__ = [
    "CursesPresenter",
    "curses_session",
    "visible_window",
]
