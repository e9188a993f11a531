"""Selection state for the branch list."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from branchpick.errors import BranchNotFoundError, EmptyBranchListError


def ensure_branches(branches: Sequence[str]) -> tuple[str, ...]:
    items = tuple(branches)
    if not items:
        raise EmptyBranchListError(
            "Couldn't read branches",
            hint="Create an initial commit so the repository has a local branch.",
        )
    return items


@dataclass
class SelectionModel:
    branches: tuple[str, ...] = ()
    index: int | None = None

    @classmethod
    def initialize(cls, branches: Sequence[str], current_branch: str) -> SelectionModel:
        """Select ``current_branch`` by exact match within ``branches``."""
        items = ensure_branches(branches)
        try:
            index = items.index(current_branch)
        except ValueError:
            raise BranchNotFoundError(
                f"Couldn't find current branch in branch list: {current_branch or '<empty>'}",
                hint="Check out a named branch, or raise branch_limit in the config.",
                branch=current_branch,
            ) from None
        return cls(branches=items, index=index)

    @property
    def selected_branch(self) -> str | None:
        if self.index is None:
            return None
        return self.branches[self.index]

    def select_next(self) -> None:
        if self.index is None:
            self.index = 0
            return
        self.index = (self.index + 1) % len(self.branches)

    def select_previous(self) -> None:
        if self.index is None:
            self.index = 0
            return
        self.index = (self.index - 1) % len(self.branches)
