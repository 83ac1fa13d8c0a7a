"""Undo log making the last-removed-first-reinserted contract explicit."""

from __future__ import annotations
from typing import Any, List, Optional, Set

from .errors import ItemStateError, ReinsertionOrderError


class Removal:
    """
    Token for one removal recorded in an ``UndoLog``.

    The token can be consumed exactly once, and only while it is the most
    recent pending removal in its log.
    """
    __slots__ = ['log', 'target', 'depth', 'consumed']

    def __init__(self, log: UndoLog, target: Any, depth: int):
        self.log = log
        self.target = target
        self.depth = depth
        self.consumed = False

    def undo(self) -> None:
        """Reinsert the removed target through the owning log."""
        self.log.undo(self)

    def __repr__(self) -> str:
        state = "consumed" if self.consumed else "pending"
        return f"Removal(target={self.target!r}, depth={self.depth}, {state})"


class UndoLog:
    """
    Stack of reversible removals.

    Works with anything exposing ``remove()`` and ``reinsert()``: generic
    list nodes as well as ``Item`` cursors. A search descends with
    ``remove()`` and backtracks with ``undo()`` or ``rollback(mark)``.
    """

    def __init__(self):
        self._pending: List[Removal] = []
        self._targets: Set[int] = set()

    def remove(self, target: Any) -> Removal:
        """
        Remove ``target`` from its list and record the removal.

        Returns:
            The token that must be undone before any earlier removal.

        Raises:
            ItemStateError: If the target already has a pending removal.
        """
        if id(target) in self._targets:
            raise ItemStateError(f"{target!r} already has a pending removal")
        target.remove()
        token = Removal(self, target, depth=len(self._pending))
        self._pending.append(token)
        self._targets.add(id(target))
        return token

    def undo(self, token: Optional[Removal] = None) -> Any:
        """
        Reinsert the most recent removal.

        Args:
            token: If given, must be the most recent pending removal.

        Returns:
            The reinserted target.

        Raises:
            ItemStateError: If the token was already consumed, belongs to
                another log, or nothing is pending.
            ReinsertionOrderError: If the token is not the most recent removal.
        """
        if token is not None:
            if token.consumed:
                raise ItemStateError(f"{token!r} was already undone")
            if token.log is not self:
                raise ItemStateError(f"{token!r} belongs to a different undo log")
        if not self._pending:
            raise ItemStateError("Nothing to undo")

        top = self._pending[-1]
        if token is not None and token is not top:
            raise ReinsertionOrderError(
                f"{token!r} undone before the later removal {top!r}"
            )

        top.target.reinsert()
        self._pending.pop()
        self._targets.discard(id(top.target))
        top.consumed = True
        return top.target

    def mark(self) -> int:
        """Current number of pending removals."""
        return len(self._pending)

    def rollback(self, mark: int = 0) -> None:
        """Undo pending removals, newest first, until ``mark`` remain."""
        if mark < 0 or mark > len(self._pending):
            raise ValueError(
                f"Mark must be between 0 and {len(self._pending)}, got {mark}"
            )
        while len(self._pending) > mark:
            self.undo()

    def __len__(self) -> int:
        return len(self._pending)

    def __repr__(self) -> str:
        return f"UndoLog(pending={len(self._pending)})"
