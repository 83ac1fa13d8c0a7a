"""Array-backed ring of the items that remain to be covered."""

from __future__ import annotations
import operator
from dataclasses import dataclass
from typing import Iterable, List, Set, Tuple

import numpy as np

from .errors import ItemStateError, ReinsertionOrderError, SentinelIndexError


ITEM_DTYPE = np.dtype([("previous", np.int64), ("next", np.int64)])

# Index of the header node; never a live item.
SENTINEL = 0


@dataclass(frozen=True)
class ItemNode:
    """Neighbour positions of one item (or of the sentinel at index 0)."""
    previous: int
    next: int


class Items:
    """
    Circular doubly-linked list of items, indexed by position.

    Slot 0 is the sentinel header, slots 1..n are the items. Identity is the
    array index, so nodes never hold references to each other and a removed
    item keeps its old ``previous``/``next`` untouched in the array.

    Removed indices are tracked on a stack: reinsertions must undo removals
    in exact reverse order, anything else raises ``ReinsertionOrderError``
    before the ring is touched.
    """

    def __init__(self, size: int):
        """
        Build a fully connected ring of ``size`` items plus the sentinel.

        Args:
            size: Number of items (n >= 0).
        """
        size = operator.index(size)
        if size < 0:
            raise ValueError(f"Size must be non-negative, got {size}")

        positions = np.arange(size + 1, dtype=np.int64)
        self.nodes = np.zeros(size + 1, dtype=ITEM_DTYPE)
        self.nodes["previous"] = (positions - 1) % (size + 1)
        self.nodes["next"] = (positions + 1) % (size + 1)
        self._removed: List[int] = []
        self._removed_set: Set[int] = set()

    @classmethod
    def from_nodes(cls, nodes: Iterable[ItemNode]) -> Items:
        """Create a ring from explicit node values (slot 0 first), with no removals pending."""
        nodes = list(nodes)
        if not nodes:
            raise ValueError("At least the sentinel node is required")

        ring = cls(len(nodes) - 1)
        for index, node in enumerate(nodes):
            ring.nodes[index] = (node.previous, node.next)
        return ring

    @property
    def capacity(self) -> int:
        """Number of item slots, live or removed (sentinel excluded)."""
        return len(self.nodes) - 1

    @property
    def removed(self) -> Tuple[int, ...]:
        """Currently removed indices, oldest removal first."""
        return tuple(self._removed)

    def items(self) -> Item:
        """Cursor traversing every live item once, in ring order."""
        return Item(self, SENTINEL, end=int(self.nodes["previous"][SENTINEL]))

    def item(self, index: int) -> Item:
        """
        Cursor anchored at a single live item, for removal or reinsertion.

        Raises:
            SentinelIndexError: If index is 0.
            IndexError: If index is outside 1..n.
        """
        index = self._check_index(index)
        return Item(self, index, end=int(self.nodes["previous"][index]))

    def order(self) -> List[int]:
        """Indices of the live items in ring order."""
        return list(self.items())

    def snapshot(self) -> np.ndarray:
        """Copy of the backing array."""
        return self.nodes.copy()

    def checkpoint(self) -> int:
        """Current depth of the removal stack, for use with ``rollback()``."""
        return len(self._removed)

    def rollback(self, mark: int = 0) -> None:
        """Reinsert removed items, newest first, until the stack depth is ``mark``."""
        if mark < 0 or mark > len(self._removed):
            raise ValueError(
                f"Checkpoint must be between 0 and {len(self._removed)}, got {mark}"
            )
        while len(self._removed) > mark:
            self.item(self._removed[-1]).reinsert()

    def _check_index(self, index: int) -> int:
        index = operator.index(index)
        if index == SENTINEL:
            raise SentinelIndexError("Index 0 is the sentinel, not a live item")
        if index < 0 or index >= len(self.nodes):
            raise IndexError(f"Item index must be 1-{self.capacity}, got {index}")
        return index

    def _unlink(self, index: int, previous: int, next_: int) -> None:
        if index in self._removed_set:
            raise ItemStateError(f"Item {index} is already removed")
        self.nodes["next"][previous] = next_
        self.nodes["previous"][next_] = previous
        self._removed.append(index)
        self._removed_set.add(index)

    def _relink(self, index: int, previous: int, next_: int) -> None:
        if index not in self._removed_set:
            raise ItemStateError(f"Item {index} is not removed")
        if self._removed[-1] != index:
            raise ReinsertionOrderError(
                f"Item {index} reinserted before item {self._removed[-1]}; "
                f"reinsertions must reverse the removal order"
            )
        recorded = self[index]
        if (previous, next_) != (recorded.previous, recorded.next):
            raise ItemStateError(
                f"Stale cursor for item {index}: expected neighbours "
                f"({recorded.previous}, {recorded.next}), got ({previous}, {next_})"
            )
        self.nodes["next"][previous] = index
        self.nodes["previous"][next_] = index
        self._removed.pop()
        self._removed_set.discard(index)

    def __getitem__(self, index: int) -> ItemNode:
        index = operator.index(index)
        if index < 0 or index >= len(self.nodes):
            raise IndexError(f"Slot index must be 0-{self.capacity}, got {index}")
        row = self.nodes[index]
        return ItemNode(int(row["previous"]), int(row["next"]))

    def __len__(self) -> int:
        """Number of live items."""
        return self.items().count()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Items):
            return False
        return (np.array_equal(self.nodes["previous"], other.nodes["previous"])
                and np.array_equal(self.nodes["next"], other.nodes["next"]))

    __hash__ = None

    def __str__(self) -> str:
        return "[" + " -> ".join(str(i) for i in self.order()) + "]"

    def __repr__(self) -> str:
        return f"Items(capacity={self.capacity}, live={len(self)})"


class Item:
    """
    Transient cursor over an ``Items`` ring.

    Iterating advances ``current`` along ``next`` and yields each index
    reached, stopping once ``current`` equals ``end``. ``remove()`` and
    ``reinsert()`` act on the anchor ``index`` the cursor was built at, using
    the neighbour positions recorded on the cursor.

    Those positions are read when the cursor is built and again by
    ``remove()``. A cursor built before other items were removed holds stale
    neighbours; ``reinsert()`` rejects it with ``ItemStateError``, so build a
    fresh cursor with ``Items.item()`` after the removal instead.
    """
    __slots__ = ['_ring', 'index', 'current', 'end', 'previous', 'next']

    def __init__(self, ring: Items, index: int, end: int):
        self._ring = ring
        self.index = index
        self.current = index
        self.end = end
        node = ring[index]
        self.previous: int = node.previous
        self.next: int = node.next

    def remove(self) -> None:
        """Splice the anchored item out, leaving its own slot untouched."""
        self._check_live_anchor()
        node = self._ring[self.index]
        self.previous, self.next = node.previous, node.next
        self._ring._unlink(self.index, self.previous, self.next)

    def reinsert(self) -> None:
        """Point the recorded neighbours back at the anchored item."""
        self._check_live_anchor()
        self._ring._relink(self.index, self.previous, self.next)

    def count(self) -> int:
        """Consume the cursor and return the number of steps taken."""
        return sum(1 for _ in self)

    def _check_live_anchor(self) -> None:
        if self.index == SENTINEL:
            raise SentinelIndexError("The sentinel cannot be removed or reinserted")

    def __iter__(self) -> Item:
        return self

    def __next__(self) -> int:
        if self.current == self.end:
            raise StopIteration
        self.current = int(self._ring.nodes["next"][self.current])
        return self.current

    def __repr__(self) -> str:
        return (f"Item(index={self.index}, current={self.current}, end={self.end}, "
                f"previous={self.previous}, next={self.next})")
