"""
Intrusive circular doubly-linked list with reversible removal.

Dancing links uses two kinds of intrusive list: one tracking the items that
remain to be covered, and one tracking the options that can still cover each
item. The ``LinkedList`` mixin below covers both. Nodes are owned by the
caller; the list only rewires neighbour references.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Iterator, Optional

from .errors import UnconnectedNodeError


class Link:
    """A pair of neighbour slots. Starts unconnected (both ``None``)."""
    __slots__ = ['next', 'previous']

    def __init__(self):
        self.next: Optional[LinkedList] = None
        self.previous: Optional[LinkedList] = None

    def __repr__(self) -> str:
        return (f"Link(next={_node_id(self.next)}, "
                f"previous={_node_id(self.previous)})")


def _node_id(node: Optional[LinkedList]) -> str:
    return "None" if node is None else hex(id(node))


class LinkedList(ABC):
    """
    Capability mixin for any node that exposes a ``Link``.

    Removal never touches the removed node's own slots, so ``reinsert()``
    puts it back exactly where it was. Removals and reinsertions must nest
    like a stack: undo A, B, C as C, B, A. Nothing here checks that; use
    ``UndoLog`` when the order must be enforced.
    """
    __slots__ = ()

    @property
    @abstractmethod
    def link(self) -> Link:
        """The node's own neighbour slots."""

    def grow(self) -> None:
        """Hook called on the receiver of ``prepend()`` and ``reinsert()``."""

    def shrink(self) -> None:
        """Hook called on the receiver of ``remove()``."""

    @property
    def next(self) -> LinkedList:
        node = self.link.next
        if node is None:
            raise UnconnectedNodeError(
                f"{type(self).__name__} has no next neighbour; call connect_self() first"
            )
        return node

    @next.setter
    def next(self, node: LinkedList) -> None:
        self.link.next = node

    @property
    def previous(self) -> LinkedList:
        node = self.link.previous
        if node is None:
            raise UnconnectedNodeError(
                f"{type(self).__name__} has no previous neighbour; call connect_self() first"
            )
        return node

    @previous.setter
    def previous(self, node: LinkedList) -> None:
        self.link.previous = node

    def connect_self(self) -> None:
        """Initialize the node as an empty list by pointing it at itself."""
        self.link.next = self
        self.link.previous = self

    def prepend(self, node: LinkedList) -> None:
        """
        Insert ``node`` immediately before this node in cyclic order.

        Args:
            node: Node to insert. Its own link slots are overwritten.
        """
        previous = self.previous
        self.grow()
        node.previous = previous
        node.next = self
        previous.next = node
        self.previous = node

    def remove(self) -> None:
        """Reversibly splice this node out of its list."""
        previous, next_ = self.previous, self.next
        self.shrink()
        next_.previous = previous
        previous.next = next_

    def reinsert(self) -> None:
        """Splice this node back between its recorded neighbours."""
        previous, next_ = self.previous, self.next
        self.grow()
        next_.previous = self
        previous.next = self

    def is_empty(self) -> bool:
        """A list is empty when its node is connected only to itself."""
        return self.next is self and self.previous is self

    def is_valid(self) -> bool:
        """A node is valid once both neighbour slots are populated."""
        return self.link.next is not None and self.link.previous is not None

    def members(self) -> Iterator[LinkedList]:
        """Yield every other node in the ring, following ``next``."""
        node = self.next
        while node is not self:
            yield node
            node = node.next

    def size(self) -> int:
        """Count the other nodes reachable from this one."""
        return sum(1 for _ in self.members())


class ListNode(LinkedList):
    """A plain list node carrying an arbitrary payload."""
    __slots__ = ['_link', 'value']

    def __init__(self, value: Any = None):
        self._link = Link()
        self.value = value

    @property
    def link(self) -> Link:
        return self._link

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value={self.value!r})"


class SizedListNode(ListNode):
    """A list node whose hooks keep ``parent.size`` in step with the list."""
    __slots__ = ['parent']

    def __init__(self, parent: ListHeader, value: Any = None):
        super().__init__(value)
        self.parent = parent

    def grow(self) -> None:
        self.parent.size += 1

    def shrink(self) -> None:
        self.parent.size -= 1


class ListHeader:
    """
    A header record owning a sentinel node and a live-member counter.

    Members are ``SizedListNode`` objects pointing back at the header, so
    ``remove()``/``reinsert()`` on any member updates ``size``.
    """

    def __init__(self, value: Any = None):
        self.size = 0
        self.head = SizedListNode(self, value)
        self.head.connect_self()

    def prepend(self, value: Any = None) -> SizedListNode:
        """Create a member at the end of the list and return it."""
        node = SizedListNode(self, value)
        self.head.prepend(node)
        return node

    def is_empty(self) -> bool:
        return self.head.is_empty()

    def values(self) -> list:
        """Payloads of the live members in ring order."""
        return [node.value for node in self.head.members()]

    def __iter__(self) -> Iterator[LinkedList]:
        return self.head.members()

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"ListHeader(size={self.size})"
