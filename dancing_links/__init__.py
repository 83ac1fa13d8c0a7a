"""Reversible circular linked lists for Knuth's dancing links technique."""

from .core import (
    DancingLinksError,
    ItemStateError,
    ReinsertionOrderError,
    SentinelIndexError,
    UnconnectedNodeError,
    ItemNode,
    Items,
    Item,
    Removal,
    UndoLog,
    Link,
    LinkedList,
    ListHeader,
    ListNode,
    SizedListNode,
    OptionNode,
    SpacerNode,
)

__version__ = "1.0.0"

__all__ = [
    "DancingLinksError",
    "ItemStateError",
    "ReinsertionOrderError",
    "SentinelIndexError",
    "UnconnectedNodeError",
    "ItemNode",
    "Items",
    "Item",
    "Removal",
    "UndoLog",
    "Link",
    "LinkedList",
    "ListHeader",
    "ListNode",
    "SizedListNode",
    "OptionNode",
    "SpacerNode",
]
