"""Core module for the reversible linked lists behind dancing links."""

from .errors import (
    DancingLinksError,
    ItemStateError,
    ReinsertionOrderError,
    SentinelIndexError,
    UnconnectedNodeError,
)
from .items import ItemNode, Items, Item, SENTINEL
from .journal import Removal, UndoLog
from .link import Link, LinkedList, ListHeader, ListNode, SizedListNode
from .options import OptionNode, SpacerNode

__all__ = [
    "DancingLinksError",
    "ItemStateError",
    "ReinsertionOrderError",
    "SentinelIndexError",
    "UnconnectedNodeError",
    "ItemNode",
    "Items",
    "Item",
    "SENTINEL",
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
