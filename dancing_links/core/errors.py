"""Exception classes for structural violations of the dancing links lists."""


class DancingLinksError(Exception):
    """Base exception for all dancing links errors."""


class UnconnectedNodeError(DancingLinksError, RuntimeError):
    """Raised when a neighbour is read from a node that was never connected."""


class SentinelIndexError(DancingLinksError, IndexError):
    """Raised when the sentinel index 0 is used where a live item is required."""


class ItemStateError(DancingLinksError, RuntimeError):
    """Raised when removing a removed item or reinserting a live one."""


class ReinsertionOrderError(ItemStateError):
    """Raised when reinsertions do not undo removals in last-in-first-out order."""
