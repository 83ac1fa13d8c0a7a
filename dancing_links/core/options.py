"""
Field layouts for the option (row) dimension of the exact cover matrix.

Options are stored in one flattened array: a spacer marks each row
boundary, and every option node names its parent item plus its horizontal
neighbours within the row. Only the layout is defined here; nothing links
these into a search yet.
"""

from __future__ import annotations
from dataclasses import dataclass, fields

from .errors import SentinelIndexError


def _check_nonzero(record) -> None:
    for field in fields(record):
        value = getattr(record, field.name)
        if value < 1:
            raise SentinelIndexError(
                f"{type(record).__name__}.{field.name} must be a non-zero index, got {value}"
            )


@dataclass(frozen=True)
class SpacerNode:
    """Row boundary in the flattened option array."""
    previous: int
    next: int

    def __post_init__(self):
        _check_nonzero(self)


@dataclass(frozen=True)
class OptionNode:
    """One cell of an option: its item and its neighbours in the row."""
    parent: int
    previous: int
    next: int

    def __post_init__(self):
        _check_nonzero(self)
