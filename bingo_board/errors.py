"""Exception hierarchy shared by the bingo board modules."""

from __future__ import annotations


class BingoError(Exception):
    """Base class for all bingo board errors."""


class InvalidArgumentError(BingoError, ValueError):
    """Raised when a caller passes a value outside of the accepted domain."""


class IndexOutOfRangeError(BingoError, IndexError):
    """Raised when a cell or sentence index does not exist."""


class DeserializationError(BingoError, ValueError):
    """Raised when a persisted snapshot cannot be turned back into a board."""


__all__ = [
    "BingoError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "DeserializationError",
]
