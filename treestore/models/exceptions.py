"""
Custom exceptions for the tree store.
"""

from typing import Any


class OrderingUndefinedError(TypeError):
    """
    Raised when a key cannot be ordered against a key already in the tree.

    This is a caller contract violation, not an operational error: the
    tree is left exactly as it was before the call.
    """

    def __init__(self, key: Any, other: Any):
        """
        Initialize ordering error.

        Args:
            key: The key passed by the caller.
            other: The stored key it failed to compare against.
        """
        self.key = key
        self.other = other
        super().__init__(
            f"Ordering not defined between {type(key).__name__} key {key!r} "
            f"and {type(other).__name__} key {other!r}"
        )


class RecordStoreError(Exception):
    """Raised when the relational record store fails to execute a statement."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Record store {operation} failed: {cause}")
