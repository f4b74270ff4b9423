"""
Traversable protocol for binary trees that support depth-first walks.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any


class Traversable(ABC):
    """
    Protocol for binary trees that can be walked depth-first.

    Implementations must support:
    - In-order, pre-order and post-order traversal, each materialized
      into a fresh list on every call
    - Lazy ascending iteration via __iter__
    """

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        """Return an iterator over all keys in ascending order."""
        pass

    @abstractmethod
    def in_order_traversal(self) -> list[Any]:
        """
        Visit the left subtree, the node, then the right subtree.

        Returns:
            List of keys in ascending order.
        """
        pass

    @abstractmethod
    def pre_order_traversal(self) -> list[Any]:
        """
        Visit the node, the left subtree, then the right subtree.

        Returns:
            List of keys in pre-order.
        """
        pass

    @abstractmethod
    def post_order_traversal(self) -> list[Any]:
        """
        Visit the left subtree, the right subtree, then the node.

        Returns:
            List of keys in post-order.
        """
        pass
