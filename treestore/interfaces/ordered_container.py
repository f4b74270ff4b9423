"""
OrderedContainer abstract base class for ordered key collections.
"""

from abc import abstractmethod
from typing import Any

from treestore.interfaces.traversable import Traversable


class OrderedContainer(Traversable):
    """
    Abstract base class for ordered collections of unique keys.

    Provides O(height) insert, search and delete.
    Inherits depth-first traversal from Traversable.

    Implementations:
    - BinarySearchTree: plain unbalanced tree, no rebalancing
    """

    @abstractmethod
    def insert(self, key: Any) -> None:
        """
        Insert a key.

        Inserting a key that is already present leaves the container
        unchanged.

        Args:
            key: The key to insert.

        Time complexity: O(height)
        """
        pass

    @abstractmethod
    def search(self, key: Any) -> bool:
        """
        Check if a key exists.

        Args:
            key: The key to look up.

        Returns:
            True if the key exists, False otherwise.

        Time complexity: O(height)
        """
        pass

    @abstractmethod
    def delete(self, key: Any) -> None:
        """
        Remove a key.

        Deleting an absent key leaves the container unchanged.

        Args:
            key: The key to remove.

        Time complexity: O(height)
        """
        pass

    @abstractmethod
    def get_min(self) -> Any | None:
        """Return the smallest key, or None if the container is empty."""
        pass

    @abstractmethod
    def get_max(self) -> Any | None:
        """Return the largest key, or None if the container is empty."""
        pass

    @abstractmethod
    def get_height(self) -> int:
        """
        Return the number of nodes on the longest root-to-leaf path.

        Returns:
            0 for an empty container.

        Time complexity: O(N)
        """
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of keys.

        Time complexity: O(1)
        """
        pass
