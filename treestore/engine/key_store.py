"""
KeyStore - Async key/value façade over an ordered key index.
"""

import asyncio
import logging
from typing import Any

from treestore.interfaces.ordered_container import OrderedContainer
from treestore.models.binary_search_tree import BinarySearchTree

logger = logging.getLogger(__name__)


class KeyStore:
    """
    In-memory key/value store whose keys are indexed by an OrderedContainer.

    Provides:
    - put(key, value): Insert/update a key-value pair
    - get(key): Retrieve a value by key
    - delete(key): Remove a key
    - keys(order): Keys in in-, pre- or post-order
    - stats(): Shape of the key index

    The index is not safe for concurrent mutation, so every operation,
    reads included, runs under one asyncio.Lock.
    """

    ORDERS = ("in", "pre", "post")

    def __init__(self, container: OrderedContainer | None = None) -> None:
        """
        Initialize the store.

        Args:
            container: Ordered key index. Defaults to an empty BinarySearchTree.
        """
        self._index = container if container is not None else BinarySearchTree()
        self._values: dict[Any, Any] = {}
        self._lock = asyncio.Lock()

    @classmethod
    async def create(cls, keys: list[tuple[Any, Any]] | None = None) -> "KeyStore":
        """
        Async factory method to create a store, optionally pre-populated.

        Args:
            keys: (key, value) pairs inserted in the given order.

        Returns:
            Initialized KeyStore instance.
        """
        store = cls()
        for key, value in keys or []:
            await store.put(key, value)
        return store

    async def put(self, key: Any, value: Any) -> bool:
        """
        Insert or update a key-value pair.

        Args:
            key: The key to insert/update.
            value: The value to store.

        Returns:
            True if successful.

        Raises:
            TypeError: If the key is unhashable. The store is left unchanged.
        """
        # Keys double as dict keys and must be hashable
        hash(key)

        async with self._lock:
            self._index.insert(key)
            self._values[key] = value
            logger.debug(f"put {key!r} (size={self._index.size()})")
            return True

    async def get(self, key: Any) -> Any | None:
        """
        Retrieve a value by key.

        Args:
            key: The key to look up.

        Returns:
            The value if found, None otherwise.
        """
        async with self._lock:
            if not self._index.search(key):
                return None
            return self._values.get(key)

    async def has(self, key: Any) -> bool:
        async with self._lock:
            return self._index.search(key)

    async def delete(self, key: Any) -> bool:
        """
        Remove a key and its value.

        Args:
            key: The key to delete.

        Returns:
            True if the key existed, False otherwise.
        """
        async with self._lock:
            existed = self._index.search(key)
            self._index.delete(key)
            self._values.pop(key, None)
            logger.debug(f"delete {key!r} existed={existed}")
            return existed

    async def keys(self, order: str = "in") -> list[Any]:
        """
        List keys in the requested traversal order.

        Args:
            order: One of "in", "pre" or "post".

        Returns:
            List of keys.

        Raises:
            ValueError: If order is not a known traversal.
        """
        if order not in self.ORDERS:
            raise ValueError(f"Unknown traversal order {order!r}, expected one of {self.ORDERS}")

        async with self._lock:
            if order == "pre":
                return self._index.pre_order_traversal()
            if order == "post":
                return self._index.post_order_traversal()
            return self._index.in_order_traversal()

    async def stats(self) -> dict[str, Any]:
        async with self._lock:
            return {
                "size": self._index.size(),
                "height": self._index.get_height(),
                "min": self._index.get_min(),
                "max": self._index.get_max(),
                "empty": self._index.is_empty(),
            }

    def size(self) -> int:
        return self._index.size()

    async def close(self) -> None:
        """Drop all keys and values."""
        async with self._lock:
            self._index = type(self._index)()
            self._values.clear()

    async def __aenter__(self) -> "KeyStore":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
