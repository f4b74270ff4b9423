"""
Tests for the async KeyStore façade.
"""

import pytest

from treestore.engine.key_store import KeyStore
from treestore.models.binary_search_tree import BinarySearchTree
from treestore.models.exceptions import OrderingUndefinedError


class TestKeyStoreBasics:
    """Tests for put, get, has and delete."""

    async def test_put_and_get(self, key_store):
        """Test basic put and get operations."""
        assert await key_store.put("key1", "value1")
        assert await key_store.put("key2", "value2")

        assert await key_store.get("key1") == "value1"
        assert await key_store.get("key2") == "value2"
        assert await key_store.get("key3") is None

    async def test_update_keeps_single_key(self, key_store):
        """Test overwriting a value does not duplicate the key."""
        await key_store.put("key1", "value1")
        await key_store.put("key1", "value2")

        assert await key_store.get("key1") == "value2"
        assert key_store.size() == 1
        assert await key_store.keys() == ["key1"]

    async def test_has(self, key_store):
        """Test has reflects the key index."""
        await key_store.put("key1", "value1")

        assert await key_store.has("key1")
        assert not await key_store.has("key2")

    async def test_delete(self, key_store):
        """Test delete reports whether the key existed."""
        await key_store.put("key1", "value1")

        assert await key_store.delete("key1")
        assert await key_store.get("key1") is None
        assert not await key_store.has("key1")
        assert not await key_store.delete("key1")

    async def test_delete_empty(self, key_store):
        """Test deleting from an empty store is a no-op."""
        assert not await key_store.delete("missing")
        assert key_store.size() == 0

    async def test_none_value_is_stored(self, key_store):
        """Test a None value still registers the key."""
        await key_store.put("key1", None)

        assert await key_store.has("key1")
        assert await key_store.get("key1") is None

    async def test_incomparable_key_rejected(self, key_store):
        """Test a key of another type leaves the store unchanged."""
        await key_store.put("a", 1)

        with pytest.raises(OrderingUndefinedError):
            await key_store.put(5, 2)

        assert key_store.size() == 1
        assert await key_store.keys() == ["a"]

    async def test_unhashable_key_rejected(self, key_store):
        """Test an unhashable key is refused before it reaches the index."""
        with pytest.raises(TypeError):
            await key_store.put([1], "v")

        assert await key_store.stats() == {
            "size": 0, "height": 0, "min": None, "max": None, "empty": True
        }
        assert await key_store.put("a", "b")
        assert await key_store.keys() == ["a"]
        assert await key_store.get("a") == "b"


class TestKeyStoreOrdering:
    """Tests for traversal orders and stats."""

    async def test_keys_orders(self):
        """Test each traversal order over the reference tree."""
        store = await KeyStore.create([(k, str(k)) for k in (8, 3, 10, 1, 6, 14, 4, 7, 13)])

        assert await store.keys() == [1, 3, 4, 6, 7, 8, 10, 13, 14]
        assert await store.keys("pre") == [8, 3, 1, 6, 4, 7, 10, 14, 13]
        assert await store.keys("post") == [1, 4, 7, 6, 3, 13, 14, 10, 8]

    async def test_unknown_order(self, key_store):
        """Test an unknown order raises ValueError."""
        with pytest.raises(ValueError):
            await key_store.keys("level")

    async def test_stats(self, key_store):
        """Test stats describe the index shape."""
        assert await key_store.stats() == {
            "size": 0, "height": 0, "min": None, "max": None, "empty": True
        }

        for key in ["b", "a", "c", "d"]:
            await key_store.put(key, key.upper())

        assert await key_store.stats() == {
            "size": 4, "height": 3, "min": "a", "max": "d", "empty": False
        }

    async def test_custom_container(self):
        """Test the store accepts an injected container."""
        index = BinarySearchTree()
        store = KeyStore(index)
        await store.put("x", 1)

        assert index.search("x")

    async def test_close_clears(self):
        """Test closing the store drops every key."""
        async with KeyStore() as store:
            await store.put("x", 1)
        assert store.size() == 0
        assert await store.get("x") is None

    async def test_close_keeps_container_type(self):
        """Test closing the store resets the injected container's own type."""

        class CountingTree(BinarySearchTree):
            inserts = 0

            def insert(self, key):
                CountingTree.inserts += 1
                return super().insert(key)

        store = KeyStore(CountingTree())
        await store.put("x", 1)
        await store.close()

        assert isinstance(store._index, CountingTree)
        assert store.size() == 0

        await store.put("y", 2)
        assert CountingTree.inserts == 2
        assert await store.keys() == ["y"]
