"""
Shared pytest fixtures for tree store tests.
"""

import os
import tempfile

import pytest
import pytest_asyncio

from treestore.engine.key_store import KeyStore
from treestore.engine.record_store import RecordStore
from treestore.models.binary_search_tree import BinarySearchTree

SAMPLE_KEYS = [8, 3, 10, 1, 6, 14, 4, 7, 13]


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def db_path(temp_dir):
    """Provide a path for a SQLite database file."""
    return os.path.join(temp_dir, "records.db")


@pytest.fixture
def tree():
    """Provide a fresh, empty BinarySearchTree."""
    return BinarySearchTree()


@pytest.fixture
def sample_tree():
    """
    Provide the reference tree:

            8
           / \\
          3   10
         / \\    \\
        1   6    14
           / \\   /
          4   7 13
    """
    bst = BinarySearchTree()
    for key in SAMPLE_KEYS:
        bst.insert(key)
    return bst


@pytest_asyncio.fixture
async def key_store():
    """Provide an empty KeyStore."""
    async with KeyStore() as store:
        yield store


@pytest_asyncio.fixture
async def record_store(db_path):
    """Provide a RecordStore on a temporary database file."""
    async with await RecordStore.create(db_path) as store:
        yield store
