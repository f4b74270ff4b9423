"""
Data models for the tree store.
"""

from treestore.models.binary_search_tree import BinarySearchTree, Node
from treestore.models.exceptions import OrderingUndefinedError, RecordStoreError

__all__ = [
    "BinarySearchTree",
    "Node",
    "OrderingUndefinedError",
    "RecordStoreError",
]
