"""
In-memory ordered key store built on an unbalanced binary search tree.

This package provides:
- BinarySearchTree - insert/search/delete, min/max, height and the
  three depth-first traversals
- KeyStore - async key/value façade indexed by the tree
- RecordStore - relational tables for the customer and webhook endpoints
"""

from treestore.engine import KeyStore, RecordStore
from treestore.models import BinarySearchTree

__all__ = ["BinarySearchTree", "KeyStore", "RecordStore"]
