"""
Stores that sit behind the HTTP surface.
"""

from treestore.engine.key_store import KeyStore
from treestore.engine.record_store import RecordStore

__all__ = ["KeyStore", "RecordStore"]
