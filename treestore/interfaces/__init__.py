"""
Abstract base classes and protocols for the tree store.
"""

from treestore.interfaces.ordered_container import OrderedContainer
from treestore.interfaces.traversable import Traversable

__all__ = ["OrderedContainer", "Traversable"]
