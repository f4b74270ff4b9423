"""
Binary Search Tree implementation for ordered key storage.

Plain unbalanced tree: no rotations, no colors. Inserting keys in sorted
order degrades it to a single chain whose height equals its size.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from treestore.interfaces.ordered_container import OrderedContainer
from treestore.models.exceptions import OrderingUndefinedError


@dataclass
class Node:
    """Node in the Binary Search Tree."""

    key: Any
    left: "Node | None" = None
    right: "Node | None" = None


class BinarySearchTree(OrderedContainer):
    """
    Binary Search Tree implementation of OrderedContainer.

    Properties maintained:
    1. Every key in a node's left subtree is strictly less than its key
    2. Every key in a node's right subtree is strictly greater than its key
    3. No two nodes hold equal keys

    Walks are iterative so that degenerate trees deeper than the
    interpreter recursion limit are still handled.
    """

    def __init__(self) -> None:
        self._root: Node | None = None
        self._size: int = 0

    @property
    def root(self) -> Node | None:
        return self._root

    def insert(self, key: Any) -> None:
        """Insert a key as a new leaf. Duplicates are ignored. O(height)"""
        if self._root is None:
            self._root = Node(key=key)
            self._size = 1
            return

        current = self._root
        while True:
            order = _compare(key, current.key)
            if order < 0:
                if current.left is None:
                    current.left = Node(key=key)
                    break
                current = current.left
            elif order > 0:
                if current.right is None:
                    current.right = Node(key=key)
                    break
                current = current.right
            else:
                # Key exists, nothing to do
                return

        self._size += 1

    def search(self, key: Any) -> bool:
        """Return True if the key is stored. O(height)"""
        current = self._root
        while current is not None:
            order = _compare(key, current.key)
            if order < 0:
                current = current.left
            elif order > 0:
                current = current.right
            else:
                return True
        return False

    def delete(self, key: Any) -> None:
        """Remove a key if present. O(height)"""
        parent = None
        node = self._root

        while node is not None:
            order = _compare(key, node.key)
            if order == 0:
                break
            parent = node
            node = node.left if order < 0 else node.right

        if node is None:
            return

        if node.left is not None and node.right is not None:
            # Two children: pull up the in-order successor's key, then
            # remove the successor from the right subtree.
            successor_parent = node
            successor = node.right
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left

            node.key = successor.key
            parent, node = successor_parent, successor

        # Node has at most one child
        child = node.left if node.left is not None else node.right
        self._replace_child(parent, node, child)
        self._size -= 1

    def get_min(self) -> Any | None:
        if self._root is None:
            return None
        return _leftmost(self._root).key

    def get_max(self) -> Any | None:
        if self._root is None:
            return None
        node = self._root
        while node.right is not None:
            node = node.right
        return node.key

    def get_height(self) -> int:
        """Count levels from the root down to the deepest leaf. O(N)"""
        height = 0
        level = [self._root] if self._root is not None else []
        while level:
            height += 1
            level = [
                child
                for node in level
                for child in (node.left, node.right)
                if child is not None
            ]
        return height

    def is_empty(self) -> bool:
        return self._root is None

    def size(self) -> int:
        return self._size

    def in_order_traversal(self) -> list[Any]:
        return list(self)

    def pre_order_traversal(self) -> list[Any]:
        result = []
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            result.append(node.key)
            # Right pushed first so the left subtree is visited first
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return result

    def post_order_traversal(self) -> list[Any]:
        # Node-right-left pre-order, reversed, is left-right-node.
        result = []
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            result.append(node.key)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        result.reverse()
        return result

    def __iter__(self) -> Iterator[Any]:
        return _InOrderIterator(self._root)

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __contains__(self, key: Any) -> bool:
        return self.search(key)

    def __repr__(self) -> str:
        return f"BinarySearchTree({self.in_order_traversal()!r})"

    def _replace_child(
        self, parent: Node | None, node: Node, child: Node | None
    ) -> None:
        """Splice child into the link that currently points at node."""
        if parent is None:
            self._root = child
        elif parent.left is node:
            parent.left = child
        else:
            parent.right = child


def _compare(key: Any, other: Any) -> int:
    """Three-way compare, translating TypeError into OrderingUndefinedError."""
    try:
        if key < other:
            return -1
        if key > other:
            return 1
    except TypeError as e:
        raise OrderingUndefinedError(key, other) from e
    return 0


def _leftmost(node: Node) -> Node:
    while node.left is not None:
        node = node.left
    return node


class _InOrderIterator(Iterator[Any]):
    """Ascending iterator over a Binary Search Tree."""

    def __init__(self, root: Node | None) -> None:
        self._stack: list[Node] = []
        self._push_left_path(root)

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()

        # Push right subtree's left path
        self._push_left_path(node.right)

        return node.key

    def _push_left_path(self, node: Node | None) -> None:
        while node is not None:
            self._stack.append(node)
            node = node.left
