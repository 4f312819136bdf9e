#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
red_black_tree.py
-----------------

An in‑memory ordered dictionary of **fixed‑width byte keys** built on a
self‑balancing **Red‑Black** binary search tree.  Keys carry no payload;
the structure is a multiset, so inserting the same key twice stores two
nodes, the later one following the earlier one in key order.

Features
~~~~~~~~
* `tree.insert(key)`          – O(log n) insertion, returns the node handle
* `tree.search(key)`          – first node holding *key* or ``None``
* `tree.delete(node)`         – O(log n) removal of a node handle
* `tree.remove(key)` / `tree.discard(key)` – removal by key
* `tree.delete_where(pred)`   – bulk removal of every key matching ``pred``
* `tree.traverse_in_order()`  – lazy ``(key, color)`` pairs in ascending order
* `tree.minimum()`, `tree.maximum()`, `tree.successor(node)`,
  `tree.predecessor(node)` – navigation, returning the sentinel past the ends
* `tree.validate()` – sanity‑check that the red‑black invariants hold

Keys are compared over their full width, byte by byte.  Two keys are equal
only when all ``width`` bytes match, including any bytes that follow an
embedded NUL.

The implementation uses a **single shared sentinel node** per tree
(``tree.sentinel``) for every "no child", "no parent" and "empty tree"
reference, which removes ``None`` checks from the rebalancing code.  The
sentinel is always black and reading its key raises ``SentinelKeyError``.

Typical usage
~~~~~~~~~~~~~
>>> from red_black_tree import RedBlackTree
>>> tree = RedBlackTree(width=4)
>>> for word in (b"pear", b"fig\\0", b"kiwi"):
...     _ = tree.insert(word)
>>> [key for key, _ in tree.traverse_in_order()]
[b'fig\\x00', b'kiwi', b'pear']
>>> tree.delete_where(lambda key: key.startswith(b"k"))
1
>>> tree.search(b"kiwi") is None
True
"""

from __future__ import annotations

import logging
from typing import (
    Callable,
    Generator,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
)

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
#  Node colour constants – using simple booleans is fastest
# ----------------------------------------------------------------------
RED = True
BLACK = False

DEFAULT_KEY_WIDTH = 32

Predicate = Callable[[bytes], bool]


# ----------------------------------------------------------------------
#  Errors
# ----------------------------------------------------------------------
class AllocationError(MemoryError):
    """A new tree node could not be allocated."""


class KeyWidthError(ValueError):
    """A key is not a byte sequence of exactly the tree's width."""


class SentinelKeyError(LookupError):
    """The key of the sentinel node was read."""


# ----------------------------------------------------------------------
#  Nodes
# ----------------------------------------------------------------------
class Node:
    """
    A stored key together with its colour and tree links.

    Node handles are handed out by ``insert``, ``search`` and the navigation
    helpers, and are accepted back by ``delete``.  Once a node has been
    deleted its links are cleared and the handle is no longer usable.
    """

    __slots__ = ("key", "color", "left", "right", "parent")

    def __init__(
        self,
        key: bytes,
        color: bool,
        left: "Node",
        right: "Node",
        parent: "Node",
    ) -> None:
        self.key = key
        self.color = color
        self.left: Optional[Node] = left
        self.right: Optional[Node] = right
        self.parent: Optional[Node] = parent

    def __repr__(self) -> str:
        col = "R" if self.color == RED else "B"
        return f"<{col} {self.key!r}>"


class _Sentinel(Node):
    """The per‑tree terminator: black, self‑linked and keyless."""

    __slots__ = ()

    def __init__(self) -> None:
        self.color = BLACK
        self.left = self.right = self.parent = self

    @property
    def key(self) -> bytes:  # type: ignore[override]
        raise SentinelKeyError("the sentinel node holds no key")

    def __repr__(self) -> str:
        return "<NIL>"


class RedBlackTree:
    """
    An ordered multiset of fixed‑width byte keys kept in a red‑black tree.

    Every public operation leaves the tree satisfying the red‑black
    invariants: the root and the sentinel are black, no red node has a red
    child, and every downward path to the sentinel crosses the same number
    of black nodes.  Equal keys are placed in the right subtree.

    The tree is not thread‑safe; callers sharing one across threads must
    guard it with a single lock.
    """

    __slots__ = ("_root", "_nil", "_width", "_size")

    # ------------------------------------------------------------------
    #   Construction / basic container protocol
    # ------------------------------------------------------------------
    def __init__(
        self,
        width: int = DEFAULT_KEY_WIDTH,
        keys: Optional[Iterable[bytes]] = None,
    ) -> None:
        """
        Create an empty tree for keys of ``width`` bytes, optionally
        inserting every key of ``keys`` (O(n log n) overall).
        """
        if width <= 0:
            raise ValueError(f"key width must be positive, got {width}")
        self._nil: Node = _Sentinel()
        self._root: Node = self._nil
        self._width: int = width
        self._size: int = 0

        if keys is not None:
            for key in keys:
                self.insert(key)

    @property
    def root(self) -> Node:
        """The root node, or the sentinel when the tree is empty."""
        return self._root

    @property
    def sentinel(self) -> Node:
        return self._nil

    @property
    def width(self) -> int:
        return self._width

    def is_nil(self, node: Node) -> bool:
        """True if *node* is this tree's sentinel."""
        return node is self._nil

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._root is not self._nil

    def __contains__(self, key: object) -> bool:
        try:
            return self.search(key) is not None  # type: ignore[arg-type]
        except KeyWidthError:
            return False

    def __iter__(self) -> Iterator[bytes]:
        """Yield keys in ascending order."""
        for key, _ in self.traverse_in_order():
            yield key

    # ------------------------------------------------------------------
    #   Key handling
    # ------------------------------------------------------------------
    def _check_key(self, key: bytes) -> bytes:
        if not isinstance(key, (bytes, bytearray, memoryview)):
            raise KeyWidthError(
                f"keys must be bytes, got {type(key).__name__}"
            )
        key = bytes(key)
        if len(key) != self._width:
            raise KeyWidthError(
                f"keys must be exactly {self._width} bytes, got {len(key)}"
            )
        return key

    # ------------------------------------------------------------------
    #   Search
    # ------------------------------------------------------------------
    def search(self, key: bytes) -> Optional[Node]:
        """Return the first node holding *key*, or ``None`` if absent."""
        key = self._check_key(key)
        cur = self._root
        while cur is not self._nil:
            if key == cur.key:
                return cur
            elif key < cur.key:
                cur = cur.left
            else:
                cur = cur.right
        return None

    # ------------------------------------------------------------------
    #   Minimum / maximum / successor / predecessor
    # ------------------------------------------------------------------
    def minimum(self, node: Optional[Node] = None) -> Node:
        """
        Return the node with the smallest key in the subtree rooted at
        *node* (the whole tree by default); the sentinel if it is empty.
        """
        node = self._root if node is None else node
        if node is self._nil:
            return node
        while node.left is not self._nil:
            node = node.left
        return node

    def maximum(self, node: Optional[Node] = None) -> Node:
        """Mirror of ``minimum``."""
        node = self._root if node is None else node
        if node is self._nil:
            return node
        while node.right is not self._nil:
            node = node.right
        return node

    def successor(self, node: Node) -> Node:
        """Return the next node in key order, or the sentinel after the last."""
        if node is self._nil:
            return node
        if node.right is not self._nil:
            return self.minimum(node.right)

        # Walk up until we leave a right‑child position.
        y = node.parent
        while y is not self._nil and node is y.right:
            node = y
            y = y.parent
        return y

    def predecessor(self, node: Node) -> Node:
        if node is self._nil:
            return node
        if node.left is not self._nil:
            return self.maximum(node.left)

        y = node.parent
        while y is not self._nil and node is y.left:
            node = y
            y = y.parent
        return y

    def traverse_in_order(self) -> Generator[Tuple[bytes, bool], None, None]:
        """
        Yield ``(key, color)`` pairs in ascending key order.

        Each call starts a fresh walk from the minimum; mutating the tree
        while a walk is in progress invalidates it.
        """
        node = self.minimum()
        while node is not self._nil:
            yield node.key, node.color
            node = self.successor(node)

    # ------------------------------------------------------------------
    #   Core BST insertion
    # ------------------------------------------------------------------
    def insert(self, key: bytes) -> Node:
        """
        Insert *key* and return its new node.  Equal keys descend to the
        right, so duplicates keep their insertion order.
        """
        key = self._check_key(key)
        parent = self._nil
        cur = self._root
        go_left = False

        while cur is not self._nil:
            parent = cur
            go_left = key < cur.key
            cur = cur.left if go_left else cur.right

        try:
            new_node = Node(key, RED, self._nil, self._nil, parent)
        except MemoryError as exc:
            raise AllocationError("could not allocate a tree node") from exc

        if parent is self._nil:
            self._root = new_node
        elif go_left:
            parent.left = new_node
        else:
            parent.right = new_node

        self._size += 1
        self._fix_insert(new_node)
        return new_node

    # ------------------------------------------------------------------
    #   Insert fix‑up (preserves red‑black properties)
    # ------------------------------------------------------------------
    def _fix_insert(self, z: Node) -> None:
        """Restore red‑black properties after inserting node `z` (which is RED)."""
        while z.parent.color == RED:
            if z.parent is z.parent.parent.left:
                y = z.parent.parent.right  # uncle
                if y.color == RED:
                    # Case 1 – recolour and move the violation up
                    z.parent.color = BLACK
                    y.color = BLACK
                    z.parent.parent.color = RED
                    z = z.parent.parent
                else:
                    if z is z.parent.right:
                        # Case 2 – inner child, turn it into an outer one
                        z = z.parent
                        self._rotate_left(z)
                    # Case 3 – outer child
                    z.parent.color = BLACK
                    z.parent.parent.color = RED
                    self._rotate_right(z.parent.parent)
            else:
                y = z.parent.parent.left
                if y.color == RED:
                    z.parent.color = BLACK
                    y.color = BLACK
                    z.parent.parent.color = RED
                    z = z.parent.parent
                else:
                    if z is z.parent.left:
                        z = z.parent
                        self._rotate_right(z)
                    z.parent.color = BLACK
                    z.parent.parent.color = RED
                    self._rotate_left(z.parent.parent)
        self._root.color = BLACK

    # ------------------------------------------------------------------
    #   Left / right rotations – helper primitives
    # ------------------------------------------------------------------
    def _rotate_left(self, x: Node) -> None:
        """Left‑rotate the subtree rooted at `x`; colours are untouched."""
        y = x.right
        if y is self._nil:
            raise RuntimeError("rotate_left called on a node with nil right child")
        x.right = y.left
        if y.left is not self._nil:
            y.left.parent = x
        y.parent = x.parent
        if x.parent is self._nil:
            self._root = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y
        y.left = x
        x.parent = y

    def _rotate_right(self, y: Node) -> None:
        """Right‑rotate the subtree rooted at `y`; colours are untouched."""
        x = y.left
        if x is self._nil:
            raise RuntimeError("rotate_right called on a node with nil left child")
        y.left = x.right
        if x.right is not self._nil:
            x.right.parent = y
        x.parent = y.parent
        if y.parent is self._nil:
            self._root = x
        elif y is y.parent.right:
            y.parent.right = x
        else:
            y.parent.left = x
        x.right = y
        y.parent = x

    # ------------------------------------------------------------------
    #   Deletion
    # ------------------------------------------------------------------
    def _owns(self, node: object) -> bool:
        """True if *node* is a live, non‑sentinel node of this tree."""
        if not isinstance(node, Node) or isinstance(node, _Sentinel):
            return False
        cur = node
        while cur.parent is not self._nil:
            if cur.parent is None or isinstance(cur.parent, _Sentinel):
                return False
            cur = cur.parent
        return cur is self._root

    def _transplant(self, u: Node, v: Node) -> None:
        """Replace subtree rooted at `u` with the subtree rooted at `v`."""
        if u.parent is self._nil:
            self._root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        # May set the sentinel's parent; the delete fix‑up relies on it.
        v.parent = u.parent

    def delete(self, z: Node) -> None:
        """
        Remove node `z` from the tree and fix up any colour violations.

        Raises ``ValueError`` if `z` is the sentinel, an already deleted
        node, or a node of another tree.
        """
        if not self._owns(z):
            raise ValueError(f"{z!r} is not a node of this tree")

        y = z  # node spliced out or moved
        y_original_color = y.color
        if z.left is self._nil:
            x = z.right
            self._transplant(z, z.right)
        elif z.right is self._nil:
            x = z.left
            self._transplant(z, z.left)
        else:
            # Two children: promote the in‑order successor `y`.
            y = self.minimum(z.right)
            y_original_color = y.color
            x = y.right
            if y.parent is z:
                x.parent = y
            else:
                self._transplant(y, y.right)
                y.right = z.right
                y.right.parent = y
            self._transplant(z, y)
            y.left = z.left
            y.left.parent = y
            y.color = z.color

        self._size -= 1

        if y_original_color == BLACK:
            self._fix_delete(x)

        self._nil.parent = self._nil
        z.left = z.right = z.parent = None

    def remove(self, key: bytes) -> None:
        """Delete the first node holding *key*; ``KeyError`` if absent."""
        node = self.search(key)
        if node is None:
            raise KeyError(key)
        self.delete(node)

    def discard(self, key: bytes) -> bool:
        """Delete the first node holding *key* if present; report whether it was."""
        node = self.search(key)
        if node is None:
            return False
        self.delete(node)
        return True

    # ------------------------------------------------------------------
    #   Delete fix‑up (preserves red‑black properties)
    # ------------------------------------------------------------------
    def _fix_delete(self, x: Node) -> None:
        """
        Restore red‑black properties after deleting a black node.
        `x` is the node that moved into the removed position (could be the
        sentinel, in which case its parent link marks the position).
        """
        while x is not self._root and x.color == BLACK:
            if x is x.parent.left:
                w = x.parent.right  # sibling
                if w.color == RED:
                    # Case A – sibling is red
                    w.color = BLACK
                    x.parent.color = RED
                    self._rotate_left(x.parent)
                    w = x.parent.right
                if w.left.color == BLACK and w.right.color == BLACK:
                    # Case B – both of sibling's children are black
                    w.color = RED
                    x = x.parent
                else:
                    if w.right.color == BLACK:
                        # Case C – far child black, near child red
                        w.left.color = BLACK
                        w.color = RED
                        self._rotate_right(w)
                        w = x.parent.right
                    # Case D – far child red
                    w.color = x.parent.color
                    x.parent.color = BLACK
                    w.right.color = BLACK
                    self._rotate_left(x.parent)
                    x = self._root
            else:
                w = x.parent.left
                if w.color == RED:
                    w.color = BLACK
                    x.parent.color = RED
                    self._rotate_right(x.parent)
                    w = x.parent.left
                if w.right.color == BLACK and w.left.color == BLACK:
                    w.color = RED
                    x = x.parent
                else:
                    if w.left.color == BLACK:
                        w.right.color = BLACK
                        w.color = RED
                        self._rotate_left(w)
                        w = x.parent.left
                    w.color = x.parent.color
                    x.parent.color = BLACK
                    w.left.color = BLACK
                    self._rotate_right(x.parent)
                    x = self._root
        x.color = BLACK

    # ------------------------------------------------------------------
    #   Bulk predicate deletion
    # ------------------------------------------------------------------
    def delete_where(self, predicate: Predicate, strategy: str = "rescan") -> int:
        """
        Delete every node whose key satisfies ``predicate``, in ascending
        key order, and return how many were removed.

        Strategies
        ----------
        ``"rescan"``
            Walk with a cursor; after each deletion restart from the new
            minimum and recompute the upper bound, since the fix‑up may have
            restructured the tree around the cursor.  Worst case O(n²).
        ``"snapshot"``
            Collect the matching nodes in one in‑order pass, then delete
            them one by one.  O(n log n).
        """
        if strategy == "rescan":
            removed = self._delete_where_rescan(predicate)
        elif strategy == "snapshot":
            removed = self._delete_where_snapshot(predicate)
        else:
            raise ValueError(f"unknown delete_where strategy {strategy!r}")
        logger.debug(
            "delete_where(%s) removed %d node(s), %d left", strategy, removed, self._size
        )
        return removed

    def _delete_where_rescan(self, predicate: Predicate) -> int:
        if self._root is self._nil:
            return 0
        removed = 0
        cursor = self.minimum()
        upper_bound = self.maximum()
        while True:
            if predicate(cursor.key):
                self.delete(cursor)
                removed += 1
                if self._root is self._nil:
                    break
                cursor = self.minimum()
                upper_bound = self.maximum()
            elif cursor is upper_bound:
                break
            else:
                cursor = self.successor(cursor)
        return removed

    def _delete_where_snapshot(self, predicate: Predicate) -> int:
        doomed: List[Node] = []
        node = self.minimum()
        while node is not self._nil:
            if predicate(node.key):
                doomed.append(node)
            node = self.successor(node)
        # Deletion moves nodes, it never copies keys, so handles stay valid.
        for node in doomed:
            self.delete(node)
        return len(doomed)

    # ------------------------------------------------------------------
    #   Validation/checking utilities – useful for debugging
    # ------------------------------------------------------------------
    def black_height(self) -> int:
        """Number of black nodes on any path from the root down to the sentinel."""
        height = 0
        node = self._root
        while node is not self._nil:
            if node.color == BLACK:
                height += 1
            node = node.left
        return height

    def validate(self) -> None:
        """
        Verify that the tree satisfies all red‑black invariants.
        Raises ``AssertionError`` with a descriptive message if something is broken.
        """
        nil = self._nil
        assert nil.color == BLACK, "Sentinel is not black"
        assert nil.left is nil and nil.right is nil, "Sentinel children were relinked"
        assert self._root.color == BLACK, "Root is not black"
        assert self._root.parent is nil, "Root parent is not the sentinel"

        def dfs(
            node: Node, low: Optional[bytes], high: Optional[bytes]
        ) -> Tuple[int, int]:
            """Return ``(black_height, node_count)`` of the subtree at *node*."""
            if node is nil:
                return 0, 0

            assert len(node.key) == self._width, "Key has the wrong width"
            if low is not None:
                assert low <= node.key, "BST property violated (right subtree smaller)"
            if high is not None:
                assert node.key <= high, "BST property violated (left subtree larger)"

            if node.color == RED:
                assert node.left.color == BLACK, "Red node has red left child"
                assert node.right.color == BLACK, "Red node has red right child"

            for child in (node.left, node.right):
                if child is not nil:
                    assert child.parent is node, "Child does not point back to parent"

            left_black, left_count = dfs(node.left, low, node.key)
            right_black, right_count = dfs(node.right, node.key, high)
            assert left_black == right_black, "Black-height mismatch"

            bh = left_black + (1 if node.color == BLACK else 0)
            return bh, left_count + right_count + 1

        _, count = dfs(self._root, None, None)
        assert count == self._size, "Size counter out of sync"

    # ------------------------------------------------------------------
    #   Convenience string representation (for debugging)
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        keys = ", ".join(repr(key) for key in self)
        return f"RedBlackTree(width={self._width}, keys=[{keys}])"
