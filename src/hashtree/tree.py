"""Fixed-height, array-backed Merkle tree.

Nodes live in one flat list using 1-based breadth-first addressing: slot 0 is
unused, slot 1 is the root and node ``i`` has children ``2i`` and ``2i + 1``.
Leaves occupy ``[2**height, 2**(height + 1))``.

Updates are two-phase. ``insert`` writes the leaf hash and clears every
ancestor of that leaf; ``update_internal_nodes`` re-hashes only the cleared
nodes. Reading an internal node between the two phases raises
``UncomputedInternalNode``.
"""
from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

from .errors import InvalidHeight, OutOfBounds, TreeFull, UncomputedInternalNode
from .hashing import HashFunction
from .models import Opening

logger = logging.getLogger(__name__)

MAX_HEIGHT = 10
NODE_SEPARATOR = " | "
EMPTY_LEAF = "empty node"


class HashTree:
    def __init__(self, hash_function: HashFunction, height: int):
        if isinstance(height, bool) or not isinstance(height, int):
            raise InvalidHeight(f"height must be an integer, got {height!r}")
        if height < 1 or height > MAX_HEIGHT:
            raise InvalidHeight(
                f"height must be between 1 and {MAX_HEIGHT}, got {height}"
            )
        self._hash = hash_function
        self._height = height
        self._length = 0
        self._first_leaf_index = 2**height
        self._slots: List[Optional[str]] = [None] * (2 ** (height + 1))

    @classmethod
    def from_height(cls, hash_function: HashFunction, height: int) -> "HashTree":
        return cls(hash_function, height)

    @property
    def height(self) -> int:
        return self._height

    @property
    def length(self) -> int:
        return self._length

    def __len__(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return 2**self._height

    @property
    def first_leaf_index(self) -> int:
        return self._first_leaf_index

    @property
    def is_full(self) -> bool:
        return self._length >= self.capacity

    @property
    def hash_function(self) -> HashFunction:
        return self._hash

    @property
    def slots(self) -> Tuple[Optional[str], ...]:
        """Snapshot of the node slots, index 0 included."""
        return tuple(self._slots)

    @property
    def empty_hash(self) -> str:
        return self._hash(EMPTY_LEAF)

    def insert(self, value: str) -> int:
        """Append a leaf and mark its ancestors stale.

        Returns the 0-based position of the new leaf. Raises TreeFull, without
        touching any slot, once every leaf is taken.
        """
        if not isinstance(value, str):
            raise TypeError(f"leaf values must be str, got {type(value).__name__}")
        if self.is_full:
            raise TreeFull(
                f"tree of height {self._height} already holds {self.capacity} leaves"
            )

        position = self._length
        leaf_index = self._first_leaf_index + position
        self._slots[leaf_index] = self._hash(value)
        self._length += 1

        # parent chain up to and including the root: exactly `height` nodes
        i = leaf_index // 2
        for _ in range(self._height):
            self._slots[i] = None
            i //= 2

        logger.debug("inserted leaf position=%d index=%d", position, leaf_index)
        return position

    def extend(self, values: Iterable[str]) -> List[int]:
        """Insert values in order; stops with TreeFull at the first overflow."""
        return [self.insert(v) for v in values]

    def update_internal_nodes(self) -> int:
        """Re-hash every stale internal node, deepest first.

        Nodes that are already set are left alone, so a second call with no
        insert in between changes nothing. Returns the number of nodes hashed.
        """
        updated = 0
        for i in range(self._first_leaf_index - 1, 0, -1):
            if self._slots[i] is None:
                left = self.get_node_hash(2 * i)
                right = self.get_node_hash(2 * i + 1)
                self._slots[i] = self._hash(left + NODE_SEPARATOR + right)
                updated += 1
        logger.debug("recomputed %d internal nodes", updated)
        return updated

    def get_root(self) -> str:
        return self.get_node_hash(1)

    def get_value(self, position: int) -> str:
        """Hash committed at leaf `position` (0-based).

        Positions that are in range but not yet filled return the empty-leaf
        hash.
        """
        return self.get_node_hash(self._leaf_index(position))

    def get_opening(self, position: int) -> Opening:
        index = self._leaf_index(position)
        partner_index = index + 1 if index % 2 == 0 else index - 1

        root_child_index = index
        for _ in range(self._height - 1):
            root_child_index //= 2

        return Opening(
            partner_hash=self.get_node_hash(partner_index),
            root_child_hash=self.get_node_hash(root_child_index),
        )

    def get_node_hash(self, index: int) -> str:
        """Effective hash of the node at raw slot `index`."""
        if index < 1 or index >= len(self._slots):
            raise OutOfBounds(f"node index {index} is out of bounds")
        h = self._slots[index]
        if h is not None:
            return h
        if index >= self._first_leaf_index:
            return self.empty_hash
        raise UncomputedInternalNode(
            f"internal node {index} is stale; call update_internal_nodes() first"
        )

    def _leaf_index(self, position: int) -> int:
        if isinstance(position, bool) or not isinstance(position, int):
            raise OutOfBounds(f"leaf position must be an integer, got {position!r}")
        if position < 0:
            raise OutOfBounds(f"leaf position {position} is out of bounds")
        index = self._first_leaf_index + position
        if index >= len(self._slots):
            raise OutOfBounds(f"leaf position {position} is out of bounds")
        return index

    def __repr__(self) -> str:
        return f"HashTree(height={self._height}, length={self._length})"
