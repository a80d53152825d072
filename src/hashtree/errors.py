from __future__ import annotations


class HashTreeError(Exception):
    """Base class for misuse of a HashTree (bad height, overflow, stale reads)."""


class InvalidHeight(HashTreeError, ValueError):
    pass


class TreeFull(HashTreeError):
    pass


class OutOfBounds(HashTreeError, IndexError):
    pass


class UncomputedInternalNode(HashTreeError, RuntimeError):
    """An internal node was read before update_internal_nodes() ran."""
