"""Fuzz harness for insert / recompute batches against a from-scratch rebuild."""
from __future__ import annotations
import atheris
import sys

with atheris.instrument_imports():
    from hashtree.errors import TreeFull
    from hashtree.hashing import sha256_hex
    from hashtree.tree import HashTree


def _rebuild_root(tree: HashTree) -> str:
    # Level-by-level reference computation over the effective leaf hashes
    level = [tree.get_value(p) for p in range(tree.capacity)]
    while len(level) > 1:
        level = [sha256_hex(f"{level[i]} | {level[i + 1]}") for i in range(0, len(level), 2)]
    return level[0]


def TestOneInput(data: bytes):  # noqa: N802
    if len(data) < 2:
        return
    fdp = atheris.FuzzedDataProvider(data)
    tree = HashTree.from_height(sha256_hex, fdp.ConsumeIntInRange(1, 6))
    # Random batches: each batch inserts a few leaves, then recomputes
    for _ in range(fdp.ConsumeIntInRange(1, 8)):
        for _ in range(fdp.ConsumeIntInRange(0, 5)):
            try:
                tree.insert(fdp.ConsumeUnicodeNoSurrogates(16))
            except TreeFull:
                if not tree.is_full:
                    raise RuntimeError("TreeFull raised before capacity")
        tree.update_internal_nodes()
        if tree.get_root() != _rebuild_root(tree):
            raise RuntimeError("incremental root diverged from rebuild")
    if tree.update_internal_nodes() != 0:
        raise RuntimeError("recompute was not idempotent")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
