from __future__ import annotations
import hashlib
from typing import Callable, Dict

HashFunction = Callable[[str], str]


def sha256_hex(value: str) -> str:
    """Hex SHA-256 of the UTF-8 encoded value."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def dummy_hash(value: str) -> str:
    """Readable stand-in hash, handy for walkthroughs and debugging."""
    return f"Hash of ({value})"


HASH_FUNCTIONS: Dict[str, HashFunction] = {
    "sha256": sha256_hex,
    "dummy": dummy_hash,
}


def get_hash_function(name: str) -> HashFunction:
    try:
        return HASH_FUNCTIONS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(HASH_FUNCTIONS))
        raise ValueError(f"unknown hash function {name!r}; choose one of: {known}")
