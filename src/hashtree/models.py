from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Opening(BaseModel):
    """Single-level opening for a leaf.

    `partner_hash` is the leaf's sibling and `root_child_hash` is the
    ancestor of the leaf sitting directly under the root. Together with the
    leaf hash this authenticates the leaf against the root only for trees of
    height 2 or less; deeper trees need the intermediate siblings as well.
    """

    model_config = ConfigDict(frozen=True)

    partner_hash: str
    root_child_hash: str


class InsertPayload(BaseModel):
    """Inbound leaf value (strict: no coercion of numbers to strings)."""

    model_config = ConfigDict(strict=True)

    value: str


class InsertResult(BaseModel):
    position: int
    length: int
    hash: str


class LeafHash(BaseModel):
    position: int
    hash: str


class TreeInfo(BaseModel):
    height: int
    capacity: int
    length: int
    # None until internal nodes are recomputed after the last insert
    root: Optional[str] = Field(default=None)
