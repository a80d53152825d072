from __future__ import annotations
import datetime
import logging
from typing import Optional
from fastapi import FastAPI, HTTPException, Request, status

from .errors import OutOfBounds, TreeFull, UncomputedInternalNode
from .hashing import get_hash_function
from .models import InsertPayload, InsertResult, LeafHash, Opening, TreeInfo
from .settings import settings
from .tree import HashTree

logger = logging.getLogger(__name__)


def _tree_from_settings() -> HashTree:
    return HashTree.from_height(
        get_hash_function(settings.hash_function), settings.height
    )


def create_app(tree: Optional[HashTree] = None) -> FastAPI:
    """Build the service around one in-memory tree.

    Handlers are async and never await while touching the tree, so the event
    loop serializes every insert and recompute.
    """
    app = FastAPI(title="hashtree")
    app.state.tree = tree if tree is not None else _tree_from_settings()

    def _tree(request: Request) -> HashTree:
        return request.app.state.tree

    @app.get("/healthz")
    async def healthz():
        return {"ok": True, "ts": datetime.datetime.utcnow().isoformat()}

    @app.get("/tree", response_model=TreeInfo)
    async def tree_info(request: Request):
        t = _tree(request)
        try:
            root = t.get_root()
        except UncomputedInternalNode:
            root = None
        return TreeInfo(height=t.height, capacity=t.capacity, length=t.length, root=root)

    @app.post("/tree/leaves", response_model=InsertResult)
    async def insert_leaf(request: Request):
        try:
            raw = await request.json()
        except Exception:
            raise HTTPException(status_code=400, detail="invalid JSON body")
        try:
            payload = InsertPayload.model_validate(raw)
        except Exception:
            raise HTTPException(status_code=400, detail="payload schema invalid")

        t = _tree(request)
        try:
            position = t.insert(payload.value)
        except TreeFull as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
        logger.info("inserted value=%r at position=%d", payload.value, position)
        return InsertResult(position=position, length=t.length, hash=t.get_value(position))

    @app.post("/tree/recompute")
    async def recompute(request: Request):
        t = _tree(request)
        updated = t.update_internal_nodes()
        return {"updated": updated, "root": t.get_root()}

    @app.get("/tree/root")
    async def root(request: Request):
        try:
            return {"root": _tree(request).get_root()}
        except UncomputedInternalNode as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    @app.get("/tree/leaves/{position}", response_model=LeafHash)
    async def leaf_value(position: int, request: Request):
        try:
            h = _tree(request).get_value(position)
        except OutOfBounds as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        return LeafHash(position=position, hash=h)

    @app.get("/tree/leaves/{position}/opening", response_model=Opening)
    async def leaf_opening(position: int, request: Request):
        try:
            return _tree(request).get_opening(position)
        except OutOfBounds as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        except UncomputedInternalNode as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return app


app = create_app()
