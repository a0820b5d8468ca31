# catalog/api/admin.py
from __future__ import annotations
from fastapi import APIRouter, Depends
from catalog.dependencies import get_repo, get_store, snapshot
from catalog.persistence.store import DiskStore
from catalog.repo.memory import DocumentStore

router = APIRouter(prefix="/v1/admin", tags=["admin"])

@router.post("/snapshot")
def force_snapshot(repo: DocumentStore = Depends(get_repo), store: DiskStore = Depends(get_store)):
    snapshot(repo, store)
    return {"status": "ok", "snapshot_bytes": store.stats()["snapshot_bytes"]}

@router.get("/storage")
def storage_stats(store: DiskStore = Depends(get_store)):
    return store.stats()
