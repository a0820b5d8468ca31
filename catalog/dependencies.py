# catalog/dependencies.py
from __future__ import annotations
import logging

from fastapi import Request

from catalog.persistence.store import DiskStore
from catalog.repo.memory import DocumentStore

log = logging.getLogger("catalog")


def get_repo(request: Request) -> DocumentStore:
    return request.app.state.repo

def get_store(request: Request) -> DiskStore:
    return request.app.state.store


def bootstrap_from_disk(repo: DocumentStore, store: DiskStore) -> None:
    loaded = store.load()
    snap = loaded.get("snapshot")
    wal = loaded.get("wal", [])
    with repo.write_locked():
        if snap:
            log.info("[persistence] loading snapshot with %d books", len(snap.get("books", {})))
            repo.hydrate(snap)
        if wal:
            log.info("[persistence] replaying WAL entries: %d", len(wal))
            for e in wal:
                repo.apply_wal_entry(e)


def snapshot(repo: DocumentStore, store: DiskStore) -> None:
    # read lock keeps writers (and their WAL appends) out until the WAL is truncated
    with repo.read_locked():
        store.write_snapshot(repo.dump_json())
