from __future__ import annotations
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from threading import RLock, Condition
from typing import Any, Dict, Iterator
from uuid import UUID

from pydantic import BaseModel

from catalog.domain.errors import NotFoundError
from catalog.domain.models import COLLECTIONS
from catalog.persistence.store import DiskStore
from catalog.services.filters import match_obj

log = logging.getLogger("catalog")


class RWLock:
    def __init__(self):
        self._lock = RLock()
        self._readers = 0
        self._cond = Condition(self._lock)

    def acquire_read(self):
        with self._lock:
            self._readers += 1

    def release_read(self):
        with self._lock:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        self._lock.acquire()
        while self._readers > 0:
            self._cond.wait()

    def release_write(self):
        self._lock.release()


def _utc_ts() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class DocumentStore:
    """
    In-memory document collections (authors, genres, books, instances).

    Reads and writes do not lock on their own; callers that need a
    consistent view across several calls hold read_locked()/write_locked()
    around the whole sequence. Every mutation is journaled to the
    DiskStore WAL first and then applied through apply_wal_entry, so
    replay and live writes share one code path.
    """
    def __init__(self, journal: DiskStore | None = None):
        self.collections: Dict[str, Dict[UUID, BaseModel]] = {name: {} for name in COLLECTIONS}
        self.journal = journal
        self.lock = RWLock()

    # ---------- locking ----------
    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.lock.acquire_read()
        try:
            yield
        finally:
            self.lock.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.lock.acquire_write()
        try:
            yield
        finally:
            self.lock.release_write()

    def _collection(self, name: str) -> Dict[UUID, BaseModel]:
        try:
            return self.collections[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None

    # ---------- reads ----------
    def find_by_id(self, collection: str, entity_id: UUID) -> BaseModel | None:
        return self._collection(collection).get(entity_id)

    def find_many(
        self,
        collection: str,
        spec: dict[str, Any] | None = None,
        projection: list[str] | None = None,
        sort: str | None = None,
    ) -> list:
        hits = [e for e in self._collection(collection).values() if match_obj(e, spec)]
        if sort:
            hits.sort(key=lambda e: (getattr(e, sort) is None, getattr(e, sort)))
        if projection is not None:
            return [e.model_dump(mode="json", include={"id", *projection}) for e in hits]
        return hits

    def count(self, collection: str, spec: dict[str, Any] | None = None) -> int:
        return sum(1 for e in self._collection(collection).values() if match_obj(e, spec))

    # ---------- writes ----------
    def _commit(self, entry: dict[str, Any]) -> None:
        if self.journal is not None:
            self.journal.append_wal(entry)
        self.apply_wal_entry(entry)

    def insert(self, collection: str, entity: BaseModel) -> BaseModel:
        self._collection(collection)
        self._commit({
            "ts": _utc_ts(),
            "op": f"{collection}.create",
            "data": entity.model_dump(mode="json"),
        })
        return self.collections[collection][entity.id]

    def replace(self, collection: str, entity: BaseModel) -> BaseModel:
        if entity.id not in self._collection(collection):
            raise NotFoundError(COLLECTIONS[collection].__name__)
        self._commit({
            "ts": _utc_ts(),
            "op": f"{collection}.update",
            "id": str(entity.id),
            "data": entity.model_dump(mode="json"),
        })
        return self.collections[collection][entity.id]

    def delete_by_id(self, collection: str, entity_id: UUID) -> None:
        if entity_id not in self._collection(collection):
            raise NotFoundError(COLLECTIONS[collection].__name__)
        self._commit({
            "ts": _utc_ts(),
            "op": f"{collection}.delete",
            "id": str(entity_id),
        })

    # ---------- (A) serialization ----------
    def dump_json(self) -> dict[str, Any]:
        """Serialize every collection to a JSON-friendly dict."""
        image: dict[str, Any] = {"schema_version": 1}
        for name, items in self.collections.items():
            image[name] = {str(k): v.model_dump(mode="json") for k, v in items.items()}
        return image

    # ---------- (B) hydrate from snapshot ----------
    def hydrate(self, image: dict[str, Any]) -> None:
        """Replace in-memory state with a snapshot image."""
        for items in self.collections.values():
            items.clear()

        if not image:
            return

        for name, model in COLLECTIONS.items():
            for sid, raw in (image.get(name) or {}).items():
                self.collections[name][UUID(sid)] = model(**raw)

    # ---------- (C) WAL replay ----------
    def apply_wal_entry(self, entry: dict[str, Any]) -> None:
        """Apply one WAL op directly to in-memory structures (no WAL here!)."""
        collection, _, action = (entry.get("op") or "").partition(".")
        model = COLLECTIONS.get(collection)
        if model is None:
            log.warning("[persistence] skipping WAL entry with unknown op %r", entry.get("op"))
            return
        items = self.collections[collection]

        if action == "create":
            entity = model(**entry["data"])
            items[entity.id] = entity
        elif action == "update":
            eid = UUID(entry["id"])
            cur = items[eid]
            patched = {**cur.model_dump(), **entry["data"]}
            items[eid] = model(**patched)
        elif action == "delete":
            items.pop(UUID(entry["id"]), None)
        else:
            log.warning("[persistence] skipping WAL entry with unknown op %r", entry.get("op"))
