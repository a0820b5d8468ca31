from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from pydantic import BaseModel

from catalog.domain.dtos import Blocker, DeletionView
from catalog.domain.errors import BlockedError, NotFoundError
from catalog.repo.memory import DocumentStore

log = logging.getLogger("catalog")


@dataclass(frozen=True)
class ReferenceGuard:
    """A target collection, the collection whose reference field may point at it,
    and (optionally) the records to show alongside each referencer."""
    target: str
    label: str
    referencer: str
    field: str
    dependents: str | None = None
    dependents_field: str | None = None


GENRE_GUARD = ReferenceGuard("genres", "Genre", "books", "genre", "instances", "book")
AUTHOR_GUARD = ReferenceGuard("authors", "Author", "books", "author", "instances", "book")
BOOK_GUARD = ReferenceGuard("books", "Book", "instances", "book")


class ReferenceGuardedDeletion:
    """
    Two-step delete for records other records point at.

      prepare(id) -> read-only view: the target, every referencer still
                     holding its id (with their own dependents for display),
                     and whether deletion is blocked.
      commit(id)  -> re-reads target and referencers under the write lock and
                     deletes only if none remain; otherwise raises BlockedError.

    commit never trusts an earlier prepare: a referencer may have been created
    in between.
    """
    def __init__(self, repo: DocumentStore, guard: ReferenceGuard):
        self.repo = repo
        self.guard = guard

    def _referencers(self, target_id: UUID) -> list[BaseModel]:
        g = self.guard
        return self.repo.find_many(g.referencer, {g.field: {"refs": target_id}})

    def _dependents_of(self, referencer_id: UUID) -> list[dict]:
        g = self.guard
        if not g.dependents:
            return []
        found = self.repo.find_many(g.dependents, {g.dependents_field: {"refs": referencer_id}})
        return [d.model_dump(mode="json") for d in found]

    def _load_target(self, target_id: UUID) -> BaseModel:
        target = self.repo.find_by_id(self.guard.target, target_id)
        if target is None:
            raise NotFoundError(self.guard.label)
        return target

    def prepare(self, target_id: UUID) -> DeletionView:
        with self.repo.read_locked():
            target = self._load_target(target_id)
            referencers = self._referencers(target_id)
            blockers = [
                Blocker(referencer=r.model_dump(mode="json"), dependents=self._dependents_of(r.id))
                for r in referencers
            ]
        return DeletionView(
            target=target.model_dump(mode="json"),
            blockers=blockers,
            blocked=len(blockers) > 0,
        )

    def commit(self, target_id: UUID) -> None:
        with self.repo.write_locked():
            self._load_target(target_id)
            referencers = self._referencers(target_id)
            if referencers:
                log.warning(
                    "[delete] refused %s %s: %d referencing %s",
                    self.guard.label, target_id, len(referencers), self.guard.referencer,
                )
                raise BlockedError(self.guard.label, [r.model_dump(mode="json") for r in referencers])
            self.repo.delete_by_id(self.guard.target, target_id)
        log.info("[delete] %s %s deleted", self.guard.label, target_id)
