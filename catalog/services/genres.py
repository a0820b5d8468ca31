# catalog/services/genres.py
from __future__ import annotations

import logging
from uuid import UUID

from catalog.domain.dtos import DeletionView, GenreDetail
from catalog.domain.errors import ConflictError, NotFoundError
from catalog.domain.models import Genre
from catalog.repo.memory import DocumentStore
from catalog.services.deletion import GENRE_GUARD, ReferenceGuardedDeletion
from catalog.services.validation import GENRE_RULES, require_valid

log = logging.getLogger("catalog")


class GenreService:
    def __init__(self, repo: DocumentStore):
        self.repo = repo
        self.deletion = ReferenceGuardedDeletion(repo, GENRE_GUARD)

    def _ensure_unique(self, name: str, exclude: UUID | None = None) -> None:
        for g in self.repo.find_many("genres", {"name": {"ieq": name}}):
            if g.id != exclude:
                raise ConflictError(f"Genre '{g.name}' already exists ({g.id})")

    # ---- CREATE ----
    def create(self, raw: dict) -> Genre:
        data = require_valid(raw, GENRE_RULES)
        with self.repo.write_locked():
            self._ensure_unique(data["name"])
            genre = self.repo.insert("genres", Genre(name=data["name"]))
        log.info("[genre] created %s (%s)", genre.id, genre.name)
        return genre

    # ---- READ ----
    def list(self) -> list[Genre]:
        with self.repo.read_locked():
            return self.repo.find_many("genres", sort="name")

    def get(self, genre_id: UUID) -> Genre:
        genre = self.repo.find_by_id("genres", genre_id)
        if genre is None:
            raise NotFoundError("Genre")
        return genre

    def detail(self, genre_id: UUID) -> GenreDetail:
        with self.repo.read_locked():
            genre = self.get(genre_id)
            books = self.repo.find_many(
                "books", {"genre": {"refs": genre_id}}, projection=["title", "summary"], sort="title",
            )
        return GenreDetail(genre=genre, books=books)

    # ---- UPDATE ----
    def update(self, genre_id: UUID, raw: dict) -> Genre:
        data = require_valid(raw, GENRE_RULES)
        with self.repo.write_locked():
            self.get(genre_id)
            self._ensure_unique(data["name"], exclude=genre_id)
            return self.repo.replace("genres", Genre(id=genre_id, name=data["name"]))

    # ---- DELETE ----
    def prepare_delete(self, genre_id: UUID) -> DeletionView:
        return self.deletion.prepare(genre_id)

    def delete(self, genre_id: UUID) -> None:
        self.deletion.commit(genre_id)
