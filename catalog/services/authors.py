# catalog/services/authors.py
from __future__ import annotations

import logging
from uuid import UUID

from catalog.domain.dtos import AuthorDetail, DeletionView
from catalog.domain.errors import NotFoundError
from catalog.domain.models import Author
from catalog.repo.memory import DocumentStore
from catalog.services.deletion import AUTHOR_GUARD, ReferenceGuardedDeletion
from catalog.services.validation import AUTHOR_RULES, require_valid

log = logging.getLogger("catalog")


class AuthorService:
    """Author CRUD. Deleting an author is refused while any book names them."""
    def __init__(self, repo: DocumentStore):
        self.repo = repo
        self.deletion = ReferenceGuardedDeletion(repo, AUTHOR_GUARD)

    def create(self, raw: dict) -> Author:
        author = Author(**require_valid(raw, AUTHOR_RULES))
        with self.repo.write_locked():
            author = self.repo.insert("authors", author)
        log.info("[author] created %s (%s)", author.id, author.name)
        return author

    def list(self) -> list[Author]:
        with self.repo.read_locked():
            return self.repo.find_many("authors", sort="family_name")

    def get(self, author_id: UUID) -> Author:
        author = self.repo.find_by_id("authors", author_id)
        if author is None:
            raise NotFoundError("Author")
        return author

    def detail(self, author_id: UUID) -> AuthorDetail:
        with self.repo.read_locked():
            author = self.get(author_id)
            books = self.repo.find_many(
                "books", {"author": {"refs": author_id}}, projection=["title", "summary"], sort="title",
            )
        return AuthorDetail(author=author, books=books)

    def update(self, author_id: UUID, raw: dict) -> Author:
        data = require_valid(raw, AUTHOR_RULES)
        with self.repo.write_locked():
            self.get(author_id)
            return self.repo.replace("authors", Author(id=author_id, **data))

    def prepare_delete(self, author_id: UUID) -> DeletionView:
        return self.deletion.prepare(author_id)

    def delete(self, author_id: UUID) -> None:
        self.deletion.commit(author_id)
