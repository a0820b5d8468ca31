# catalog/services/books.py
from __future__ import annotations

import logging
from uuid import UUID

from catalog.domain.dtos import BookDetail, BookListItem, DeletionView
from catalog.domain.errors import NotFoundError, ValidationFailedError
from catalog.domain.models import Book
from catalog.repo.memory import DocumentStore
from catalog.services.deletion import BOOK_GUARD, ReferenceGuardedDeletion
from catalog.services.validation import BOOK_RULES, require_valid

log = logging.getLogger("catalog")


class BookService:
    """
    Book CRUD.
    NOTE:
      - author/genre ids are checked against the store under the same write
        lock as the insert/replace, so a book can never point at an author or
        genre deleted concurrently.
      - deleting a book is refused while copies (book instances) exist.
    """
    def __init__(self, repo: DocumentStore):
        self.repo = repo
        self.deletion = ReferenceGuardedDeletion(repo, BOOK_GUARD)

    def _check_references(self, data: dict) -> None:
        errors: dict[str, list[str]] = {}
        if self.repo.find_by_id("authors", data["author"]) is None:
            errors["author"] = ["Author not found."]
        missing = [str(g) for g in data["genre"] if self.repo.find_by_id("genres", g) is None]
        if missing:
            errors["genre"] = [f"Genre not found: {g}" for g in missing]
        if errors:
            raise ValidationFailedError(errors, {
                **data,
                "author": str(data["author"]),
                "genre": [str(g) for g in data["genre"]],
            })

    # ---- CREATE ----
    def create(self, raw: dict) -> Book:
        data = require_valid(raw, BOOK_RULES)
        data["genre"] = list(dict.fromkeys(data["genre"]))
        with self.repo.write_locked():
            self._check_references(data)
            book = self.repo.insert("books", Book(**data))
        log.info("[book] created %s (%s)", book.id, book.title)
        return book

    # ---- READ ----
    def list(self) -> list[BookListItem]:
        with self.repo.read_locked():
            items = []
            for b in self.repo.find_many("books", sort="title"):
                author = self.repo.find_by_id("authors", b.author)
                items.append(BookListItem(id=b.id, title=b.title, author_name=author.name if author else None))
            return items

    def get(self, book_id: UUID) -> Book:
        book = self.repo.find_by_id("books", book_id)
        if book is None:
            raise NotFoundError("Book")
        return book

    def detail(self, book_id: UUID) -> BookDetail:
        with self.repo.read_locked():
            book = self.get(book_id)
            genres = [g for g in (self.repo.find_by_id("genres", gid) for gid in book.genre) if g is not None]
            return BookDetail(
                book=book,
                author=self.repo.find_by_id("authors", book.author),
                genres=genres,
                instances=self.repo.find_many("instances", {"book": {"refs": book_id}}),
            )

    # ---- UPDATE ----
    def update(self, book_id: UUID, raw: dict) -> Book:
        data = require_valid(raw, BOOK_RULES)
        data["genre"] = list(dict.fromkeys(data["genre"]))
        with self.repo.write_locked():
            self.get(book_id)
            self._check_references(data)
            return self.repo.replace("books", Book(id=book_id, **data))

    # ---- DELETE ----
    def prepare_delete(self, book_id: UUID) -> DeletionView:
        return self.deletion.prepare(book_id)

    def delete(self, book_id: UUID) -> None:
        self.deletion.commit(book_id)
