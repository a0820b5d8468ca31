# catalog/services/instances.py
from __future__ import annotations

import logging
from datetime import date
from uuid import UUID

from catalog.domain.dtos import BookInstanceDetail, BookInstanceListItem, DeletionView
from catalog.domain.errors import NotFoundError, ValidationFailedError
from catalog.domain.models import BookInstance
from catalog.repo.memory import DocumentStore
from catalog.services.validation import INSTANCE_RULES, require_valid

log = logging.getLogger("catalog")


class BookInstanceService:
    """Copies of a book. Nothing references an instance, so deletes are direct."""
    def __init__(self, repo: DocumentStore):
        self.repo = repo

    def _build(self, data: dict, instance_id: UUID | None = None) -> BookInstance:
        if self.repo.find_by_id("books", data["book"]) is None:
            raise ValidationFailedError({"book": ["Book not found."]}, {
                **data,
                "book": str(data["book"]),
                "due_back": str(data["due_back"]) if data["due_back"] else None,
            })
        fields = {k: v for k, v in data.items() if v is not None}
        fields.setdefault("due_back", date.today())
        if instance_id is not None:
            fields["id"] = instance_id
        return BookInstance(**fields)

    def create(self, raw: dict) -> BookInstance:
        data = require_valid(raw, INSTANCE_RULES)
        with self.repo.write_locked():
            inst = self.repo.insert("instances", self._build(data))
        log.info("[instance] created %s for book %s", inst.id, inst.book)
        return inst

    def list(self) -> list[BookInstanceListItem]:
        with self.repo.read_locked():
            items = []
            for i in self.repo.find_many("instances"):
                book = self.repo.find_by_id("books", i.book)
                items.append(BookInstanceListItem(
                    id=i.id,
                    book=i.book,
                    book_title=book.title if book else None,
                    imprint=i.imprint,
                    status=i.status.value,
                    due_back=i.due_back.isoformat(),
                ))
            return items

    def get(self, instance_id: UUID) -> BookInstance:
        inst = self.repo.find_by_id("instances", instance_id)
        if inst is None:
            raise NotFoundError("BookInstance")
        return inst

    def detail(self, instance_id: UUID) -> BookInstanceDetail:
        with self.repo.read_locked():
            inst = self.get(instance_id)
            return BookInstanceDetail(instance=inst, book=self.repo.find_by_id("books", inst.book))

    def update(self, instance_id: UUID, raw: dict) -> BookInstance:
        data = require_valid(raw, INSTANCE_RULES)
        with self.repo.write_locked():
            self.get(instance_id)
            return self.repo.replace("instances", self._build(data, instance_id))

    def prepare_delete(self, instance_id: UUID) -> DeletionView:
        with self.repo.read_locked():
            inst = self.get(instance_id)
        return DeletionView(target=inst.model_dump(mode="json"))

    def delete(self, instance_id: UUID) -> None:
        with self.repo.write_locked():
            self.repo.delete_by_id("instances", instance_id)
        log.info("[instance] %s deleted", instance_id)
