from __future__ import annotations

from catalog.domain.dtos import CatalogSummary
from catalog.repo.memory import DocumentStore


class CatalogService:
    def __init__(self, repo: DocumentStore):
        self.repo = repo

    def summary(self) -> CatalogSummary:
        with self.repo.read_locked():
            return CatalogSummary(
                book_count=self.repo.count("books"),
                book_instance_count=self.repo.count("instances"),
                book_instance_available_count=self.repo.count("instances", {"status": {"eq": "Available"}}),
                author_count=self.repo.count("authors"),
                genre_count=self.repo.count("genres"),
            )
