from pydantic import BaseModel, Field
from typing import Any
from uuid import UUID

from catalog.domain.models import Author, Book, BookInstance, Genre

# ---- Forms (raw, unsanitized input; see services/validation.py) ----

class AuthorForm(BaseModel):
    first_name: str | None = None
    family_name: str | None = None
    date_of_birth: str | None = None
    date_of_death: str | None = None

class GenreForm(BaseModel):
    name: str | None = None

class BookForm(BaseModel):
    title: str | None = None
    author: str | None = None
    summary: str | None = None
    isbn: str | None = None
    # a single id is accepted and treated as a one-element list
    genre: list[str] | str | None = None

class BookInstanceForm(BaseModel):
    book: str | None = None
    imprint: str | None = None
    status: str | None = None
    due_back: str | None = None

# ---- Views ----

class CatalogSummary(BaseModel):
    book_count: int
    book_instance_count: int
    book_instance_available_count: int
    author_count: int
    genre_count: int

class BookListItem(BaseModel):
    id: UUID
    title: str
    author_name: str | None = None

class BookInstanceListItem(BaseModel):
    id: UUID
    book: UUID
    book_title: str | None = None
    imprint: str
    status: str
    due_back: str

class AuthorDetail(BaseModel):
    author: Author
    books: list[dict[str, Any]]

class GenreDetail(BaseModel):
    genre: Genre
    books: list[dict[str, Any]]

class BookDetail(BaseModel):
    book: Book
    author: Author | None = None
    genres: list[Genre] = Field(default_factory=list)
    instances: list[BookInstance] = Field(default_factory=list)

class BookInstanceDetail(BaseModel):
    instance: BookInstance
    book: Book | None = None

class Blocker(BaseModel):
    referencer: dict[str, Any]
    dependents: list[dict[str, Any]] = Field(default_factory=list)

class DeletionView(BaseModel):
    target: dict[str, Any]
    blockers: list[Blocker] = Field(default_factory=list)
    blocked: bool = False
