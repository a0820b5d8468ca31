# catalog_client/models.py
from __future__ import annotations
from typing import Any
from pydantic import BaseModel, Field

# -------- Authors --------
class Author(BaseModel):
    id: str
    first_name: str
    family_name: str
    date_of_birth: str | None = None
    date_of_death: str | None = None
    name: str = ""
    lifespan: str = ""

class AuthorForm(BaseModel):
    first_name: str
    family_name: str
    date_of_birth: str | None = None
    date_of_death: str | None = None

class AuthorDetail(BaseModel):
    author: Author
    books: list[dict[str, Any]] = Field(default_factory=list)

# -------- Genres --------
class Genre(BaseModel):
    id: str
    name: str

class GenreForm(BaseModel):
    name: str

class GenreDetail(BaseModel):
    genre: Genre
    books: list[dict[str, Any]] = Field(default_factory=list)

# -------- Books --------
class Book(BaseModel):
    id: str
    title: str
    author: str
    summary: str
    isbn: str
    genre: list[str] = Field(default_factory=list)

class BookForm(BaseModel):
    title: str
    author: str
    summary: str
    isbn: str
    genre: list[str] = Field(default_factory=list)

class BookListItem(BaseModel):
    id: str
    title: str
    author_name: str | None = None

# -------- Book instances --------
class BookInstance(BaseModel):
    id: str
    book: str
    imprint: str
    status: str
    due_back: str

class BookInstanceForm(BaseModel):
    book: str
    imprint: str
    status: str | None = None
    due_back: str | None = None

class BookInstanceListItem(BaseModel):
    id: str
    book: str
    book_title: str | None = None
    imprint: str
    status: str
    due_back: str

class BookDetail(BaseModel):
    book: Book
    author: Author | None = None
    genres: list[Genre] = Field(default_factory=list)
    instances: list[BookInstance] = Field(default_factory=list)

class BookInstanceDetail(BaseModel):
    instance: BookInstance
    book: Book | None = None

# -------- Catalog / deletion --------
class CatalogSummary(BaseModel):
    book_count: int
    book_instance_count: int
    book_instance_available_count: int
    author_count: int
    genre_count: int

class Blocker(BaseModel):
    referencer: dict[str, Any]
    dependents: list[dict[str, Any]] = Field(default_factory=list)

class DeletionView(BaseModel):
    target: dict[str, Any]
    blockers: list[Blocker] = Field(default_factory=list)
    blocked: bool = False
