from __future__ import annotations
from pydantic import BaseModel, Field, computed_field
from datetime import date
from typing import Any
from uuid import UUID, uuid4
from enum import Enum

class BookStatus(str, Enum):
    available = "Available"
    maintenance = "Maintenance"
    loaned = "Loaned"
    reserved = "Reserved"

class Author(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    first_name: str
    family_name: str
    date_of_birth: date | None = None
    date_of_death: date | None = None

    @computed_field
    @property
    def name(self) -> str:
        # empty when either part is missing
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @computed_field
    @property
    def lifespan(self) -> str:
        if self.date_of_birth is None and self.date_of_death is None:
            return ""
        born = self.date_of_birth.isoformat() if self.date_of_birth else ""
        died = self.date_of_death.isoformat() if self.date_of_death else ""
        return f"{born} - {died}"

class Genre(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str

class Book(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    title: str
    author: UUID
    summary: str
    isbn: str
    genre: list[UUID] = Field(default_factory=list)

class BookInstance(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    book: UUID
    imprint: str
    status: BookStatus = BookStatus.maintenance
    due_back: date = Field(default_factory=date.today)

# collection name -> model class
COLLECTIONS: dict[str, type[BaseModel]] = {
    "authors": Author,
    "genres": Genre,
    "books": Book,
    "instances": BookInstance,
}


def reference_ids(value: Any) -> frozenset:
    """Read a reference field as a set of ids, whether it holds one id or many."""
    if value is None:
        return frozenset()
    if isinstance(value, (list, set, tuple, frozenset)):
        return frozenset(value)
    return frozenset((value,))
