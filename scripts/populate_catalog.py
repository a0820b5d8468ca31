#!/usr/bin/env python
"""Seed a running catalog with the sample authors, genres, books and copies.

Usage:
    python scripts/populate_catalog.py --base-url http://localhost:8000
"""
from __future__ import annotations

import argparse

from catalog_client import CatalogClient, ClientConfig, models as M
from catalog_client.exceptions import CatalogError, Conflict

AUTHORS = [
    ("Patrick", "Rothfuss", "1973-06-06", None),
    ("Ben", "Bova", "1932-11-08", None),
    ("Isaac", "Asimov", "1920-01-02", "1992-04-06"),
    ("Bob", "Billings", None, None),
    ("Jim", "Jones", "1971-12-16", None),
]

GENRES = ["Fantasy", "Science Fiction", "French Poetry"]

# (title, summary, isbn, author index, genre indexes)
BOOKS = [
    ("The Name of the Wind (The Kingkiller Chronicle, #1)",
     "I have stolen princesses back from sleeping barrow kings. I burned down the town of Trebon.",
     "9781473211896", 0, [0]),
    ("The Wise Man's Fear (The Kingkiller Chronicle, #2)",
     "Picking up the tale of Kvothe Kingkiller once again, we follow him into exile.",
     "9788401352836", 0, [0]),
    ("The Slow Regard of Silent Things (Kingkiller Chronicle)",
     "Deep below the University, there is a dark place.",
     "9780756411336", 0, [0]),
    ("Apes and Angels",
     "Humankind headed out to the stars not for conquest, nor exploration, nor even for curiosity.",
     "9780765379528", 1, [1]),
    ("Death Wave",
     "In Ben Bova's previous novel New Earth, Jordan Kell led the first human mission beyond the solar system.",
     "9780765379504", 1, [1]),
    ("Test Book 1", "Summary of test book 1", "ISBN111111", 4, [0, 1]),
    ("Test Book 2", "Summary of test book 2", "ISBN222222", 4, []),
]

# (book index, imprint, status, due_back)
INSTANCES = [
    (0, "London Gollancz, 2014.", "Available", None),
    (1, " Gollancz, 2011.", "Loaned", None),
    (2, " Gollancz, 2015.", None, None),
    (3, "New York Tom Doherty Associates, 2016.", "Available", None),
    (3, "New York Tom Doherty Associates, 2016.", "Available", None),
    (3, "New York Tom Doherty Associates, 2016.", "Available", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Available", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Maintenance", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Loaned", None),
    (0, "Imprint XXX2", None, None),
    (1, "Imprint XXX3", None, None),
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the catalog with sample data.")
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="Catalog API base URL (default: %(default)s)",
    )
    return parser.parse_args()


def ensure_genre(cli: CatalogClient, name: str) -> M.Genre:
    try:
        genre = cli.create_genre(name)
        print(f"[info] Created genre {genre.id} ({genre.name})")
        return genre
    except Conflict:
        existing = [g for g in cli.list_genres() if g.name.casefold() == name.casefold()]
        print(f"[info] Reusing existing genre {existing[0].id} ({name})")
        return existing[0]


def populate(cli: CatalogClient) -> M.CatalogSummary:
    genres = [ensure_genre(cli, name) for name in GENRES]

    authors = []
    for first, family, born, died in AUTHORS:
        author = cli.create_author(M.AuthorForm(
            first_name=first, family_name=family, date_of_birth=born, date_of_death=died,
        ))
        authors.append(author)
    print(f"[info] Created {len(authors)} authors")

    books = []
    for title, summary, isbn, author_ix, genre_ixs in BOOKS:
        books.append(cli.create_book(M.BookForm(
            title=title,
            summary=summary,
            isbn=isbn,
            author=authors[author_ix].id,
            genre=[genres[i].id for i in genre_ixs],
        )))
    print(f"[info] Created {len(books)} books")

    for book_ix, imprint, status, due_back in INSTANCES:
        cli.create_instance(M.BookInstanceForm(
            book=books[book_ix].id, imprint=imprint, status=status, due_back=due_back,
        ))
    print(f"[info] Created {len(INSTANCES)} book instances")

    return cli.summary()


def main() -> None:
    args = parse_args()
    with CatalogClient(ClientConfig(base_url=args.base_url)) as cli:
        try:
            summary = populate(cli)
        except CatalogError as exc:
            raise SystemExit(f"Failed to populate catalog: {exc}") from exc
    print(f"[info] Catalog now holds {summary.model_dump()}")


if __name__ == "__main__":
    main()
