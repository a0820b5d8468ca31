from __future__ import annotations

import random
import threading
from uuid import uuid4

import pytest

from catalog.domain.errors import BlockedError, NotFoundError, ValidationFailedError
from catalog.domain.models import Author, Book, BookInstance, Genre, reference_ids
from catalog.repo.memory import DocumentStore
from catalog.services.deletion import (
    AUTHOR_GUARD, BOOK_GUARD, GENRE_GUARD, ReferenceGuardedDeletion,
)
from catalog.services.books import BookService
from catalog.services.genres import GenreService


def _seed():
    repo = DocumentStore()
    author = repo.insert("authors", Author(first_name="Ursula", family_name="LeGuin"))
    genre1 = repo.insert("genres", Genre(name="Fantasy"))
    genre2 = repo.insert("genres", Genre(name="Poetry"))
    book1 = repo.insert("books", Book(title="A Wizard of Earthsea", author=author.id,
                                       summary="s", isbn="i", genre=[genre1.id]))
    copy = repo.insert("instances", BookInstance(book=book1.id, imprint="Parnassus, 1968."))
    return repo, author, genre1, genre2, book1, copy


def test_scenario_blocked_genre_keeps_record():
    repo, _, genre1, _, book1, copy = _seed()
    flow = ReferenceGuardedDeletion(repo, GENRE_GUARD)

    view = flow.prepare(genre1.id)
    assert view.blocked is True
    assert [b.referencer["id"] for b in view.blockers] == [str(book1.id)]
    assert [d["id"] for d in view.blockers[0].dependents] == [str(copy.id)]

    with pytest.raises(BlockedError) as exc_info:
        flow.commit(genre1.id)
    assert exc_info.value.what == "Genre"
    assert [b["id"] for b in exc_info.value.blockers] == [str(book1.id)]
    assert repo.find_by_id("genres", genre1.id) is not None


def test_scenario_unreferenced_genre_is_removed():
    repo, _, _, genre2, _, _ = _seed()
    flow = ReferenceGuardedDeletion(repo, GENRE_GUARD)

    assert flow.prepare(genre2.id).blocked is False
    flow.commit(genre2.id)
    assert repo.find_by_id("genres", genre2.id) is None


def test_commit_rechecks_after_prepare():
    repo, author, _, genre2, _, _ = _seed()
    flow = ReferenceGuardedDeletion(repo, GENRE_GUARD)
    assert flow.prepare(genre2.id).blocked is False

    late = repo.insert("books", Book(title="Late", author=author.id, summary="s", isbn="i",
                                     genre=[genre2.id]))

    with pytest.raises(BlockedError) as exc_info:
        flow.commit(genre2.id)
    assert [b["id"] for b in exc_info.value.blockers] == [str(late.id)]
    assert repo.find_by_id("genres", genre2.id) is not None


def test_single_valued_reference_is_guarded_like_a_set():
    repo, author, _, _, book1, copy = _seed()

    with pytest.raises(BlockedError):
        ReferenceGuardedDeletion(repo, AUTHOR_GUARD).commit(author.id)

    book_view = ReferenceGuardedDeletion(repo, BOOK_GUARD).prepare(book1.id)
    assert book_view.blocked is True
    assert [b.referencer["id"] for b in book_view.blockers] == [str(copy.id)]
    assert book_view.blockers[0].dependents == []


def test_missing_target_is_not_found_and_store_untouched():
    repo, *_ = _seed()
    before = repo.dump_json()
    flow = ReferenceGuardedDeletion(repo, GENRE_GUARD)

    with pytest.raises(NotFoundError):
        flow.prepare(uuid4())
    with pytest.raises(NotFoundError):
        flow.commit(uuid4())
    assert repo.dump_json() == before


def test_prepare_is_repeatable():
    repo, _, genre1, *_ = _seed()
    flow = ReferenceGuardedDeletion(repo, GENRE_GUARD)
    assert flow.prepare(genre1.id) == flow.prepare(genre1.id)


def test_random_operations_never_leave_dangling_genre_references():
    rng = random.Random(1234)
    repo = DocumentStore()
    author = repo.insert("authors", Author(first_name="Anon", family_name="Writer"))
    flow = ReferenceGuardedDeletion(repo, GENRE_GUARD)

    for _ in range(300):
        genres = list(repo.collections["genres"])
        books = list(repo.collections["books"])
        action = rng.choice(["genre", "book", "delete_genre", "delete_book"])
        if action == "genre":
            repo.insert("genres", Genre(name=f"g{rng.random()}"))
        elif action == "book" and genres:
            picked = rng.sample(genres, k=rng.randint(1, min(3, len(genres))))
            repo.insert("books", Book(title="t", author=author.id, summary="s", isbn="i", genre=picked))
        elif action == "delete_genre" and genres:
            try:
                flow.commit(rng.choice(genres))
            except BlockedError:
                pass
        elif action == "delete_book" and books:
            repo.delete_by_id("books", rng.choice(books))

        known = set(repo.collections["genres"])
        for book in repo.collections["books"].values():
            assert reference_ids(book.genre) <= known


def test_concurrent_book_create_and_genre_delete_never_dangle():
    repo = DocumentStore()
    author = repo.insert("authors", Author(first_name="Anon", family_name="Writer"))
    books, genres = BookService(repo), GenreService(repo)
    outcomes = {"created": 0, "rejected": 0, "deleted": 0, "blocked": 0}

    for i in range(50):
        genre = repo.insert("genres", Genre(name=f"Genre {i}"))
        barrier = threading.Barrier(2)

        def create():
            barrier.wait()
            try:
                books.create({"title": f"Book {i}", "author": str(author.id), "summary": "s",
                              "isbn": "i", "genre": [str(genre.id)]})
                outcomes["created"] += 1
            except ValidationFailedError:
                outcomes["rejected"] += 1

        def delete():
            barrier.wait()
            try:
                genres.delete(genre.id)
                outcomes["deleted"] += 1
            except BlockedError:
                outcomes["blocked"] += 1

        threads = [threading.Thread(target=create), threading.Thread(target=delete)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)
        assert not any(t.is_alive() for t in threads)

        known = set(repo.collections["genres"])
        for book in repo.collections["books"].values():
            assert reference_ids(book.genre) <= known

    # each round either the book won (delete blocked) or the delete won (book rejected)
    assert outcomes["created"] == outcomes["blocked"]
    assert outcomes["deleted"] == outcomes["rejected"]
    assert outcomes["created"] + outcomes["deleted"] == 50
