import pytest

from catalog_client import CatalogClient, ClientConfig, models as M
from catalog_client.exceptions import Blocked, NotFound, ValidationFailed
from scripts.populate_catalog import BOOKS, GENRES, INSTANCES, populate


@pytest.fixture
def sdk(client):
    return CatalogClient(ClientConfig(base_url="http://testserver"), http=client)


def test_sdk_delete_flow(sdk):
    genre = sdk.create_genre("Fantasy")
    author = sdk.create_author(M.AuthorForm(first_name="Patrick", family_name="Rothfuss"))
    book = sdk.create_book(M.BookForm(
        title="The Name of the Wind", author=author.id, summary="s", isbn="i", genre=[genre.id],
    ))

    view = sdk.prepare_delete_genre(genre.id)
    assert view.blocked is True
    assert view.blockers[0].referencer["id"] == book.id

    with pytest.raises(Blocked) as exc_info:
        sdk.delete_genre(genre.id)
    assert [b["id"] for b in exc_info.value.blockers] == [book.id]

    sdk.delete_book(book.id)
    sdk.delete_genre(genre.id)
    with pytest.raises(NotFound):
        sdk.get_genre(genre.id)


def test_sdk_surfaces_field_errors(sdk):
    with pytest.raises(ValidationFailed) as exc_info:
        sdk.create_genre("ab")
    assert exc_info.value.errors == {"name": ["Genre name must contain at least 3 characters"]}


def test_populate_script_seeds_catalog(sdk):
    summary = populate(sdk)
    assert summary.genre_count == len(GENRES)
    assert summary.book_count == len(BOOKS)
    assert summary.book_instance_count == len(INSTANCES)
    assert summary.book_instance_available_count == 5


def test_sdk_prepare_delete_instance(sdk):
    author = sdk.create_author(M.AuthorForm(first_name="Patrick", family_name="Rothfuss"))
    book = sdk.create_book(M.BookForm(title="The Wise Man's Fear", author=author.id, summary="s", isbn="i"))
    copy = sdk.create_instance(M.BookInstanceForm(book=book.id, imprint="DAW, 2011."))

    view = sdk.prepare_delete_instance(copy.id)
    assert view.blocked is False
    assert view.blockers == []
    assert view.target["id"] == copy.id

    sdk.delete_instance(copy.id)
    with pytest.raises(NotFound):
        sdk.prepare_delete_instance(copy.id)
