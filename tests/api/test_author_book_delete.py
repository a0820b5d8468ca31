def test_author_with_books_is_blocked_until_books_are_gone(client, make):
    author = make.author("Patrick", "Rothfuss")
    genre = make.genre("Fantasy")
    book = make.book(author["id"], [genre["id"]], title="The Name of the Wind")
    copy = make.instance(book["id"])

    view = client.get(f"/v1/authors/{author['id']}/delete").json()
    assert view["blocked"] is True
    assert view["blockers"][0]["referencer"]["title"] == "The Name of the Wind"
    assert [d["id"] for d in view["blockers"][0]["dependents"]] == [copy["id"]]
    assert client.delete(f"/v1/authors/{author['id']}").status_code == 409

    # the book is itself guarded by its copies
    book_view = client.get(f"/v1/books/{book['id']}/delete").json()
    assert book_view["blocked"] is True
    assert book_view["blockers"][0]["dependents"] == []
    assert client.delete(f"/v1/books/{book['id']}").status_code == 409

    assert client.delete(f"/v1/bookinstances/{copy['id']}").status_code == 204
    assert client.delete(f"/v1/books/{book['id']}").status_code == 204
    assert client.delete(f"/v1/authors/{author['id']}").status_code == 204
    assert client.delete(f"/v1/genres/{genre['id']}").status_code == 204

    assert client.get(f"/v1/authors/{author['id']}").status_code == 404


def test_instance_delete_view_and_missing_instance(client, make):
    author = make.author()
    book = make.book(author["id"], [])
    copy = make.instance(book["id"])

    view = client.get(f"/v1/bookinstances/{copy['id']}/delete").json()
    assert view == {"target": copy, "blockers": [], "blocked": False}

    assert client.delete(f"/v1/bookinstances/{copy['id']}").status_code == 204
    assert client.delete(f"/v1/bookinstances/{copy['id']}").status_code == 404
