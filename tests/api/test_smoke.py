def test_catalog_smoke(client, make):
    fantasy = make.genre("Fantasy")
    scifi = make.genre("Science Fiction")
    rothfuss = make.author("Patrick", "Rothfuss")
    bova = make.author("Ben", "Bova")
    wind = make.book(rothfuss["id"], [fantasy["id"]], title="The Name of the Wind")
    apes = make.book(bova["id"], [scifi["id"], fantasy["id"]], title="Apes and Angels")
    make.instance(wind["id"], status="Available")
    make.instance(apes["id"], status="Loaned")

    summary = client.get("/v1/catalog").json()
    assert summary == {
        "book_count": 2,
        "book_instance_count": 2,
        "book_instance_available_count": 1,
        "author_count": 2,
        "genre_count": 2,
    }

    authors = client.get("/v1/authors").json()
    assert [a["family_name"] for a in authors] == ["Bova", "Rothfuss"]

    books = client.get("/v1/books").json()
    assert [(b["title"], b["author_name"]) for b in books] == [
        ("Apes and Angels", "Bova, Ben"),
        ("The Name of the Wind", "Rothfuss, Patrick"),
    ]

    genre_detail = client.get(f"/v1/genres/{fantasy['id']}").json()
    assert {b["title"] for b in genre_detail["books"]} == {"The Name of the Wind", "Apes and Angels"}
    assert set(genre_detail["books"][0]) == {"id", "title", "summary"}

    author_detail = client.get(f"/v1/authors/{bova['id']}").json()
    assert [b["id"] for b in author_detail["books"]] == [apes["id"]]

    book_detail = client.get(f"/v1/books/{apes['id']}").json()
    assert book_detail["author"]["id"] == bova["id"]
    assert {g["name"] for g in book_detail["genres"]} == {"Fantasy", "Science Fiction"}
    assert [i["status"] for i in book_detail["instances"]] == ["Loaned"]

    instances = client.get("/v1/bookinstances").json()
    assert {i["book_title"] for i in instances} == {"The Name of the Wind", "Apes and Angels"}

    copy_detail = client.get(f"/v1/bookinstances/{instances[0]['id']}").json()
    assert copy_detail["book"]["id"] == instances[0]["book"]


def test_malformed_id_is_rejected(client):
    assert client.get("/v1/genres/not-a-uuid").status_code == 422
