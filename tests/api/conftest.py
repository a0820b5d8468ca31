import pytest
from fastapi.testclient import TestClient


class CatalogFactory:
    """Creates records through the HTTP API and asserts each create succeeded."""
    def __init__(self, client: TestClient):
        self.client = client

    def author(self, first="Isaac", family="Asimov", **extra) -> dict:
        resp = self.client.post("/v1/authors", json={"first_name": first, "family_name": family, **extra})
        assert resp.status_code == 201, resp.text
        return resp.json()

    def genre(self, name: str) -> dict:
        resp = self.client.post("/v1/genres", json={"name": name})
        assert resp.status_code == 201, resp.text
        return resp.json()

    def book(self, author_id: str, genre_ids: list[str], title="Foundation") -> dict:
        resp = self.client.post("/v1/books", json={
            "title": title,
            "author": author_id,
            "summary": "A mathematician predicts the fall of an empire.",
            "isbn": "9780553293357",
            "genre": genre_ids,
        })
        assert resp.status_code == 201, resp.text
        return resp.json()

    def instance(self, book_id: str, status="Available") -> dict:
        resp = self.client.post("/v1/bookinstances", json={
            "book": book_id, "imprint": "Gnome Press, 1951.", "status": status,
        })
        assert resp.status_code == 201, resp.text
        return resp.json()


@pytest.fixture
def make(client):
    return CatalogFactory(client)
