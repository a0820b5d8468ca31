# catalog_client/client.py
from __future__ import annotations
from typing import Any
import time
import httpx

from .config import ClientConfig
from .exceptions import (
    NotFound, Conflict, Blocked, BadRequest, ValidationFailed, TransportError, ServerError
)
from . import models as M


def _body(resp: httpx.Response) -> dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class CatalogClient:
    """
    Thin SDK over the catalog HTTP API.

    Only GET requests are retried on transport/5xx failures: a write whose
    outcome is unknown is surfaced to the caller instead of being replayed.
    """
    def __init__(self, config: ClientConfig, http: httpx.Client | None = None):
        self.cfg = config
        self._client = http or httpx.Client(base_url=config.base_url, timeout=config.timeout_s)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------ low-level helpers ------------
    def _raise_for(self, resp: httpx.Response) -> None:
        if resp.status_code >= 500:
            raise ServerError(f"HTTP {resp.status_code}: {resp.text}")
        if resp.status_code == 404:
            raise NotFound(resp.text)
        if resp.status_code == 409:
            body = _body(resp)
            if body.get("error") == "Blocked":
                raise Blocked(body.get("detail", resp.text), body.get("blockers", []))
            raise Conflict(resp.text)
        if resp.status_code == 422:
            body = _body(resp)
            if body.get("error") == "ValidationFailed":
                raise ValidationFailed(resp.text, body.get("detail", {}), body.get("data"))
            raise BadRequest(resp.text)
        if resp.status_code == 400:
            raise BadRequest(resp.text)
        resp.raise_for_status()

    def _request(self, method: str, url: str, json: Any | None = None) -> httpx.Response:
        tries = max(1, self.cfg.retries + 1) if method == "GET" else 1
        for attempt in range(tries):
            try:
                resp = self._client.request(method, url, json=json)
                self._raise_for(resp)
                return resp
            except (httpx.ConnectError, httpx.ReadTimeout, httpx.RemoteProtocolError) as e:
                if attempt < tries - 1:
                    time.sleep(0.25 * (2 ** attempt))
                    continue
                raise TransportError(str(e)) from e
            except ServerError:
                if attempt < tries - 1:
                    time.sleep(0.5 * (2 ** attempt))
                    continue
                raise
        raise TransportError(f"{method} {url}: no attempts made")

    # ------------ Catalog ------------
    def summary(self) -> M.CatalogSummary:
        r = self._request("GET", "/v1/catalog")
        return M.CatalogSummary(**r.json())

    # ------------ Authors ------------
    def create_author(self, form: M.AuthorForm) -> M.Author:
        r = self._request("POST", "/v1/authors", json=form.model_dump(exclude_none=True))
        return M.Author(**r.json())

    def list_authors(self) -> list[M.Author]:
        r = self._request("GET", "/v1/authors")
        return [M.Author(**x) for x in r.json()]

    def get_author(self, author_id: str) -> M.AuthorDetail:
        r = self._request("GET", f"/v1/authors/{author_id}")
        return M.AuthorDetail(**r.json())

    def update_author(self, author_id: str, form: M.AuthorForm) -> M.Author:
        r = self._request("PUT", f"/v1/authors/{author_id}", json=form.model_dump(exclude_none=True))
        return M.Author(**r.json())

    def prepare_delete_author(self, author_id: str) -> M.DeletionView:
        r = self._request("GET", f"/v1/authors/{author_id}/delete")
        return M.DeletionView(**r.json())

    def delete_author(self, author_id: str) -> None:
        self._request("DELETE", f"/v1/authors/{author_id}")

    # ------------ Genres ------------
    def create_genre(self, name: str) -> M.Genre:
        r = self._request("POST", "/v1/genres", json=M.GenreForm(name=name).model_dump())
        return M.Genre(**r.json())

    def list_genres(self) -> list[M.Genre]:
        r = self._request("GET", "/v1/genres")
        return [M.Genre(**x) for x in r.json()]

    def get_genre(self, genre_id: str) -> M.GenreDetail:
        r = self._request("GET", f"/v1/genres/{genre_id}")
        return M.GenreDetail(**r.json())

    def update_genre(self, genre_id: str, name: str) -> M.Genre:
        r = self._request("PUT", f"/v1/genres/{genre_id}", json=M.GenreForm(name=name).model_dump())
        return M.Genre(**r.json())

    def prepare_delete_genre(self, genre_id: str) -> M.DeletionView:
        r = self._request("GET", f"/v1/genres/{genre_id}/delete")
        return M.DeletionView(**r.json())

    def delete_genre(self, genre_id: str) -> None:
        self._request("DELETE", f"/v1/genres/{genre_id}")

    # ------------ Books ------------
    def create_book(self, form: M.BookForm) -> M.Book:
        r = self._request("POST", "/v1/books", json=form.model_dump())
        return M.Book(**r.json())

    def list_books(self) -> list[M.BookListItem]:
        r = self._request("GET", "/v1/books")
        return [M.BookListItem(**x) for x in r.json()]

    def get_book(self, book_id: str) -> M.BookDetail:
        r = self._request("GET", f"/v1/books/{book_id}")
        return M.BookDetail(**r.json())

    def update_book(self, book_id: str, form: M.BookForm) -> M.Book:
        r = self._request("PUT", f"/v1/books/{book_id}", json=form.model_dump())
        return M.Book(**r.json())

    def prepare_delete_book(self, book_id: str) -> M.DeletionView:
        r = self._request("GET", f"/v1/books/{book_id}/delete")
        return M.DeletionView(**r.json())

    def delete_book(self, book_id: str) -> None:
        self._request("DELETE", f"/v1/books/{book_id}")

    # ------------ Book instances ------------
    def create_instance(self, form: M.BookInstanceForm) -> M.BookInstance:
        r = self._request("POST", "/v1/bookinstances", json=form.model_dump(exclude_none=True))
        return M.BookInstance(**r.json())

    def list_instances(self) -> list[M.BookInstanceListItem]:
        r = self._request("GET", "/v1/bookinstances")
        return [M.BookInstanceListItem(**x) for x in r.json()]

    def get_instance(self, instance_id: str) -> M.BookInstanceDetail:
        r = self._request("GET", f"/v1/bookinstances/{instance_id}")
        return M.BookInstanceDetail(**r.json())

    def update_instance(self, instance_id: str, form: M.BookInstanceForm) -> M.BookInstance:
        r = self._request("PUT", f"/v1/bookinstances/{instance_id}", json=form.model_dump(exclude_none=True))
        return M.BookInstance(**r.json())

    def prepare_delete_instance(self, instance_id: str) -> M.DeletionView:
        r = self._request("GET", f"/v1/bookinstances/{instance_id}/delete")
        return M.DeletionView(**r.json())

    def delete_instance(self, instance_id: str) -> None:
        self._request("DELETE", f"/v1/bookinstances/{instance_id}")
