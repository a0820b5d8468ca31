# catalog_client/exceptions.py
from __future__ import annotations
from typing import Any


class CatalogError(Exception):
    """Base class for every error raised by the catalog SDK."""

class TransportError(CatalogError):
    pass

class ServerError(CatalogError):
    pass

class BadRequest(CatalogError):
    pass

class NotFound(CatalogError):
    pass

class Conflict(CatalogError):
    pass

class Blocked(Conflict):
    def __init__(self, message: str, blockers: list[dict[str, Any]]):
        super().__init__(message)
        self.blockers = blockers

class ValidationFailed(BadRequest):
    def __init__(self, message: str, errors: dict[str, list[str]], data: dict[str, Any] | None = None):
        super().__init__(message)
        self.errors = errors
        self.data = data or {}
