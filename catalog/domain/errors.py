from __future__ import annotations
from typing import Any

class NotFoundError(Exception):
    def __init__(self, what: str = "Resource"):
        super().__init__(what)
        self.what = what

class ConflictError(Exception):
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

class ValidationFailedError(Exception):
    """Form input failed sanitization; carries field errors and the sanitized values."""
    def __init__(self, errors: dict[str, list[str]], data: dict[str, Any] | None = None):
        super().__init__(", ".join(f"{k}: {'; '.join(v)}" for k, v in errors.items()))
        self.errors = errors
        self.data = data or {}

class BlockedError(Exception):
    """Deletion refused because other records still reference the target."""
    def __init__(self, what: str, blockers: list[dict[str, Any]]):
        super().__init__(f"{what} is still referenced by {len(blockers)} record(s)")
        self.what = what
        self.blockers = blockers

class StoreUnavailableError(Exception):
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail
