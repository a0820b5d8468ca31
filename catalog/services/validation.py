from __future__ import annotations

import html
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping
from uuid import UUID

from catalog.domain.errors import ValidationFailedError


@dataclass(frozen=True)
class FieldRules:
    """
    Sanitization rules for one form field.

    Checks run on the trimmed value; escaping runs last so the minimum
    length and character checks see what the user typed. The maximum length
    applies to the escaped value, since that is what gets stored.
    ``many`` applies the rules to every element of a list (a single value
    is read as a one-element list).
    """
    label: str
    trim: bool = True
    escape: bool = True
    optional: bool = False
    min_length: int | None = None
    max_length: int | None = None
    alphanumeric: bool = False
    iso8601_date: bool = False
    uuid: bool = False
    choices: tuple[str, ...] | None = None
    many: bool = False
    default: Any = None
    messages: dict[str, str] = field(default_factory=dict)

    def message(self, rule: str) -> str:
        if rule in self.messages:
            return self.messages[rule]
        if rule == "required":
            return f"{self.label} must be specified."
        if rule == "min_length":
            return f"{self.label} must contain at least {self.min_length} characters."
        if rule == "max_length":
            return f"{self.label} must contain at most {self.max_length} characters."
        if rule == "alphanumeric":
            return f"{self.label} has non-alphanumeric characters."
        if rule == "iso8601_date":
            return f"Invalid {self.label.lower()}."
        if rule == "uuid":
            return f"{self.label} is not a valid identifier."
        if rule == "choices":
            return f"{self.label} must be one of: {', '.join(self.choices or ())}."
        return f"{self.label} is invalid."


@dataclass
class ValidationResult:
    sanitized: dict[str, Any]
    errors: dict[str, list[str]]

    @property
    def ok(self) -> bool:
        return not self.errors


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


def _sanitize_one(value: Any, rules: FieldRules, errors: list[str]) -> Any:
    if value is None:
        value = ""
    if not isinstance(value, str):
        value = str(value)
    if rules.trim:
        value = value.strip()

    if value == "":
        if rules.optional:
            return rules.default
        errors.append(rules.message("required"))
        return value

    if rules.min_length is not None and len(value) < rules.min_length:
        errors.append(rules.message("min_length"))
    stored = html.escape(value) if rules.escape else value
    if rules.max_length is not None and len(stored) > rules.max_length:
        errors.append(rules.message("max_length"))
    if rules.alphanumeric and not value.isalnum():
        errors.append(rules.message("alphanumeric"))
    if rules.choices is not None and value not in rules.choices:
        errors.append(rules.message("choices"))

    if rules.iso8601_date:
        try:
            return _parse_date(value)
        except ValueError:
            errors.append(rules.message("iso8601_date"))
            return value
    if rules.uuid:
        try:
            return UUID(value)
        except ValueError:
            errors.append(rules.message("uuid"))
            return value

    return html.escape(value) if rules.escape else value


def validate(raw: Mapping[str, Any], rules: Mapping[str, FieldRules]) -> ValidationResult:
    """Trim, check and escape every field named in ``rules``; unknown fields are dropped."""
    sanitized: dict[str, Any] = {}
    errors: dict[str, list[str]] = {}
    for name, field_rules in rules.items():
        field_errors: list[str] = []
        value = raw.get(name)
        if field_rules.many:
            if value is None or value == "":
                items = []
            elif isinstance(value, (list, tuple)):
                items = list(value)
            else:
                items = [value]
            cleaned = [_sanitize_one(v, field_rules, field_errors) for v in items]
            sanitized[name] = [v for v in cleaned if v is not None]
            if not sanitized[name] and not field_rules.optional:
                field_errors.append(field_rules.message("required"))
        else:
            sanitized[name] = _sanitize_one(value, field_rules, field_errors)
        if field_errors:
            errors[name] = field_errors
    return ValidationResult(sanitized=sanitized, errors=errors)


def require_valid(raw: Mapping[str, Any], rules: Mapping[str, FieldRules]) -> dict[str, Any]:
    result = validate(raw, rules)
    if not result.ok:
        raise ValidationFailedError(result.errors, _jsonable(result.sanitized))
    return result.sanitized


def _jsonable(data: dict[str, Any]) -> dict[str, Any]:
    def conv(v):
        if isinstance(v, (date, UUID)):
            return str(v)
        if isinstance(v, list):
            return [conv(x) for x in v]
        return v
    return {k: conv(v) for k, v in data.items()}


# ---- per-entity form rules ----

AUTHOR_RULES: dict[str, FieldRules] = {
    "first_name": FieldRules(
        "First name", max_length=100, alphanumeric=True,
        messages={"required": "First name must be specified."},
    ),
    "family_name": FieldRules(
        "Family name", max_length=100, alphanumeric=True,
        messages={"required": "Family name must be specified."},
    ),
    "date_of_birth": FieldRules("Date of birth", optional=True, iso8601_date=True),
    "date_of_death": FieldRules("Date of death", optional=True, iso8601_date=True),
}

GENRE_RULES: dict[str, FieldRules] = {
    "name": FieldRules(
        "Genre name", min_length=3, max_length=100,
        messages={
            "required": "Genre name must contain at least 3 characters",
            "min_length": "Genre name must contain at least 3 characters",
        },
    ),
}

BOOK_RULES: dict[str, FieldRules] = {
    "title": FieldRules("Title", messages={"required": "Title must not be empty."}),
    "author": FieldRules("Author", uuid=True, messages={"required": "Author must not be empty."}),
    "summary": FieldRules("Summary", messages={"required": "Summary must not be empty."}),
    "isbn": FieldRules("ISBN", messages={"required": "ISBN must not be empty"}),
    "genre": FieldRules("Genre", uuid=True, many=True, optional=True),
}

INSTANCE_RULES: dict[str, FieldRules] = {
    "book": FieldRules("Book", uuid=True, messages={"required": "Book must be specified"}),
    "imprint": FieldRules("Imprint", messages={"required": "Imprint must be specified"}),
    "status": FieldRules(
        "Status", optional=True, default="Maintenance",
        choices=("Available", "Maintenance", "Loaned", "Reserved"),
    ),
    "due_back": FieldRules("Due back date", optional=True, iso8601_date=True),
}
