from datetime import date
from uuid import UUID

import pytest

from catalog.domain.errors import ValidationFailedError
from catalog.services.validation import (
    AUTHOR_RULES, BOOK_RULES, INSTANCE_RULES, FieldRules, require_valid, validate,
)


def test_trim_then_escape():
    result = validate({"name": "  <b>Tom & Jerry</b> "}, {"name": FieldRules("Name")})
    assert result.ok
    assert result.sanitized == {"name": "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;"}


def test_max_length_counts_the_escaped_value():
    rules = {"name": FieldRules("Name", min_length=3, max_length=3)}
    assert validate({"name": "a&b"}, rules).errors == {"name": ["Name must contain at most 3 characters."]}
    assert validate({"name": "a&b"}, {"name": FieldRules("Name", escape=False, max_length=3)}).ok
    # the minimum is measured on what was typed
    assert validate({"name": "<>"}, {"name": FieldRules("Name", min_length=3)}).errors
    assert validate({"name": "abcd"}, rules).errors == {"name": ["Name must contain at most 3 characters."]}


def test_optional_dates_are_parsed():
    result = validate({"first_name": "Ada", "family_name": "Lovelace", "date_of_birth": "1815-12-10",
                       "date_of_death": ""}, AUTHOR_RULES)
    assert result.ok
    assert result.sanitized["date_of_birth"] == date(1815, 12, 10)
    assert result.sanitized["date_of_death"] is None


def test_many_accepts_single_value_and_drops_blanks():
    gid = "6f1c1f0e-3a5b-4b8e-9d57-7b2d0f5f9a11"
    one = validate({"genre": gid}, {"genre": BOOK_RULES["genre"]})
    assert one.sanitized["genre"] == [UUID(gid)]
    blanks = validate({"genre": ["", " "]}, {"genre": BOOK_RULES["genre"]})
    assert blanks.ok
    assert blanks.sanitized["genre"] == []


def test_instance_defaults():
    result = validate({"book": "6f1c1f0e-3a5b-4b8e-9d57-7b2d0f5f9a11", "imprint": "x"}, INSTANCE_RULES)
    assert result.ok
    assert result.sanitized["status"] == "Maintenance"
    assert result.sanitized["due_back"] is None


def test_require_valid_raises_with_jsonable_data():
    with pytest.raises(ValidationFailedError) as exc_info:
        require_valid({"book": "nope", "imprint": "", "due_back": "2024-02-30"}, INSTANCE_RULES)
    err = exc_info.value
    assert set(err.errors) == {"book", "imprint", "due_back"}
    assert err.errors["imprint"] == ["Imprint must be specified"]
    assert err.data["book"] == "nope"
