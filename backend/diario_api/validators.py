"""
Diario de Classe API — Input Validators
========================================

What:  Pure checks for post fields, identifiers and search terms.
Why:   Keeping the rules side-effect free lets the service decide which
       error (and which status code) a failed rule becomes.
How:   Every check returns a ValidationResult naming the offending field;
       nothing raises.

Rules:
    id       decimal integer, 0 < id <= MAX_ID
    title    present, at least 3 characters after trimming
    content  present, at least 10 characters after trimming
    author   present, at least 3 characters after trimming
    query    present, at least 2 characters after trimming

Field order:
    FIELD_VALIDATORS is the single source of the title → content → author
    order; the first failing field is the one reported.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

TITLE_MIN_LENGTH = 3
CONTENT_MIN_LENGTH = 10
AUTHOR_MIN_LENGTH = 3
QUERY_MIN_LENGTH = 2

# Largest id the document store can encode (BSON int64)
MAX_ID = 2**63 - 1

# ASCII digits only, with at most one sign. 19 digits covers MAX_ID.
# Why: str.isdigit() also accepts "²" and friends, which int() rejects
_ID_PATTERN = re.compile(r"[+-]?[0-9]{1,19}")


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[str] = None
    field: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid


VALID = ValidationResult(valid=True)


def _invalid(field: str, reason: str) -> ValidationResult:
    return ValidationResult(valid=False, reason=reason, field=field)


def parse_id(value: Any) -> Optional[int]:
    """
    Convert a path or caller supplied identifier to int.

    Accepts ints and short ASCII decimal strings ("7", " 7 ", "+7");
    rejects bools, floats with a fraction, doubled signs, non-ASCII
    digits and anything else. Returns None when not convertible.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if _ID_PATTERN.fullmatch(text):
            return int(text)
    return None


def validate_id(value: Any) -> ValidationResult:
    parsed = parse_id(value)
    if parsed is None or not 0 < parsed <= MAX_ID:
        return _invalid("id", "Invalid ID. It must be a number greater than zero.")
    return VALID


def _validate_text(value: Any, field: str, label: str, min_length: int) -> ValidationResult:
    if not isinstance(value, str) or len(value.strip()) < min_length:
        return _invalid(field, f"{label} is required and must have at least {min_length} characters.")
    return VALID


def validate_title(value: Any) -> ValidationResult:
    return _validate_text(value, "title", "Title", TITLE_MIN_LENGTH)


def validate_content(value: Any) -> ValidationResult:
    return _validate_text(value, "content", "Content", CONTENT_MIN_LENGTH)


def validate_author(value: Any) -> ValidationResult:
    return _validate_text(value, "author", "Author", AUTHOR_MIN_LENGTH)


def validate_query(value: Any) -> ValidationResult:
    return _validate_text(value, "q", "Search term", QUERY_MIN_LENGTH)


FIELD_VALIDATORS = {
    "title": validate_title,
    "content": validate_content,
    "author": validate_author,
}


def validate_fields(fields: Mapping[str, Any]) -> ValidationResult:
    """
    Check the fields present in `fields`, returning the first failure.

    Absent keys are skipped (partial updates); a key present with None
    is checked and fails.
    """
    for name, validator in FIELD_VALIDATORS.items():
        if name not in fields:
            continue
        result = validator(fields[name])
        if not result.valid:
            return result
    return VALID


def validate_post_fields(title: Any, content: Any, author: Any) -> ValidationResult:
    """Check all creation fields; a missing one counts as empty."""
    return validate_fields({"title": title, "content": content, "author": author})
