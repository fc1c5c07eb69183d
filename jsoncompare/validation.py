"""Validation and formatting of raw JSON text."""

from __future__ import annotations

import json

from .exceptions import MalformedJsonError
from .models import ValidationResult
from .parser import parse_json

GENERIC_ERROR = "Invalid JSON format"


def validate_json(raw: str) -> ValidationResult:
    """
    Check whether a string is valid JSON.

    Empty or whitespace-only text counts as valid (nothing entered yet).
    On failure the result carries the parser message and, when the parser
    reports an offset, the 1-based line and column it points at. Without an
    offset only a generic message is returned.
    """
    if not raw or not raw.strip():
        return ValidationResult(is_valid=True)

    try:
        parse_json(raw)
    except MalformedJsonError as e:
        if e.position is None:
            return ValidationResult(is_valid=False, error=GENERIC_ERROR)
        return ValidationResult(
            is_valid=False,
            error=e.message,
            error_line=e.line,
            error_column=e.column,
        )

    return ValidationResult(is_valid=True)


def format_json(raw: str, indent: int = 2) -> str:
    """
    Pretty-print a JSON string.

    Key order and array order are preserved. Blank input gives "";
    invalid input is returned unchanged. So is input that cannot be written
    back as standard JSON, such as a number literal too large for a float.
    """
    if not raw or not raw.strip():
        return ""

    try:
        parsed = parse_json(raw)
    except MalformedJsonError:
        return raw

    try:
        return json.dumps(parsed, indent=indent, ensure_ascii=False, allow_nan=False)
    except (ValueError, RecursionError):
        return raw
