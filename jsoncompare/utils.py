"""Utility functions for jsoncompare."""

from __future__ import annotations

import json
import math
from typing import Any

from .models import JsonKind, MISSING


def classify(value: Any) -> JsonKind:
    """Classify a parsed JSON value into its coarse kind."""
    if value is MISSING:
        return JsonKind.MISSING
    if value is None:
        return JsonKind.NULL
    # bool first: bool is an int subclass
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def format_number(value: int | float) -> str:
    """Render a number the way it would read in a JSON document."""
    if isinstance(value, float) and math.isinf(value):
        # Out-of-range literals such as 1e400 parse to infinity
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def format_value(value: Any) -> str:
    """
    Render a value for a difference message.

    Scalars use their natural text with no quoting; containers are shown as
    compact JSON, or as a placeholder when nested too deeply to serialize.
    """
    kind = classify(value)
    if kind is JsonKind.MISSING:
        return "undefined"
    if kind is JsonKind.NULL:
        return "null"
    if kind is JsonKind.BOOLEAN:
        return "true" if value else "false"
    if kind is JsonKind.NUMBER:
        return format_number(value)
    if kind is JsonKind.STRING:
        return value
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except RecursionError:
        return "[...]" if kind is JsonKind.ARRAY else "{...}"


def build_path(parent_path: str, key: str | int) -> str:
    """Build a display path from parent path and key or index."""
    if isinstance(key, int):
        return f"{parent_path}[{key}]"
    return f"{parent_path}.{key}" if parent_path else key
