"""Structural deep comparison of parsed JSON values."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .models import CompareOptions, DeepCompareResult, JsonKind, MISSING
from .parser import parse_json
from .utils import build_path, classify, format_value

logger = logging.getLogger(__name__)

# Stack marker: (_REPORT, reason, path) records a difference in traversal order
_REPORT = object()


class Comparator:
    """
    Walks two parsed JSON trees in lockstep and records differences.

    Each value is classified into a JsonKind before branching. Precedence:
    null checks, kind mismatch, scalar values, array/object mismatch, then
    array and object descent.

    Differences are plain strings of the form '<path>: <reason>', in
    traversal order: array indices ascending; object keys in the first
    object's order followed by keys only the second object has.

    The walk uses an explicit stack, so nesting depth is limited only by
    memory, not by the interpreter's recursion limit.
    """

    def __init__(self, options: Optional[CompareOptions] = None):
        self.options = options or CompareOptions()
        self.diffs: list[str] = []

    def compare(self, a: Any, b: Any, path: str = "") -> list[str]:
        """Compare two values and return the differences found so far."""
        stack = [(a, b, path)]
        while stack:
            item_a, item_b, item_path = stack.pop()
            if item_a is _REPORT:
                self._add_diff(item_path, item_b)
                continue
            children = self._diff(item_a, item_b, item_path)
            # Pushed in reverse so they pop in traversal order
            stack.extend(reversed(children))
        return self.diffs

    def _diff(self, a: Any, b: Any, path: str) -> list[tuple]:
        """Record differences at one node and return child pairs to visit."""
        kind_a = classify(a)
        kind_b = classify(b)

        if kind_a is JsonKind.NULL and kind_b is JsonKind.NULL:
            return []

        if kind_a is JsonKind.NULL or kind_b is JsonKind.NULL:
            self._add_diff(path, f"Null mismatch - {format_value(a)} vs {format_value(b)}")
            return []

        if kind_a is not kind_b and not (kind_a.is_container and kind_b.is_container):
            self._add_diff(path, f"Type mismatch - {kind_a.type_name} vs {kind_b.type_name}")
            return []

        if kind_a.is_scalar:
            if a != b:
                self._add_diff(path, f"Value mismatch - {format_value(a)} vs {format_value(b)}")
            return []

        if kind_a is not kind_b:
            self._add_diff(path, "Array/Object mismatch")
            return []

        if kind_a is JsonKind.ARRAY:
            return self._diff_arrays(a, b, path)
        return self._diff_objects(a, b, path)

    def _diff_arrays(self, a: list, b: list, path: str) -> list[tuple]:
        """Pair arrays index-by-index; absent elements are MISSING."""
        if len(a) != len(b):
            self._add_diff(path, f"Array length mismatch - {len(a)} vs {len(b)}")

        children = []
        for i in range(max(len(a), len(b))):
            item_a = a[i] if i < len(a) else MISSING
            item_b = b[i] if i < len(b) else MISSING
            children.append((item_a, item_b, build_path(path, i)))
        return children

    def _diff_objects(self, a: dict, b: dict, path: str) -> list[tuple]:
        """Pair objects over the union of their keys."""
        excluded = self.options.excluded_fields
        all_keys = list(a.keys()) + [key for key in b.keys() if key not in a]
        children = []

        for key in all_keys:
            if key in excluded:
                continue

            child_path = build_path(path, key)

            if key not in a:
                children.append((_REPORT, "Missing in first object", child_path))
            elif key not in b:
                children.append((_REPORT, "Missing in second object", child_path))
            else:
                children.append((a[key], b[key], child_path))
        return children

    def _add_diff(self, path: str, reason: str):
        self.diffs.append(f"{path}: {reason}")


def deep_compare(
    a: Any,
    b: Any,
    options: Optional[CompareOptions] = None,
    path: str = ""
) -> list[str]:
    """
    Compare two parsed JSON values.

    Args:
        a: The first value
        b: The second value
        options: Comparison options (excluded field names)
        path: Path of a and b within their documents; "" at the root

    Returns:
        Ordered list of difference strings; empty when the values match
    """
    return Comparator(options).compare(a, b, path)


def compare_json(
    raw_a: str,
    raw_b: str,
    excluded_fields: Optional[Iterable[str]] = None
) -> DeepCompareResult:
    """
    Parse two JSON strings and compare them.

    Parse failures are not caught here: callers decide how to report them.

    Args:
        raw_a: The first JSON document
        raw_b: The second JSON document
        excluded_fields: Bare key names to skip at any depth

    Returns:
        DeepCompareResult echoing excluded_fields in the given order

    Raises:
        MalformedJsonError: if either document is not valid JSON
    """
    excluded = list(excluded_fields or [])
    parsed_a = parse_json(raw_a, source="first")
    parsed_b = parse_json(raw_b, source="second")

    differences = deep_compare(parsed_a, parsed_b, CompareOptions.from_fields(excluded))
    logger.debug(
        "Compared documents: %d difference(s), %d excluded field(s)",
        len(differences), len(excluded)
    )
    return DeepCompareResult(differences=differences, excluded_fields=excluded)
