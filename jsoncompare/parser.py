"""Strict JSON parsing shared by the comparator and the validator."""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from .exceptions import MalformedJsonError


_OFFSET_PATTERN = re.compile(r'(?:position|char)\s+(\d+)')

# Strings are matched first so constants inside them are skipped
_CONSTANT_PATTERN = re.compile(r'"(?:\\.|[^"\\])*"|(-?Infinity|NaN)')


class _NonStandardConstant(ValueError):
    def __init__(self, name: str):
        super().__init__(f"Unexpected token {name} (not valid in strict JSON)")
        self.name = name


def _reject_constant(name: str):
    raise _NonStandardConstant(name)


def offset_to_line_column(text: str, offset: int) -> tuple[int, int]:
    """
    Convert a zero-based character offset into a 1-based (line, column).

    Lines are split on '\\n'; each line accounts for its length plus one for
    the newline. An offset at or past the end of a line (the newline itself,
    or end of input) is reported on that line.
    """
    offset = max(offset, 0)
    line_start = 0
    lines = text.split('\n')

    for index, line in enumerate(lines):
        if offset <= line_start + len(line):
            return index + 1, offset - line_start + 1
        line_start += len(line) + 1

    # Past the end of input: clamp to the last line
    last = lines[-1]
    return len(lines), len(last) + 1


def extract_offset(error: Exception) -> Optional[int]:
    """Find the character offset a parser error points at, if it reports one."""
    position = getattr(error, 'pos', None)
    if isinstance(position, int):
        return position

    match = _OFFSET_PATTERN.search(str(error))
    if match:
        return int(match.group(1))
    return None


def find_constant(raw: str, name: str) -> Optional[int]:
    """Offset of the first non-standard constant outside a string literal."""
    for match in _CONSTANT_PATTERN.finditer(raw):
        if match.group(1) == name:
            return match.start(1)
    return None


def parse_json(raw: str, source: Optional[str] = None) -> Any:
    """
    Parse a raw JSON string.

    Only standard JSON is accepted: the NaN/Infinity extensions of Python's
    json module are rejected.

    Args:
        raw: The text to parse
        source: Optional label of the input, carried on the error

    Returns:
        The parsed value

    Raises:
        MalformedJsonError: if the text is not valid JSON
    """
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        position = extract_offset(e)
        line, column = offset_to_line_column(raw, position)
        raise MalformedJsonError(
            str(e), position=position, line=line, column=column, source=source
        ) from e
    except _NonStandardConstant as e:
        position = find_constant(raw, e.name)
        line = column = None
        if position is not None:
            line, column = offset_to_line_column(raw, position)
        raise MalformedJsonError(
            str(e), position=position, line=line, column=column, source=source
        ) from e
    except ValueError as e:
        # e.g. integer literals beyond the int string conversion limit
        raise MalformedJsonError(str(e), source=source) from e
    except RecursionError as e:
        raise MalformedJsonError(
            "Maximum nesting depth exceeded", source=source
        ) from e
    except TypeError as e:
        raise MalformedJsonError(
            f"Expected a string, got {type(raw).__name__}", source=source
        ) from e
