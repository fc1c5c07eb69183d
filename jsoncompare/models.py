"""Data models for jsoncompare."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class JsonKind(Enum):
    """Coarse classification of a parsed JSON value."""
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    MISSING = "undefined"

    @property
    def type_name(self) -> str:
        """Name used in type-mismatch messages; arrays read as 'object'."""
        if self is JsonKind.ARRAY:
            return JsonKind.OBJECT.value
        return self.value

    @property
    def is_scalar(self) -> bool:
        return self in (JsonKind.BOOLEAN, JsonKind.NUMBER, JsonKind.STRING)

    @property
    def is_container(self) -> bool:
        return self in (JsonKind.ARRAY, JsonKind.OBJECT)


class _Missing:
    """Placeholder for an array element that only one side has."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class CompareOptions:
    """Options for a structural comparison."""
    excluded_fields: frozenset = frozenset()

    def __post_init__(self):
        if not isinstance(self.excluded_fields, frozenset):
            object.__setattr__(self, "excluded_fields", frozenset(self.excluded_fields))

    @classmethod
    def from_fields(cls, fields: Optional[Iterable[str]]) -> 'CompareOptions':
        return cls(excluded_fields=frozenset(fields or ()))


@dataclass
class DeepCompareResult:
    """Outcome of comparing two raw JSON documents."""
    differences: list[str] = field(default_factory=list)
    excluded_fields: list[str] = field(default_factory=list)

    @property
    def is_equal(self) -> bool:
        return len(self.differences) == 0

    def to_dict(self) -> dict:
        return {
            "is_equal": self.is_equal,
            "differences": list(self.differences),
            "excluded_fields": list(self.excluded_fields),
        }


@dataclass
class ValidationResult:
    """Outcome of validating one raw JSON string."""
    is_valid: bool
    error: Optional[str] = None
    error_line: Optional[int] = None
    error_column: Optional[int] = None

    @property
    def location(self) -> str:
        """Human readable 'Line L, Column C' prefix, empty when unknown."""
        if self.error_line and self.error_column:
            return f"Line {self.error_line}, Column {self.error_column}"
        return ""

    def to_dict(self) -> dict:
        result = {"is_valid": self.is_valid}
        if self.error is not None:
            result["error"] = self.error
        if self.error_line is not None:
            result["error_line"] = self.error_line
        if self.error_column is not None:
            result["error_column"] = self.error_column
        return result


@dataclass
class Template:
    """A named, reusable list of excluded field names."""
    id: str
    name: str
    excluded_fields: list[str] = field(default_factory=list)
    created_at: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "excluded_fields": list(self.excluded_fields),
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Template':
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            excluded_fields=[str(f) for f in data.get("excluded_fields") or []],
            created_at=int(data.get("created_at", 0)),
        )

    def describe(self) -> str:
        count = len(self.excluded_fields)
        return f"{self.name} ({count} field{'s' if count != 1 else ''})"
