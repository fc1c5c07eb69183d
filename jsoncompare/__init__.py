"""
jsoncompare - Structural JSON Comparison

Compares two JSON documents and reports path-qualified differences,
skipping excluded field names at any depth. Also validates JSON text
(with line/column error locations) and pretty-prints it.
"""

from .comparator import Comparator, deep_compare, compare_json
from .validation import validate_json, format_json
from .parser import parse_json
from .models import (
    CompareOptions,
    DeepCompareResult,
    ValidationResult,
    Template,
    JsonKind,
)
from .exceptions import (
    JsonCompareError,
    MalformedJsonError,
    TemplateStorageError,
    ConfigError,
)
from .templates import (
    TemplateRepository,
    InMemoryTemplateRepository,
    FileTemplateRepository,
)
from .session import ComparisonSession
from .config import CompareConfig, load_config

__version__ = "1.0.0"
__all__ = [
    # Comparison
    "Comparator",
    "deep_compare",
    "compare_json",
    "CompareOptions",
    "DeepCompareResult",
    "JsonKind",
    # Validation
    "validate_json",
    "format_json",
    "parse_json",
    "ValidationResult",
    # Errors
    "JsonCompareError",
    "MalformedJsonError",
    "TemplateStorageError",
    "ConfigError",
    # Templates
    "Template",
    "TemplateRepository",
    "InMemoryTemplateRepository",
    "FileTemplateRepository",
    # Session
    "ComparisonSession",
    # Config
    "CompareConfig",
    "load_config",
]
