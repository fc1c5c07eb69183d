"""Caller-side workflow around comparison, validation and templates."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .comparator import compare_json
from .exceptions import MalformedJsonError
from .models import DeepCompareResult, Template, ValidationResult
from .templates import InMemoryTemplateRepository, TemplateRepository
from .validation import format_json, validate_json

logger = logging.getLogger(__name__)

PARSE_ERROR_PREFIX = "JSON parsing error: "


def parse_error_result(error: Exception, excluded_fields: Iterable[str]) -> DeepCompareResult:
    """Turn a parse failure into a result with one synthetic difference."""
    return DeepCompareResult(
        differences=[f"{PARSE_ERROR_PREFIX}{error}"],
        excluded_fields=list(excluded_fields),
    )


def render_result(result: DeepCompareResult, excluded_fields: Iterable[str] = ()) -> str:
    """Render a comparison result as report text."""
    excluded = list(excluded_fields)
    lines = ["Comparison Results"]
    if excluded:
        lines[0] += f" (Excluded fields: {', '.join(excluded)})"

    if result.is_equal:
        lines.append("The JSON objects are equal (excluding specified fields)")
    else:
        lines.append(f"Found {len(result.differences)} difference(s):")
        lines.append("")
        lines.extend(result.differences)

    return "\n".join(lines)


class ComparisonSession:
    """
    Holds two JSON inputs, an exclusion list and the selected template.

    Inputs are re-validated on every change. compare() only runs when both
    inputs are non-blank and valid.
    """

    def __init__(self, repository: Optional[TemplateRepository] = None):
        self.repository = repository or InMemoryTemplateRepository()
        self.left = ""
        self.right = ""
        self.left_validation = ValidationResult(is_valid=True)
        self.right_validation = ValidationResult(is_valid=True)
        self.excluded_fields: list[str] = []
        self.selected_template_id: Optional[str] = None
        self.result: Optional[DeepCompareResult] = None

    # Exclusion list

    def add_excluded_field(self, name: str) -> bool:
        """Add a trimmed field name; blanks and duplicates are ignored."""
        name = name.strip()
        if not name or name in self.excluded_fields:
            return False
        self.excluded_fields.append(name)
        return True

    def remove_excluded_field(self, name: str) -> bool:
        if name not in self.excluded_fields:
            return False
        self.excluded_fields = [f for f in self.excluded_fields if f != name]
        return True

    # Inputs

    def set_left(self, text: str) -> ValidationResult:
        self.left = text
        self.left_validation = validate_json(text)
        return self.left_validation

    def set_right(self, text: str) -> ValidationResult:
        self.right = text
        self.right_validation = validate_json(text)
        return self.right_validation

    def format_left(self, indent: int = 2) -> str:
        if self.left.strip() and self.left_validation.is_valid:
            self.set_left(format_json(self.left, indent))
        return self.left

    def format_right(self, indent: int = 2) -> str:
        if self.right.strip() and self.right_validation.is_valid:
            self.set_right(format_json(self.right, indent))
        return self.right

    @property
    def can_compare(self) -> bool:
        return bool(
            self.left.strip()
            and self.right.strip()
            and self.left_validation.is_valid
            and self.right_validation.is_valid
        )

    def compare(self) -> Optional[DeepCompareResult]:
        """
        Compare the two inputs.

        Returns None without comparing when can_compare is false. A parse
        failure becomes a result whose only difference is the parse error.
        """
        if not self.can_compare:
            logger.debug("Compare skipped: inputs empty or invalid")
            return None

        try:
            self.result = compare_json(self.left, self.right, self.excluded_fields)
        except MalformedJsonError as e:
            logger.warning("Comparison aborted: %s", e)
            self.result = parse_error_result(e, self.excluded_fields)
        return self.result

    def report(self) -> str:
        if self.result is None:
            return ""
        return render_result(self.result, self.excluded_fields)

    # Templates

    @property
    def templates(self) -> list[Template]:
        return self.repository.list_all()

    def save_template(self, name: str) -> Optional[Template]:
        """Save the current exclusion list under a new name and select it."""
        if not name.strip() or not self.excluded_fields:
            return None
        template = self.repository.create(name, self.excluded_fields)
        self.selected_template_id = template.id
        self.excluded_fields = list(template.excluded_fields)
        return template

    def load_template(self, template_id: Optional[str]) -> Optional[Template]:
        """Replace the exclusion list with a template's; a blank id clears it."""
        if not template_id:
            self.excluded_fields = []
            self.selected_template_id = None
            return None

        template = self.repository.get(template_id)
        if template is not None:
            self.excluded_fields = list(template.excluded_fields)
            self.selected_template_id = template.id
        return template

    def update_template(self, name: str) -> Optional[Template]:
        """Overwrite the selected template with the current exclusion list."""
        if not self.selected_template_id or not name.strip():
            return None
        return self.repository.update(self.selected_template_id, name, self.excluded_fields)

    def delete_template(self, template_id: str) -> bool:
        deleted = self.repository.delete(template_id)
        if deleted and self.selected_template_id == template_id:
            self.selected_template_id = None
        return deleted
