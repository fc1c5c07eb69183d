"""Storage of named exclusion-field templates."""

from __future__ import annotations

import logging
import time
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

import yaml

from .exceptions import TemplateStorageError
from .models import Template

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_id() -> str:
    return uuid.uuid4().hex


class TemplateRepository(ABC):
    """
    CRUD interface for templates.

    Implementations return copies, so callers cannot change stored
    templates by mutating what they get back.
    """

    @abstractmethod
    def list_all(self) -> list[Template]:
        """Return every stored template, oldest first."""

    @abstractmethod
    def _save_all(self, templates: list[Template]):
        """Replace the stored templates."""

    def _load_for_update(self) -> list[Template]:
        return self.list_all()

    def get(self, template_id: str) -> Optional[Template]:
        for template in self.list_all():
            if template.id == template_id:
                return template
        return None

    def create(self, name: str, excluded_fields: Iterable[str]) -> Template:
        templates = self._load_for_update()
        template = Template(
            id=_new_id(),
            name=name.strip(),
            excluded_fields=list(excluded_fields),
            created_at=_now_ms(),
        )
        templates.append(template)
        self._save_all(templates)
        return _copy(template)

    def update(
        self,
        template_id: str,
        name: str,
        excluded_fields: Iterable[str]
    ) -> Optional[Template]:
        """Rename a template and replace its fields; None if it does not exist."""
        templates = self._load_for_update()
        for index, existing in enumerate(templates):
            if existing.id == template_id:
                updated = Template(
                    id=existing.id,
                    name=name.strip(),
                    excluded_fields=list(excluded_fields),
                    created_at=existing.created_at,
                )
                templates[index] = updated
                self._save_all(templates)
                return _copy(updated)
        return None

    def delete(self, template_id: str) -> bool:
        """Remove a template; returns whether one existed."""
        templates = self._load_for_update()
        remaining = [t for t in templates if t.id != template_id]
        if len(remaining) == len(templates):
            return False
        self._save_all(remaining)
        return True


def _copy(template: Template) -> Template:
    return Template.from_dict(template.to_dict())


class InMemoryTemplateRepository(TemplateRepository):
    """Templates kept in process memory."""

    def __init__(self, templates: Optional[Iterable[Template]] = None):
        self._templates: list[Template] = [_copy(t) for t in templates or []]

    def list_all(self) -> list[Template]:
        return [_copy(t) for t in self._templates]

    def _save_all(self, templates: list[Template]):
        self._templates = [_copy(t) for t in templates]


class FileTemplateRepository(TemplateRepository):
    """
    Templates persisted as a YAML list in a single file.

    JSON files are read too, since JSON is valid YAML. A missing file is an
    empty store. Reads for listing tolerate a corrupt file (logged, treated
    as empty); mutations refuse to overwrite it.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def list_all(self) -> list[Template]:
        try:
            return self._read()
        except TemplateStorageError as e:
            logger.error("Error loading templates: %s", e)
            return []

    def _load_for_update(self) -> list[Template]:
        return self._read()

    def _read(self) -> list[Template]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise TemplateStorageError(str(self.path), str(e)) from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise TemplateStorageError(str(self.path), "expected a list of templates")

        try:
            return [Template.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise TemplateStorageError(str(self.path), f"bad template entry: {e}") from e

    def _save_all(self, templates: list[Template]):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(
                    [t.to_dict() for t in templates],
                    f,
                    sort_keys=False,
                    allow_unicode=True,
                )
        except OSError as e:
            raise TemplateStorageError(str(self.path), str(e)) from e

        logger.debug("Saved %d template(s) to %s", len(templates), self.path)
