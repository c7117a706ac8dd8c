"""JSON-file-backed template catalog."""

from __future__ import annotations

import json
import uuid
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import jsonschema

from ordergen.lib.logging_config import get_logger
from ordergen.models.template import Template, merge_templates

logger = get_logger("template_store")

# Path to the template catalog JSON Schema contract
TEMPLATES_SCHEMA_FILE = Path(__file__).parent.parent / "contracts" / "templates.schema.json"


def load_templates_schema(path: Path | None = None) -> dict[str, Any]:
    """Load the JSON Schema for template catalog files."""
    with open(path or TEMPLATES_SCHEMA_FILE) as f:
        return json.load(f)


class TemplateStore:
    """Template catalog persisted as a single JSON document.

    The catalog is read on construction. Every mutating call rewrites
    the file.

    Attributes:
        path: Location of the catalog JSON file.
    """

    def __init__(self, path: Path | str) -> None:
        """Open a catalog file.

        Args:
            path: Catalog JSON file. A missing file is an empty catalog.

        Raises:
            jsonschema.ValidationError: If the file does not match the contract.
            json.JSONDecodeError: If the file is not valid JSON.
        """
        self.path = Path(path)
        self._templates: list[Template] = self.load()

    def load(self) -> list[Template]:
        """Read and validate the catalog file."""
        if not self.path.exists():
            logger.info("Template catalog %s not found, starting empty", self.path)
            return []

        with open(self.path) as f:
            data = json.load(f)

        jsonschema.validate(instance=data, schema=load_templates_schema())
        templates = [Template.from_dict(t) for t in data["templates"]]
        logger.info("Loaded %d template(s) from %s", len(templates), self.path)
        return templates

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"templates": [t.to_dict() for t in self._templates]}
        self.path.write_text(json.dumps(payload, indent=2))

    def get_all(self) -> list[Template]:
        return list(self._templates)

    def get(self, template_id: str) -> Template | None:
        for template in self._templates:
            if template.id == template_id:
                return template
        return None

    def save(self, template: Template) -> Template:
        """Add a template under a fresh id with new timestamps."""
        now = datetime.now(UTC).isoformat()
        stored = replace(template, id=str(uuid.uuid4()), created_at=now, updated_at=now)
        self._templates.append(stored)
        self._write()
        return stored

    def update(self, template_id: str, **changes: Any) -> Template | None:
        """Replace fields of an existing template.

        ``updated_at`` is always stamped with the current time; a value
        passed in ``changes`` is ignored.

        Returns:
            The updated template, or None if the id is unknown.
        """
        changes.pop("updated_at", None)
        for index, template in enumerate(self._templates):
            if template.id == template_id:
                updated = replace(
                    template, **changes, updated_at=datetime.now(UTC).isoformat(),
                )
                self._templates[index] = updated
                self._write()
                return updated
        return None

    def delete(self, template_id: str) -> bool:
        remaining = [t for t in self._templates if t.id != template_id]
        if len(remaining) == len(self._templates):
            return False
        self._templates = remaining
        self._write()
        return True

    def merge(self, template_ids: list[str]) -> Template | None:
        """Merge the templates with the given ids; unknown ids are ignored."""
        wanted = set(template_ids)
        return merge_templates(t for t in self._templates if t.id in wanted)

    def resolve(self, template_ids: list[str]) -> Template | None:
        """Return the template to generate from.

        A single id resolves to that template, several ids to their merge.
        """
        if not template_ids:
            return None
        if len(template_ids) == 1:
            return self.get(template_ids[0])
        return self.merge(template_ids)
