"""File-backed storage for captured templates.

One JSON file per template under the template directory. Templates are
write-once: nothing here updates a stored template in place. There is no
expiry; callers remove templates explicitly with ``delete``.
"""

import json
import logging
import re
from pathlib import Path

from .exceptions import NotFoundError, ValidationError
from .models import Template

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class TemplateStore:
    """Key-value store of templates keyed by template id."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path(self, template_id: str) -> Path:
        if not template_id or not _SAFE_ID.match(template_id):
            raise NotFoundError(f"Template {template_id!r} not found")
        return self.root / f"template_{template_id}.json"

    def save(self, template: Template) -> Path:
        """Persist a new template. Returns the file it was written to."""
        path = self._path(template.id)
        if path.exists():
            raise ValidationError(f"Template {template.id} already exists")
        self.root.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(template.to_record(), indent=2), encoding="utf-8")
        logger.info("Template stored: %s", template.id)
        return path

    def load(self, template_id: str) -> Template:
        path = self._path(template_id)
        if not path.is_file():
            raise NotFoundError(f"Template {template_id} not found")
        record = json.loads(path.read_text(encoding="utf-8"))
        return Template.from_record(record)

    def exists(self, template_id: str) -> bool:
        try:
            return self._path(template_id).is_file()
        except NotFoundError:
            return False

    def delete(self, template_id: str) -> None:
        path = self._path(template_id)
        if not path.is_file():
            raise NotFoundError(f"Template {template_id} not found")
        path.unlink()
        logger.info("Template deleted: %s", template_id)

    def list(self) -> list[dict]:
        """Summaries of every stored template, newest first.

        Unreadable files are skipped.
        """
        if not self.root.is_dir():
            return []

        templates: list[Template] = []
        for path in self.root.glob("template_*.json"):
            try:
                record = json.loads(path.read_text(encoding="utf-8"))
                templates.append(Template.from_record(record))
            except (OSError, ValueError, KeyError) as e:
                logger.warning("Skipping unreadable template file %s: %s", path.name, e)

        templates.sort(key=lambda t: t.created_at, reverse=True)
        return [t.summary() for t in templates]

    def __len__(self) -> int:
        return len(self.list())
