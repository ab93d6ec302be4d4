"""Tests for template storage."""

import json
from datetime import datetime

import pytest

from pagecloner.exceptions import NotFoundError, ValidationError
from pagecloner.models import Template
from pagecloner.template_store import TemplateStore


def _template(template_id: str, created: datetime) -> Template:
    return Template(
        id=template_id,
        name=f"Template {template_id}",
        source_document_id="100",
        source_container_id="1",
        source_title="Source",
        content="<p>body</p>",
        created_at=created,
    )


def test_save_and_load_roundtrip_keeps_content_verbatim(template_store):
    template = _template("tpl_a", datetime(2026, 2, 1))
    template_store.save(template)
    assert template_store.load("tpl_a") == template


def test_templates_are_write_once(template_store, stored_template):
    with pytest.raises(ValidationError, match="already exists"):
        template_store.save(stored_template)


def test_load_missing_template(template_store):
    with pytest.raises(NotFoundError):
        template_store.load("tpl_missing")


def test_ids_cannot_escape_the_store(template_store):
    with pytest.raises(NotFoundError):
        template_store.load("../secrets")


def test_list_returns_summaries_newest_first(template_store):
    template_store.save(_template("tpl_old", datetime(2025, 1, 1)))
    template_store.save(_template("tpl_new", datetime(2026, 1, 1)))
    listed = template_store.list()
    assert [t["id"] for t in listed] == ["tpl_new", "tpl_old"]
    assert "content" not in listed[0]
    assert set(listed[0]) == {"id", "name", "sourceTitle", "createdAt"}


def test_list_skips_unreadable_files(template_store, stored_template):
    (template_store.root / "template_broken.json").write_text("{not json", encoding="utf-8")
    assert [t["id"] for t in template_store.list()] == [stored_template.id]


def test_list_on_missing_directory(tmp_path):
    assert TemplateStore(tmp_path / "nowhere").list() == []


def test_delete(template_store, stored_template):
    template_store.delete(stored_template.id)
    assert not template_store.exists(stored_template.id)
    with pytest.raises(NotFoundError):
        template_store.delete(stored_template.id)


def test_stored_file_is_plain_json(template_store, stored_template):
    record = json.loads(
        (template_store.root / f"template_{stored_template.id}.json").read_text(encoding="utf-8")
    )
    assert record["sourceDocumentId"] == "100"
    assert record["content"] == "<p>template body</p>"
