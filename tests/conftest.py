"""Pytest fixtures for pagecloner tests."""

from datetime import datetime
from typing import Optional

import pytest

from pagecloner.config import Config
from pagecloner.exceptions import RemoteRequestError
from pagecloner.models import (
    Container,
    CreatedDocument,
    DocumentContent,
    DocumentSpec,
    ResultPage,
    Template,
)
from pagecloner.remote.base import DocumentStoreClient
from pagecloner.template_store import TemplateStore

SITE = "https://example.atlassian.net"


class FakeStoreClient(DocumentStoreClient):
    """In-memory document store serving canned data in small pages.

    Failure injection:
        failing_containers: container ids whose page listing raises
        fail_container_listing: every list_containers call raises
        fail_titles: titles whose create raises a 500
        fail_at_cursor: listing ("containers" or a container id) -> cursor
            at which that listing raises a 503, after earlier pages succeed
        sticky_cursor: listings end with an empty page that still carries
            a next cursor
    """

    def __init__(self, containers=None, documents=None, page_size: int = 2):
        self.containers: list[Container] = list(containers or [])
        self.documents: dict[str, list[dict]] = {k: list(v) for k, v in (documents or {}).items()}
        self.bodies: dict[str, DocumentContent] = {}
        self.page_size = page_size
        self.failing_containers: set[str] = set()
        self.fail_container_listing = False
        self.fail_titles: set[str] = set()
        self.fail_at_cursor: dict[str, str] = {}
        self.sticky_cursor = False
        self.created: list[DocumentSpec] = []
        self.calls: list[tuple] = []
        self._next_id = 1000

    def _page(self, items: list, cursor: Optional[str]) -> ResultPage:
        start = int(cursor or 0)
        chunk = items[start : start + self.page_size]
        end = start + self.page_size
        if end < len(items):
            return ResultPage(items=chunk, next_cursor=str(end))
        if self.sticky_cursor:
            return ResultPage(items=chunk, next_cursor=str(end))
        return ResultPage(items=chunk, next_cursor=None)

    def list_containers(self, cursor=None, limit=250):
        self.calls.append(("list_containers", cursor))
        if self.fail_container_listing:
            raise RemoteRequestError("GET /spaces failed: 503 - unavailable", status_code=503)
        if cursor is not None and self.fail_at_cursor.get("containers") == cursor:
            raise RemoteRequestError("GET /spaces failed: 503 - unavailable", status_code=503)
        return self._page(self.containers, cursor)

    def find_container(self, key):
        self.calls.append(("find_container", key))
        for container in self.containers:
            if container.key == key:
                return container
        return None

    def list_documents(self, container_id, cursor=None, limit=250, sort="-modified-date"):
        self.calls.append(("list_documents", container_id, cursor))
        if container_id in self.failing_containers:
            raise RemoteRequestError(f"GET /spaces/{container_id}/pages failed: 500", status_code=500)
        if cursor is not None and self.fail_at_cursor.get(container_id) == cursor:
            raise RemoteRequestError(f"GET /spaces/{container_id}/pages failed: 503", status_code=503)
        items = self.documents.get(container_id, [])
        if sort == "title":
            items = sorted(items, key=lambda d: d["title"])
            return ResultPage(items=items[:limit], next_cursor=None)
        return self._page(items, cursor)

    def create_document(self, spec):
        self.calls.append(("create_document", spec.title))
        if spec.title in self.fail_titles:
            raise RemoteRequestError(f"POST /pages failed: 500 - could not create {spec.title}", status_code=500)
        self.created.append(spec)
        self._next_id += 1
        page_id = str(self._next_id)
        key = next((c.key for c in self.containers if c.id == spec.container_id), "UNKNOWN")
        return CreatedDocument(id=page_id, title=spec.title, url=f"{SITE}/wiki/spaces/{key}/pages/{page_id}")

    def get_document(self, document_id):
        self.calls.append(("get_document", document_id))
        if document_id not in self.bodies:
            raise RemoteRequestError(f"GET /pages/{document_id} failed: 404", status_code=404)
        return self.bodies[document_id]

    def document_url(self, container_key, document_id):
        return f"{SITE}/wiki/spaces/{container_key}/pages/{document_id}"

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


def page(page_id: str, title: str, modified: str = "2026-01-01T00:00:00Z") -> dict:
    return {"id": page_id, "title": title, "parentId": None, "lastModified": modified}


@pytest.fixture
def config(tmp_path):
    return Config(
        base_url=SITE,
        email="user@example.com",
        api_token="token",
        template_dir=tmp_path / "templates",
        create_delay=0,
    )


@pytest.fixture
def template_store(config):
    return TemplateStore(config.template_dir)


@pytest.fixture
def fake_client():
    client = FakeStoreClient(
        containers=[
            Container(id="1", key="TEAM", name="Team Space"),
            Container(id="2", key="ENG", name="Engineering"),
            Container(id="3", key="OPS", name="Operations"),
        ],
        documents={
            "1": [
                page("10", "Team Space"),
                page("11", "Roadmap"),
                page("12", "Retro"),
                page("13", "Onboarding"),
            ],
            "2": [page("20", "ENG"), page("21", "Architecture"), page("22", "Runbook")],
            "3": [page("30", "Incident Review")],
        },
    )
    client.bodies["100"] = DocumentContent(
        id="100",
        title="Weekly Report",
        container_id="1",
        body="<p>Status: <ac:structured-macro ac:name=\"status\"/></p>",
    )
    return client


@pytest.fixture
def stored_template(template_store):
    template = Template(
        id="tpl_1_abc",
        name="Weekly Report",
        source_document_id="100",
        source_container_id="1",
        source_title="Weekly Report",
        content="<p>template body</p>",
        created_at=datetime(2026, 1, 5, 9, 30),
    )
    template_store.save(template)
    return template
