"""Data models for pagecloner."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class Container:
    """A space in the document store."""

    id: str
    key: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "key": self.key, "name": self.name}


@dataclass
class Document:
    """A page listed from a container, denormalized with container metadata."""

    id: str
    title: str
    container_key: str
    container_name: str = ""
    last_modified: str = "Unknown"
    parent_id: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "containerKey": self.container_key,
            "containerName": self.container_name,
            "lastModified": self.last_modified,
        }
        if self.parent_id:
            data["parentId"] = self.parent_id
        return data


@dataclass
class DocumentContent:
    """A single page fetched with its body in native storage format."""

    id: str
    title: str
    container_id: str
    body: str
    parent_id: Optional[str] = None


@dataclass
class DocumentSpec:
    """Everything needed to create one page."""

    container_id: str
    title: str
    body: str = ""
    parent_id: Optional[str] = None


@dataclass
class CreatedDocument:
    """What the store hands back after a successful create."""

    id: str
    title: str
    url: str = ""


@dataclass
class ResultPage:
    """One page of a cursor-paginated listing."""

    items: list
    next_cursor: Optional[str] = None


@dataclass(frozen=True)
class Template:
    """Immutable capture of a source page's content."""

    id: str
    name: str
    source_document_id: str
    source_container_id: str
    source_title: str
    content: str  # opaque storage-format body, passed through untouched
    created_at: datetime = field(default_factory=datetime.now)

    def summary(self) -> dict:
        """The non-bulky view handed back to callers (never the content)."""
        return {
            "id": self.id,
            "name": self.name,
            "sourceTitle": self.source_title,
            "createdAt": self.created_at.isoformat(),
        }

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "sourceDocumentId": self.source_document_id,
            "sourceContainerId": self.source_container_id,
            "sourceTitle": self.source_title,
            "content": self.content,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, record: dict) -> "Template":
        return cls(
            id=record["id"],
            name=record["name"],
            source_document_id=record["sourceDocumentId"],
            source_container_id=record.get("sourceContainerId", ""),
            source_title=record.get("sourceTitle", ""),
            content=record.get("content", ""),
            created_at=datetime.fromisoformat(record["createdAt"]),
        )


class OrganizationMode(str, Enum):
    """Where generated pages are placed in the container hierarchy."""

    ATTACH_TO_EXISTING_PARENT = "attach-to-existing-parent"
    CREATE_AS_TOP_LEVEL = "create-as-top-level"
    CREATE_NEW_PARENT_THEN_CHILDREN = "create-new-parent-then-children"


@dataclass
class TitleSpec:
    """A title generation mode plus its mode-specific parameters."""

    mode: str
    base_title: str
    count: int = 1
    params: dict = field(default_factory=dict)


@dataclass
class GenerationRequest:
    """Input to one bulk run. Consumed once, never persisted."""

    template_id: str
    container_key: str
    titles: Union[list[str], TitleSpec]
    organization_mode: OrganizationMode = OrganizationMode.CREATE_AS_TOP_LEVEL
    parent_document_id: Optional[str] = None
    new_parent_title: Optional[str] = None


@dataclass
class CreatedPage:
    index: int
    id: str
    title: str
    url: str

    def to_dict(self) -> dict:
        return {"index": self.index, "id": self.id, "title": self.title, "url": self.url}


@dataclass
class GenerationFailure:
    index: int
    title: str
    error: str

    def to_dict(self) -> dict:
        return {"index": self.index, "title": self.title, "error": self.error}


@dataclass
class GenerationReport:
    """Outcome of one bulk run: one entry per requested title."""

    total_requested: int
    pages: list[CreatedPage] = field(default_factory=list)
    errors: list[GenerationFailure] = field(default_factory=list)
    parent_id: Optional[str] = None
    timed_out: bool = False

    @property
    def created_count(self) -> int:
        return len(self.pages)

    @property
    def all_succeeded(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "createdCount": self.created_count,
            "pages": [p.to_dict() for p in self.pages],
            "errors": [e.to_dict() for e in self.errors],
            "totalRequested": self.total_requested,
            "parentId": self.parent_id,
            "timedOut": self.timed_out,
            "firstPageUrl": self.pages[0].url if self.pages else None,
        }


@dataclass
class CrawlResult:
    """Flat catalog of documents across all containers."""

    documents: list[Document] = field(default_factory=list)
    containers: list[Container] = field(default_factory=list)
    truncated: bool = False  # stopped at the document cap
    failed_containers: list[str] = field(default_factory=list)
    error: Optional[str] = None  # set when the crawl could not finish at all

    @property
    def partial(self) -> bool:
        return self.truncated or bool(self.failed_containers) or self.error is not None

    def to_dict(self) -> dict:
        data = {
            "documents": [d.to_dict() for d in self.documents],
            "containers": [c.to_dict() for c in self.containers],
            "totalCount": len(self.documents),
            "loadedContainers": len(self.containers),
            "truncated": self.truncated,
            "failedContainers": list(self.failed_containers),
        }
        if self.error is not None:
            data["error"] = self.error
        return data
