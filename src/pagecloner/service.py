"""Operations exposed to the UI, plus a name-based dispatcher.

Every method returns plain dicts with camelCase keys. Methods raise
PageClonerError subclasses; ``dispatch`` turns those into
``{"error": ..., "errorType": ...}`` payloads.
"""

import logging
from typing import Any, Callable, Optional

from .capture import capture_template
from .config import Config
from .crawler import crawl_all, is_home_document, list_all_containers, list_container_documents, to_document
from .engine import BulkCreationEngine
from .exceptions import InvalidReferenceError, NotFoundError, PageClonerError, RemoteRequestError, ValidationError
from .models import GenerationReport, GenerationRequest, OrganizationMode, TitleSpec
from .remote.base import DocumentStoreClient
from .resolver import ContainerResolver
from .template_store import TemplateStore
from .titles import suggest_titles
from .utils import parse_space_url

logger = logging.getLogger(__name__)

SORT_ORDERS = ("title", "-title", "modified-date", "-modified-date")

# camelCase RPC parameter -> generator parameter
_MODE_PARAMS = {
    "startMonth": "start_month",
    "startDay": "start_day",
    "startYear": "start_year",
    "startQuarter": "start_quarter",
}


def _str_field(payload: dict, key: str, default: Optional[str] = "") -> Optional[str]:
    """Text payload field; bare numbers are accepted for ids."""
    value = payload.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError(f"{key} must be a string, got {type(value).__name__}")
    return str(value)


def _int_field(payload: dict, key: str, default: Optional[int] = None) -> Optional[int]:
    """Integer payload field; numeric strings are accepted, anything else is rejected."""
    value = payload.get(key)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be an integer, got {value!r}") from None


def _float_field(payload: dict, key: str) -> Optional[float]:
    value = payload.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be a number of seconds, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be a number of seconds, got {value!r}") from None


def title_spec_from_payload(payload: dict) -> TitleSpec:
    params = {
        name: payload[key]
        for key, name in _MODE_PARAMS.items()
        if payload.get(key) not in (None, "")
    }
    count = _int_field(payload, "count", 1)
    return TitleSpec(
        mode=_str_field(payload, "mode") or "single",
        base_title=_str_field(payload, "baseTitle"),
        count=count,
        params=params,
    )


def request_from_payload(payload: dict) -> GenerationRequest:
    """Build a GenerationRequest from an RPC payload."""
    titles = payload.get("titles")
    if isinstance(titles, dict):
        titles = title_spec_from_payload(titles)
    elif titles is None:
        raise ValidationError("titles is required")
    elif not isinstance(titles, list) or not all(isinstance(t, str) for t in titles):
        raise ValidationError("titles must be a list of strings or a generation mode object")

    return GenerationRequest(
        template_id=_str_field(payload, "templateId"),
        container_key=_str_field(payload, "containerKey"),
        titles=titles,
        organization_mode=_str_field(payload, "organizationMode", None) or OrganizationMode.CREATE_AS_TOP_LEVEL,
        parent_document_id=_str_field(payload, "parentDocumentId", None),
        new_parent_title=_str_field(payload, "newParentTitle", None),
    )


class PageClonerService:
    """The narrow surface the UI talks to."""

    def __init__(self, client: DocumentStoreClient, templates: TemplateStore, config: Config):
        self.client = client
        self.templates = templates
        self.config = config
        self.resolver = ContainerResolver(client, ttl=config.resolver_ttl)
        self.engine = BulkCreationEngine(client, templates, self.resolver, config)

    # ----- read side -------------------------------------------------------

    def list_containers(self) -> dict:
        containers = list_all_containers(self.client, self.config.page_size)
        for container in containers:
            self.resolver.remember(container)
        return {"containers": [c.to_dict() for c in containers]}

    def crawl_all_documents(self, max_documents: Optional[int] = None) -> dict:
        limit = self.config.max_documents if max_documents is None else max_documents
        if limit < 0:
            raise ValidationError("maxDocuments cannot be negative")
        return crawl_all(self.client, limit, self.config.page_size).to_dict()

    def resolve_from_url(self, url: str) -> dict:
        """One page if the URL names one, else every page in the named space."""
        if not url or not url.strip():
            raise ValidationError("URL is required")
        container_key, document_id = parse_space_url(url)
        if not container_key:
            raise InvalidReferenceError(
                "Invalid URL format. Expected: .../wiki/spaces/SPACEKEY/pages/PAGEID/... "
                "or .../wiki/spaces/SPACEKEY/overview"
            )

        container = self.resolver.resolve(container_key)

        if document_id is None:
            documents = list_container_documents(self.client, container, self.config.page_size)
            return {
                "documents": [d.to_dict() for d in documents],
                "containers": [container.to_dict()],
                "directMode": False,
            }

        try:
            content = self.client.get_document(document_id)
        except RemoteRequestError as e:
            if e.status_code == 404:
                raise NotFoundError(
                    f"Page with ID {document_id} not found in space {container.name}"
                ) from e
            raise
        if content.container_id and content.container_id != container.id:
            raise NotFoundError(f"Page with ID {document_id} not found in space {container.name}")

        target = to_document(
            {"id": content.id, "title": content.title, "parentId": content.parent_id},
            container,
        )
        return {
            "targetDocument": target.to_dict(),
            "containers": [container.to_dict()],
            "directMode": True,
        }

    def list_top_documents(self, container_key: str, limit: int = 30, sort_by: str = "title") -> dict:
        """A short, title-sorted list of pages to offer as parents."""
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        if sort_by not in SORT_ORDERS:
            raise ValidationError(f"sortBy must be one of: {', '.join(SORT_ORDERS)}")
        container = self.resolver.resolve(container_key)
        page = self.client.list_documents(container.id, limit=50, sort=sort_by)
        documents = [
            to_document(item, container)
            for item in page.items
            if not is_home_document(item["title"], container)
        ]
        return {"documents": [d.to_dict() for d in documents[:limit]]}

    # ----- templates -------------------------------------------------------

    def capture_template(
        self,
        document_id: Optional[str] = None,
        url: Optional[str] = None,
        name: Optional[str] = None,
    ) -> dict:
        template = capture_template(self.client, self.templates, document_id, url, name)
        return template.summary()

    def list_templates(self) -> dict:
        return {"templates": self.templates.list()}

    def delete_template(self, template_id: str) -> dict:
        if not template_id:
            raise ValidationError("templateId is required")
        self.templates.delete(template_id)
        return {"deleted": template_id}

    # ----- write side ------------------------------------------------------

    def suggest_titles(self, titles: list[str], count: int) -> dict:
        filled, pattern = suggest_titles(titles, count)
        return {"titles": filled, "pattern": pattern.label if pattern else None}

    def run_bulk_creation(self, request: GenerationRequest, timeout: Optional[float] = None) -> GenerationReport:
        return self.engine.run(request, timeout=timeout)


def _title_list(payload: dict) -> list[str]:
    titles = payload.get("titles") or []
    if not isinstance(titles, list) or not all(isinstance(t, str) for t in titles):
        raise ValidationError("titles must be a list of strings")
    return titles


def _handlers(service: PageClonerService) -> dict[str, Callable[[dict], dict]]:
    return {
        "listContainers": lambda p: service.list_containers(),
        "crawlAllDocuments": lambda p: service.crawl_all_documents(_int_field(p, "maxDocuments")),
        "resolveFromUrl": lambda p: service.resolve_from_url(_str_field(p, "url")),
        "listTopDocuments": lambda p: service.list_top_documents(
            _str_field(p, "containerKey"), _int_field(p, "limit", 30), _str_field(p, "sortBy", "title"),
        ),
        "captureTemplate": lambda p: service.capture_template(
            _str_field(p, "documentId", None), _str_field(p, "url", None), _str_field(p, "name", None),
        ),
        "listTemplates": lambda p: service.list_templates(),
        "deleteTemplate": lambda p: service.delete_template(_str_field(p, "templateId")),
        "suggestTitles": lambda p: service.suggest_titles(_title_list(p), _int_field(p, "count", 0)),
        "runBulkCreation": lambda p: service.run_bulk_creation(
            request_from_payload(p), timeout=_float_field(p, "timeout"),
        ).to_dict(),
    }


def dispatch(service: PageClonerService, method: str, payload: Optional[dict] = None) -> dict[str, Any]:
    """Route an RPC call by name; domain errors become error payloads."""
    handler = _handlers(service).get(method)
    if handler is None:
        return {"error": f"Unknown method: {method}", "errorType": "ValidationError"}
    if payload is not None and not isinstance(payload, dict):
        return {"error": "Payload must be an object", "errorType": "ValidationError"}
    try:
        return handler(payload or {})
    except PageClonerError as e:
        logger.error("%s failed: %s", method, e)
        return {"error": str(e), "errorType": type(e).__name__}
