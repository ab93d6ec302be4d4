"""Bulk page creation from a stored template.

Deep module: callers hand in a GenerationRequest and get a
GenerationReport back. Per-title failures land in the report; only
structural problems (bad request, unknown template or container, failed
parent page) raise.

Pages are created strictly one at a time in title order. Failed creates
are not retried and already-created pages are never rolled back.
"""

import logging
import time
from typing import Callable, Optional

from .batching import batch_size_for, split_batches
from .config import Config
from .exceptions import OperationTimeoutError, RemoteRequestError, ValidationError
from .models import (
    Container,
    CreatedPage,
    DocumentSpec,
    GenerationFailure,
    GenerationReport,
    GenerationRequest,
    OrganizationMode,
    Template,
)
from .remote.base import DocumentStoreClient
from .resolver import ContainerResolver
from .template_store import TemplateStore
from .titles import resolve_titles

logger = logging.getLogger(__name__)

TIMED_OUT_MESSAGE = "Timed out before attempt"


class BulkCreationEngine:
    """Creates one page per title under a resolved container.

    Args:
        client: Document store client used for all writes.
        templates: Where captured templates live.
        resolver: Container resolver (memoized per run at minimum).
        config: Batch sizing and the delay between creates.
        sleep: Injected for tests.
        clock: Monotonic clock used for the optional run timeout.
    """

    def __init__(
        self,
        client: DocumentStoreClient,
        templates: TemplateStore,
        resolver: ContainerResolver,
        config: Config,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._client = client
        self._templates = templates
        self._resolver = resolver
        self._config = config
        self._sleep = sleep
        self._clock = clock

    # ----- validation ------------------------------------------------------

    def _validate(self, request: GenerationRequest) -> tuple[Template, list[str]]:
        """Check every precondition before anything is written."""
        if not request.template_id:
            raise ValidationError("templateId is required")
        if not (request.container_key or "").strip():
            raise ValidationError("containerKey is required")

        try:
            mode = OrganizationMode(request.organization_mode)
        except ValueError:
            raise ValidationError(
                f"Unknown organization mode: {request.organization_mode!r}"
            ) from None
        if mode is OrganizationMode.ATTACH_TO_EXISTING_PARENT and not (
            request.parent_document_id and str(request.parent_document_id).strip()
        ):
            raise ValidationError("A parent page is required when attaching to an existing parent")
        if mode is OrganizationMode.CREATE_NEW_PARENT_THEN_CHILDREN and not (
            request.new_parent_title and request.new_parent_title.strip()
        ):
            raise ValidationError("A title for the new parent page is required")

        titles = resolve_titles(request.titles)
        if not titles:
            raise ValidationError("No valid page titles provided")

        template = self._templates.load(request.template_id)
        return template, titles

    # ----- structural phase ------------------------------------------------

    def _parent_for(self, request: GenerationRequest, container: Container) -> Optional[str]:
        mode = OrganizationMode(request.organization_mode)
        if mode is OrganizationMode.ATTACH_TO_EXISTING_PARENT:
            return str(request.parent_document_id).strip()
        if mode is OrganizationMode.CREATE_AS_TOP_LEVEL:
            return None

        title = request.new_parent_title.strip()
        logger.info("Creating new parent page: %s", title)
        try:
            parent = self._client.create_document(
                DocumentSpec(container_id=container.id, title=title, body="")
            )
        except RemoteRequestError as e:
            logger.error("Failed to create parent page '%s': %s", title, e)
            raise
        logger.info("Parent page created: %s", parent.id)
        return parent.id

    # ----- run -------------------------------------------------------------

    def run(self, request: GenerationRequest, timeout: Optional[float] = None) -> GenerationReport:
        """Create every requested page and report per-title outcomes.

        Raises ValidationError, NotFoundError or RemoteRequestError (from
        container lookup or parent creation) before any page is created.
        Raises OperationTimeoutError if the budget runs out before the
        first page is attempted; after that, a timeout yields a report
        whose unattempted titles are recorded as failures.
        """
        deadline = self._clock() + timeout if timeout is not None else None

        def expired() -> bool:
            return deadline is not None and self._clock() >= deadline

        template, titles = self._validate(request)
        container = self._resolver.resolve(request.container_key)
        if expired():
            raise OperationTimeoutError("Timed out before any page was created")

        parent_id = self._parent_for(request, container)
        if expired():
            raise OperationTimeoutError("Timed out after creating the parent page")

        report = GenerationReport(total_requested=len(titles), parent_id=parent_id)
        size = batch_size_for(len(titles), self._config.batch_size, self._config.max_batches)
        batches = split_batches(titles, size)
        logger.info(
            "Creating %d pages in %d batches of up to %d using template '%s'",
            len(titles), len(batches), size, template.name,
        )

        attempted = 0
        for batch_number, batch in enumerate(batches, start=1):
            logger.info("Processing batch %d/%d with %d pages", batch_number, len(batches), len(batch))
            for index, title in batch:
                if report.timed_out or expired():
                    report.timed_out = True
                    report.errors.append(GenerationFailure(index, title, TIMED_OUT_MESSAGE))
                    continue
                if attempted and self._config.create_delay:
                    self._sleep(self._config.create_delay)
                self._create_one(report, template, container, parent_id, index, title)
                attempted += 1

        report.pages.sort(key=lambda p: p.index)
        report.errors.sort(key=lambda e: e.index)
        logger.info(
            "Bulk generation complete: %d created, %d failed",
            report.created_count, len(report.errors),
        )
        return report

    def _create_one(
        self,
        report: GenerationReport,
        template: Template,
        container: Container,
        parent_id: Optional[str],
        index: int,
        title: str,
    ) -> None:
        spec = DocumentSpec(
            container_id=container.id,
            title=title,
            body=template.content,
            parent_id=parent_id,
        )
        logger.debug("Creating page %d/%d: %s", index + 1, report.total_requested, title)
        try:
            created = self._client.create_document(spec)
        except RemoteRequestError as e:
            logger.warning("Page creation failed for '%s': %s", title, e)
            report.errors.append(GenerationFailure(index, title, str(e)))
            return

        url = created.url or self._client.document_url(container.key, created.id)
        report.pages.append(CreatedPage(index=index, id=created.id, title=title, url=url))
