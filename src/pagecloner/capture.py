"""Capture an existing page as a reusable template."""

import logging
from datetime import datetime
from typing import Optional

from .exceptions import InvalidReferenceError, NotFoundError, RemoteRequestError, ValidationError
from .models import Template
from .remote.base import DocumentStoreClient
from .template_store import TemplateStore
from .utils import extract_document_id, generate_template_id

logger = logging.getLogger(__name__)


def resolve_document_reference(document_id: Optional[str] = None, url: Optional[str] = None) -> str:
    """Turn a direct id or a page URL into a document id."""
    if document_id and str(document_id).strip():
        return str(document_id).strip()
    if url and url.strip():
        extracted = extract_document_id(url)
        if not extracted:
            raise InvalidReferenceError(
                "Could not extract page ID from URL. Please use a direct page URL."
            )
        return extracted
    raise ValidationError("Page ID or URL is required")


def capture_template(
    client: DocumentStoreClient,
    store: TemplateStore,
    document_id: Optional[str] = None,
    url: Optional[str] = None,
    name: Optional[str] = None,
) -> Template:
    """Fetch a page's raw body and persist it as a new template.

    The body is stored exactly as the store returned it. Fetch failures
    propagate (a missing page becomes NotFoundError).
    """
    source_id = resolve_document_reference(document_id, url)
    logger.info("Capturing template from page %s", source_id)

    try:
        source = client.get_document(source_id)
    except RemoteRequestError as e:
        if e.status_code == 404:
            raise NotFoundError(f"Page {source_id} not found or not accessible") from e
        raise

    display_name = name.strip() if name and name.strip() else (source.title or "Cloned Page")
    template = Template(
        id=generate_template_id(),
        name=display_name,
        source_document_id=source.id,
        source_container_id=source.container_id,
        source_title=source.title,
        content=source.body,
        created_at=datetime.now(),
    )
    store.save(template)
    logger.info("Template %s captured from '%s' (%d chars)", template.id, source.title, len(source.body))
    return template
