"""Cursor-following listings and the exhaustive all-containers crawl."""

import logging
from typing import Callable, Iterator, Optional

from .exceptions import PageClonerError
from .models import Container, CrawlResult, Document, ResultPage
from .remote.base import DocumentStoreClient

logger = logging.getLogger(__name__)


def paginate(fetch: Callable[[Optional[str]], ResultPage]) -> Iterator[list]:
    """Yield each page's items until the listing is exhausted.

    Stops on a missing next cursor, an empty page, or a cursor the store
    already handed out (a store that never clears its cursor would
    otherwise loop forever).
    """
    cursor: Optional[str] = None
    seen: set[str] = set()
    while True:
        page = fetch(cursor)
        if not page.items:
            return
        yield page.items
        if not page.next_cursor or page.next_cursor in seen:
            return
        seen.add(page.next_cursor)
        cursor = page.next_cursor


def is_home_document(title: str, container: Container) -> bool:
    """A page titled after its own container is the container's home page."""
    return title == container.name or title == container.key


def to_document(item: dict, container: Container) -> Document:
    return Document(
        id=item["id"],
        title=item["title"],
        container_key=container.key,
        container_name=container.name,
        last_modified=item.get("lastModified") or "Unknown",
        parent_id=item.get("parentId"),
    )


def iter_containers(client: DocumentStoreClient, page_size: int = 250) -> Iterator[Container]:
    """Containers visible to the caller, page by page. Failures propagate."""
    for items in paginate(lambda cursor: client.list_containers(cursor=cursor, limit=page_size)):
        yield from items


def list_all_containers(client: DocumentStoreClient, page_size: int = 250) -> list[Container]:
    """Every container visible to the caller. Failures propagate."""
    return list(iter_containers(client, page_size))


def iter_container_documents(
    client: DocumentStoreClient,
    container: Container,
    page_size: int = 250,
) -> Iterator[Document]:
    """Non-home documents in one container, newest first, page by page.

    Failures propagate once the documents already fetched are consumed.
    """
    pages = paginate(
        lambda cursor: client.list_documents(container.id, cursor=cursor, limit=page_size)
    )
    for items in pages:
        for item in items:
            if not is_home_document(item["title"], container):
                yield to_document(item, container)


def list_container_documents(
    client: DocumentStoreClient,
    container: Container,
    page_size: int = 250,
    limit: Optional[int] = None,
) -> list[Document]:
    """All non-home documents in one container, newest first.

    Stops once ``limit`` documents have been collected. Failures propagate.
    """
    documents: list[Document] = []
    if limit is not None and limit <= 0:
        return documents
    for document in iter_container_documents(client, container, page_size):
        documents.append(document)
        if limit is not None and len(documents) >= limit:
            break
    return documents


def crawl_all(
    client: DocumentStoreClient,
    max_documents: int = 5000,
    page_size: int = 250,
) -> CrawlResult:
    """Walk every container and collect its documents, up to max_documents.

    Never raises for store failures. Results are accumulated as pages
    arrive: a container whose listing fails is recorded in
    failed_containers and keeps the documents read before the failure; a
    failure to list the containers themselves is reported in ``error``
    alongside the containers read before it.
    """
    result = CrawlResult()

    try:
        for container in iter_containers(client, page_size):
            result.containers.append(container)
    except PageClonerError as e:
        logger.error("Could not list containers: %s", e)
        result.error = str(e)
        return result

    logger.info("Found %d containers, loading documents...", len(result.containers))

    for container in result.containers:
        if len(result.documents) >= max_documents:
            logger.info("Reached document limit of %d, stopping", max_documents)
            result.truncated = True
            break

        loaded = 0
        try:
            for document in iter_container_documents(client, container, page_size):
                result.documents.append(document)
                loaded += 1
                if len(result.documents) >= max_documents:
                    break
        except PageClonerError as e:
            logger.warning(
                "Error loading documents for container %s after %d documents: %s",
                container.key, loaded, e,
            )
            result.failed_containers.append(container.key)
            continue

        logger.debug(
            "Completed container %s: %d documents (running total: %d)",
            container.key, loaded, len(result.documents),
        )
        if len(result.documents) >= max_documents:
            logger.info("Reached document limit of %d, stopping", max_documents)
            result.truncated = True
            break

    logger.info(
        "Crawl complete: %d documents from %d containers",
        len(result.documents), len(result.containers),
    )
    return result
