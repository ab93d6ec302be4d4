"""Abstract interface to the remote document store."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import Container, CreatedDocument, DocumentContent, DocumentSpec, ResultPage


class DocumentStoreClient(ABC):
    """Narrow view of the document store used by everything above it.

    Listing methods return one ResultPage at a time; callers follow
    next_cursor themselves. Every failure surfaces as RemoteRequestError.
    """

    @abstractmethod
    def list_containers(self, cursor: Optional[str] = None, limit: int = 250) -> ResultPage:
        """One page of containers (items are Container)."""

    @abstractmethod
    def find_container(self, key: str) -> Optional[Container]:
        """Exact-match lookup by key. Returns None when nothing matches."""

    @abstractmethod
    def list_documents(
        self,
        container_id: str,
        cursor: Optional[str] = None,
        limit: int = 250,
        sort: str = "-modified-date",
    ) -> ResultPage:
        """One page of a container's pages.

        Items are raw dicts with id, title, parentId and lastModified keys.
        """

    @abstractmethod
    def create_document(self, spec: DocumentSpec) -> CreatedDocument:
        """Create one page. Never retried."""

    @abstractmethod
    def get_document(self, document_id: str) -> DocumentContent:
        """Fetch one page with its body in storage format."""

    @abstractmethod
    def document_url(self, container_key: str, document_id: str) -> str:
        """Browser URL of a page."""
