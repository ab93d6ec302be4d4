"""Confluence Cloud REST API v2 client."""

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional
from urllib.parse import parse_qs, urlparse

import requests

from ..exceptions import RemoteRequestError
from ..models import Container, CreatedDocument, DocumentContent, DocumentSpec, ResultPage
from .base import DocumentStoreClient

logger = logging.getLogger(__name__)

API_PREFIX = "/wiki/api/v2"


def _next_cursor(data: dict) -> Optional[str]:
    """Pull the cursor out of the _links.next URL, if there is one."""
    next_link = (data.get("_links") or {}).get("next")
    if not next_link:
        return None
    values = parse_qs(urlparse(next_link).query).get("cursor")
    return values[0] if values else None


def _last_modified(page: dict) -> str:
    version = page.get("version") or {}
    return version.get("createdAt") or page.get("createdAt") or "Unknown"


@contextmanager
def _parsing(method: str, path: str) -> Iterator[None]:
    """Report a response missing expected fields as a RemoteRequestError."""
    try:
        yield
    except (KeyError, TypeError, AttributeError) as e:
        raise RemoteRequestError(f"{method} {path} returned a malformed response: {e!r}") from e


class ConfluenceClient(DocumentStoreClient):
    """Talks to one Confluence site as one user (email + API token)."""

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        timeout: float = 30.0,
        read_retries: int = 3,
        backoff: float = 1.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._auth = (email, api_token)
        self.timeout = timeout
        self.read_retries = read_retries
        self.backoff = backoff

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        payload: Optional[dict] = None,
        attempts: int = 1,
    ) -> dict[str, Any]:
        """Issue one API call, retrying throttled/5xx/transport failures.

        Client errors other than 429 are raised immediately.
        """
        url = f"{self.base_url}{API_PREFIX}{path}"
        last_error: Optional[RemoteRequestError] = None

        for attempt in range(attempts):
            try:
                response = requests.request(
                    method,
                    url,
                    params=params,
                    json=payload,
                    auth=self._auth,
                    headers={"Accept": "application/json"},
                    timeout=self.timeout,
                )
            except requests.exceptions.RequestException as e:
                last_error = RemoteRequestError(f"{method} {path} failed: {e}")
            else:
                if 200 <= response.status_code < 300:
                    return self._decode(method, path, response)
                last_error = RemoteRequestError(
                    f"{method} {path} failed: {response.status_code} - {response.text[:500]}",
                    status_code=response.status_code,
                )

            if not last_error.retryable:
                raise last_error
            if attempt < attempts - 1:
                delay = self.backoff * (2 ** attempt) * (5 if last_error.status_code == 429 else 1)
                logger.warning(
                    "%s %s failed (attempt %d/%d), retrying in %.1fs: %s",
                    method, path, attempt + 1, attempts, delay, last_error,
                )
                time.sleep(delay)

        raise last_error

    @staticmethod
    def _decode(method: str, path: str, response: requests.Response) -> dict[str, Any]:
        """JSON body of a 2xx response; anything else is a RemoteRequestError."""
        try:
            data = response.json()
        except ValueError as e:
            raise RemoteRequestError(
                f"{method} {path} returned an unreadable response: {response.text[:200]}",
                status_code=response.status_code,
            ) from e
        if not isinstance(data, dict):
            raise RemoteRequestError(
                f"{method} {path} returned an unexpected response: {type(data).__name__}",
                status_code=response.status_code,
            )
        return data

    # ----- read operations -------------------------------------------------

    def list_containers(self, cursor: Optional[str] = None, limit: int = 250) -> ResultPage:
        params: dict[str, Any] = {"limit": limit}
        if cursor:
            params["cursor"] = cursor
        data = self._request("GET", "/spaces", params=params, attempts=self.read_retries)
        with _parsing("GET", "/spaces"):
            items = [
                Container(id=str(space["id"]), key=space["key"], name=space.get("name", ""))
                for space in data.get("results") or []
            ]
            return ResultPage(items=items, next_cursor=_next_cursor(data))

    def find_container(self, key: str) -> Optional[Container]:
        data = self._request(
            "GET", "/spaces", params={"keys": key, "limit": 1}, attempts=self.read_retries,
        )
        with _parsing("GET", "/spaces"):
            for space in data.get("results") or []:
                if space.get("key") == key:
                    return Container(id=str(space["id"]), key=space["key"], name=space.get("name", ""))
        return None

    def list_documents(
        self,
        container_id: str,
        cursor: Optional[str] = None,
        limit: int = 250,
        sort: str = "-modified-date",
    ) -> ResultPage:
        params: dict[str, Any] = {"limit": limit, "sort": sort}
        if cursor:
            params["cursor"] = cursor
        data = self._request(
            "GET", f"/spaces/{container_id}/pages", params=params, attempts=self.read_retries,
        )
        with _parsing("GET", f"/spaces/{container_id}/pages"):
            items = [
                {
                    "id": str(page["id"]),
                    "title": page.get("title", ""),
                    "parentId": page.get("parentId"),
                    "lastModified": _last_modified(page),
                }
                for page in data.get("results") or []
            ]
            return ResultPage(items=items, next_cursor=_next_cursor(data))

    def get_document(self, document_id: str) -> DocumentContent:
        data = self._request(
            "GET",
            f"/pages/{document_id}",
            params={"body-format": "storage"},
            attempts=self.read_retries,
        )
        with _parsing("GET", f"/pages/{document_id}"):
            body = ((data.get("body") or {}).get("storage") or {}).get("value", "")
            return DocumentContent(
                id=str(data["id"]),
                title=data.get("title", ""),
                container_id=str(data.get("spaceId", "")),
                body=body,
                parent_id=data.get("parentId"),
            )

    # ----- write operations ------------------------------------------------

    def create_document(self, spec: DocumentSpec) -> CreatedDocument:
        payload: dict[str, Any] = {
            "spaceId": spec.container_id,
            "status": "current",
            "title": spec.title,
            "body": {"representation": "storage", "value": spec.body},
        }
        if spec.parent_id:
            payload["parentId"] = spec.parent_id

        data = self._request("POST", "/pages", payload=payload)

        with _parsing("POST", "/pages"):
            links = data.get("_links") or {}
            url = ""
            if links.get("webui"):
                base = links.get("base") or f"{self.base_url}/wiki"
                url = f"{base.rstrip('/')}{links['webui']}"
            return CreatedDocument(id=str(data["id"]), title=data.get("title", spec.title), url=url)

    def document_url(self, container_key: str, document_id: str) -> str:
        return f"{self.base_url}/wiki/spaces/{container_key}/pages/{document_id}"
