"""Container key -> store id resolution with a short-lived memo."""

import logging
import time
from typing import Callable

from .exceptions import NotFoundError, ValidationError
from .models import Container
from .remote.base import DocumentStoreClient

logger = logging.getLogger(__name__)


class ContainerResolver:
    """Resolves container keys, remembering answers for ``ttl`` seconds.

    Container metadata can change (renames, deletions), so entries expire.
    A ttl of 0 disables memoization.
    """

    def __init__(
        self,
        client: DocumentStoreClient,
        ttl: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._client = client
        self._ttl = ttl
        self._clock = clock
        self._cache: dict[str, tuple[float, Container]] = {}

    def resolve(self, key: str) -> Container:
        """Return the container for ``key`` or raise NotFoundError.

        RemoteRequestError from the lookup propagates.
        """
        key = (key or "").strip()
        if not key:
            raise ValidationError("A container key is required.")

        cached = self._cache.get(key)
        if cached is not None:
            expires_at, container = cached
            if self._clock() < expires_at:
                return container
            del self._cache[key]

        container = self._client.find_container(key)
        if container is None:
            raise NotFoundError(f"Container '{key}' not found or not accessible.")

        logger.debug("Resolved container %s -> %s", key, container.id)
        if self._ttl > 0:
            self._cache[key] = (self._clock() + self._ttl, container)
        return container

    def remember(self, container: Container) -> None:
        """Seed the memo with a container already seen in a listing."""
        if self._ttl > 0:
            self._cache[container.key] = (self._clock() + self._ttl, container)

    def clear(self) -> None:
        self._cache.clear()
