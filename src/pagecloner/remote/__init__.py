"""Document store client factory."""

from ..config import Config
from .base import DocumentStoreClient
from .confluence import ConfluenceClient


def get_store_client(config: Config) -> DocumentStoreClient:
    """Create and return the configured document store client."""
    return ConfluenceClient(
        base_url=config.site_url,
        email=config.email,
        api_token=config.api_token,
        timeout=config.request_timeout,
        read_retries=config.read_retries,
    )


__all__ = ["ConfluenceClient", "DocumentStoreClient", "get_store_client"]
