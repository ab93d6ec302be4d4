"""Configuration loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError


@dataclass
class Config:
    """Application configuration."""

    base_url: str = ""
    email: str = ""
    api_token: str = ""
    template_dir: Path = field(default_factory=lambda: Path.cwd() / ".pagecloner" / "templates")
    max_documents: int = 5000
    batch_size: int = 10
    max_batches: int = 50
    page_size: int = 250
    create_delay: float = 0.1  # seconds between successive create attempts
    request_timeout: float = 30.0
    read_retries: int = 3
    resolver_ttl: float = 300.0
    verbose: bool = False

    @property
    def site_url(self) -> str:
        return self.base_url.rstrip("/")

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.base_url:
            raise ConfigError(
                "CONFLUENCE_BASE_URL is required. Set it in .env or environment."
            )
        if not self.email or not self.api_token:
            raise ConfigError(
                "CONFLUENCE_EMAIL and CONFLUENCE_API_TOKEN are required."
            )
        if self.batch_size < 1:
            raise ConfigError("batch_size must be at least 1.")
        if self.max_batches < 1:
            raise ConfigError("max_batches must be at least 1.")
        if not 1 <= self.page_size <= 250:
            raise ConfigError("page_size must be between 1 and 250.")
        if self.max_documents < 0:
            raise ConfigError("max_documents cannot be negative.")
        if self.create_delay < 0:
            raise ConfigError("create_delay cannot be negative.")
        if self.read_retries < 1:
            raise ConfigError("read_retries must be at least 1.")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}.") from e


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}.") from e


def load_config(
    base_url: Optional[str] = None,
    template_dir: Optional[str] = None,
    max_documents: Optional[int] = None,
    batch_size: Optional[int] = None,
    page_size: Optional[int] = None,
    verbose: bool = False,
) -> Config:
    """Load config from .env and apply CLI overrides."""
    load_dotenv()

    config = Config(
        base_url=base_url or os.getenv("CONFLUENCE_BASE_URL", ""),
        email=os.getenv("CONFLUENCE_EMAIL", ""),
        api_token=os.getenv("CONFLUENCE_API_TOKEN", ""),
        template_dir=Path(template_dir) if template_dir else Path(
            os.getenv("PAGECLONER_TEMPLATE_DIR", str(Path.cwd() / ".pagecloner" / "templates"))
        ),
        max_documents=max_documents if max_documents is not None
        else _env_int("PAGECLONER_MAX_DOCUMENTS", 5000),
        batch_size=batch_size if batch_size is not None
        else _env_int("PAGECLONER_BATCH_SIZE", 10),
        page_size=page_size if page_size is not None
        else _env_int("PAGECLONER_PAGE_SIZE", 250),
        create_delay=_env_float("PAGECLONER_CREATE_DELAY", 0.1),
        verbose=verbose,
    )

    config.validate()
    return config
