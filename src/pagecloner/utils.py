"""Utility functions for pagecloner."""

import re
import time
import uuid
from typing import Optional

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Tried in order, first match wins.
_DOCUMENT_ID_PATTERNS = [
    re.compile(r"/pages/(\d+)"),
    re.compile(r"/pages/edit-v2/(\d+)"),
    re.compile(r"/pages/viewpage\.action\?pageId=(\d+)"),
    re.compile(r"[?&]pageId=(\d+)"),
]

_SPACE_PAGE_URL = re.compile(r"/wiki/spaces/([^/?#]+)/pages/(?:edit-v2/)?(\d+)")
_SPACE_URL = re.compile(r"/wiki/spaces/([^/?#]+)(?:/overview)?(?:[/?#]|$)")


def extract_document_id(url: str) -> Optional[str]:
    """Pull a page id out of any of the known page URL shapes."""
    if not url or not url.strip():
        return None
    for pattern in _DOCUMENT_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def parse_space_url(url: str) -> tuple[Optional[str], Optional[str]]:
    """Return (space_key, page_id) from a space or page URL.

    page_id is None for a space overview URL. Both are None when the URL
    names neither.
    """
    match = _SPACE_PAGE_URL.search(url or "")
    if match:
        return match.group(1), match.group(2)
    match = _SPACE_URL.search(url or "")
    if match:
        return match.group(1), None
    return None, None


def generate_template_id() -> str:
    """Time-based id with a random suffix."""
    return f"tpl_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def month_index(name: str) -> int:
    """Zero-based index of a month name (case-insensitive)."""
    lowered = name.strip().lower()
    for i, month in enumerate(MONTH_NAMES):
        if month.lower() == lowered:
            return i
    raise ValueError(f"Unknown month name: {name!r}")
