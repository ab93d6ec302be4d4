"""Batch planning for bulk creates.

Titles are split into consecutive batches processed one after another.
The batch size starts at the configured size and grows only when a run
is large enough that the number of batches would exceed ``max_batches``.
"""

import math
from typing import TypeVar

T = TypeVar("T")


def needs_resizing(total: int, batch_size: int, max_batches: int) -> bool:
    """Check whether ``total`` items would exceed ``max_batches`` batches."""
    return math.ceil(total / batch_size) > max_batches


def batch_size_for(total: int, batch_size: int = 10, max_batches: int = 50) -> int:
    """Deterministic batch size for a run of ``total`` items."""
    if total <= 0:
        return batch_size
    if not needs_resizing(total, batch_size, max_batches):
        return batch_size
    return math.ceil(total / max_batches)


def split_batches(items: list[T], size: int) -> list[list[tuple[int, T]]]:
    """Consecutive batches of (original index, item) pairs."""
    if size < 1:
        raise ValueError("batch size must be at least 1")
    indexed = list(enumerate(items))
    return [indexed[i : i + size] for i in range(0, len(indexed), size)]
