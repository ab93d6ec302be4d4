"""Abstract base class for title generators."""

from abc import ABC, abstractmethod
from typing import Any

from ..exceptions import ValidationError


class TitleGenerator(ABC):
    """Base class for all title generation modes.

    Subclasses define ``mode``, ``_parse_params`` and ``_title_at``.
    Generation is pure: same input, same titles, no I/O.
    """

    @property
    @abstractmethod
    def mode(self) -> str:
        """Identifier for this generation mode."""

    @abstractmethod
    def _parse_params(self, params: dict) -> Any:
        """Validate mode parameters and convert them to a working form."""

    @abstractmethod
    def _title_at(self, base_title: str, index: int, parsed: Any) -> str:
        """Title for the zero-based position ``index``."""

    def generate(self, base_title: str, count: int, params: dict | None = None) -> list[str]:
        """Exactly ``count`` titles in ascending order."""
        base_title = (base_title or "").strip()
        if not base_title:
            raise ValidationError("A base title is required.")
        if not isinstance(count, int) or count < 1:
            raise ValidationError(f"count must be a positive integer, got {count!r}")
        parsed = self._parse_params(params or {})
        return [self._title_at(base_title, i, parsed) for i in range(count)]

    @staticmethod
    def _require_int(params: dict, name: str, low: int, high: int) -> int:
        value = params.get(name)
        if value is None or value == "":
            raise ValidationError(f"{name} is required for this mode.")
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"{name} must be an integer, got {value!r}") from e
        if not low <= number <= high:
            raise ValidationError(f"{name} must be between {low} and {high}, got {number}")
        return number
