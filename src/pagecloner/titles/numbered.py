"""Single and numbered title modes."""

from ..exceptions import ValidationError
from .base import TitleGenerator


class SingleTitleGenerator(TitleGenerator):
    @property
    def mode(self) -> str:
        return "single"

    def _parse_params(self, params: dict) -> None:
        return None

    def generate(self, base_title: str, count: int = 1, params: dict | None = None) -> list[str]:
        if count != 1:
            raise ValidationError("single mode produces exactly one title.")
        return super().generate(base_title, count, params)

    def _title_at(self, base_title: str, index: int, parsed: None) -> str:
        return base_title


class NumberedTitleGenerator(TitleGenerator):
    @property
    def mode(self) -> str:
        return "numbered"

    def _parse_params(self, params: dict) -> None:
        return None

    def _title_at(self, base_title: str, index: int, parsed: None) -> str:
        return f"{base_title} ({index + 1})"
