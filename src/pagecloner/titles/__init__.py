"""Title generator registry."""

from typing import Optional

from ..exceptions import ValidationError
from ..models import TitleSpec
from .autofill import TitlePattern, autofill, detect_pattern
from .base import TitleGenerator
from .calendar import MonthlyTitleGenerator, QuarterlyTitleGenerator, WeeklyTitleGenerator
from .dedupe import deduplicate_titles
from .numbered import NumberedTitleGenerator, SingleTitleGenerator

GENERATORS: dict[str, TitleGenerator] = {
    gen.mode: gen
    for gen in (
        SingleTitleGenerator(),
        NumberedTitleGenerator(),
        WeeklyTitleGenerator(),
        MonthlyTitleGenerator(),
        QuarterlyTitleGenerator(),
    )
}


def get_generator(mode: str) -> TitleGenerator:
    try:
        return GENERATORS[mode]
    except KeyError:
        raise ValidationError(
            f"Unknown generation mode: {mode!r}. Use one of: {', '.join(GENERATORS)}."
        ) from None


def generate_titles(mode: str, params: dict, count: int = 1) -> list[str]:
    """Titles for one generation mode.

    ``params`` carries ``base_title`` plus the mode's own parameters
    (start_month, start_day, start_year, start_quarter).
    """
    params = dict(params or {})
    base_title = params.pop("base_title", "")
    return get_generator(mode).generate(base_title, count, params)


def expand_titles(spec: TitleSpec) -> list[str]:
    return generate_titles(spec.mode, {"base_title": spec.base_title, **spec.params}, spec.count)


def resolve_titles(titles: "list[str] | TitleSpec", dedupe: bool = True) -> list[str]:
    """Final ordered title list for a run.

    Explicit lists lose blank entries and are made unique; a TitleSpec is
    expanded by its generator.
    """
    if isinstance(titles, TitleSpec):
        return expand_titles(titles)
    cleaned = [t.strip() for t in titles or [] if t and t.strip()]
    return deduplicate_titles(cleaned) if dedupe else cleaned


def suggest_titles(titles: list[str], count: int) -> tuple[list[str], Optional[TitlePattern]]:
    """Autofill plus the pattern that drove it (None if nothing was detected)."""
    return autofill(titles, count), detect_pattern(titles)


__all__ = [
    "GENERATORS",
    "TitlePattern",
    "autofill",
    "deduplicate_titles",
    "detect_pattern",
    "expand_titles",
    "generate_titles",
    "get_generator",
    "resolve_titles",
    "suggest_titles",
]
