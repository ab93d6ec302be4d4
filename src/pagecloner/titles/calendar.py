"""Date-based title modes: weekly, monthly and quarterly."""

from datetime import date, timedelta

from ..exceptions import ValidationError
from ..utils import MONTH_NAMES, month_index
from .base import TitleGenerator

QUARTER_START_MONTHS = {"Q1": 0, "Q2": 3, "Q3": 6, "Q4": 9}


def _parse_month(params: dict) -> int:
    name = params.get("start_month")
    if not name:
        raise ValidationError("start_month is required for this mode.")
    try:
        return month_index(str(name))
    except ValueError as e:
        raise ValidationError(str(e)) from e


class WeeklyTitleGenerator(TitleGenerator):
    """``{base} - Week of {Month} {day}, {year}``, seven days apart."""

    @property
    def mode(self) -> str:
        return "weekly"

    def _parse_params(self, params: dict) -> date:
        month = _parse_month(params) + 1
        day = self._require_int(params, "start_day", 1, 31)
        year = self._require_int(params, "start_year", 1, 9998)
        try:
            return date(year, month, day)
        except ValueError as e:
            raise ValidationError(f"Invalid start date: {e}") from e

    def _title_at(self, base_title: str, index: int, start: date) -> str:
        try:
            current = start + timedelta(days=7 * index)
        except OverflowError as e:
            raise ValidationError("Weekly sequence runs past the supported date range.") from e
        return f"{base_title} - Week of {MONTH_NAMES[current.month - 1]} {current.day}, {current.year}"


class MonthlyTitleGenerator(TitleGenerator):
    """``{base} - {Month} {year}``, rolling into the next year after December."""

    @property
    def mode(self) -> str:
        return "monthly"

    def _parse_params(self, params: dict) -> tuple[int, int]:
        return _parse_month(params), self._require_int(params, "start_year", 1, 9999)

    def _title_at(self, base_title: str, index: int, parsed: tuple[int, int]) -> str:
        start_month, start_year = parsed
        months = start_month + index
        return f"{base_title} - {MONTH_NAMES[months % 12]} {start_year + months // 12}"


class QuarterlyTitleGenerator(TitleGenerator):
    """``{base} - Q{n} {year}``, rolling into the next year after Q4."""

    @property
    def mode(self) -> str:
        return "quarterly"

    def _parse_params(self, params: dict) -> tuple[int, int]:
        quarter = str(params.get("start_quarter") or "").strip().upper()
        if quarter not in QUARTER_START_MONTHS:
            raise ValidationError(f"start_quarter must be one of Q1-Q4, got {quarter or None!r}")
        return QUARTER_START_MONTHS[quarter], self._require_int(params, "start_year", 1, 9999)

    def _title_at(self, base_title: str, index: int, parsed: tuple[int, int]) -> str:
        quarter_start, start_year = parsed
        total_months = quarter_start + 3 * index
        year = start_year + total_months // 12
        quarter = (total_months % 12) // 3 + 1
        return f"{base_title} - Q{quarter} {year}"
