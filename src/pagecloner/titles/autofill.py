"""Detect the progression in a few hand-typed titles and continue it.

Given ["Sprint 4", "Sprint 5"] and a target of four titles, autofill
returns ["Sprint 4", "Sprint 5", "Sprint 6", "Sprint 7"]. Detectors run
from most to least specific so that "Q1 2026" is read as a quarter and
not as the number 1.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional

from ..utils import MONTH_NAMES, month_index

_MONTHS = "|".join(MONTH_NAMES)

_DATE = re.compile(r"^(.*?)(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})(.*)$")
_QUARTER_YEAR = re.compile(r"^(.*?)Q([1-4])(\s+)(\d{4})(.*)$", re.IGNORECASE)
_MONTH_YEAR = re.compile(rf"^(.*?)({_MONTHS})(\s+)(\d{{4}})(.*)$", re.IGNORECASE)
_MONTH = re.compile(rf"^(.*?)({_MONTHS})(.*)$", re.IGNORECASE)
_QUARTER = re.compile(r"^(.*?)Q([1-4])(.*)$", re.IGNORECASE)
_NUMBER = re.compile(r"^(.*?)(\d+)(.*)$")


@dataclass(frozen=True)
class TitlePattern:
    kind: str
    label: str
    step: int = 1


def _leading_titles(titles: list[str]) -> list[str]:
    """Titles up to (not including) the first blank one."""
    leading = []
    for title in titles:
        if not title or not title.strip():
            break
        leading.append(title.strip())
    return leading


def _constant_step(values: list[int], modulo: Optional[int] = None) -> Optional[int]:
    steps = [b - a for a, b in zip(values, values[1:])]
    if modulo:
        steps = [s % modulo for s in steps]
    if steps and steps[0] > 0 and all(s == steps[0] for s in steps):
        return steps[0]
    return None


def _matches(pattern: re.Pattern, titles: list[str]) -> Optional[list[re.Match]]:
    found = [pattern.match(t) for t in titles]
    return found if all(found) else None


# ----- per-kind parsing --------------------------------------------------

def _parse_date(match: re.Match) -> Optional[date]:
    _, month, day, year, _ = match.groups()
    full_year = int(year) + 2000 if len(year) == 2 else int(year)
    try:
        return date(full_year, int(month), int(day))
    except ValueError:
        return None


def _quarter_year_ordinal(match: re.Match) -> int:
    return int(match.group(4)) * 4 + int(match.group(2)) - 1


def _month_year_ordinal(match: re.Match) -> int:
    return int(match.group(4)) * 12 + month_index(match.group(2))


# ----- detectors ---------------------------------------------------------

def _detect_dates(titles: list[str]) -> Optional[TitlePattern]:
    found = _matches(_DATE, titles)
    if not found:
        return None
    dates = [_parse_date(m) for m in found]
    if not all(dates):
        return None
    step = _constant_step([d.toordinal() for d in dates])
    if step is None:
        return None
    label = "weekly dates" if step == 7 else f"date progression (+{step} days)"
    return TitlePattern("date", label, step)


def _detect_quarter_year(titles: list[str]) -> Optional[TitlePattern]:
    found = _matches(_QUARTER_YEAR, titles)
    step = _constant_step([_quarter_year_ordinal(m) for m in found]) if found else None
    return TitlePattern("quarter_year", "quarterly progression", step) if step else None


def _detect_month_year(titles: list[str]) -> Optional[TitlePattern]:
    found = _matches(_MONTH_YEAR, titles)
    step = _constant_step([_month_year_ordinal(m) for m in found]) if found else None
    return TitlePattern("month_year", "monthly progression with year", step) if step else None


def _detect_month(titles: list[str]) -> Optional[TitlePattern]:
    found = _matches(_MONTH, titles)
    step = _constant_step([month_index(m.group(2)) for m in found], modulo=12) if found else None
    return TitlePattern("month", "monthly progression", step) if step else None


def _detect_quarter(titles: list[str]) -> Optional[TitlePattern]:
    found = _matches(_QUARTER, titles)
    step = _constant_step([int(m.group(2)) for m in found], modulo=4) if found else None
    return TitlePattern("quarter", "quarterly progression", step) if step else None


def _detect_number(titles: list[str]) -> Optional[TitlePattern]:
    found = _matches(_NUMBER, titles)
    step = _constant_step([int(m.group(2)) for m in found]) if found else None
    return TitlePattern("number", f"number sequence (+{step})", step) if step else None


_DETECTORS: list[Callable[[list[str]], Optional[TitlePattern]]] = [
    _detect_dates,
    _detect_quarter_year,
    _detect_month_year,
    _detect_month,
    _detect_quarter,
    _detect_number,
]


# ----- continuation ------------------------------------------------------

def _continue_dates(last: str, extra: int, step: int) -> list[str]:
    match = _DATE.match(last)
    prefix, _, _, year, suffix = match.groups()
    start = _parse_date(match)
    titles = []
    for k in range(1, extra + 1):
        current = start + timedelta(days=step * k)
        year_text = str(current.year)[-2:] if len(year) == 2 else str(current.year)
        titles.append(f"{prefix}{current.month}/{current.day}/{year_text}{suffix}")
    return titles


def _continue_quarter_year(last: str, extra: int, step: int) -> list[str]:
    match = _QUARTER_YEAR.match(last)
    prefix, _, middle, _, suffix = match.groups()
    ordinal = _quarter_year_ordinal(match)
    titles = []
    for k in range(1, extra + 1):
        year, quarter = divmod(ordinal + step * k, 4)
        titles.append(f"{prefix}Q{quarter + 1}{middle}{year}{suffix}")
    return titles


def _continue_month_year(last: str, extra: int, step: int) -> list[str]:
    match = _MONTH_YEAR.match(last)
    prefix, _, middle, _, suffix = match.groups()
    ordinal = _month_year_ordinal(match)
    titles = []
    for k in range(1, extra + 1):
        year, month = divmod(ordinal + step * k, 12)
        titles.append(f"{prefix}{MONTH_NAMES[month]}{middle}{year}{suffix}")
    return titles


def _continue_month(last: str, extra: int, step: int) -> list[str]:
    prefix, name, suffix = _MONTH.match(last).groups()
    start = month_index(name)
    return [
        f"{prefix}{MONTH_NAMES[(start + step * k) % 12]}{suffix}"
        for k in range(1, extra + 1)
    ]


def _continue_quarter(last: str, extra: int, step: int) -> list[str]:
    prefix, quarter, suffix = _QUARTER.match(last).groups()
    start = int(quarter) - 1
    return [
        f"{prefix}Q{(start + step * k) % 4 + 1}{suffix}"
        for k in range(1, extra + 1)
    ]


def _continue_number(last: str, extra: int, step: int) -> list[str]:
    prefix, digits, suffix = _NUMBER.match(last).groups()
    width = len(digits) if digits.startswith("0") else 0
    start = int(digits)
    return [
        f"{prefix}{start + step * k:0{width}d}{suffix}"
        for k in range(1, extra + 1)
    ]


_CONTINUERS = {
    "date": _continue_dates,
    "quarter_year": _continue_quarter_year,
    "month_year": _continue_month_year,
    "month": _continue_month,
    "quarter": _continue_quarter,
    "number": _continue_number,
}


def detect_pattern(titles: list[str]) -> Optional[TitlePattern]:
    """Name the progression followed by the leading filled-in titles.

    Needs at least two titles; returns None when nothing fits.
    """
    leading = _leading_titles(titles)
    if len(leading) < 2:
        return None
    for detector in _DETECTORS:
        pattern = detector(leading)
        if pattern is not None:
            return pattern
    return None


def autofill(titles: list[str], count: int) -> list[str]:
    """Extend the leading titles to ``count`` by continuing their progression.

    Without a detectable progression the input is returned unchanged.
    """
    leading = _leading_titles(titles)
    pattern = detect_pattern(leading)
    if pattern is None or count <= len(leading):
        return list(titles)
    continuer = _CONTINUERS[pattern.kind]
    return leading + continuer(leading[-1], count - len(leading), pattern.step)
