"""
Period resolver

Turns /budget_list style arguments into an ascending list of months.
"""

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional, Sequence

from database.models import YearMonth
from finance.errors import InvalidDateError, MalformedCommand, RangeInvertedError
from shared.constants import ROLLING_PERIOD_MONTHS

_YEAR_MONTH_RE = re.compile(r"([0-9]{2})\.([0-9]{4})")
_YEAR_RE = re.compile(r"[0-9]{4}")


class PeriodMode(str, Enum):
    ROLLING = "rolling"
    YEAR = "year"
    RANGE = "range"


@dataclass(frozen=True)
class Period:
    """Resolved period: ordered months plus how they were chosen"""
    mode: PeriodMode
    months: List[YearMonth]
    year: Optional[int] = None

    @property
    def tag(self) -> str:
        if self.mode is PeriodMode.ROLLING:
            return f"rolling-{ROLLING_PERIOD_MONTHS}"
        if self.mode is PeriodMode.YEAR:
            return f"year:{self.year:04d}"
        return f"range:{len(self.months)}"

    @property
    def start(self) -> YearMonth:
        return self.months[0]

    @property
    def end(self) -> YearMonth:
        return self.months[-1]


def parse_year_month(text: str) -> YearMonth:
    """
    Parse "MM.YYYY"

    Raises:
        InvalidDateError: If the month is not 01-12 or the year is not four digits
    """
    match = _YEAR_MONTH_RE.fullmatch(text.strip())
    if match is None:
        raise InvalidDateError(text)

    month, year = int(match.group(1)), int(match.group(2))
    try:
        return YearMonth(year, month)
    except ValueError as e:
        raise InvalidDateError(text) from e


def parse_year(text: str) -> int:
    """
    Parse a four-digit year

    Raises:
        InvalidDateError: If the text is not a four-digit number
    """
    text = text.strip()
    if not _YEAR_RE.fullmatch(text) or int(text) < 1:
        raise InvalidDateError(text)
    return int(text)


def months_between(start: YearMonth, end: YearMonth) -> List[YearMonth]:
    """All months from start to end inclusive"""
    return [start.plus_months(i) for i in range(start.months_until(end) + 1)]


def rolling_period(today: date) -> Period:
    """Current month and the months before it"""
    end = YearMonth.from_date(today)
    start = end.minus_months(ROLLING_PERIOD_MONTHS - 1)
    return Period(mode=PeriodMode.ROLLING, months=months_between(start, end))


def resolve_period(args: Sequence[str], today: date) -> Period:
    """
    Resolve command arguments into a period

    Args:
        args: [], [YYYY] or [MM.YYYY, MM.YYYY]
        today: Current date

    Raises:
        InvalidDateError: If a year or month cannot be parsed
        RangeInvertedError: If the range starts after it ends
        MalformedCommand: For any other number of arguments
    """
    if len(args) == 0:
        return rolling_period(today)

    if len(args) == 1:
        year = parse_year(args[0])
        return Period(
            mode=PeriodMode.YEAR,
            months=months_between(YearMonth(year, 1), YearMonth(year, 12)),
            year=year
        )

    if len(args) == 2:
        start = parse_year_month(args[0])
        end = parse_year_month(args[1])
        if start > end:
            raise RangeInvertedError(start, end)
        return Period(mode=PeriodMode.RANGE, months=months_between(start, end))

    raise MalformedCommand(f"Expected 0, 1 or 2 arguments, got {len(args)}")
