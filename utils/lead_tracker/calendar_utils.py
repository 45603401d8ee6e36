# utils/lead_tracker/calendar_utils.py
"""
Week Bucketing Helpers for Lead Tracker

Handles all calendar calculations:
- Date -> week number (Thursday-shift algorithm)
- Week number -> Monday..Sunday date range (Jan 1 offset algorithm)
- Month -> week numbers (timeline range and aggregation scan)
- Week navigation with a fixed 52-week year
- Week key formatting/parsing ("2024-W7")

NOTE: week_number_of() and week_date_range() are independent procedures.
week_date_range() is not the inverse of week_number_of() for every year,
and weeks_in_month() / weeks_overlapping_month() can disagree around
year boundaries. Displayed ranges depend on each of them as-is.
"""

import calendar
import logging
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from .constants import MONTH_ORDER, WEEKS_PER_YEAR, FIRST_YEAR, YEARS_AHEAD

logger = logging.getLogger(__name__)

WEEK_KEY_PATTERN = re.compile(r"^(\d{4})-W(\d{1,2})$")


@dataclass(frozen=True)
class WeekRange:
    """Monday..Sunday span of a tracked week."""
    start: date
    end: date

    def label(self) -> str:
        """Short label as shown on week cards, e.g. 'Jan 1 - Jan 7'."""
        return f"{format_short_date(self.start)} - {format_short_date(self.end)}"


def _as_date(d) -> date:
    if isinstance(d, datetime):
        return d.date()
    return d


def format_short_date(d: date) -> str:
    return f"{MONTH_ORDER[d.month - 1]} {d.day}"


# =========================================================================
# WEEK NUMBERS
# =========================================================================

def week_number_of(d) -> int:
    """
    Week number of a date.

    The date is moved to the Thursday of its Monday-based week, then whole
    weeks are counted from January 1st of that Thursday's year (1-indexed).

    Returns:
        Integer in [1, 53]
    """
    d = _as_date(d)
    shifted = d + timedelta(days=4 - d.isoweekday())
    year_start = date(shifted.year, 1, 1)
    return math.ceil(((shifted - year_start).days + 1) / 7)


def week_date_range(year: int, week_number: int) -> WeekRange:
    """
    Start (Monday) and end (Sunday) of a week.

    Offsets January 1st by (week_number - 1) * 7 days and snaps to the
    Monday of that calendar week (a Sunday moves back six days).
    """
    week_start = date(int(year), 1, 1) + timedelta(days=(int(week_number) - 1) * 7)
    week_start -= timedelta(days=week_start.weekday())
    return WeekRange(start=week_start, end=week_start + timedelta(days=6))


def weeks_in_month(year: int, month_index: int) -> List[int]:
    """
    Week numbers displayed for a month on the timeline.

    Args:
        year: Calendar year
        month_index: 0-based month (0 = January)

    Returns:
        Contiguous ascending range from the first day's week number to the
        last day's week number. Empty when the first day still belongs to
        the previous year's last week (e.g. January 2021).
    """
    month = month_index + 1
    first_day = date(year, month, 1)
    last_day = date(year, month, calendar.monthrange(year, month)[1])

    return list(range(week_number_of(first_day), week_number_of(last_day) + 1))


def weeks_overlapping_month(month: int, year: int) -> List[int]:
    """
    Week numbers used for monthly aggregation.

    Steps through the month seven days at a time from the 1st and collects
    each sampled day's week number, deduplicated in order of first appearance.

    Args:
        month: 1-based month
        year: Calendar year
    """
    last_day = calendar.monthrange(year, month)[1]
    weeks: List[int] = []

    for day in range(1, last_day + 1, 7):
        week = week_number_of(date(year, month, day))
        if week not in weeks:
            weeks.append(week)

    return weeks


# =========================================================================
# NAVIGATION
# =========================================================================

def current_week(today: Optional[date] = None) -> Tuple[int, int]:
    """Initial (year, week) shown by the dashboard."""
    today = _as_date(today) if today else date.today()
    return today.year, week_number_of(today)


def shift_week(year: int, week: int, delta: int) -> Tuple[int, int]:
    """
    Move by delta weeks assuming every year has 52 weeks.

    Week 53 is never produced; going below week 1 lands on week 52 of the
    previous year.
    """
    step = 1 if delta > 0 else -1

    for _ in range(abs(delta)):
        week += step
        if week < 1:
            week = WEEKS_PER_YEAR
            year -= 1
        elif week > WEEKS_PER_YEAR:
            week = 1
            year += 1

    return year, week


def year_options(
    today: Optional[date] = None,
    first_year: int = FIRST_YEAR,
    years_ahead: int = YEARS_AHEAD
) -> List[int]:
    """Selectable years for the year picker."""
    today = _as_date(today) if today else date.today()
    return list(range(first_year, today.year + years_ahead + 1))


# =========================================================================
# WEEK KEYS
# =========================================================================

def make_week_key(year: int, week: int) -> str:
    return f"{int(year)}-W{int(week)}"


def parse_week_key(week_key: str) -> Optional[Tuple[int, int]]:
    """Parse '2024-W7' into (2024, 7). Returns None for malformed keys."""
    match = WEEK_KEY_PATTERN.match(week_key or "")
    if not match:
        logger.debug(f"Ignoring malformed week key: {week_key!r}")
        return None
    return int(match.group(1)), int(match.group(2))
