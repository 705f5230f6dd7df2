"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, timedelta
from typing import List

from dateutil.relativedelta import relativedelta


def normalize_date(value: date | datetime) -> date:
    """Drop the time component of a datetime (midnight normalization)"""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative if end is earlier)"""
    return (normalize_date(end) - normalize_date(start)).days


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping the day to the last day of a short month"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def add_months(anchor: date, months: int) -> date:
    """Calendar-month offset; Jan 31 + 1 month -> Feb 28/29"""
    return anchor + relativedelta(months=months)
