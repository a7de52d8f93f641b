"""Date manipulation utilities"""

import calendar
from datetime import date, datetime
from typing import Iterator, Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta
from dateutil.tz import gettz

from invoice_gateway.domain.exceptions import InvalidConfigurationError, InvalidDateError

DateLike = Union[date, datetime, str]


def normalize_date(value: Union[date, datetime]) -> date:
    """Drop the time of day, keeping the calendar date of the value itself"""
    if isinstance(value, datetime):
        return value.date()
    return value


def to_date(value: DateLike) -> date:
    """
    Coerce a date, datetime or ISO-8601 string into a calendar date.

    Raises:
        InvalidDateError: value is not a date or cannot be parsed as one
    """
    if isinstance(value, (date, datetime)):
        return normalize_date(value)

    if isinstance(value, str):
        try:
            return isoparse(value.strip()).date()
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(f"Invalid date: {value!r}") from e

    raise InvalidDateError(f"Expected a date or ISO-8601 string, got {type(value).__name__}")


def today(tz_name: str = "UTC") -> date:
    """Current calendar date in the given IANA time zone"""
    zone = gettz(tz_name)
    if zone is None:
        raise InvalidConfigurationError(f"Unknown time zone: {tz_name!r}")
    return datetime.now(zone).date()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, pulling a day past the end of the month back to its last day"""
    return date(year, month, min(day, days_in_month(year, month)))


def add_months(from_date: date, months: int) -> date:
    """Calendar-month arithmetic; Jan 31 + 1 month is the last day of February"""
    return from_date + relativedelta(months=months)


def shift_month(year: int, month: int, months: int) -> tuple[int, int]:
    """Move a (year, month) pair by a number of months"""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def month_name(year: int, month: int) -> str:
    """Display label such as 'January 2025'"""
    return f"{calendar.month_name[month]} {year}"


def month_key(value: date) -> str:
    """Aggregation bucket key in YYYY-MM form"""
    return f"{value.year:04d}-{value.month:02d}"


def iter_months(year: int, month: int, count: int) -> Iterator[tuple[int, int]]:
    """Yield count consecutive (year, month) pairs starting at the given month"""
    for offset in range(count):
        yield shift_month(year, month, offset)

