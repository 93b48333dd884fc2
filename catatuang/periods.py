"""Calendar period arithmetic.

Every range is inclusive on both ends: it starts at midnight of its first day
and ends at the last microsecond of its last day. Weeks start on Monday.
"""

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta

from catatuang.domain import Direction, Granularity, PeriodRange

END_OF_DAY = time(23, 59, 59, 999999)


def as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def add_days(reference: date, days: int) -> date:
    """Step by whole days, stopping at date.min and date.max."""
    try:
        return reference + timedelta(days=days)
    except OverflowError:
        return date.max if days > 0 else date.min


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def day_bounds(day: date | datetime) -> PeriodRange:
    day = as_date(day)
    return PeriodRange(datetime.combine(day, time.min), datetime.combine(day, END_OF_DAY))


def span(first: date, last: date) -> PeriodRange:
    return PeriodRange(datetime.combine(first, time.min), datetime.combine(last, END_OF_DAY))


def week_start(reference: date | datetime) -> date:
    reference = as_date(reference)
    # weekday() is 0 for Monday, so a Sunday steps back six days
    return reference - timedelta(days=reference.weekday())


def month_range(year: int, month: int) -> PeriodRange:
    return span(date(year, month, 1), date(year, month, days_in_month(year, month)))


def year_range(year: int) -> PeriodRange:
    return span(date(year, 1, 1), date(year, 12, 31))


def period_range(granularity: Granularity, reference_date: date | datetime) -> PeriodRange:
    granularity = Granularity.parse(granularity)
    reference = as_date(reference_date)
    if granularity is Granularity.DAY:
        return day_bounds(reference)
    if granularity is Granularity.WEEK:
        monday = week_start(reference)
        return span(monday, add_days(monday, 6))
    if granularity is Granularity.MONTH:
        return month_range(reference.year, reference.month)
    if granularity is Granularity.YEAR:
        return year_range(reference.year)
    raise ValueError(f"Unsupported granularity: {granularity!r}")


def add_months(reference: date, months: int) -> date:
    """Move by whole calendar months, clamping the day to the target month's length."""
    index = reference.year * 12 + (reference.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    if year > MAXYEAR:
        return date.max
    if year < MINYEAR:
        return date.min
    return reference.replace(year=year, month=month, day=min(reference.day, days_in_month(year, month)))


def shift_reference_date(
    granularity: Granularity, reference_date: date | datetime, direction: Direction
) -> date:
    granularity = Granularity.parse(granularity)
    step = 1 if Direction(direction) is Direction.NEXT else -1
    reference = as_date(reference_date)
    if granularity is Granularity.DAY:
        return add_days(reference, step)
    if granularity is Granularity.WEEK:
        return add_days(reference, 7 * step)
    if granularity is Granularity.MONTH:
        return add_months(reference, step)
    if granularity is Granularity.YEAR:
        return add_months(reference, 12 * step)
    raise ValueError(f"Unsupported granularity: {granularity!r}")


def custom_range(start: date | datetime, end: date | datetime) -> PeriodRange:
    """Day-bound an explicit user selection."""
    first, last = as_date(start), as_date(end)
    if first > last:
        raise ValueError(f"Custom range start {first} is after end {last}")
    return span(first, last)
