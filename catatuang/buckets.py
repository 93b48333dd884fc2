"""Split a flat transaction list into calendar buckets.

Each transaction with a parseable date lands in at most one bucket of a view.
Weekly buckets of a month are fixed seven-day windows counted from day 1, so
unlike ``period_range(Granularity.WEEK, ...)`` they are not Monday-aligned.
"""

from collections import defaultdict
from datetime import date, datetime
from typing import Iterable, Optional

from catatuang.domain import (
    Bucket,
    DayBucket,
    Granularity,
    MonthBucket,
    PeriodRange,
    Transaction,
    WeekBucket,
    YearBucket,
    parse_date,
)
from catatuang.filters import month_transactions
from catatuang.logging_setup import get_logger
from catatuang.periods import as_date, day_bounds, days_in_month, month_range, span, year_range
from catatuang.summary import kind_totals

logger = get_logger(__name__)


def _dated(transactions: Iterable[Transaction]) -> list[tuple[datetime, Transaction]]:
    result = []
    for t in transactions:
        moment = parse_date(t.date)
        if moment is None:
            logger.debug("Transaction %s has unparseable date %r; left out of buckets", t.id, t.date)
            continue
        result.append((moment, t))
    return result


def _bucket(cls: type, index: int, period: PeriodRange, members: list[Transaction], **extra) -> Bucket:
    income, expense = kind_totals(members)
    return cls(
        index=index,
        range=period,
        transactions=tuple(members),
        income=income,
        expense=expense,
        balance=income - expense,
        **extra,
    )


def daily_buckets(transactions: Iterable[Transaction], year: int, month: int) -> list[DayBucket]:
    grouped: dict[int, list[Transaction]] = {day: [] for day in range(1, days_in_month(year, month) + 1)}
    for moment, t in _dated(month_transactions(transactions, year, month)):
        grouped[moment.day].append(t)
    return [
        _bucket(DayBucket, day, day_bounds(date(year, month, day)), members)
        for day, members in grouped.items()
    ]


def week_windows(year: int, month: int) -> list[tuple[int, int]]:
    """(first_day, last_day) pairs of consecutive seven-day windows from day 1."""
    last_day = days_in_month(year, month)
    windows = []
    first = 1
    while first <= last_day:
        windows.append((first, min(first + 6, last_day)))
        first += 7
    return windows


def weekly_buckets(transactions: Iterable[Transaction], year: int, month: int) -> list[WeekBucket]:
    windows = week_windows(year, month)
    grouped: list[list[Transaction]] = [[] for _ in windows]
    for moment, t in _dated(month_transactions(transactions, year, month)):
        grouped[(moment.day - 1) // 7].append(t)
    return [
        _bucket(WeekBucket, number, span(date(year, month, first), date(year, month, last)), members)
        for number, ((first, last), members) in enumerate(zip(windows, grouped), start=1)
    ]


def monthly_buckets(
    transactions: Iterable[Transaction], year: int, today: Optional[date] = None
) -> list[MonthBucket]:
    today = as_date(today) if today is not None else date.today()
    grouped: dict[int, list[Transaction]] = {month: [] for month in range(1, 13)}
    for moment, t in _dated(transactions):
        if moment.year == year:
            grouped[moment.month].append(t)
    return [
        _bucket(
            MonthBucket,
            month,
            month_range(year, month),
            members,
            is_current=(today.year == year and today.month == month),
        )
        for month, members in grouped.items()
    ]


def yearly_buckets(transactions: Iterable[Transaction]) -> list[YearBucket]:
    grouped: dict[int, list[Transaction]] = defaultdict(list)
    for moment, t in _dated(transactions):
        grouped[moment.year].append(t)
    return [_bucket(YearBucket, year, year_range(year), grouped[year]) for year in sorted(grouped, reverse=True)]


def buckets_for(
    granularity: Granularity,
    transactions: Iterable[Transaction],
    reference_date: date,
    today: Optional[date] = None,
) -> list[Bucket]:
    """Bucket view shown under each tab of the transaction list.

    Daily and weekly tabs break down the reference month, the monthly tab the
    reference year, and the yearly tab the whole history.
    """
    granularity = Granularity.parse(granularity)
    reference = as_date(reference_date)
    if granularity is Granularity.DAY:
        return daily_buckets(transactions, reference.year, reference.month)
    if granularity is Granularity.WEEK:
        return weekly_buckets(transactions, reference.year, reference.month)
    if granularity is Granularity.MONTH:
        return monthly_buckets(transactions, reference.year, today=today)
    return yearly_buckets(transactions)
