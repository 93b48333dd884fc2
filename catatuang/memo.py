from datetime import date
from functools import lru_cache
from typing import Optional

from catatuang.buckets import daily_buckets, monthly_buckets, weekly_buckets, yearly_buckets
from catatuang.domain import Bucket, DayBucket, Granularity, MonthBucket, Summary, Transaction, WeekBucket, YearBucket
from catatuang.periods import as_date
from catatuang.summary import summarize


@lru_cache(maxsize=128)
def cached_summary(trans: tuple[Transaction, ...]) -> Summary:
    return summarize(trans)


@lru_cache(maxsize=128)
def cached_daily_buckets(trans: tuple[Transaction, ...], year: int, month: int) -> tuple[DayBucket, ...]:
    return tuple(daily_buckets(trans, year, month))


@lru_cache(maxsize=128)
def cached_weekly_buckets(trans: tuple[Transaction, ...], year: int, month: int) -> tuple[WeekBucket, ...]:
    return tuple(weekly_buckets(trans, year, month))


@lru_cache(maxsize=128)
def _cached_monthly_buckets(trans: tuple[Transaction, ...], year: int, today: date) -> tuple[MonthBucket, ...]:
    return tuple(monthly_buckets(trans, year, today=today))


def cached_monthly_buckets(
    trans: tuple[Transaction, ...], year: int, today: Optional[date] = None
) -> tuple[MonthBucket, ...]:
    # today is part of the key so is_current flags never go stale across midnight
    return _cached_monthly_buckets(trans, year, as_date(today) if today is not None else date.today())


@lru_cache(maxsize=128)
def cached_yearly_buckets(trans: tuple[Transaction, ...]) -> tuple[YearBucket, ...]:
    return tuple(yearly_buckets(trans))


def clear_caches() -> None:
    for fn in (
        cached_summary,
        cached_daily_buckets,
        cached_weekly_buckets,
        _cached_monthly_buckets,
        cached_yearly_buckets,
    ):
        fn.cache_clear()


def cached_buckets_for(
    granularity: Granularity,
    trans: tuple[Transaction, ...],
    reference_date: date,
    today: Optional[date] = None,
) -> tuple[Bucket, ...]:
    """Memoized counterpart of ``buckets.buckets_for``."""
    granularity = Granularity.parse(granularity)
    reference = as_date(reference_date)
    if granularity is Granularity.DAY:
        return cached_daily_buckets(trans, reference.year, reference.month)
    if granularity is Granularity.WEEK:
        return cached_weekly_buckets(trans, reference.year, reference.month)
    if granularity is Granularity.MONTH:
        return cached_monthly_buckets(trans, reference.year, today=today)
    return cached_yearly_buckets(trans)
