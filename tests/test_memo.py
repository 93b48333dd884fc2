from datetime import date

from catatuang.domain import Granularity, Transaction, TransactionKind
from catatuang.memo import (
    cached_buckets_for,
    cached_daily_buckets,
    cached_monthly_buckets,
    cached_summary,
    cached_weekly_buckets,
    cached_yearly_buckets,
    clear_caches,
)
from catatuang.summary import summarize


def make_trans(n=50):
    return tuple(
        Transaction(id=i, kind=TransactionKind.EXPENSE, amount=-100, category_id=1, date=f"2024-01-{i % 28 + 1:02d}")
        for i in range(n)
    )


def test_cached_summary_matches_summarize():
    clear_caches()
    trans = make_trans()
    assert cached_summary(trans) == summarize(trans)


def test_cached_summary_hits_cache():
    clear_caches()
    trans = make_trans()
    cached_summary(trans)
    cached_summary(trans)
    assert cached_summary.cache_info().hits == 1


def test_cached_buckets_return_same_object():
    clear_caches()
    trans = make_trans()
    assert cached_daily_buckets(trans, 2024, 1) is cached_daily_buckets(trans, 2024, 1)
    assert len(cached_weekly_buckets(trans, 2024, 1)) == 5
    assert [b.year for b in cached_yearly_buckets(trans)] == [2024]


def test_monthly_cache_keyed_by_today():
    clear_caches()
    trans = make_trans()
    january = cached_monthly_buckets(trans, 2024, today=date(2024, 1, 31))
    february = cached_monthly_buckets(trans, 2024, today=date(2024, 2, 1))
    assert january[0].is_current
    assert february[1].is_current and not february[0].is_current


def test_clear_caches_resets_info():
    trans = make_trans()
    cached_summary(trans)
    clear_caches()
    assert cached_summary.cache_info().currsize == 0


def test_cached_buckets_for_dispatches_by_tab():
    clear_caches()
    trans = make_trans()
    assert len(cached_buckets_for(Granularity.DAY, trans, date(2024, 1, 5))) == 31
    assert len(cached_buckets_for("weekly", trans, date(2024, 1, 5))) == 5
    assert len(cached_buckets_for(Granularity.MONTH, trans, date(2024, 1, 5), today=date(2024, 1, 5))) == 12
    assert cached_buckets_for(Granularity.YEAR, trans, date(2024, 1, 5)) is cached_yearly_buckets(trans)


def test_new_snapshot_is_never_served_stale():
    clear_caches()
    before = make_trans(3)
    after = before + (Transaction(id=99, kind=TransactionKind.INCOME, amount=500, category_id=2, date="2024-01-20"),)
    assert cached_summary(before).income == 0
    assert cached_summary(after).income == 500
    assert cached_summary.cache_info().currsize == 2
