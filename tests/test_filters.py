from datetime import date
from itertools import permutations

from catatuang.domain import Granularity, SortOrder, Transaction, TransactionKind
from catatuang.filters import (
    by_category,
    by_date_range,
    by_kind,
    filter_transactions,
    month_transactions,
    recent_transactions,
    sort_transactions,
)
from catatuang.periods import period_range
from catatuang.summary import summarize

INCOME = TransactionKind.INCOME
EXPENSE = TransactionKind.EXPENSE


def make_tx(id, kind, amount, category_id, date):
    return Transaction(id=id, kind=kind, amount=amount, category_id=category_id, date=date)


def make_sample():
    return (
        make_tx(1, EXPENSE, 50000, 1, "2024-03-05"),
        make_tx(2, INCOME, 200000, 2, "2024-03-10"),
        make_tx(3, EXPENSE, 30000, 1, "2024-04-01"),
        make_tx(4, EXPENSE, 15000, 3, "2024-03-31T23:30:00"),
        make_tx(5, INCOME, 10000, 2, "not a date"),
    )


def test_end_to_end_month_filter_and_summary():
    trans = make_sample()[:3]
    result = filter_transactions(trans, range=period_range(Granularity.MONTH, date(2024, 3, 15)))
    assert [t.id for t in result] == [1, 2]

    s = summarize(result)
    assert s.income == 200000
    assert s.expense == 50000
    assert s.balance == 150000
    assert (s.total_count, s.income_count, s.expense_count) == (2, 1, 1)
    assert s.average_income == 200000
    assert s.average_expense == 50000


def test_malformed_date_is_out_of_range():
    trans = make_sample()
    result = filter_transactions(trans, range=period_range(Granularity.YEAR, date(2024, 1, 1)))
    assert 5 not in [t.id for t in result]
    assert by_date_range(period_range(Granularity.YEAR, date(2024, 1, 1)))(trans[4]) is False


def test_malformed_date_kept_without_range():
    assert [t.id for t in filter_transactions(make_sample(), kind=INCOME)] == [2, 5]


def test_filter_preserves_order_and_input():
    trans = make_sample()
    snapshot = tuple(trans)
    result = filter_transactions(trans, kind=EXPENSE)
    assert [t.id for t in result] == [1, 3, 4]
    assert trans == snapshot


def test_filter_combines_category_kind_and_range():
    result = filter_transactions(
        make_sample(),
        range=period_range(Granularity.MONTH, date(2024, 3, 1)),
        kind=EXPENSE,
        category_id=1,
    )
    assert [t.id for t in result] == [1]


def test_filter_order_does_not_change_result():
    trans = make_sample()
    preds = [
        by_category(1),
        by_kind(EXPENSE),
        by_date_range(period_range(Granularity.MONTH, date(2024, 3, 1))),
    ]
    results = set()
    for order in permutations(preds):
        current = trans
        for pred in order:
            current = tuple(filter(pred, current))
        results.add(frozenset(t.id for t in current))
    assert len(results) == 1


def test_no_predicates_returns_everything():
    assert filter_transactions(make_sample()) == make_sample()


def test_month_transactions_includes_last_evening():
    assert [t.id for t in month_transactions(make_sample(), 2024, 3)] == [1, 2, 4]


def test_sort_newest_and_oldest_put_bad_dates_last():
    trans = make_sample()
    assert [t.id for t in sort_transactions(trans, SortOrder.NEWEST)] == [3, 4, 2, 1, 5]
    assert [t.id for t in sort_transactions(trans, SortOrder.OLDEST)] == [1, 2, 4, 3, 5]


def test_recent_transactions_limit():
    assert [t.id for t in recent_transactions(make_sample(), limit=2)] == [3, 4]
    assert recent_transactions(make_sample(), limit=0) == []


def test_out_of_range_offset_does_not_abort_filter():
    trans = (
        make_tx(1, EXPENSE, 50000, 1, "2024-03-05"),
        make_tx(2, EXPENSE, 10000, 1, "9999-12-31T23:00:00-05:00"),
        make_tx(3, INCOME, 70000, 2, "0001-01-01T00:00:00+05:00"),
    )
    selected = filter_transactions(trans, range=period_range(Granularity.MONTH, date(2024, 3, 1)))
    assert [t.id for t in selected] == [1]
    assert [t.id for t in sort_transactions(trans)] == [1, 2, 3]
