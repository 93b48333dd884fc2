from datetime import date, datetime

import pytest

from catatuang.domain import Direction, Granularity
from catatuang.navigation import NavigationState
from catatuang.periods import period_range


def fixed_clock(moment=datetime(2024, 3, 15, 10, 30)):
    return lambda: moment


def test_initial_states():
    reports = NavigationState.for_reports(clock=fixed_clock())
    listing = NavigationState.for_transaction_list(clock=fixed_clock())
    assert reports.granularity is Granularity.MONTH
    assert listing.granularity is Granularity.DAY
    assert reports.reference_date == date(2024, 3, 15)
    assert not reports.custom_range_active


def test_range_follows_granularity_and_reference():
    nav = NavigationState(Granularity.WEEK, date(2024, 1, 7), clock=fixed_clock())
    assert nav.range == period_range(Granularity.WEEK, date(2024, 1, 7))
    assert nav.range_start == datetime(2024, 1, 1)


def test_navigate_month_rolls_year():
    nav = NavigationState(Granularity.MONTH, date(2024, 1, 20), clock=fixed_clock())
    nav.navigate(Direction.PREVIOUS)
    assert nav.reference_date == date(2023, 12, 20)
    assert nav.range_start == datetime(2023, 12, 1)
    assert nav.range_end.date() == date(2023, 12, 31)


def test_set_granularity_recomputes_range():
    nav = NavigationState(Granularity.DAY, date(2024, 2, 10), clock=fixed_clock())
    nav.set_granularity(Granularity.YEAR)
    assert nav.range == period_range(Granularity.YEAR, date(2024, 2, 10))
    nav.set_granularity("weekly")
    assert nav.granularity is Granularity.WEEK


def test_custom_range_keeps_reference_date():
    nav = NavigationState(Granularity.MONTH, date(2024, 3, 15), clock=fixed_clock())
    nav.apply_custom_range(date(2024, 1, 5), date(2024, 2, 20))
    assert nav.custom_range_active
    assert nav.reference_date == date(2024, 3, 15)
    assert nav.range_start == datetime(2024, 1, 5)
    assert nav.range_end.date() == date(2024, 2, 20)


@pytest.mark.parametrize(
    "leave_custom",
    [
        lambda nav: nav.navigate(Direction.NEXT),
        lambda nav: nav.set_granularity(Granularity.WEEK),
        lambda nav: nav.reset_to_today(),
    ],
)
def test_transitions_abandon_custom_range(leave_custom):
    nav = NavigationState(Granularity.MONTH, date(2024, 3, 15), clock=fixed_clock())
    nav.apply_custom_range(date(2024, 1, 5), date(2024, 2, 20))
    leave_custom(nav)
    assert not nav.custom_range_active
    assert nav.range == period_range(nav.granularity, nav.reference_date)


def test_navigate_after_custom_range_shifts_reference():
    nav = NavigationState(Granularity.MONTH, date(2024, 3, 15), clock=fixed_clock())
    nav.apply_custom_range(date(2024, 1, 5), date(2024, 2, 20))
    nav.navigate(Direction.NEXT)
    assert nav.reference_date == date(2024, 4, 15)


def test_reset_to_today_uses_clock():
    nav = NavigationState(Granularity.WEEK, date(2020, 6, 1), clock=fixed_clock(datetime(2024, 3, 17, 22, 0)))
    nav.reset_to_today()
    assert nav.reference_date == date(2024, 3, 17)
    assert nav.range_start == datetime(2024, 3, 11)


def test_inverted_custom_range_leaves_state_untouched():
    nav = NavigationState(Granularity.MONTH, date(2024, 3, 15), clock=fixed_clock())
    with pytest.raises(ValueError):
        nav.apply_custom_range(date(2024, 3, 10), date(2024, 3, 1))
    assert not nav.custom_range_active
