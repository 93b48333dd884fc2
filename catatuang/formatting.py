"""Indonesian display strings for amounts, periods and list headers."""

from datetime import date, timedelta

from catatuang.config import settings
from catatuang.domain import Granularity, PeriodRange
from catatuang.navigation import NavigationState
from catatuang.periods import as_date, week_start

MONTH_NAMES = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des")
WEEKDAY_NAMES = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")


def month_name(month: int, short: bool = False) -> str:
    return (MONTH_ABBREVIATIONS if short else MONTH_NAMES)[month - 1]


def format_currency(amount: float) -> str:
    """Rupiah without decimals and with dot thousands separators, e.g. ``Rp 1.250.000``."""
    rounded = round(amount)
    digits = f"{abs(rounded):,}".replace(",", ".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}{settings.CURRENCY_SYMBOL} {digits}"


def format_day(day: date) -> str:
    return f"{day.day} {month_name(day.month, short=True)} {day.year}"


def period_label(granularity: Granularity, reference_date: date) -> str:
    granularity = Granularity.parse(granularity)
    day = as_date(reference_date)
    if granularity is Granularity.DAY:
        return f"{WEEKDAY_NAMES[day.weekday()]}, {format_day(day)}"
    if granularity is Granularity.WEEK:
        start = week_start(day)
        end = start + timedelta(days=6)
        return f"{start.day} - {end.day} {month_name(start.month, short=True)} {start.year}"
    if granularity is Granularity.MONTH:
        return f"{month_name(day.month, short=True)} {day.year}"
    return str(day.year)


def range_label(period: PeriodRange) -> str:
    return f"{format_day(period.start.date())} - {format_day(period.end.date())}"


def list_header(state: NavigationState) -> str:
    """Header above the transaction list: one level coarser than the active tab."""
    if state.custom_range_active:
        start, end = state.range_start.date(), state.range_end.date()
        return (
            f"{start.day:02d} {month_name(start.month, short=True)} - "
            f"{end.day:02d} {month_name(end.month, short=True)} {end.year}"
        )
    reference = state.reference_date
    if state.granularity in (Granularity.DAY, Granularity.WEEK):
        return f"{month_name(reference.month)} {reference.year}"
    if state.granularity is Granularity.MONTH:
        return str(reference.year)
    return "Total"
