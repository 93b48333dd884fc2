from datetime import datetime
from typing import Callable, Iterable, Optional

from catatuang.config import settings
from catatuang.domain import PeriodRange, SortOrder, Transaction, TransactionKind, parse_date
from catatuang.logging_setup import get_logger
from catatuang.periods import month_range

logger = get_logger(__name__)

Predicate = Callable[[Transaction], bool]


def by_category(category_id: int) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.category_id == category_id

    return _filter


def by_kind(kind: TransactionKind) -> Predicate:
    kind = TransactionKind(kind)

    def _filter(t: Transaction) -> bool:
        return t.kind == kind

    return _filter


def by_date_range(period: PeriodRange) -> Predicate:
    def _filter(t: Transaction) -> bool:
        moment = parse_date(t.date)
        if moment is None:
            logger.debug("Skipping transaction %s with unparseable date %r", t.id, t.date)
            return False
        return period.contains(moment)

    return _filter


def filter_transactions(
    transactions: Iterable[Transaction],
    range: Optional[PeriodRange] = None,
    kind: Optional[TransactionKind] = None,
    category_id: Optional[int] = None,
) -> tuple[Transaction, ...]:
    """Keep transactions matching every given predicate, in their original order.

    Category and kind are checked before the date range so dates are only
    parsed for the surviving candidates.
    """
    predicates: list[Predicate] = []
    if category_id is not None:
        predicates.append(by_category(category_id))
    if kind is not None:
        predicates.append(by_kind(kind))
    if range is not None:
        predicates.append(by_date_range(range))

    result = tuple(transactions)
    for pred in predicates:
        result = tuple(filter(pred, result))
    return result


def month_transactions(transactions: Iterable[Transaction], year: int, month: int) -> tuple[Transaction, ...]:
    return filter_transactions(transactions, range=month_range(year, month))


def sort_transactions(transactions: Iterable[Transaction], order: SortOrder = SortOrder.NEWEST) -> list[Transaction]:
    """Sort by effective date; undated records always go last."""
    newest_first = SortOrder(order) is SortOrder.NEWEST
    dated: list[tuple[datetime, Transaction]] = []
    undated: list[Transaction] = []
    for t in transactions:
        moment = parse_date(t.date)
        if moment is None:
            undated.append(t)
        else:
            dated.append((moment, t))
    dated.sort(key=lambda item: item[0], reverse=newest_first)
    return [t for _, t in dated] + undated


def recent_transactions(transactions: Iterable[Transaction], limit: Optional[int] = None) -> list[Transaction]:
    if limit is None:
        limit = settings.RECENT_LIMIT
    return sort_transactions(transactions, SortOrder.NEWEST)[: max(0, limit)]
