from typing import Iterable, Optional

from catatuang.config import settings
from catatuang.domain import Category, CategoryBreakdownEntry, Transaction, TransactionKind
from catatuang.functional import safe_category


def fallback_category(category_id: int, kind: TransactionKind) -> Category:
    """Stand-in for a category id that no longer resolves."""
    return Category(
        id=category_id,
        name=settings.FALLBACK_CATEGORY_NAME,
        kind=kind,
        icon=settings.FALLBACK_CATEGORY_ICON,
        color=settings.FALLBACK_CATEGORY_COLOR,
    )


def _percentage(part: float, whole: float) -> float:
    return part / whole * 100 if whole > 0 else 0


def top_categories(
    transactions: Iterable[Transaction],
    kind: TransactionKind,
    categories: Iterable[Category],
    limit: Optional[int] = None,
) -> list[CategoryBreakdownEntry]:
    """Rank categories of one kind by total magnitude, largest first.

    Percentages are relative to the whole kind, so with ``limit`` smaller than
    the number of categories the returned shares sum to less than 100.
    """
    kind = TransactionKind(kind)
    if limit is None:
        limit = settings.TOP_CATEGORY_LIMIT
    cats = tuple(categories)

    # dict preserves first-seen order, which the stable sort keeps for ties
    totals: dict[int, list] = {}
    for t in transactions:
        if t.kind != kind:
            continue
        entry = totals.setdefault(t.category_id, [0, 0])
        entry[0] += t.magnitude
        entry[1] += 1

    kind_total = sum(amount for amount, _ in totals.values())
    kind_count = sum(count for _, count in totals.values())

    entries = []
    for category_id, (amount, count) in totals.items():
        category = safe_category(cats, category_id).get_or_else(fallback_category(category_id, kind))
        entries.append(
            CategoryBreakdownEntry(
                category_id=category_id,
                category_name=category.name,
                icon=category.icon,
                color=category.color,
                amount=amount,
                count=count,
                percentage_of_kind_total=_percentage(amount, kind_total),
                percentage_of_kind_count=_percentage(count, kind_count),
            )
        )

    entries.sort(key=lambda e: e.amount, reverse=True)
    return entries[: max(0, limit)]
