from typing import Any, Dict, Iterable, Optional

from catatuang.config import settings
from catatuang.domain import Category, SortOrder, Transaction, TransactionKind
from catatuang.filters import filter_transactions, sort_transactions
from catatuang.functional import pipe
from catatuang.logging_setup import get_logger
from catatuang.memo import cached_buckets_for, cached_summary
from catatuang.navigation import NavigationState
from catatuang.ranking import top_categories

logger = get_logger(__name__)


class ReportService:
    """Facade running filter -> summary -> ranking for one navigation state.

    Each stage's output is recorded under ``steps`` so the page can show how a
    figure was derived.
    """

    def __init__(self, top_limit: Optional[int] = None):
        self.top_limit = top_limit if top_limit is not None else settings.TOP_CATEGORY_LIMIT

    def period_report(
        self,
        state: NavigationState,
        transactions: Iterable[Transaction],
        categories: Iterable[Category],
        kind: Optional[TransactionKind] = None,
        category_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        cats = tuple(categories)
        period = state.range
        selected = filter_transactions(transactions, range=period, kind=kind, category_id=category_id)
        summary = cached_summary(selected)
        top_expense = top_categories(selected, TransactionKind.EXPENSE, cats, self.top_limit)
        top_income = top_categories(selected, TransactionKind.INCOME, cats, self.top_limit)

        logger.debug(
            "Report %s %s - %s: %d transactions", state.granularity.value, period.start, period.end, len(selected)
        )
        return {
            "granularity": state.granularity,
            "range": period,
            "custom_range": state.custom_range_active,
            "transactions": selected,
            "summary": summary,
            "top_expense": top_expense,
            "top_income": top_income,
            "steps": [
                {"step": "filter", "output": len(selected)},
                {"step": "summarize", "output": summary},
                {"step": "rank_expense", "output": len(top_expense)},
                {"step": "rank_income", "output": len(top_income)},
            ],
        }

    def list_view(
        self,
        state: NavigationState,
        transactions: Iterable[Transaction],
        kind: Optional[TransactionKind] = None,
        category_id: Optional[int] = None,
        order: SortOrder = SortOrder.NEWEST,
    ) -> Dict[str, Any]:
        """Transaction list tab: the sorted rows in range plus the tab's buckets.

        Buckets are built from the kind/category selection without the range
        filter, since a bucket view spans more than the active period.
        """
        candidates = filter_transactions(transactions, kind=kind, category_id=category_id)
        rows = pipe(
            candidates,
            lambda ts: filter_transactions(ts, range=state.range),
            lambda ts: sort_transactions(ts, order),
        )
        return {
            "granularity": state.granularity,
            "range": state.range,
            "transactions": rows,
            "buckets": cached_buckets_for(state.granularity, candidates, state.reference_date),
        }
