"""pandas frames behind the bar and pie charts."""

from typing import Iterable, Sequence

import pandas as pd

from catatuang.domain import Bucket, CategoryBreakdownEntry, DayBucket, MonthBucket, WeekBucket, YearBucket
from catatuang.formatting import month_name

BUCKET_COLUMNS = ["label", "start", "end", "income", "expense", "balance", "count"]
BREAKDOWN_COLUMNS = ["category", "icon", "color", "amount", "count", "percentage", "count_percentage"]


def bucket_label(bucket: Bucket) -> str:
    if isinstance(bucket, DayBucket):
        return str(bucket.day)
    if isinstance(bucket, WeekBucket):
        return f"{bucket.range.start.day}-{bucket.range.end.day}"
    if isinstance(bucket, MonthBucket):
        return month_name(bucket.month, short=True)
    if isinstance(bucket, YearBucket):
        return str(bucket.year)
    return str(bucket.index)


def buckets_frame(buckets: Sequence[Bucket]) -> pd.DataFrame:
    rows = [
        {
            "label": bucket_label(b),
            "start": b.range.start,
            "end": b.range.end,
            "income": b.income,
            "expense": b.expense,
            "balance": b.balance,
            "count": len(b.transactions),
        }
        for b in buckets
    ]
    return pd.DataFrame(rows, columns=BUCKET_COLUMNS)


def breakdown_frame(entries: Iterable[CategoryBreakdownEntry]) -> pd.DataFrame:
    rows = [
        {
            "category": e.category_name,
            "icon": e.icon,
            "color": e.color,
            "amount": e.amount,
            "count": e.count,
            "percentage": round(e.percentage_of_kind_total, 1),
            "count_percentage": round(e.percentage_of_kind_count, 1),
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)


def cumulative_balance(buckets: Sequence[Bucket]) -> pd.Series:
    """Running balance across buckets in chronological order."""
    frame = buckets_frame(buckets).sort_values("start")
    return frame.set_index("label")["balance"].cumsum()
