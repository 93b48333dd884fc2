from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Granularity(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "str | Granularity") -> "Granularity":
        """Accept enum values plus the tab names used by the list and report screens."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        aliases = {
            "today": cls.DAY,
            "daily": cls.DAY,
            "weekly": cls.WEEK,
            "monthly": cls.MONTH,
            "yearly": cls.YEAR,
        }
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown granularity: {value!r}") from None


class Direction(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"


@dataclass(frozen=True)
class Category:
    id: int
    name: str
    kind: TransactionKind
    icon: str = "help-circle"
    color: str = "#6B7280"


@dataclass(frozen=True)
class Transaction:
    id: Optional[int]        # None until persisted
    kind: TransactionKind
    amount: float            # stored negative for expenses in some exports; use magnitude
    category_id: int
    date: str                # ISO-8601 effective date, e.g. "2024-03-05T10:00:00"
    description: str = ""
    created_at: Optional[str] = None

    @property
    def magnitude(self) -> float:
        return abs(self.amount)


@dataclass(frozen=True)
class PeriodRange:
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Range start {self.start} is after end {self.end}")

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class Bucket:
    index: int
    range: PeriodRange
    transactions: tuple[Transaction, ...]
    income: float
    expense: float
    balance: float


@dataclass(frozen=True)
class DayBucket(Bucket):
    @property
    def day(self) -> int:
        return self.index


@dataclass(frozen=True)
class WeekBucket(Bucket):
    @property
    def week(self) -> int:
        return self.index


@dataclass(frozen=True)
class MonthBucket(Bucket):
    is_current: bool = False

    @property
    def month(self) -> int:
        return self.index


@dataclass(frozen=True)
class YearBucket(Bucket):
    @property
    def year(self) -> int:
        return self.index


@dataclass(frozen=True)
class Summary:
    income: float
    expense: float
    balance: float
    total_count: int
    income_count: int
    expense_count: int
    average_income: float
    average_expense: float

    @classmethod
    def empty(cls) -> "Summary":
        return cls(0, 0, 0, 0, 0, 0, 0, 0)


@dataclass(frozen=True)
class CategoryBreakdownEntry:
    category_id: int
    category_name: str
    icon: str
    color: str
    amount: float
    count: int
    percentage_of_kind_total: float
    percentage_of_kind_count: float


def parse_date(value) -> Optional[datetime]:
    """Parse an ISO-8601 date or date-time into a naive local datetime.

    Returns None for anything that is not a valid date; callers treat that as
    "outside every range" instead of failing.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if moment.tzinfo is not None:
        try:
            moment = moment.astimezone().replace(tzinfo=None)
        except (OverflowError, ValueError):
            # offset pushes the instant past datetime.min or datetime.max
            return None
    return moment
