"""In-memory transaction/category store with optional JSON persistence.

The engine never queries the store; callers load ``list_transactions()`` and
``list_categories()`` once and pass the collections into the pure functions.
Every mutation is published on the event bus so cached views can be dropped.
"""

from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional

from catatuang.config import settings
from catatuang.domain import Category, SortOrder, Transaction, TransactionKind, parse_date
from catatuang.events import (
    CATEGORY_ADDED,
    CATEGORY_DELETED,
    CATEGORY_UPDATED,
    DATA_RESET,
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    TRANSACTION_UPDATED,
    EventBus,
    event_bus,
)
from catatuang.filters import sort_transactions
from catatuang.functional import safe_category
from catatuang.logging_setup import get_logger
from catatuang.transforms import add_transaction, dump_seed, load_seed

logger = get_logger(__name__)

DEFAULT_EXPENSE_CATEGORIES = (
    ("Makanan", "restaurant", "#FF6B6B"),
    ("Transportasi", "car", "#4ECDC4"),
    ("Belanja", "bag", "#45B7D1"),
    ("Hiburan", "game-controller", "#96CEB4"),
    ("Kesehatan", "medical", "#FFEAA7"),
    ("Pendidikan", "school", "#DDA0DD"),
    ("Tagihan", "receipt", "#98D8C8"),
    ("Hobi", "heart", "#FF9FF3"),
    ("Lainnya", "ellipsis-horizontal", "#F7DC6F"),
)

DEFAULT_INCOME_CATEGORIES = (
    ("Gaji", "wallet", "#2ECC71"),
    ("Bonus", "gift", "#3498DB"),
    ("Investasi", "trending-up", "#9B59B6"),
    ("Freelance", "laptop", "#E67E22"),
    ("Lainnya", "add-circle", "#1ABC9C"),
)


def _normalize_date(value) -> str:
    if isinstance(value, (date, datetime)):
        value = value.isoformat()
    if parse_date(value) is None:
        raise ValueError(f"Invalid transaction date: {value!r}")
    return value


class TransactionStore:
    def __init__(
        self,
        path: Optional[str | Path] = None,
        bus: EventBus = event_bus,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.path = Path(path) if path is not None else None
        self._bus = bus
        self._clock = clock
        self._categories: tuple[Category, ...] = ()
        self._transactions: tuple[Transaction, ...] = ()
        self._settings: dict[str, str] = {}

        if self.path is not None and self.path.exists():
            self._categories, self._transactions, self._settings = load_seed(self.path)
            logger.info(
                "Loaded %d transactions and %d categories from %s",
                len(self._transactions), len(self._categories), self.path,
            )
        if not self._categories:
            self._seed_default_categories()

    @classmethod
    def from_settings(cls) -> "TransactionStore":
        return cls(settings.DATA_PATH)

    def _seed_default_categories(self) -> None:
        for kind, defaults in (
            (TransactionKind.EXPENSE, DEFAULT_EXPENSE_CATEGORIES),
            (TransactionKind.INCOME, DEFAULT_INCOME_CATEGORIES),
        ):
            for name, icon, color in defaults:
                self._categories += (Category(self._next_category_id(), name, kind, icon, color),)
        logger.info("Seeded %d default categories", len(self._categories))

    def _next_transaction_id(self) -> int:
        return max((t.id for t in self._transactions if t.id is not None), default=0) + 1

    def _next_category_id(self) -> int:
        return max((c.id for c in self._categories), default=0) + 1

    def _changed(self, name: str, payload: dict) -> None:
        if self.path is not None:
            self.save()
        self._bus.publish(name, payload)

    def save(self) -> None:
        if self.path is None:
            raise ValueError("Store has no path to save to")
        dump_seed(self.path, self._categories, self._transactions, self._settings)

    # transactions

    def list_transactions(self) -> tuple[Transaction, ...]:
        return tuple(sort_transactions(self._transactions, SortOrder.NEWEST))

    def get_transaction(self, transaction_id: int) -> Transaction:
        for t in self._transactions:
            if t.id == transaction_id:
                return t
        raise KeyError(f"Transaction {transaction_id} not found")

    def add_transaction(
        self,
        kind: TransactionKind,
        amount: float,
        category_id: int,
        date,
        description: str = "",
    ) -> Transaction:
        if amount == 0:
            raise ValueError("Transaction amount must not be zero")
        t = Transaction(
            id=self._next_transaction_id(),
            kind=TransactionKind(kind),
            amount=amount,
            category_id=category_id,
            date=_normalize_date(date),
            description=description,
            created_at=self._clock().isoformat(),
        )
        self._transactions = add_transaction(self._transactions, t)
        logger.info("Added %s transaction %s", t.kind.value, t.id)
        self._changed(TRANSACTION_ADDED, {"id": t.id, "kind": t.kind.value, "amount": t.amount})
        return t

    def update_transaction(self, transaction_id: int, **changes) -> Transaction:
        current = self.get_transaction(transaction_id)
        changes.pop("id", None)
        changes.pop("created_at", None)
        if "kind" in changes:
            changes["kind"] = TransactionKind(changes["kind"])
        if "date" in changes:
            changes["date"] = _normalize_date(changes["date"])
        if changes.get("amount", current.amount) == 0:
            raise ValueError("Transaction amount must not be zero")
        updated = replace(current, **changes)
        self._transactions = tuple(updated if t.id == transaction_id else t for t in self._transactions)
        self._changed(TRANSACTION_UPDATED, {"id": transaction_id, "fields": sorted(changes)})
        return updated

    def delete_transaction(self, transaction_id: int) -> None:
        self.get_transaction(transaction_id)
        self._transactions = tuple(t for t in self._transactions if t.id != transaction_id)
        self._changed(TRANSACTION_DELETED, {"id": transaction_id})

    # categories

    def list_categories(self, kind: Optional[TransactionKind] = None) -> tuple[Category, ...]:
        if kind is not None:
            kind = TransactionKind(kind)
            return tuple(sorted((c for c in self._categories if c.kind == kind), key=lambda c: c.name))
        return tuple(sorted(self._categories, key=lambda c: (c.kind.value, c.name)))

    def get_category(self, category_id: int) -> Category:
        found = safe_category(self._categories, category_id)
        if found.is_some():
            return found.get_or_else(None)
        raise KeyError(f"Category {category_id} not found")

    def add_category(self, name: str, kind: TransactionKind, icon: str = "help-circle", color: str = "#6B7280") -> Category:
        if not name.strip():
            raise ValueError("Category name must not be empty")
        c = Category(self._next_category_id(), name.strip(), TransactionKind(kind), icon, color)
        self._categories += (c,)
        self._changed(CATEGORY_ADDED, {"id": c.id, "kind": c.kind.value})
        return c

    def update_category(self, category_id: int, **changes) -> Category:
        current = self.get_category(category_id)
        changes.pop("id", None)
        if "kind" in changes:
            changes["kind"] = TransactionKind(changes["kind"])
        if "name" in changes and not str(changes["name"]).strip():
            raise ValueError("Category name must not be empty")
        updated = replace(current, **changes)
        self._categories = tuple(updated if c.id == category_id else c for c in self._categories)
        self._changed(CATEGORY_UPDATED, {"id": category_id, "fields": sorted(changes)})
        return updated

    def delete_category(self, category_id: int) -> None:
        """Remove a category; its transactions keep the dangling id."""
        self.get_category(category_id)
        self._categories = tuple(c for c in self._categories if c.id != category_id)
        self._changed(CATEGORY_DELETED, {"id": category_id})

    # settings

    def get_setting(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._settings.get(key, default)

    def set_setting(self, key: str, value: str) -> None:
        self._settings[key] = str(value)
        if self.path is not None:
            self.save()

    def reset(self) -> None:
        """Drop every transaction and category, then reseed the defaults."""
        self._transactions = ()
        self._categories = ()
        self._seed_default_categories()
        logger.warning("All data reset to defaults")
        self._changed(DATA_RESET, {})
