import json
from pathlib import Path
from typing import Iterable, Mapping, Tuple

from catatuang.domain import Category, Transaction, TransactionKind


def category_from_dict(data: Mapping) -> Category:
    return Category(
        id=int(data["id"]),
        name=data["name"],
        kind=TransactionKind(data.get("type") or data["kind"]),
        icon=data.get("icon", "help-circle"),
        color=data.get("color", "#6B7280"),
    )


def category_to_dict(c: Category) -> dict:
    return {"id": c.id, "name": c.name, "type": c.kind.value, "icon": c.icon, "color": c.color}


def transaction_from_dict(data: Mapping) -> Transaction:
    raw_id = data.get("id")
    return Transaction(
        id=int(raw_id) if raw_id is not None else None,
        kind=TransactionKind(data.get("type") or data["kind"]),
        amount=data["amount"],
        category_id=int(data["category_id"]),
        date=data["date"],
        description=data.get("description") or "",
        created_at=data.get("created_at"),
    )


def transaction_to_dict(t: Transaction) -> dict:
    return {
        "id": t.id,
        "type": t.kind.value,
        "amount": t.amount,
        "category_id": t.category_id,
        "description": t.description,
        "date": t.date,
        "created_at": t.created_at,
    }


def load_seed(
    path: str | Path,
) -> Tuple[Tuple[Category, ...], Tuple[Transaction, ...], dict]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    categories = tuple(category_from_dict(c) for c in data.get("categories", []))
    transactions = tuple(transaction_from_dict(t) for t in data.get("transactions", []))
    settings = {str(k): str(v) for k, v in data.get("settings", {}).items()}

    return categories, transactions, settings


def dump_seed(
    path: str | Path,
    categories: Iterable[Category],
    transactions: Iterable[Transaction],
    settings: Mapping[str, str],
) -> None:
    data = {
        "categories": [category_to_dict(c) for c in categories],
        "transactions": [transaction_to_dict(t) for t in transactions],
        "settings": dict(settings),
    }
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return trans + (t,)
