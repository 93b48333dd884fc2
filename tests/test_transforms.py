from pathlib import Path

from catatuang.domain import Category, Transaction, TransactionKind
from catatuang.transforms import (
    add_transaction,
    category_from_dict,
    category_to_dict,
    dump_seed,
    load_seed,
    transaction_from_dict,
)

SEED = Path(__file__).resolve().parent.parent / "data" / "seed.json"


def test_load_seed():
    categories, transactions, settings = load_seed(SEED)

    assert len(categories) >= 5
    assert len(transactions) >= 5
    assert {c.kind for c in categories} == {TransactionKind.INCOME, TransactionKind.EXPENSE}
    assert settings["language"] == "id"


def test_transaction_from_stored_row():
    t = transaction_from_dict(
        {"id": "7", "type": "expense", "amount": -15000, "category_id": "2", "description": None, "date": "2024-03-05"}
    )
    assert t.id == 7
    assert t.kind is TransactionKind.EXPENSE
    assert t.category_id == 2
    assert t.description == ""
    assert t.magnitude == 15000


def test_unsaved_transaction_has_no_id():
    t = transaction_from_dict({"kind": "income", "amount": 10, "category_id": 1, "date": "2024-03-05"})
    assert t.id is None


def test_category_dict_round_trip():
    c = Category(3, "Gaji", TransactionKind.INCOME, "wallet", "#2ECC71")
    assert category_from_dict(category_to_dict(c)) == c


def test_dump_then_load(tmp_path):
    cats = (Category(1, "Makanan", TransactionKind.EXPENSE),)
    trans = (Transaction(1, TransactionKind.EXPENSE, -5000, 1, "2024-03-05", "Kopi"),)
    path = tmp_path / "nested" / "seed.json"
    dump_seed(path, cats, trans, {"theme": "dark"})
    assert load_seed(path) == (cats, trans, {"theme": "dark"})


def test_add_transaction_immutability():
    t1 = Transaction(1, TransactionKind.INCOME, 100, 1, "2025-09-01", "Gaji")
    transactions = (t1,)
    new_transactions = add_transaction(transactions, t1)

    assert new_transactions is not transactions
    assert len(new_transactions) == 2
    assert len(transactions) == 1
