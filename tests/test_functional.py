from catatuang.domain import Category, TransactionKind
from catatuang.functional import Nothing, pipe, safe_category


def make_categories():
    return (
        Category(1, "Makanan", TransactionKind.EXPENSE),
        Category(2, "Gaji", TransactionKind.INCOME),
    )


def test_safe_category_found():
    found = safe_category(make_categories(), 2)
    assert found.is_some()
    assert found.get_or_else(None).name == "Gaji"


def test_safe_category_missing_uses_default():
    fallback = Category(99, "Lainnya", TransactionKind.EXPENSE)
    missing = safe_category(make_categories(), 99)
    assert not missing.is_some()
    assert missing.get_or_else(fallback) is fallback


def test_nothing_repr():
    assert repr(Nothing()) == "Nothing()"


def test_pipe_runs_left_to_right():
    def add1(x):
        return x + 1

    def mul2(x):
        return x * 2

    assert pipe(3, add1, mul2) == 8
    assert pipe(3) == 3
