from typing import Iterable

from catatuang.domain import Summary, Transaction, TransactionKind


def kind_totals(transactions: Iterable[Transaction]) -> tuple[float, float]:
    """Return (income, expense) as sums of magnitudes."""
    income = 0
    expense = 0
    for t in transactions:
        if t.kind == TransactionKind.INCOME:
            income += t.magnitude
        elif t.kind == TransactionKind.EXPENSE:
            expense += t.magnitude
    return income, expense


def summarize(transactions: Iterable[Transaction]) -> Summary:
    income = expense = 0
    income_count = expense_count = total_count = 0

    for t in transactions:
        total_count += 1
        if t.kind == TransactionKind.INCOME:
            income += t.magnitude
            income_count += 1
        elif t.kind == TransactionKind.EXPENSE:
            expense += t.magnitude
            expense_count += 1

    if total_count == 0:
        return Summary.empty()
    return Summary(
        income=income,
        expense=expense,
        balance=income - expense,
        total_count=total_count,
        income_count=income_count,
        expense_count=expense_count,
        average_income=income / income_count if income_count > 0 else 0,
        average_expense=expense / expense_count if expense_count > 0 else 0,
    )


def overall_balance(transactions: Iterable[Transaction]) -> dict:
    """Running balance across the whole history, as shown on the home card."""
    income, expense = kind_totals(transactions)
    return {"total": income - expense, "income": income, "expense": expense}
