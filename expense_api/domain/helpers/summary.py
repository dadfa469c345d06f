import calendar
from datetime import date
from typing import Iterable, Optional, Tuple

from expense_api.domain.models import Category, MonthlySummary, Transaction


def month_range(year: int, month: int) -> Tuple[date, date]:
    """
    First and last calendar day of the given month, both inclusive.
    Raises ValueError for a month outside 1-12 or a year outside 1-9999.
    """
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


def summarize(
    rows: Iterable[Tuple[Transaction, Optional[Category]]]
) -> MonthlySummary:
    summary = MonthlySummary()
    for transaction, category in rows:
        name = category.name if category else ""
        if category is not None and category.is_income:
            summary.total_income += transaction.amount
        else:
            summary.total_expense += transaction.amount
        summary.category_summary[name] = (
            summary.category_summary.get(name, 0.0) + transaction.amount
        )
    return summary
