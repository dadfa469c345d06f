import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from expense_api.data.base import MAX_ROW_ID
from expense_api.data.repositories.category_repository import get_category
from expense_api.data.repositories.transaction_repository import (
    add_transaction,
    get_transactions_with_categories,
    get_user_transactions,
)
from expense_api.domain.errors import (
    InvalidReferenceError,
    MalformedInputError,
    RecordNotFoundError,
    StoreFailureError,
)
from expense_api.domain.helpers.summary import month_range, summarize
from expense_api.domain.models import MonthlySummary, Transaction

logger = logging.getLogger(__name__)


def create_transaction(
    db: Session,
    user_id: int,
    category_id: int,
    amount: float,
    description: str = "",
    t_date: Optional[date] = None,
) -> Transaction:
    if not 0 < category_id <= MAX_ROW_ID:
        raise InvalidReferenceError("Invalid category")
    try:
        get_category(db, category_id)
    except RecordNotFoundError:
        raise InvalidReferenceError("Invalid category")
    except SQLAlchemyError:
        logger.exception("Category lookup failed for id=%s", category_id)
        raise StoreFailureError("Could not create transaction")

    if t_date is None:
        t_date = date.today()

    try:
        return add_transaction(db, user_id, category_id, amount, description, t_date)
    except SQLAlchemyError:
        logger.exception("Could not create transaction for user_id=%s", user_id)
        raise StoreFailureError("Could not create transaction")


def list_transactions(db: Session, user_id: int) -> List[Transaction]:
    try:
        return get_user_transactions(db, user_id)
    except SQLAlchemyError:
        logger.exception("Could not fetch transactions for user_id=%s", user_id)
        raise StoreFailureError("Could not fetch transactions")


def parse_month_year(month: Optional[str], year: Optional[str]):
    if not month or not year:
        raise MalformedInputError("Month and year parameters required")
    try:
        return month_range(int(year), int(month))
    except ValueError:
        raise MalformedInputError("Invalid month or year")


def monthly_summary(
    db: Session, user_id: int, month: Optional[str], year: Optional[str]
) -> MonthlySummary:
    start, end = parse_month_year(month, year)
    try:
        rows = get_transactions_with_categories(db, user_id, start, end)
    except SQLAlchemyError:
        logger.exception("Could not fetch transactions for user_id=%s", user_id)
        raise StoreFailureError("Could not fetch transactions")
    return summarize(rows)
