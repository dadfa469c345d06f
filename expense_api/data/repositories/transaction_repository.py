from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, func

from expense_api.data.base import Base, create, find_all
from expense_api.data.repositories.category_repository import (
    CategoryORM,
    category_to_domain,
)
from expense_api.domain.models import Category, Transaction


class TransactionORM(Base):
    __tablename__ = "transactions"
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    amount = Column(Float, nullable=False)
    description = Column(String, default="")
    date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


def transaction_to_domain(transaction_orm: TransactionORM) -> Transaction:
    return Transaction(
        id=transaction_orm.id,
        user_id=transaction_orm.user_id,
        category_id=transaction_orm.category_id,
        amount=transaction_orm.amount,
        description=transaction_orm.description or "",
        date=transaction_orm.date,
        created_at=transaction_orm.created_at,
    )


def add_transaction(
    db,
    user_id: int,
    category_id: int,
    amount: float,
    description: str,
    t_date: date,
) -> Transaction:
    db_transaction = TransactionORM(
        user_id=user_id,
        category_id=category_id,
        amount=amount,
        description=description,
        date=t_date,
    )
    return transaction_to_domain(create(db, db_transaction))


def get_user_transactions(db, user_id: int) -> List[Transaction]:
    return [transaction_to_domain(t) for t in find_all(db, TransactionORM, user_id=user_id)]


def get_transactions_with_categories(
    db, user_id: int, start: date, end: date
) -> List[Tuple[Transaction, Optional[Category]]]:
    """
    Transactions of one user dated within [start, end], each paired with its
    category (None if the category row is gone).
    """
    rows = (
        db.query(TransactionORM, CategoryORM)
        .outerjoin(CategoryORM, TransactionORM.category_id == CategoryORM.id)
        .filter(
            TransactionORM.user_id == user_id,
            TransactionORM.date >= start,
            TransactionORM.date <= end,
        )
        .order_by(TransactionORM.id)
        .all()
    )
    return [
        (transaction_to_domain(t), category_to_domain(c) if c is not None else None)
        for t, c in rows
    ]
