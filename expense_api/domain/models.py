# expense_api/domain/models.py
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional


class CategoryType(Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass
class User:
    id: int
    name: str
    email: str
    hashed_password: str
    created_at: Optional[datetime] = None


@dataclass
class Category:
    id: int
    name: str
    type: str  # stored as free text; only "income" counts as income

    @property
    def is_income(self) -> bool:
        return self.type == CategoryType.INCOME.value


@dataclass
class Transaction:
    id: int
    user_id: int
    category_id: int
    amount: float
    description: str
    date: date
    created_at: Optional[datetime] = None


@dataclass
class MonthlySummary:
    total_income: float = 0.0
    total_expense: float = 0.0
    category_summary: Dict[str, float] = field(default_factory=dict)

    @property
    def net_balance(self) -> float:
        return self.total_income - self.total_expense
