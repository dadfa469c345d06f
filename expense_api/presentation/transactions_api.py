import datetime as dt
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from expense_api.domain.models import MonthlySummary, Transaction
from expense_api.domain.services.transaction_service import (
    create_transaction,
    list_transactions,
    monthly_summary,
)
from expense_api.presentation.dependencies import get_current_user_id, get_db

router = APIRouter(prefix="/transactions", tags=["transactions"])


class TransactionCreateRequest(BaseModel):
    category_id: int = 0
    amount: float = Field(0.0, allow_inf_nan=False)
    description: str = ""
    date: Optional[dt.date] = None

    @field_validator("date", mode="before")
    @classmethod
    def empty_date_is_today(cls, value):
        # "" means "not given", same as an absent field
        if value == "":
            return None
        return value


class TransactionResponse(BaseModel):
    id: int
    user_id: int
    category_id: int
    amount: float
    description: str
    date: dt.date
    created_at: Optional[dt.datetime] = None

    @staticmethod
    def from_domain(t: Transaction) -> "TransactionResponse":
        return TransactionResponse(
            id=t.id,
            user_id=t.user_id,
            category_id=t.category_id,
            amount=t.amount,
            description=t.description,
            date=t.date,
            created_at=t.created_at,
        )


class SummaryResponse(BaseModel):
    total_income: float
    total_expense: float
    net_balance: float
    category_summary: Dict[str, float]

    @staticmethod
    def from_domain(s: MonthlySummary) -> "SummaryResponse":
        return SummaryResponse(
            total_income=s.total_income,
            total_expense=s.total_expense,
            net_balance=s.net_balance,
            category_summary=s.category_summary,
        )


@router.post(
    "/", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED
)
def create_transaction_endpoint(
    req: TransactionCreateRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    transaction = create_transaction(
        db,
        user_id,
        category_id=req.category_id,
        amount=req.amount,
        description=req.description,
        t_date=req.date,
    )
    return TransactionResponse.from_domain(transaction)


@router.get("/", response_model=List[TransactionResponse])
def get_transactions_endpoint(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return [TransactionResponse.from_domain(t) for t in list_transactions(db, user_id)]


@router.get("/summary", response_model=SummaryResponse)
def get_summary_endpoint(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    month: Optional[str] = Query(None, description="Month number, 1-12"),
    year: Optional[str] = Query(None, description="Four digit year"),
):
    return SummaryResponse.from_domain(monthly_summary(db, user_id, month, year))
