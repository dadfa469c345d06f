from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from expense_api.domain.models import Category
from expense_api.domain.services.category_service import list_categories
from expense_api.presentation.dependencies import get_db

router = APIRouter(prefix="/categories", tags=["categories"])


class CategoryResponse(BaseModel):
    id: int
    name: str
    type: str

    @staticmethod
    def from_domain(c: Category) -> "CategoryResponse":
        return CategoryResponse(id=c.id, name=c.name, type=c.type)


@router.get("", response_model=List[CategoryResponse])
def get_categories(db: Session = Depends(get_db)):
    return [CategoryResponse.from_domain(c) for c in list_categories(db)]
