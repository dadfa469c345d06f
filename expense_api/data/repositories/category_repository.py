from typing import List, Tuple

from sqlalchemy import Column, DateTime, Integer, String, func

from expense_api.data.base import Base, find_all, find_by_id
from expense_api.domain.models import Category

DEFAULT_CATEGORIES: List[Tuple[str, str]] = [
    ("Salary", "income"),
    ("Food", "expense"),
    ("Transport", "expense"),
    ("Entertainment", "expense"),
]


class CategoryORM(Base):
    __tablename__ = "categories"
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String, unique=True, nullable=False)
    type = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


def category_to_domain(category_orm: CategoryORM) -> Category:
    return Category(id=category_orm.id, name=category_orm.name, type=category_orm.type)


def get_category(db, category_id: int) -> Category:
    return category_to_domain(find_by_id(db, CategoryORM, category_id))


def get_all_categories(db) -> List[Category]:
    return [category_to_domain(c) for c in find_all(db, CategoryORM)]


def seed_categories(db, categories: List[Tuple[str, str]] = DEFAULT_CATEGORIES) -> int:
    """
    Insert each (name, type) pair unless a category with that name exists.
    Returns the number of rows inserted.
    """
    existing = {
        name for (name,) in db.query(CategoryORM.name).filter(
            CategoryORM.name.in_([name for name, _ in categories])
        )
    }
    added = 0
    for name, category_type in categories:
        if name in existing:
            continue
        db.add(CategoryORM(name=name, type=category_type))
        added += 1
    if added:
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
    return added
