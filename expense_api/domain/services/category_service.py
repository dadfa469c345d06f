import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from expense_api.data.repositories.category_repository import (
    get_all_categories,
    seed_categories,
)
from expense_api.domain.errors import StoreFailureError
from expense_api.domain.models import Category

logger = logging.getLogger(__name__)


def list_categories(db: Session) -> List[Category]:
    try:
        return get_all_categories(db)
    except SQLAlchemyError:
        logger.exception("Could not fetch categories")
        raise StoreFailureError("Could not fetch categories")


def seed_default_categories(db: Session) -> None:
    added = seed_categories(db)
    logger.info("Seeded %d default categories", added)
