from typing import Iterator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from expense_api.domain.services.auth_service import identify_user


def get_db(request: Request) -> Iterator[Session]:
    yield from request.app.state.database.session()


def get_current_user_id(
    user_id: Optional[str] = Header(None, alias="User-ID"),
    db: Session = Depends(get_db),
) -> int:
    return identify_user(db, user_id)
