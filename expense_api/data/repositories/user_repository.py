from sqlalchemy import Column, DateTime, Integer, String, func

from expense_api.data.base import Base, create, find_by_id, find_one
from expense_api.domain.models import User


class UserORM(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


def user_to_domain(user_orm: UserORM) -> User:
    return User(
        id=user_orm.id,
        name=user_orm.name,
        email=user_orm.email,
        hashed_password=user_orm.hashed_password,
        created_at=user_orm.created_at,
    )


def get_user(db, user_id: int) -> User:
    return user_to_domain(find_by_id(db, UserORM, user_id))


def get_user_by_email(db, email: str) -> User:
    return user_to_domain(find_one(db, UserORM, email=email))


def create_user(db, name: str, email: str, hashed_password: str) -> User:
    db_user = UserORM(name=name, email=email, hashed_password=hashed_password)
    return user_to_domain(create(db, db_user))
