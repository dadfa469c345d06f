from typing import Iterator, List, Type, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from expense_api.domain.errors import RecordNotFoundError

Base = declarative_base()

ModelT = TypeVar("ModelT")

# largest value a signed 64-bit INTEGER primary key can hold
MAX_ROW_ID = 2**63 - 1


class Database:
    """
    Owns the engine and session factory for one relational store.
    Built once at startup and handed to request handlers through app.state.
    """

    def __init__(self, url: str):
        self.url = url
        engine_kwargs = {}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # one shared connection, otherwise each session gets an empty db
                engine_kwargs["poolclass"] = StaticPool
        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def create_tables(self) -> None:
        # register the ORM classes on Base.metadata
        from expense_api.data.repositories import (  # noqa: F401
            category_repository,
            transaction_repository,
            user_repository,
        )

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


def find_by_id(db: Session, model: Type[ModelT], record_id: int) -> ModelT:
    obj = db.get(model, record_id)
    if obj is None:
        raise RecordNotFoundError(f"{model.__tablename__} id={record_id} not found")
    return obj


def find_one(db: Session, model: Type[ModelT], **filters) -> ModelT:
    obj = db.query(model).filter_by(**filters).first()
    if obj is None:
        raise RecordNotFoundError(f"no {model.__tablename__} row matching {filters}")
    return obj


def find_all(db: Session, model: Type[ModelT], **filters) -> List[ModelT]:
    return db.query(model).filter_by(**filters).order_by(model.id).all()


def create(db: Session, obj: ModelT) -> ModelT:
    db.add(obj)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(obj)
    return obj
