import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from expense_api.data.base import MAX_ROW_ID
from expense_api.data.repositories.user_repository import (
    create_user,
    get_user,
    get_user_by_email,
)
from expense_api.domain.errors import (
    ConflictError,
    InvalidCredentialsError,
    MalformedInputError,
    RecordNotFoundError,
    StoreFailureError,
    UnauthenticatedError,
)
from expense_api.domain.models import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def register_user(db: Session, name: str, email: str, password: str) -> User:
    if not name or not email or not password:
        raise MalformedInputError("Name, email and password are required")
    try:
        # the unique constraint on users.email decides conflicts
        user = create_user(db, name, email, get_password_hash(password))
    except IntegrityError:
        logger.info("Registration rejected, email already exists: %s", email)
        raise ConflictError("Email already exists")
    except SQLAlchemyError:
        logger.exception("Could not create user %s", email)
        raise StoreFailureError("Could not create user")
    logger.info("Registered user id=%s", user.id)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    try:
        user = get_user_by_email(db, email)
    except RecordNotFoundError:
        raise InvalidCredentialsError("Invalid credentials")
    except SQLAlchemyError:
        logger.exception("Login lookup failed for %s", email)
        raise InvalidCredentialsError("Invalid credentials")
    if not verify_password(password, user.hashed_password):
        raise InvalidCredentialsError("Invalid credentials")
    return user


def identify_user(db: Session, raw_user_id: str) -> int:
    """
    Resolve the caller's claimed user id to an existing user.
    This is identification only; no credential is checked.
    """
    if not raw_user_id:
        raise UnauthenticatedError("User-ID header required")
    try:
        user_id = int(raw_user_id)
    except ValueError:
        raise UnauthenticatedError("Invalid user")
    if not 0 < user_id <= MAX_ROW_ID:
        raise UnauthenticatedError("Invalid user")
    try:
        return get_user(db, user_id).id
    except RecordNotFoundError:
        raise UnauthenticatedError("Invalid user")
    except SQLAlchemyError:
        logger.exception("User lookup failed for id=%s", user_id)
        raise UnauthenticatedError("Invalid user")
