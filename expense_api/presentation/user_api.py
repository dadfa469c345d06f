from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from expense_api.domain.services.auth_service import authenticate_user, register_user
from expense_api.presentation.dependencies import get_db

router = APIRouter(tags=["auth"])


class UserCreateRequest(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class UserCreatedResponse(BaseModel):
    message: str
    id: int


class LoginResponse(BaseModel):
    message: str
    user_id: int


@router.post(
    "/register",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_user_endpoint(req: UserCreateRequest, db: Session = Depends(get_db)):
    user = register_user(db, req.name, req.email, req.password)
    return UserCreatedResponse(message="User created", id=user.id)


@router.post("/login", response_model=LoginResponse)
def login_endpoint(req: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate_user(db, req.email, req.password)
    return LoginResponse(message="Login successful", user_id=user.id)
