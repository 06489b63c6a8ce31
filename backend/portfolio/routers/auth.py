"""Auth API routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.deps import get_current_user
from portfolio.crud import commit
from portfolio.database import get_db
from portfolio.exceptions import AuthenticationError
from portfolio.models.user import User
from portfolio.schemas.auth import CurrentUserResponse, LoginRequest, RegisterRequest, Token
from portfolio.services.auth_service import (
    authenticate_user,
    issue_token,
    register_company_user,
    user_to_response,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await register_company_user(db, data)
    await commit(db)
    return Token(token=issue_token(user), user=user_to_response(user))


@router.post("/login", response_model=Token)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await authenticate_user(db, data)
    if not user:
        raise AuthenticationError("Invalid email or password")
    return Token(token=issue_token(user), user=user_to_response(user))


@router.get("/me", response_model=CurrentUserResponse)
async def me(user: Annotated[User, Depends(get_current_user)]):
    return CurrentUserResponse(
        id=user.id,
        company_id=user.company_id,
        name=user.name,
        email=user.email,
        role=user.role,
        company_name=user.company.name,
    )
