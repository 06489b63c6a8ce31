"""Auth dependencies for FastAPI."""
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.jwt import decode_token
from portfolio.database import get_db
from portfolio.exceptions import AuthenticationError
from portfolio.models.user import User

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Identity asserted by a verified session token."""

    user_id: str
    company_id: str
    role: str  # admin, pm or user


async def get_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Principal:
    if not credentials:
        raise AuthenticationError("Missing auth token")
    payload = decode_token(credentials.credentials)
    if not payload:
        raise AuthenticationError("Invalid or expired token")
    user_id = payload.get("sub")
    company_id = payload.get("company_id")
    if not user_id or not company_id:
        raise AuthenticationError("Invalid token")
    return Principal(user_id=str(user_id), company_id=str(company_id), role=payload.get("role", "user"))


async def get_current_user(
    principal: Annotated[Principal, Depends(get_principal)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    user = await db.get(User, principal.user_id)
    if not user or user.company_id != principal.company_id:
        raise AuthenticationError("User not found")
    return user
