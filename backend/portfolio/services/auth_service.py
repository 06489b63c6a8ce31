"""Authentication service."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.jwt import create_access_token, get_password_hash, verify_password
from portfolio.crud import save
from portfolio.exceptions import ValidationError
from portfolio.models.company import Company
from portfolio.models.user import User
from portfolio.schemas.auth import LoginRequest, RegisterRequest, UserResponse

logger = logging.getLogger(__name__)


async def find_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def register_company_user(db: AsyncSession, data: RegisterRequest) -> User:
    """Create a company and its first user."""
    email = data.email.lower()
    if await find_user_by_email(db, email):
        raise ValidationError("Email already registered")
    company = await save(db, Company(name=data.company_name))
    user = await save(
        db,
        User(
            company_id=company.id,
            name=data.name,
            email=email,
            password_hash=get_password_hash(data.password),
        ),
    )
    logger.info("Registered company %s with user %s", company.id, user.id)
    return user


async def authenticate_user(db: AsyncSession, data: LoginRequest) -> User | None:
    """Authenticate user by email and password."""
    user = await find_user_by_email(db, data.email)
    if not user or not verify_password(data.password, user.password_hash):
        logger.warning("Failed login for %s", data.email.strip().lower())
        return None
    return user


def issue_token(user: User) -> str:
    return create_access_token(
        data={"sub": user.id, "company_id": user.company_id, "role": user.role}
    )


def user_to_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)
