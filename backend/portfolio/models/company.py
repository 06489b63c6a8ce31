"""Company (tenant) model."""
from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.database import Base, new_id


class Company(Base):
    """Tenant: every other record belongs to exactly one company."""

    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
