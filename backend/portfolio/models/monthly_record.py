"""Monthly forecast-vs-actual labour record."""
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.database import Base, new_id


class MonthlyRecord(Base):
    """Forecast days and actual cost for one resource on one project in one month.

    At most one record exists per (project, resource, period).
    """

    __tablename__ = "monthly_records"
    __table_args__ = (
        UniqueConstraint("project_id", "resource_id", "period", name="uq_monthly_record_triple"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    project_id: Mapped[str] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    resource_id: Mapped[str] = mapped_column(
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    period: Mapped[str] = mapped_column(String(7), nullable=False)  # YYYY-MM
    forecast_days: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    actual_cost: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=0)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
