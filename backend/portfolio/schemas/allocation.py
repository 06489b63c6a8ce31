"""Allocation schemas."""
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from portfolio.schemas.common import PartialUpdate, Payload


class AllocationCreate(Payload):
    project_id: str = Field(..., min_length=1)
    resource_id: str = Field(..., min_length=1)
    from_date: date
    to_date: date
    allocation_pct: Decimal = Field(..., ge=0, le=100)
    planned_days: Decimal = Field(..., ge=0)
    actual_days: Decimal = Field(default=Decimal(0), ge=0)


class AllocationUpdate(PartialUpdate):
    from_date: date | None = None
    to_date: date | None = None
    allocation_pct: Decimal | None = Field(None, ge=0, le=100)
    planned_days: Decimal | None = Field(None, ge=0)
    actual_days: Decimal | None = Field(None, ge=0)


class AllocationResponse(BaseModel):
    id: str
    project_id: str
    resource_id: str
    from_date: date
    to_date: date
    allocation_pct: Decimal
    planned_days: Decimal
    actual_days: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
