"""Monthly record schemas."""
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from portfolio.schemas.common import PERIOD_PATTERN, PartialUpdate, Payload


class MonthlyRecordCreate(Payload):
    """Create-or-overwrite keyed on (project_id, resource_id, period)."""

    project_id: str = Field(..., min_length=1)
    resource_id: str = Field(..., min_length=1)
    period: str = Field(..., pattern=PERIOD_PATTERN)
    forecast_days: Decimal = Field(..., ge=0)
    actual_cost: Decimal = Field(default=Decimal(0), ge=0)


class MonthlyRecordUpdate(PartialUpdate):
    forecast_days: Decimal | None = Field(None, ge=0)
    actual_cost: Decimal | None = Field(None, ge=0)


class MonthlyRecordResponse(BaseModel):
    id: str
    project_id: str
    resource_id: str
    period: str
    forecast_days: Decimal
    actual_cost: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
