"""Cost item schemas."""
from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

from portfolio.schemas.common import PartialUpdate, Payload

CostTypeName = Literal["license", "equipment", "contractor", "other"]


class CostItemCreate(Payload):
    project_id: str = Field(..., min_length=1)
    type: CostTypeName
    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    date_incurred: date
    vendor: str | None = Field(None, max_length=255)


class CostItemUpdate(PartialUpdate):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"vendor"})

    type: CostTypeName | None = None
    description: str | None = Field(None, min_length=1)
    amount: Decimal | None = Field(None, ge=0)
    date_incurred: date | None = None
    vendor: str | None = Field(None, max_length=255)


class CostItemResponse(BaseModel):
    id: str
    project_id: str
    type: str
    description: str
    amount: Decimal
    date_incurred: date
    vendor: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
