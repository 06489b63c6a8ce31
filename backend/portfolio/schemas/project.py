"""Project schemas."""
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portfolio.schemas.common import PartialUpdate, Payload


class ProjectCreate(Payload):
    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=50)
    start_date: date
    end_date: date
    currency: str = Field(..., pattern=r"^[A-Z]{3}$")
    sprint_length_days: int = Field(..., ge=1)
    budget: Decimal = Field(..., ge=0)
    private: bool = False

    @field_validator("code", "currency", mode="before")
    @classmethod
    def uppercase(cls, value):
        return value.strip().upper() if isinstance(value, str) else value


class ProjectUpdate(PartialUpdate):
    name: str | None = Field(None, min_length=1, max_length=255)
    code: str | None = Field(None, min_length=1, max_length=50)
    start_date: date | None = None
    end_date: date | None = None
    currency: str | None = Field(None, pattern=r"^[A-Z]{3}$")
    sprint_length_days: int | None = Field(None, ge=1)
    budget: Decimal | None = Field(None, ge=0)
    private: bool | None = None

    @field_validator("code", "currency", mode="before")
    @classmethod
    def uppercase(cls, value):
        return value.strip().upper() if isinstance(value, str) else value


class ProjectResponse(BaseModel):
    id: str
    company_id: str
    owner_id: str | None
    name: str
    code: str
    start_date: date
    end_date: date
    currency: str
    sprint_length_days: int
    budget: Decimal
    private: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
