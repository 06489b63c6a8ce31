"""Resource and absence schemas."""
from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portfolio.schemas.common import PartialUpdate, Payload, unique_strings

AbsenceTypeName = Literal["holiday", "sick", "other"]


class ResourceCreate(Payload):
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=100)
    day_rate: Decimal = Field(..., ge=0)
    skill_tags: list[str] = []
    contact: str = Field(..., min_length=1, max_length=255)

    @field_validator("skill_tags")
    @classmethod
    def dedupe_tags(cls, value: list[str]) -> list[str]:
        return unique_strings(value)


class ResourceUpdate(PartialUpdate):
    name: str | None = Field(None, min_length=1, max_length=255)
    role: str | None = Field(None, min_length=1, max_length=100)
    day_rate: Decimal | None = Field(None, ge=0)
    skill_tags: list[str] | None = None
    contact: str | None = Field(None, min_length=1, max_length=255)

    @field_validator("skill_tags")
    @classmethod
    def dedupe_tags(cls, value: list[str] | None) -> list[str] | None:
        return unique_strings(value) if value is not None else value


class ResourceResponse(BaseModel):
    id: str
    company_id: str
    name: str
    role: str
    day_rate: Decimal
    skill_tags: list[str]
    contact: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AbsenceCreate(Payload):
    resource_id: str = Field(..., min_length=1)
    from_date: date
    to_date: date
    type: AbsenceTypeName
    note: str | None = None


class AbsenceUpdate(PartialUpdate):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"note"})

    from_date: date | None = None
    to_date: date | None = None
    type: AbsenceTypeName | None = None
    note: str | None = None


class AbsenceResponse(BaseModel):
    id: str
    resource_id: str
    from_date: date
    to_date: date
    type: str
    note: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
