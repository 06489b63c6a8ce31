"""Sprint schemas."""
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from portfolio.schemas.common import PartialUpdate, Payload


class SprintCreate(Payload):
    project_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    start_date: date
    end_date: date


class SprintUpdate(PartialUpdate):
    name: str | None = Field(None, min_length=1, max_length=255)
    start_date: date | None = None
    end_date: date | None = None


class SprintResponse(BaseModel):
    id: str
    project_id: str
    name: str
    start_date: date
    end_date: date
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
