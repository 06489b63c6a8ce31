"""Feature schemas."""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portfolio.schemas.common import PartialUpdate, Payload, unique_strings

FeatureStatusName = Literal["backlog", "in-progress", "done", "cancelled"]


class FeatureCreate(Payload):
    project_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    story_points: int = Field(..., ge=0)
    completed_points: int = Field(default=0, ge=0)
    status: FeatureStatusName = "backlog"
    sprint_ids: list[str] = []

    @field_validator("sprint_ids")
    @classmethod
    def dedupe_sprints(cls, value: list[str]) -> list[str]:
        return unique_strings(value)


class FeatureUpdate(PartialUpdate):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    story_points: int | None = Field(None, ge=0)
    completed_points: int | None = Field(None, ge=0)
    status: FeatureStatusName | None = None
    # Assign/unassign sprints by sending the full list.
    sprint_ids: list[str] | None = None

    @field_validator("sprint_ids")
    @classmethod
    def dedupe_sprints(cls, value: list[str] | None) -> list[str] | None:
        return unique_strings(value) if value is not None else value


class FeatureResponse(BaseModel):
    id: str
    project_id: str
    title: str
    description: str
    story_points: int
    completed_points: int
    status: str
    sprint_ids: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
