"""Pydantic schemas for Activity model."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.activity import ActivityType


class ActivityBase(BaseModel):
    """Base fields for an activity entry."""

    type: ActivityType
    description: str | None = Field(None, max_length=500)
    metadata: str | None = None


class ActivityCreate(ActivityBase):
    """Activity posted by a facet producer."""

    user_id: UUID


class ActivityRead(ActivityBase):
    """Activity as shown in a snapshot's recent activity list."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    user_id: UUID
    created_at: datetime

    # ORM attribute is extra_metadata; the column and the payload say metadata
    metadata: str | None = Field(None, validation_alias="extra_metadata")
