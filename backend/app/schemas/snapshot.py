"""Pydantic schemas for UserSnapshot model."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.schemas.activity import ActivityRead


class SnapshotBase(BaseModel):
    """The aggregate fields written by every upsert."""

    profile_completion: int = 0
    generated_content_count: int = 0
    match_count: int = 0
    active_relationship_count: int = 0
    milestone_count: int = 0


class SnapshotRead(SnapshotBase):
    """Full snapshot output, including the recomputed recent activity."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    last_updated: datetime
    recent_activity: list[ActivityRead] = []
