"""Activity model: append-only per-user event log."""

import enum

from sqlalchemy import Column, String, Text, Enum, Uuid, Index

from app.models.base import Base, TimestampMixin, UUIDMixin


class ActivityType(str, enum.Enum):
    LOGIN = "LOGIN"
    PITCH_GENERATED = "PITCH_GENERATED"
    CONNECTION_REQUEST = "CONNECTION_REQUEST"
    CONNECTION_ACCEPTED = "CONNECTION_ACCEPTED"
    CONNECTION_REJECTED = "CONNECTION_REJECTED"
    PROFILE_UPDATED = "PROFILE_UPDATED"
    MILESTONE_COMPLETED = "MILESTONE_COMPLETED"
    INVESTOR_VIEWED = "INVESTOR_VIEWED"
    STARTUP_VIEWED = "STARTUP_VIEWED"


class Activity(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "activities"

    user_id = Column(Uuid(as_uuid=True), nullable=False)
    type = Column(Enum(ActivityType, name="activity_type", native_enum=False, length=30), nullable=False)
    description = Column(String(500))
    # "metadata" is reserved on declarative classes
    extra_metadata = Column("metadata", Text)

    __table_args__ = (
        Index("idx_activities_user_created", "user_id", "created_at"),
    )
