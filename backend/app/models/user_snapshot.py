"""User snapshot model: one aggregated dashboard row per user."""

from sqlalchemy import Column, Integer, DateTime, Uuid, CheckConstraint

from app.models.base import Base, UUIDMixin


class UserSnapshot(UUIDMixin, Base):
    __tablename__ = "user_snapshots"

    user_id = Column(Uuid(as_uuid=True), unique=True, nullable=False, index=True)

    profile_completion = Column(Integer, server_default="0", nullable=False, default=0)
    generated_content_count = Column(Integer, server_default="0", nullable=False, default=0)
    match_count = Column(Integer, server_default="0", nullable=False, default=0)
    active_relationship_count = Column(Integer, server_default="0", nullable=False, default=0)
    milestone_count = Column(Integer, server_default="0", nullable=False, default=0)

    # Set by the snapshot store on every upsert, never by the database
    last_updated = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        CheckConstraint("profile_completion BETWEEN 0 AND 100", name="ck_user_snapshots_completion"),
    )
