"""Pydantic schemas package."""

from app.schemas.identity import UserIdentity
from app.schemas.activity import (
    ActivityBase,
    ActivityCreate,
    ActivityRead,
)
from app.schemas.snapshot import (
    SnapshotBase,
    SnapshotRead,
)

__all__ = [
    # Identity
    "UserIdentity",
    # Activity
    "ActivityBase",
    "ActivityCreate",
    "ActivityRead",
    # Snapshot
    "SnapshotBase",
    "SnapshotRead",
]
