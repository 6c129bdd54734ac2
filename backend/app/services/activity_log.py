"""Activity log adapter: bounded newest-first reads, append for producers."""

import logging
from datetime import datetime, timezone
from typing import Protocol, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.activity import Activity, ActivityType

logger = logging.getLogger(__name__)

MAX_RECENT_LIMIT = 100


class ActivityLog(Protocol):
    async def recent(self, user_id: UUID, limit: int, since: datetime | None = None) -> Sequence[Activity]:
        ...


class SqlActivityLog:
    """Activity log backed by the activities table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def recent(self, user_id: UUID, limit: int, since: datetime | None = None) -> list[Activity]:
        """Newest-first activities for a user, at most ``limit`` of them.

        If ``since`` is given, only activities created at or after it count.
        """
        limit = max(0, min(limit, MAX_RECENT_LIMIT))
        if limit == 0:
            return []

        query = select(Activity).where(Activity.user_id == user_id)
        if since is not None:
            query = query.where(Activity.created_at >= since)
        query = query.order_by(Activity.created_at.desc()).limit(limit)

        async with self.session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def append(
        self,
        user_id: UUID,
        type: ActivityType,
        description: str | None = None,
        metadata: str | None = None,
        created_at: datetime | None = None,
    ) -> Activity:
        activity = Activity(
            user_id=user_id,
            type=type,
            description=description,
            extra_metadata=metadata,
            created_at=created_at or datetime.now(timezone.utc),
        )
        async with self.session_factory() as session:
            async with session.begin():
                session.add(activity)

        logger.info("Logged activity %s for user %s", type.value, user_id)
        return activity
