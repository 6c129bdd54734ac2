"""Snapshot store: one row per user, replaced atomically on every upsert."""

import asyncio
import logging
import weakref
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.user_snapshot import UserSnapshot
from app.services.errors import PersistenceFailure, SnapshotNotFound
from app.services.facets import SnapshotFields

logger = logging.getLogger(__name__)

_TICK = timedelta(microseconds=1)

# Per-user write locks; an entry lives only while some upsert holds it
_user_locks: "weakref.WeakValueDictionary[UUID, asyncio.Lock]" = weakref.WeakValueDictionary()


def _lock_for(user_id: UUID) -> asyncio.Lock:
    lock = _user_locks.get(user_id)
    if lock is None:
        lock = asyncio.Lock()
        _user_locks[user_id] = lock
    return lock


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _next_timestamp(previous: datetime | None, now: datetime) -> datetime:
    """Current time, bumped past the previous value if the clock has not moved."""
    if previous is None:
        return now
    previous = _as_utc(previous)
    return now if now > previous else previous + _TICK


class SnapshotStore:
    """Create-or-replace persistence for user snapshots.

    Writes for the same user are serialized in-process with an asyncio lock
    and, on PostgreSQL, with a row lock (SELECT ... FOR UPDATE). The unique
    constraint on user_id catches the remaining race: two processes inserting
    a user's first row. The loser retries once as an update.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def upsert(self, user_id: UUID, fields: SnapshotFields) -> UserSnapshot:
        async with _lock_for(user_id):
            try:
                try:
                    return await self._write(user_id, fields)
                except IntegrityError:
                    logger.info("Concurrent first insert for user %s, retrying as update", user_id)
                    return await self._write(user_id, fields)
            except (SQLAlchemyError, OSError) as e:
                logger.exception("Snapshot upsert failed for user %s", user_id)
                raise PersistenceFailure(f"Could not save snapshot: {e.__class__.__name__}") from e

    async def _write(self, user_id: UUID, fields: SnapshotFields) -> UserSnapshot:
        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    select(UserSnapshot).where(UserSnapshot.user_id == user_id).with_for_update()
                )
                snapshot = result.scalar_one_or_none()
                now = datetime.now(timezone.utc)

                if snapshot is None:
                    snapshot = UserSnapshot(user_id=user_id, last_updated=now, **fields.as_dict())
                    session.add(snapshot)
                else:
                    for key, value in fields.as_dict().items():
                        setattr(snapshot, key, value)
                    snapshot.last_updated = _next_timestamp(snapshot.last_updated, now)

            return snapshot

    async def get(self, user_id: UUID) -> UserSnapshot:
        """Return the stored snapshot. Raises SnapshotNotFound if never aggregated."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(UserSnapshot).where(UserSnapshot.user_id == user_id)
                )
                snapshot = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Snapshot read failed for user %s", user_id)
            raise PersistenceFailure(f"Could not load snapshot: {e.__class__.__name__}") from e

        if snapshot is None:
            raise SnapshotNotFound(user_id)
        return snapshot
