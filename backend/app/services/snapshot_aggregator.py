"""Snapshot aggregator: fan out to facet sources, merge, persist.

One pass:
    1. resolve the caller's role to a RoleProfile (UnknownRole is fatal)
    2. fetch every facet of the profile concurrently, each under its own
       timeout, while the recent-activity read runs alongside
    3. merge facet results (failed facets take their defaults)
    4. upsert the merged fields (PersistenceFailure is fatal)
    5. return the stored snapshot with the recent activity attached

Facet and activity failures are logged as warnings and never raised.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Mapping, Sequence
from uuid import UUID

from app.schemas.activity import ActivityRead
from app.schemas.snapshot import SnapshotRead
from app.services import role_strategy
from app.services.activity_log import ActivityLog
from app.services.errors import ActivityUnavailable, SnapshotNotFound
from app.services.facets import Facet, FacetResult, FacetSource
from app.services.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


class SnapshotAggregator:

    def __init__(
        self,
        sources: Mapping[Facet, FacetSource],
        store: SnapshotStore,
        activity_log: ActivityLog,
        facet_timeout: float = 5.0,
        activity_limit: int = 10,
        activity_window: timedelta | None = None,
    ):
        """
        Args:
            sources: facet -> ``fetch(user_id)`` coroutine function
            store: where merged snapshots are persisted
            activity_log: read side of the activity log
            facet_timeout: seconds each facet fetch (and the activity read) may take
            activity_limit: maximum entries in recent_activity
            activity_window: if set, only activities newer than now - window
        """
        self.sources = sources
        self.store = store
        self.activity_log = activity_log
        self.facet_timeout = facet_timeout
        self.activity_limit = activity_limit
        self.activity_window = activity_window

    async def build_snapshot(self, user_id: UUID, role: str) -> SnapshotRead:
        """Recompute, persist and return the snapshot for an already-resolved user."""
        profile = role_strategy.resolve(role)

        results, activities = await asyncio.gather(
            self._fetch_facets(user_id, profile.facets),
            self._fetch_recent_activity(user_id),
        )

        fields = profile.merge(results)
        snapshot = await self.store.upsert(user_id, fields)

        failed = [facet.value for facet, result in results.items() if not result.ok]
        if failed:
            logger.info(
                "Built degraded snapshot for user %s (role=%s, unavailable: %s)",
                user_id, profile.role, ", ".join(failed),
            )
        else:
            logger.info("Built snapshot for user %s (role=%s)", user_id, profile.role)

        return _to_read(snapshot, activities)

    async def load_snapshot(self, user_id: UUID) -> SnapshotRead:
        """Stored snapshot plus fresh recent activity. Raises SnapshotNotFound."""
        snapshot = await self.store.get(user_id)
        activities = await self._fetch_recent_activity(user_id)
        return _to_read(snapshot, activities)

    async def fetch_or_build(self, user_id: UUID, role: str, refresh: bool = True) -> SnapshotRead:
        """Return the stored snapshot unless a refresh is asked for or none exists."""
        if not refresh:
            try:
                return await self.load_snapshot(user_id)
            except SnapshotNotFound:
                logger.info("No stored snapshot for user %s, aggregating", user_id)
        return await self.build_snapshot(user_id, role)

    async def _fetch_facets(self, user_id: UUID, facets: Sequence[Facet]) -> dict[Facet, FacetResult]:
        results = await asyncio.gather(*(self._fetch_facet(user_id, facet) for facet in facets))
        return {result.facet: result for result in results}

    async def _fetch_facet(self, user_id: UUID, facet: Facet) -> FacetResult:
        source = self.sources.get(facet)
        try:
            if source is None:
                raise LookupError(f"no source configured for {facet.value}")
            value = await asyncio.wait_for(source(user_id), timeout=self.facet_timeout)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"expected an int, got {type(value).__name__}")
        except Exception as e:
            result = FacetResult.failure(facet, e)
            logger.warning("Facet %s failed for user %s: %s", facet.value, user_id, result.error)
            return result
        return FacetResult.success(facet, value)

    async def _fetch_recent_activity(self, user_id: UUID) -> list[ActivityRead]:
        since = None
        if self.activity_window is not None:
            since = datetime.now(timezone.utc) - self.activity_window

        try:
            activities = await asyncio.wait_for(
                self.activity_log.recent(user_id, self.activity_limit, since),
                timeout=self.facet_timeout,
            )
            return [ActivityRead.model_validate(activity) for activity in activities]
        except Exception as e:
            logger.warning("%s (user %s)", ActivityUnavailable(e), user_id)
            return []


def _to_read(snapshot, activities: list[ActivityRead]) -> SnapshotRead:
    return SnapshotRead(
        **SnapshotRead.model_validate(snapshot).model_dump(exclude={"recent_activity"}),
        recent_activity=activities,
    )
