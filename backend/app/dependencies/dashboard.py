"""Dependencies wiring the snapshot aggregator for a request."""

from datetime import timedelta

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.clients import UpstreamClients
from app.config import get_settings
from app.dependencies.auth import require_credential
from app.models.base import AsyncSessionLocal
from app.services.activity_log import SqlActivityLog
from app.services.facets import build_sources
from app.services.snapshot_aggregator import SnapshotAggregator
from app.services.snapshot_store import SnapshotStore


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return AsyncSessionLocal


def get_upstream_clients() -> UpstreamClients:
    return UpstreamClients.from_settings(get_settings())


def get_activity_log(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SqlActivityLog:
    return SqlActivityLog(session_factory)


def get_aggregator(
    credential: str = Depends(require_credential),
    clients: UpstreamClients = Depends(get_upstream_clients),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    activity_log: SqlActivityLog = Depends(get_activity_log),
) -> SnapshotAggregator:
    """Aggregator whose facet sources call upstream with the caller's credential."""
    settings = get_settings()
    window = settings.recent_activity_window_days
    return SnapshotAggregator(
        sources=build_sources(clients, credential),
        store=SnapshotStore(session_factory),
        activity_log=activity_log,
        facet_timeout=settings.upstream_timeout,
        activity_limit=settings.recent_activity_limit,
        activity_window=timedelta(days=window) if window else None,
    )
